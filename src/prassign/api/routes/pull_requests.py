"""Pull request endpoints"""
from fastapi import APIRouter, Depends

from ...core.schemas import (
    PullRequestCreate,
    PullRequestEnvelope,
    PullRequestMerge,
    PullRequestResponse,
    ReassignResponse,
    ReviewerReassign,
)
from ...core.services import PullRequestService
from ..dependencies import get_pull_request_service

router = APIRouter(prefix="/pullRequest")


@router.post(
    "/create",
    response_model=PullRequestEnvelope,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_pull_request(
    pr_data: PullRequestCreate,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Create a pull request and assign up to two reviewers from the author's team."""
    pr = await service.create_pr(
        pr_data.pull_request_id, pr_data.pull_request_name, pr_data.author_id
    )
    return PullRequestEnvelope(pr=PullRequestResponse.model_validate(pr))


@router.post("/merge", response_model=PullRequestEnvelope, response_model_exclude_none=True)
async def merge_pull_request(
    request: PullRequestMerge,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Mark a pull request as merged. Merging twice is not an error."""
    pr = await service.merge_pr(request.pull_request_id)
    return PullRequestEnvelope(pr=PullRequestResponse.model_validate(pr))


@router.post("/reassign", response_model=ReassignResponse, response_model_exclude_none=True)
async def reassign_reviewer(
    request: ReviewerReassign,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Replace one reviewer with a random active member of their team."""
    pr, new_user_id = await service.reassign_reviewer(
        request.pull_request_id, request.old_user_id
    )
    return ReassignResponse(
        pr=PullRequestResponse.model_validate(pr),
        replaced_by=new_user_id,
    )
