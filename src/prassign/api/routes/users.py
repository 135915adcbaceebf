"""User endpoints"""
from fastapi import APIRouter, Depends, Query

from ...core.schemas import (
    BulkDeactivateRequest,
    BulkDeactivateResponse,
    PullRequestShort,
    ReassignmentResponse,
    SetIsActiveRequest,
    TeamMember,
    UserEnvelope,
    UserResponse,
    UserReviewsResponse,
)
from ...core.services import UserService
from ..dependencies import get_user_service

router = APIRouter(prefix="/users")


@router.post("/setIsActive", response_model=UserEnvelope)
async def set_is_active(
    request: SetIsActiveRequest,
    service: UserService = Depends(get_user_service),
):
    """Toggle whether a user can be picked as a reviewer."""
    user = await service.set_is_active(request.user_id, request.is_active)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get("/getReview", response_model=UserReviewsResponse)
async def get_reviews(
    user_id: str = Query(..., description="Reviewer's user id"),
    service: UserService = Depends(get_user_service),
):
    """List pull requests the user is assigned to review."""
    prs = await service.get_reviews(user_id)
    return UserReviewsResponse(
        user_id=user_id.strip(),
        pull_requests=[PullRequestShort.model_validate(pr) for pr in prs],
    )


@router.post("/deactivateTeamMembers", response_model=BulkDeactivateResponse)
async def deactivate_team_members(
    request: BulkDeactivateRequest,
    service: UserService = Depends(get_user_service),
):
    """Deactivate team members and move their open reviews to teammates.

    Either every deactivation and reassignment is applied or none is.
    """
    result = await service.bulk_deactivate_team_members(request.team_name, request.user_ids)
    return BulkDeactivateResponse(
        team_name=result.team.team_name,
        deactivated_user_ids=result.deactivated_user_ids,
        reassignments=[ReassignmentResponse.model_validate(r) for r in result.reassignments],
        team_members=[TeamMember.model_validate(m) for m in result.team.members],
    )
