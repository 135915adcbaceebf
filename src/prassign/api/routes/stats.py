"""Statistics endpoints"""
from fastapi import APIRouter, Depends

from ...core.schemas import AssignmentStatsResponse
from ...core.services import PullRequestService
from ..dependencies import get_pull_request_service

router = APIRouter(prefix="/stats")


@router.get("/assignments", response_model=AssignmentStatsResponse)
async def get_assignment_stats(
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Reviewer assignment counts per user and per pull request."""
    stats = await service.get_assignment_stats()
    return AssignmentStatsResponse(by_user=stats.by_user, by_pr=stats.by_pr)
