"""Team endpoints"""
from fastapi import APIRouter, Depends, Query

from ...core.domain import Team, User
from ...core.schemas import TeamCreate, TeamEnvelope, TeamMember, TeamResponse
from ...core.services import TeamService
from ..dependencies import get_team_service

router = APIRouter(prefix="/team")


def to_team_response(team: Team) -> TeamResponse:
    return TeamResponse(
        team_name=team.team_name,
        members=[TeamMember.model_validate(m) for m in team.members],
    )


@router.post("/add", response_model=TeamEnvelope, status_code=201)
async def add_team(
    team_data: TeamCreate,
    service: TeamService = Depends(get_team_service),
):
    """Create a team with its members.

    Members that already exist are moved into the new team.
    """
    members = [
        User(
            user_id=m.user_id,
            username=m.username,
            team_name=team_data.team_name,
            is_active=m.is_active,
        )
        for m in team_data.members
    ]
    team = await service.create_team(team_data.team_name, members)
    return TeamEnvelope(team=to_team_response(team))


@router.get("/get", response_model=TeamResponse)
async def get_team(
    team_name: str = Query(..., description="Team name"),
    service: TeamService = Depends(get_team_service),
):
    """Get a team and its roster."""
    team = await service.get_team(team_name)
    return to_team_response(team)
