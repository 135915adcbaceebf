"""Team schemas."""
from pydantic import BaseModel, ConfigDict, Field


class TeamMember(BaseModel):
    """Team member as sent and returned by the API."""
    user_id: str = Field(..., description="Unique user id")
    username: str = Field(..., description="Display name")
    is_active: bool = Field(default=True, description="Eligible for review")

    model_config = ConfigDict(from_attributes=True)


class TeamCreate(BaseModel):
    """Schema for creating a team with its members."""
    team_name: str = Field(..., description="Unique team name")
    members: list[TeamMember] = Field(..., description="Team members")


class TeamResponse(BaseModel):
    """Schema for a team and its roster."""
    team_name: str
    members: list[TeamMember]

    model_config = ConfigDict(from_attributes=True)


class TeamEnvelope(BaseModel):
    """Response of team creation."""
    team: TeamResponse
