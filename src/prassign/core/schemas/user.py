"""User and bulk deactivation schemas."""
from pydantic import BaseModel, ConfigDict, Field

from .pull_request import PullRequestShort
from .team import TeamMember


class SetIsActiveRequest(BaseModel):
    """Schema for toggling a user's activity flag."""
    user_id: str
    is_active: bool


class UserResponse(BaseModel):
    """Schema for a user."""
    user_id: str
    username: str
    team_name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    """Response wrapping a single user."""
    user: UserResponse


class UserReviewsResponse(BaseModel):
    """Pull requests a user is assigned to review."""
    user_id: str
    pull_requests: list[PullRequestShort]


class BulkDeactivateRequest(BaseModel):
    """Schema for deactivating several team members at once."""
    team_name: str = Field(..., description="Team the users belong to")
    user_ids: list[str] = Field(..., description="Users to deactivate")


class ReassignmentResponse(BaseModel):
    """One reviewer replacement."""
    pull_request_id: str
    old_user_id: str
    new_user_id: str

    model_config = ConfigDict(from_attributes=True)


class BulkDeactivateResponse(BaseModel):
    """Result of a bulk deactivation."""
    team_name: str
    deactivated_user_ids: list[str]
    reassignments: list[ReassignmentResponse]
    team_members: list[TeamMember]
