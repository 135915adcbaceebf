"""Pull request schemas."""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..domain import PRStatus


class PullRequestCreate(BaseModel):
    """Schema for creating a pull request."""
    pull_request_id: str = Field(..., description="Unique pull request id")
    pull_request_name: str = Field(..., description="Pull request title")
    author_id: str = Field(..., description="Author's user id")


class PullRequestMerge(BaseModel):
    """Schema for merging a pull request."""
    pull_request_id: str


class ReviewerReassign(BaseModel):
    """Schema for replacing one reviewer."""
    pull_request_id: str
    old_user_id: str = Field(..., description="Reviewer to replace")


class PullRequestResponse(BaseModel):
    """Schema for a pull request with its reviewers."""
    pull_request_id: str
    pull_request_name: str
    author_id: str
    assigned_reviewers: list[str]
    status: PRStatus
    created_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    merged_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("merged_at", "mergedAt"),
        serialization_alias="mergedAt",
    )

    model_config = ConfigDict(from_attributes=True)


class PullRequestShort(BaseModel):
    """Pull request without reviewers and timestamps."""
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus

    model_config = ConfigDict(from_attributes=True)


class PullRequestEnvelope(BaseModel):
    """Response wrapping a single pull request."""
    pr: PullRequestResponse


class ReassignResponse(BaseModel):
    """Response of a reviewer replacement."""
    pr: PullRequestResponse
    replaced_by: str
