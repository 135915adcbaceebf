"""Pydantic schemas for API validation and serialization."""
from .pull_request import (
    PullRequestCreate,
    PullRequestEnvelope,
    PullRequestMerge,
    PullRequestResponse,
    PullRequestShort,
    ReassignResponse,
    ReviewerReassign,
)
from .stats import AssignmentStatsResponse, HealthResponse
from .team import TeamCreate, TeamEnvelope, TeamMember, TeamResponse
from .user import (
    BulkDeactivateRequest,
    BulkDeactivateResponse,
    ReassignmentResponse,
    SetIsActiveRequest,
    UserEnvelope,
    UserResponse,
    UserReviewsResponse,
)

__all__ = [
    # Team schemas
    "TeamMember",
    "TeamCreate",
    "TeamResponse",
    "TeamEnvelope",
    # User schemas
    "SetIsActiveRequest",
    "UserResponse",
    "UserEnvelope",
    "UserReviewsResponse",
    "BulkDeactivateRequest",
    "BulkDeactivateResponse",
    "ReassignmentResponse",
    # Pull request schemas
    "PullRequestCreate",
    "PullRequestMerge",
    "ReviewerReassign",
    "PullRequestResponse",
    "PullRequestShort",
    "PullRequestEnvelope",
    "ReassignResponse",
    # Stats schemas
    "AssignmentStatsResponse",
    "HealthResponse",
]
