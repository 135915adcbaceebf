"""Domain entities and error taxonomy."""
from .errors import (
    InvalidArgumentError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PRAssignError,
    PRExistsError,
    PRMergedError,
    TeamExistsError,
)
from .pull_request import PRStatus, PullRequest
from .reassignment import Reassignment
from .team import Team
from .user import User

__all__ = [
    # Entities
    "User",
    "Team",
    "PullRequest",
    "PRStatus",
    "Reassignment",
    # Errors
    "PRAssignError",
    "InvalidArgumentError",
    "NotFoundError",
    "TeamExistsError",
    "PRExistsError",
    "PRMergedError",
    "NotAssignedError",
    "NoCandidateError",
]
