"""Error taxonomy for reviewer assignment operations.

Every error carries a machine-readable ``code``. The mapping from codes to
transport status lives in the API layer.
"""
from typing import Optional


class PRAssignError(Exception):
    """Base class for all domain errors."""

    code = "INTERNAL_ERROR"
    default_message = "internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgumentError(PRAssignError):
    """Malformed or empty required input."""

    code = "INVALID_ARGUMENT"
    default_message = "invalid argument"


class NotFoundError(PRAssignError):
    """Referenced team, user or pull request does not exist."""

    code = "NOT_FOUND"
    default_message = "resource not found"


class TeamExistsError(PRAssignError):
    """A team with this name already exists."""

    code = "TEAM_EXISTS"
    default_message = "team already exists"


class PRExistsError(PRAssignError):
    """A pull request with this id already exists."""

    code = "PR_EXISTS"
    default_message = "pull request already exists"


class PRMergedError(PRAssignError):
    """Attempted mutation of a merged pull request's reviewer list."""

    code = "PR_MERGED"
    default_message = "cannot modify merged pull request"


class NotAssignedError(PRAssignError):
    """The user is not an assigned reviewer of the pull request."""

    code = "NOT_ASSIGNED"
    default_message = "user is not assigned as reviewer"


class NoCandidateError(PRAssignError):
    """No active reviewer is eligible under the exclusion constraints."""

    code = "NO_CANDIDATE"
    default_message = "no active candidate available for assignment"
