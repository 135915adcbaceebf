"""prassign - pull request reviewer assignment service.

Assigns reviewers to pull requests from the author's team and keeps
reviews moving when team members are deactivated.
"""
__version__ = "0.1.0"

from . import core
from .core.assignment import MAX_REVIEWERS, AssignmentStrategy
from .core.config.settings import PRAssignConfig, get_config, init_config
from .core.domain import (
    InvalidArgumentError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PRAssignError,
    PRExistsError,
    PRMergedError,
    PRStatus,
    PullRequest,
    Reassignment,
    Team,
    TeamExistsError,
    User,
)
from .core.services import (
    BulkDeactivationResult,
    PullRequestService,
    Services,
    TeamService,
    UserService,
    build_services,
)
from .core.storage.database import Database, get_db, init_db

__all__ = [
    "__version__",
    "core",
    # Configuration
    "PRAssignConfig",
    "get_config",
    "init_config",
    # Database
    "Database",
    "init_db",
    "get_db",
    # Domain
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
    # Assignment
    "AssignmentStrategy",
    "MAX_REVIEWERS",
    # Services
    "Services",
    "build_services",
    "TeamService",
    "UserService",
    "PullRequestService",
    "BulkDeactivationResult",
]
