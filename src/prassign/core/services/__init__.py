"""Business services."""
from .container import Services, build_services
from .pull_request import AssignmentStats, PullRequestService
from .team import TeamService
from .user import BulkDeactivationResult, UserService

__all__ = [
    "Services",
    "build_services",
    "TeamService",
    "UserService",
    "BulkDeactivationResult",
    "PullRequestService",
    "AssignmentStats",
]
