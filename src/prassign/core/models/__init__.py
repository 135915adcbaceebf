"""ORM models for teams, users, pull requests and reviewer assignments."""
# Import all models to ensure relationships work correctly
from .team import TeamRecord
from .user import UserRecord
from .pull_request import PullRequestRecord, PullRequestReviewer

__all__ = [
    "TeamRecord",
    "UserRecord",
    "PullRequestRecord",
    "PullRequestReviewer",
]
