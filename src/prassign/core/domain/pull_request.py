"""Pull request domain entity."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .errors import NotAssignedError, PRMergedError
from .user import utcnow


class PRStatus(str, Enum):
    """Lifecycle status of a pull request."""
    OPEN = "OPEN"
    MERGED = "MERGED"


@dataclass
class PullRequest:
    """A pull request with its ordered reviewer list.

    The reviewer list may only change while the pull request is open;
    ``MERGED`` is terminal.
    """
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus = PRStatus.OPEN
    assigned_reviewers: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    merged_at: Optional[datetime] = None

    def is_merged(self) -> bool:
        return self.status == PRStatus.MERGED

    def can_reassign(self) -> bool:
        return not self.is_merged()

    def merge(self) -> None:
        """Mark as merged. Merging an already merged pull request is a no-op."""
        if self.is_merged():
            return
        self.status = PRStatus.MERGED
        self.merged_at = utcnow()

    def is_reviewer_assigned(self, user_id: str) -> bool:
        return user_id in self.assigned_reviewers

    def replace_reviewer(self, old_user_id: str, new_user_id: str) -> None:
        """Swap ``old_user_id`` for ``new_user_id``, keeping its position.

        Raises:
            PRMergedError: If the pull request is merged
            NotAssignedError: If ``old_user_id`` is not a reviewer
        """
        if self.is_merged():
            raise PRMergedError()
        if not self.is_reviewer_assigned(old_user_id):
            raise NotAssignedError()
        index = self.assigned_reviewers.index(old_user_id)
        self.assigned_reviewers[index] = new_user_id

    def add_reviewer(self, user_id: str) -> None:
        if not self.is_reviewer_assigned(user_id):
            self.assigned_reviewers.append(user_id)
