"""Repository and transaction contracts consumed by the services.

Services depend only on these abstract classes so that the SQLAlchemy
implementations can be swapped for in-memory ones. Every repository method
takes the explicit transaction handle of the unit of work it belongs to.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, TypeVar

from ..domain import PullRequest, Team, User

if TYPE_CHECKING:
    from .transaction import Transaction

T = TypeVar("T")


class Transactor(ABC):
    """Runs a unit of work atomically."""

    @abstractmethod
    async def run(
        self,
        work: Callable[["Transaction"], Awaitable[T]],
        tx: Optional["Transaction"] = None,
    ) -> T:
        """Run ``work`` inside one transaction.

        Commits on success; rolls back and re-raises on any failure. When
        ``tx`` is an active transaction it is reused and no new transaction
        is started.

        Args:
            work: Coroutine function receiving the transaction handle
            tx: Optional transaction already in progress

        Returns:
            The value returned by ``work``
        """
        pass


class TeamRepository(ABC):
    """Persistence for teams."""

    @abstractmethod
    async def create_team(self, tx: "Transaction", team: Team) -> None:
        """Insert a team row (members are persisted via :class:`UserRepository`)."""
        pass

    @abstractmethod
    async def get_team(self, tx: "Transaction", team_name: str) -> Team:
        """Fetch a team with its members ordered by username.

        Raises:
            NotFoundError: If the team does not exist
        """
        pass

    @abstractmethod
    async def team_exists(self, tx: "Transaction", team_name: str) -> bool:
        pass


class UserRepository(ABC):
    """Persistence for users and team membership."""

    @abstractmethod
    async def get_user(self, tx: "Transaction", user_id: str) -> User:
        """Fetch a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def get_team_members(self, tx: "Transaction", team_name: str) -> list[User]:
        """Fetch the roster of a team ordered by username (possibly empty)."""
        pass

    @abstractmethod
    async def create_or_update_user(self, tx: "Transaction", user: User) -> None:
        """Insert the user or overwrite its username, team and activity flag."""
        pass

    @abstractmethod
    async def update_user(self, tx: "Transaction", user: User) -> None:
        """Update an existing user.

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def deactivate_users(
        self, tx: "Transaction", team_name: str, user_ids: list[str]
    ) -> None:
        """Set ``is_active = false`` for every id in one batch.

        Raises:
            NotFoundError: If any id is not a member of ``team_name``; nothing
                is updated in that case
        """
        pass


class PullRequestRepository(ABC):
    """Persistence for pull requests and their reviewer assignments."""

    @abstractmethod
    async def create_pr(self, tx: "Transaction", pr: PullRequest) -> None:
        """Insert the pull request row without reviewers."""
        pass

    @abstractmethod
    async def pr_exists(self, tx: "Transaction", pull_request_id: str) -> bool:
        pass

    @abstractmethod
    async def get_pr(
        self, tx: "Transaction", pull_request_id: str, for_update: bool = False
    ) -> PullRequest:
        """Fetch a pull request with its ordered reviewer list.

        Args:
            tx: Transaction handle
            pull_request_id: Pull request id
            for_update: Lock the row for the rest of the transaction where the
                backend supports row locks

        Raises:
            NotFoundError: If the pull request does not exist
        """
        pass

    @abstractmethod
    async def update_pr(self, tx: "Transaction", pr: PullRequest) -> None:
        """Persist status, merge time and reviewer list.

        Raises:
            NotFoundError: If the pull request no longer exists
        """
        pass

    @abstractmethod
    async def assign_reviewers(
        self, tx: "Transaction", pull_request_id: str, user_ids: list[str]
    ) -> None:
        """Attach reviewers in order, skipping those already attached."""
        pass

    @abstractmethod
    async def remove_reviewer(
        self, tx: "Transaction", pull_request_id: str, user_id: str
    ) -> None:
        """Detach one reviewer.

        Raises:
            NotFoundError: If the user is not attached to the pull request
        """
        pass

    @abstractmethod
    async def add_reviewer(
        self, tx: "Transaction", pull_request_id: str, user_id: str
    ) -> None:
        """Attach one reviewer; no-op if already attached."""
        pass

    @abstractmethod
    async def get_open_pr_ids_by_reviewer(
        self, tx: "Transaction", user_id: str
    ) -> list[str]:
        """Ids of open pull requests where ``user_id`` is a reviewer."""
        pass

    @abstractmethod
    async def get_prs_by_reviewer(
        self, tx: "Transaction", user_id: str
    ) -> list[PullRequest]:
        """Pull requests of any status where ``user_id`` is a reviewer, newest first."""
        pass

    @abstractmethod
    async def get_assignment_stats_by_user(self, tx: "Transaction") -> dict[str, int]:
        """Number of reviewer assignments per user id."""
        pass

    @abstractmethod
    async def get_assignment_stats_by_pr(self, tx: "Transaction") -> dict[str, int]:
        """Number of assigned reviewers per pull request id."""
        pass
