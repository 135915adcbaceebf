"""Pull request operations: creation, merge and reviewer reassignment."""
import logging
from dataclasses import dataclass, field

from ..assignment import AssignmentStrategy
from ..domain import (
    NotAssignedError,
    PRExistsError,
    PRMergedError,
    PullRequest,
    Team,
)
from ..storage.interfaces import PullRequestRepository, Transactor, UserRepository
from ..storage.transaction import Transaction
from .reassignment import replace_reviewer
from .validation import require

logger = logging.getLogger(__name__)


@dataclass
class AssignmentStats:
    """Reviewer assignment counts."""
    by_user: dict[str, int] = field(default_factory=dict)
    by_pr: dict[str, int] = field(default_factory=dict)


class PullRequestService:
    """Business logic for pull requests."""

    def __init__(
        self,
        pr_repo: PullRequestRepository,
        user_repo: UserRepository,
        transactor: Transactor,
        strategy: AssignmentStrategy,
    ):
        self._pr_repo = pr_repo
        self._user_repo = user_repo
        self._transactor = transactor
        self._strategy = strategy

    async def create_pr(
        self, pull_request_id: str, pull_request_name: str, author_id: str
    ) -> PullRequest:
        """Create a pull request and assign up to two reviewers.

        Reviewers are drawn from the active members of the author's team,
        excluding the author. Zero reviewers is a valid outcome.

        Raises:
            InvalidArgumentError: Blank id, name or author
            PRExistsError: The id is taken
            NotFoundError: Unknown author
        """
        pull_request_id = require(pull_request_id, "pull_request_id")
        pull_request_name = require(pull_request_name, "pull_request_name")
        author_id = require(author_id, "author_id")

        async def work(tx: Transaction) -> PullRequest:
            if await self._pr_repo.pr_exists(tx, pull_request_id):
                raise PRExistsError(f"pull request '{pull_request_id}' already exists")

            author = await self._user_repo.get_user(tx, author_id)
            members = await self._user_repo.get_team_members(tx, author.team_name)
            team = Team(team_name=author.team_name, members=members)

            pr = PullRequest(
                pull_request_id=pull_request_id,
                pull_request_name=pull_request_name,
                author_id=author_id,
            )
            pr.assigned_reviewers = self._strategy.select_reviewers(team, author_id)

            await self._pr_repo.create_pr(tx, pr)
            if pr.assigned_reviewers:
                await self._pr_repo.assign_reviewers(tx, pull_request_id, pr.assigned_reviewers)
            return pr

        pr = await self._transactor.run(work)
        logger.info(
            f"Pull request {pull_request_id} created with reviewers {pr.assigned_reviewers}"
        )
        return pr

    async def get_pr(self, pull_request_id: str) -> PullRequest:
        pull_request_id = require(pull_request_id, "pull_request_id")
        return await self._transactor.run(lambda tx: self._pr_repo.get_pr(tx, pull_request_id))

    async def merge_pr(self, pull_request_id: str) -> PullRequest:
        """Mark a pull request as merged.

        Idempotent: merging an already merged pull request returns it
        unchanged.
        """
        pull_request_id = require(pull_request_id, "pull_request_id")

        async def work(tx: Transaction) -> PullRequest:
            pr = await self._pr_repo.get_pr(tx, pull_request_id, for_update=True)
            if pr.is_merged():
                return pr
            pr.merge()
            await self._pr_repo.update_pr(tx, pr)
            logger.info(f"Pull request {pull_request_id} merged")
            return pr

        return await self._transactor.run(work)

    async def reassign_reviewer(
        self, pull_request_id: str, old_user_id: str
    ) -> tuple[PullRequest, str]:
        """Replace one reviewer with a random active member of their team.

        Args:
            pull_request_id: Pull request to change
            old_user_id: Reviewer to replace

        Returns:
            The updated pull request and the new reviewer's id

        Raises:
            InvalidArgumentError: Blank arguments
            NotFoundError: Unknown pull request or reviewer
            PRMergedError: The pull request is merged
            NotAssignedError: ``old_user_id`` is not a reviewer
            NoCandidateError: No eligible replacement exists
        """
        pull_request_id = require(pull_request_id, "pull_request_id")
        old_user_id = require(old_user_id, "old_user_id")

        async def work(tx: Transaction) -> tuple[PullRequest, str]:
            pr = await self._pr_repo.get_pr(tx, pull_request_id, for_update=True)
            if not pr.can_reassign():
                raise PRMergedError(f"pull request '{pull_request_id}' is merged")
            if not pr.is_reviewer_assigned(old_user_id):
                raise NotAssignedError(
                    f"user '{old_user_id}' is not a reviewer of '{pull_request_id}'"
                )

            old_user = await self._user_repo.get_user(tx, old_user_id)
            members = await self._user_repo.get_team_members(tx, old_user.team_name)
            roster = Team(team_name=old_user.team_name, members=members)

            reassignment = await replace_reviewer(
                self._transactor, self._pr_repo, self._strategy, pr, old_user_id, roster, tx=tx
            )
            return pr, reassignment.new_user_id

        pr, new_user_id = await self._transactor.run(work)
        logger.info(
            f"Reviewer {old_user_id} replaced by {new_user_id} on pull request {pull_request_id}"
        )
        return pr, new_user_id

    async def get_prs_by_reviewer(self, user_id: str) -> list[PullRequest]:
        user_id = require(user_id, "user_id")
        return await self._transactor.run(
            lambda tx: self._pr_repo.get_prs_by_reviewer(tx, user_id)
        )

    async def get_assignment_stats(self) -> AssignmentStats:
        async def work(tx: Transaction) -> AssignmentStats:
            return AssignmentStats(
                by_user=await self._pr_repo.get_assignment_stats_by_user(tx),
                by_pr=await self._pr_repo.get_assignment_stats_by_pr(tx),
            )

        return await self._transactor.run(work)
