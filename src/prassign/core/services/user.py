"""User operations, including bulk deactivation with review reassignment."""
import logging
from dataclasses import dataclass, field

from ..assignment import AssignmentStrategy
from ..domain import NotFoundError, PullRequest, Reassignment, Team, User
from ..storage.interfaces import PullRequestRepository, Transactor, UserRepository
from ..storage.transaction import Transaction
from .reassignment import replace_reviewer
from .validation import normalize_ids, require

logger = logging.getLogger(__name__)


@dataclass
class BulkDeactivationResult:
    """Outcome of a bulk deactivation.

    Attributes:
        team: Team with the requested users marked inactive
        deactivated_user_ids: Users that were active and got deactivated,
            in request order
        reassignments: Reviewer replacements performed, in processing order
    """
    team: Team
    deactivated_user_ids: list[str] = field(default_factory=list)
    reassignments: list[Reassignment] = field(default_factory=list)


class UserService:
    """Business logic for users."""

    def __init__(
        self,
        user_repo: UserRepository,
        pr_repo: PullRequestRepository,
        transactor: Transactor,
        strategy: AssignmentStrategy,
    ):
        self._user_repo = user_repo
        self._pr_repo = pr_repo
        self._transactor = transactor
        self._strategy = strategy

    async def get_user(self, user_id: str) -> User:
        user_id = require(user_id, "user_id")
        return await self._transactor.run(lambda tx: self._user_repo.get_user(tx, user_id))

    async def set_is_active(self, user_id: str, is_active: bool) -> User:
        """Toggle a user's reviewer eligibility.

        This only flips the flag; open reviews are moved by
        :meth:`bulk_deactivate_team_members`.
        """
        user_id = require(user_id, "user_id")

        async def work(tx: Transaction) -> User:
            user = await self._user_repo.get_user(tx, user_id)
            user.set_is_active(is_active)
            await self._user_repo.update_user(tx, user)
            return user

        user = await self._transactor.run(work)
        logger.info(f"User {user_id} is_active set to {is_active}")
        return user

    async def get_reviews(self, user_id: str) -> list[PullRequest]:
        """Pull requests the user is assigned to review."""
        user_id = require(user_id, "user_id")
        return await self._transactor.run(
            lambda tx: self._pr_repo.get_prs_by_reviewer(tx, user_id)
        )

    async def bulk_deactivate_team_members(
        self, team_name: str, user_ids: list[str]
    ) -> BulkDeactivationResult:
        """Deactivate team members and move their open reviews to teammates.

        All-or-nothing: if any step fails, including finding no eligible
        replacement for one pull request, no deactivation or reassignment
        from this call is kept.

        Args:
            team_name: Team the users belong to
            user_ids: Users to deactivate; trimmed and de-duplicated

        Returns:
            BulkDeactivationResult

        Raises:
            InvalidArgumentError: Blank team name, empty or blank ids
            NotFoundError: Unknown team or an id that is not a team member
            NoCandidateError: An affected pull request has no eligible
                replacement
        """
        team_name = require(team_name, "team_name")
        requested = normalize_ids(user_ids)

        async def work(tx: Transaction) -> BulkDeactivationResult:
            members = await self._user_repo.get_team_members(tx, team_name)
            if not members:
                raise NotFoundError(f"team '{team_name}' not found")
            team = Team(team_name=team_name, members=members)

            targets: list[User] = []
            for user_id in requested:
                member = team.get_member(user_id)
                if member is None:
                    raise NotFoundError(f"user '{user_id}' is not a member of team '{team_name}'")
                if member.is_active:
                    targets.append(member)

            if not targets:
                return BulkDeactivationResult(team=team)

            target_ids = [t.user_id for t in targets]

            # Nobody being deactivated in this call may step in for another
            future_roster = team.copy()
            future_roster.mark_inactive(requested)

            await self._user_repo.deactivate_users(tx, team_name, target_ids)

            reassignments: list[Reassignment] = []
            for target_id in target_ids:
                pr_ids = await self._pr_repo.get_open_pr_ids_by_reviewer(tx, target_id)
                for pr_id in pr_ids:
                    pr = await self._pr_repo.get_pr(tx, pr_id, for_update=True)
                    if pr.is_merged():
                        continue
                    reassignment = await replace_reviewer(
                        self._transactor,
                        self._pr_repo,
                        self._strategy,
                        pr,
                        target_id,
                        future_roster,
                        tx=tx,
                    )
                    reassignments.append(reassignment)

            team.mark_inactive(requested)
            return BulkDeactivationResult(
                team=team,
                deactivated_user_ids=target_ids,
                reassignments=reassignments,
            )

        result = await self._transactor.run(work)
        logger.info(
            f"Bulk deactivation in team '{team_name}': "
            f"{len(result.deactivated_user_ids)} deactivated, "
            f"{len(result.reassignments)} reviews reassigned"
        )
        return result
