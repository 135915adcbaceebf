"""Team operations."""
import logging

from ..domain import InvalidArgumentError, Team, TeamExistsError, User
from ..storage.interfaces import TeamRepository, Transactor, UserRepository
from ..storage.transaction import Transaction
from .validation import require

logger = logging.getLogger(__name__)


class TeamService:
    """Business logic for teams."""

    def __init__(
        self,
        team_repo: TeamRepository,
        user_repo: UserRepository,
        transactor: Transactor,
    ):
        self._team_repo = team_repo
        self._user_repo = user_repo
        self._transactor = transactor

    async def create_team(self, team_name: str, members: list[User]) -> Team:
        """Create a team and upsert its members in one transaction.

        Existing users listed as members are moved into the new team.

        Args:
            team_name: Unique team name
            members: Team members; a blank ``team_name`` on a member is
                filled in, a different one is rejected

        Returns:
            The created team

        Raises:
            InvalidArgumentError: Blank names, no members, duplicate or
                mismatched members
            TeamExistsError: The team already exists
        """
        team_name = require(team_name, "team_name")
        if not members:
            raise InvalidArgumentError("team must have at least one member")

        seen: set[str] = set()
        for member in members:
            member.user_id = require(member.user_id, "user_id")
            member.username = require(member.username, "username")
            member.team_name = (member.team_name or "").strip() or team_name
            if member.team_name != team_name:
                raise InvalidArgumentError(
                    f"member '{member.user_id}' belongs to team '{member.team_name}'"
                )
            if member.user_id in seen:
                raise InvalidArgumentError(f"member '{member.user_id}' listed twice")
            seen.add(member.user_id)

        team = Team(team_name=team_name, members=list(members))

        async def work(tx: Transaction) -> Team:
            if await self._team_repo.team_exists(tx, team_name):
                raise TeamExistsError(f"team '{team_name}' already exists")

            await self._team_repo.create_team(tx, team)
            for member in team.members:
                await self._user_repo.create_or_update_user(tx, member)
            return team

        team = await self._transactor.run(work)
        logger.info(f"Team '{team_name}' created with {len(team.members)} members")
        return team

    async def get_team(self, team_name: str) -> Team:
        team_name = require(team_name, "team_name")
        return await self._transactor.run(lambda tx: self._team_repo.get_team(tx, team_name))
