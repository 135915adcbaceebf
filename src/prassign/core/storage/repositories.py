"""SQLAlchemy implementations of the repository contracts."""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, select, update

from ..domain import NotFoundError, PRStatus, PullRequest, Team, User
from ..domain.user import utcnow
from ..models import PullRequestRecord, PullRequestReviewer, TeamRecord, UserRecord
from .interfaces import PullRequestRepository, TeamRepository, UserRepository
from .transaction import Transaction

logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps; SQLite drops the offset on write."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_user(record: UserRecord) -> User:
    return User(
        user_id=record.user_id,
        username=record.username,
        team_name=record.team_name,
        is_active=record.is_active,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )


def _to_pull_request(record: PullRequestRecord, reviewers: list[str]) -> PullRequest:
    return PullRequest(
        pull_request_id=record.pull_request_id,
        pull_request_name=record.pull_request_name,
        author_id=record.author_id,
        status=PRStatus(record.status),
        assigned_reviewers=list(reviewers),
        created_at=_as_utc(record.created_at),
        merged_at=_as_utc(record.merged_at),
    )


class SQLTeamRepository(TeamRepository):
    """Team persistence on top of the ``teams`` and ``users`` tables."""

    async def create_team(self, tx: Transaction, team: Team) -> None:
        tx.session.add(
            TeamRecord(
                team_name=team.team_name,
                created_at=team.created_at,
                updated_at=team.updated_at,
            )
        )
        await tx.session.flush()

    async def get_team(self, tx: Transaction, team_name: str) -> Team:
        record = await tx.session.get(TeamRecord, team_name)
        if record is None:
            raise NotFoundError(f"team '{team_name}' not found")

        result = await tx.session.execute(
            select(UserRecord)
            .where(UserRecord.team_name == team_name)
            .order_by(UserRecord.username, UserRecord.user_id)
        )
        members = [_to_user(u) for u in result.scalars().all()]

        return Team(
            team_name=record.team_name,
            members=members,
            created_at=_as_utc(record.created_at),
            updated_at=_as_utc(record.updated_at),
        )

    async def team_exists(self, tx: Transaction, team_name: str) -> bool:
        result = await tx.session.execute(
            select(func.count()).select_from(TeamRecord).where(TeamRecord.team_name == team_name)
        )
        return result.scalar_one() > 0


class SQLUserRepository(UserRepository):
    """User persistence on top of the ``users`` table."""

    async def get_user(self, tx: Transaction, user_id: str) -> User:
        record = await tx.session.get(UserRecord, user_id)
        if record is None:
            raise NotFoundError(f"user '{user_id}' not found")
        return _to_user(record)

    async def get_team_members(self, tx: Transaction, team_name: str) -> list[User]:
        result = await tx.session.execute(
            select(UserRecord)
            .where(UserRecord.team_name == team_name)
            .order_by(UserRecord.username, UserRecord.user_id)
        )
        return [_to_user(u) for u in result.scalars().all()]

    async def create_or_update_user(self, tx: Transaction, user: User) -> None:
        record = await tx.session.get(UserRecord, user.user_id)
        if record is None:
            tx.session.add(
                UserRecord(
                    user_id=user.user_id,
                    username=user.username,
                    team_name=user.team_name,
                    is_active=user.is_active,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
            )
        else:
            record.username = user.username
            record.team_name = user.team_name
            record.is_active = user.is_active
            record.updated_at = user.updated_at
        await tx.session.flush()

    async def update_user(self, tx: Transaction, user: User) -> None:
        record = await tx.session.get(UserRecord, user.user_id)
        if record is None:
            raise NotFoundError(f"user '{user.user_id}' not found")
        record.username = user.username
        record.team_name = user.team_name
        record.is_active = user.is_active
        record.updated_at = user.updated_at
        await tx.session.flush()

    async def deactivate_users(
        self, tx: Transaction, team_name: str, user_ids: list[str]
    ) -> None:
        if not user_ids:
            return

        result = await tx.session.execute(
            select(UserRecord.user_id)
            .where(UserRecord.team_name == team_name, UserRecord.user_id.in_(user_ids))
            .with_for_update()
        )
        found = set(result.scalars().all())
        missing = [uid for uid in user_ids if uid not in found]
        if missing:
            raise NotFoundError(f"users {missing} are not members of team '{team_name}'")

        await tx.session.execute(
            update(UserRecord)
            .where(UserRecord.team_name == team_name, UserRecord.user_id.in_(user_ids))
            .values(is_active=False, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        logger.debug(f"Deactivated {len(user_ids)} users in team '{team_name}'")


class SQLPullRequestRepository(PullRequestRepository):
    """Pull request persistence on top of ``pull_requests`` and ``pr_reviewers``."""

    async def _load_reviewers(
        self, tx: Transaction, pull_request_ids: list[str]
    ) -> dict[str, list[str]]:
        reviewers: dict[str, list[str]] = {pr_id: [] for pr_id in pull_request_ids}
        if not pull_request_ids:
            return reviewers

        result = await tx.session.execute(
            select(PullRequestReviewer.pull_request_id, PullRequestReviewer.user_id)
            .where(PullRequestReviewer.pull_request_id.in_(pull_request_ids))
            .order_by(PullRequestReviewer.id)
        )
        for pr_id, user_id in result.all():
            reviewers[pr_id].append(user_id)
        return reviewers

    async def _get_record(
        self, tx: Transaction, pull_request_id: str, for_update: bool = False
    ) -> Optional[PullRequestRecord]:
        query = select(PullRequestRecord).where(
            PullRequestRecord.pull_request_id == pull_request_id
        )
        if for_update:
            query = query.with_for_update()
        result = await tx.session.execute(query)
        return result.scalar_one_or_none()

    async def create_pr(self, tx: Transaction, pr: PullRequest) -> None:
        tx.session.add(
            PullRequestRecord(
                pull_request_id=pr.pull_request_id,
                pull_request_name=pr.pull_request_name,
                author_id=pr.author_id,
                status=pr.status.value,
                created_at=pr.created_at,
                merged_at=pr.merged_at,
            )
        )
        await tx.session.flush()

    async def pr_exists(self, tx: Transaction, pull_request_id: str) -> bool:
        result = await tx.session.execute(
            select(func.count())
            .select_from(PullRequestRecord)
            .where(PullRequestRecord.pull_request_id == pull_request_id)
        )
        return result.scalar_one() > 0

    async def get_pr(
        self, tx: Transaction, pull_request_id: str, for_update: bool = False
    ) -> PullRequest:
        record = await self._get_record(tx, pull_request_id, for_update=for_update)
        if record is None:
            raise NotFoundError(f"pull request '{pull_request_id}' not found")

        reviewers = await self._load_reviewers(tx, [pull_request_id])
        return _to_pull_request(record, reviewers[pull_request_id])

    async def update_pr(self, tx: Transaction, pr: PullRequest) -> None:
        record = await self._get_record(tx, pr.pull_request_id)
        if record is None:
            raise NotFoundError(f"pull request '{pr.pull_request_id}' not found")

        record.pull_request_name = pr.pull_request_name
        record.status = pr.status.value
        record.merged_at = pr.merged_at

        current = (await self._load_reviewers(tx, [pr.pull_request_id]))[pr.pull_request_id]
        stale = [uid for uid in current if uid not in pr.assigned_reviewers]
        if stale:
            await tx.session.execute(
                delete(PullRequestReviewer).where(
                    PullRequestReviewer.pull_request_id == pr.pull_request_id,
                    PullRequestReviewer.user_id.in_(stale),
                )
            )
        await self.assign_reviewers(tx, pr.pull_request_id, pr.assigned_reviewers)
        await tx.session.flush()

    async def assign_reviewers(
        self, tx: Transaction, pull_request_id: str, user_ids: list[str]
    ) -> None:
        current = (await self._load_reviewers(tx, [pull_request_id]))[pull_request_id]
        for user_id in user_ids:
            if user_id in current:
                continue
            tx.session.add(PullRequestReviewer(pull_request_id=pull_request_id, user_id=user_id))
            current.append(user_id)
            # Flush per row so autoincrement ids follow the given order
            await tx.session.flush()

    async def remove_reviewer(
        self, tx: Transaction, pull_request_id: str, user_id: str
    ) -> None:
        result = await tx.session.execute(
            delete(PullRequestReviewer).where(
                PullRequestReviewer.pull_request_id == pull_request_id,
                PullRequestReviewer.user_id == user_id,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(
                f"user '{user_id}' is not a reviewer of pull request '{pull_request_id}'"
            )

    async def add_reviewer(
        self, tx: Transaction, pull_request_id: str, user_id: str
    ) -> None:
        await self.assign_reviewers(tx, pull_request_id, [user_id])

    async def get_open_pr_ids_by_reviewer(
        self, tx: Transaction, user_id: str
    ) -> list[str]:
        result = await tx.session.execute(
            select(PullRequestRecord.pull_request_id)
            .join(
                PullRequestReviewer,
                PullRequestReviewer.pull_request_id == PullRequestRecord.pull_request_id,
            )
            .where(
                PullRequestReviewer.user_id == user_id,
                PullRequestRecord.status == PRStatus.OPEN.value,
            )
            .order_by(PullRequestRecord.created_at, PullRequestRecord.pull_request_id)
        )
        return list(result.scalars().all())

    async def get_prs_by_reviewer(
        self, tx: Transaction, user_id: str
    ) -> list[PullRequest]:
        result = await tx.session.execute(
            select(PullRequestRecord)
            .join(
                PullRequestReviewer,
                PullRequestReviewer.pull_request_id == PullRequestRecord.pull_request_id,
            )
            .where(PullRequestReviewer.user_id == user_id)
            .order_by(PullRequestRecord.created_at.desc(), PullRequestRecord.pull_request_id)
        )
        records = list(result.scalars().all())
        reviewers = await self._load_reviewers(tx, [r.pull_request_id for r in records])
        return [_to_pull_request(r, reviewers[r.pull_request_id]) for r in records]

    async def get_assignment_stats_by_user(self, tx: Transaction) -> dict[str, int]:
        result = await tx.session.execute(
            select(PullRequestReviewer.user_id, func.count(PullRequestReviewer.id))
            .group_by(PullRequestReviewer.user_id)
        )
        return {user_id: count for user_id, count in result.all()}

    async def get_assignment_stats_by_pr(self, tx: Transaction) -> dict[str, int]:
        result = await tx.session.execute(
            select(PullRequestRecord.pull_request_id, func.count(PullRequestReviewer.id))
            .outerjoin(
                PullRequestReviewer,
                PullRequestReviewer.pull_request_id == PullRequestRecord.pull_request_id,
            )
            .group_by(PullRequestRecord.pull_request_id)
        )
        return {pr_id: count for pr_id, count in result.all()}
