"""Tests for the unit-of-work runner."""
import asyncio

import pytest

from prassign.core.domain import Team, User
from prassign.core.storage.repositories import SQLTeamRepository, SQLUserRepository
from prassign.core.storage.transaction import SQLAlchemyTransactor, Transaction


@pytest.fixture
def transactor(db):
    return SQLAlchemyTransactor(db)


def make_user(user_id: str) -> User:
    return User(user_id=user_id, username=user_id, team_name="backend")


async def team_exists(transactor, name: str) -> bool:
    return await transactor.run(lambda tx: SQLTeamRepository().team_exists(tx, name))


@pytest.mark.asyncio
async def test_commit_on_success(transactor):
    result = await transactor.run(
        lambda tx: SQLTeamRepository().create_team(tx, Team(team_name="backend"))
    )

    assert result is None
    assert await team_exists(transactor, "backend")


@pytest.mark.asyncio
async def test_rollback_on_error(transactor):
    async def work(tx):
        await SQLTeamRepository().create_team(tx, Team(team_name="backend"))
        raise ValueError("boom")

    with pytest.raises(ValueError):
        await transactor.run(work)

    assert not await team_exists(transactor, "backend")


@pytest.mark.asyncio
async def test_nested_run_reuses_transaction(transactor):
    seen: list[Transaction] = []

    async def inner(tx):
        seen.append(tx)
        await SQLUserRepository().create_or_update_user(tx, make_user("u1"))

    async def outer(tx):
        seen.append(tx)
        await SQLTeamRepository().create_team(tx, Team(team_name="backend"))
        await transactor.run(inner, tx=tx)
        raise RuntimeError("abort after nested work")

    with pytest.raises(RuntimeError):
        await transactor.run(outer)

    assert seen[0] is seen[1]
    assert not seen[0].is_active
    assert not await team_exists(transactor, "backend")


@pytest.mark.asyncio
async def test_inactive_handle_starts_new_transaction(transactor):
    captured: list[Transaction] = []

    async def capture(tx):
        captured.append(tx)

    await transactor.run(capture)
    await transactor.run(capture, tx=captured[0])

    assert captured[0] is not captured[1]
    with pytest.raises(RuntimeError):
        captured[0].session


@pytest.mark.asyncio
async def test_rollback_on_cancellation(transactor):
    started = asyncio.Event()

    async def work(tx):
        await SQLTeamRepository().create_team(tx, Team(team_name="backend"))
        started.set()
        await asyncio.sleep(10)

    task = asyncio.create_task(transactor.run(work))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert not await team_exists(transactor, "backend")
