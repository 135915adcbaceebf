"""Shared fixtures."""
import random
import time

import pytest
from httpx import ASGITransport, AsyncClient

from prassign.api import app
from prassign.core.assignment import AssignmentStrategy
from prassign.core.config.settings import init_config
from prassign.core.services import PullRequestService, TeamService, UserService, build_services
from prassign.core.storage.database import init_db

from .fakes import (
    FakeTransactor,
    InMemoryPullRequestRepository,
    InMemoryStore,
    InMemoryTeamRepository,
    InMemoryUserRepository,
)


@pytest.fixture
async def db(tmp_path):
    """Create a file-backed SQLite database for one test."""
    config = init_config()
    config.db_path = str(tmp_path / "prassign-test.db")
    db = init_db(config.get_database_url())
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def services(db):
    """Services wired to the test database with a fixed seed."""
    return build_services(db, random_seed=7)


@pytest.fixture
async def client(db, services):
    """HTTP client talking to the app in-process."""
    app.state.db = db
    app.state.services = services
    app.state.started_at = time.monotonic()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def transactor(store):
    return FakeTransactor(store)


@pytest.fixture
def strategy():
    return AssignmentStrategy(random.Random(42))


@pytest.fixture
def user_service(store, transactor, strategy):
    return UserService(
        InMemoryUserRepository(store),
        InMemoryPullRequestRepository(store),
        transactor,
        strategy,
    )


@pytest.fixture
def pr_service(store, transactor, strategy):
    return PullRequestService(
        InMemoryPullRequestRepository(store),
        InMemoryUserRepository(store),
        transactor,
        strategy,
    )


@pytest.fixture
def team_service(store, transactor):
    return TeamService(
        InMemoryTeamRepository(store),
        InMemoryUserRepository(store),
        transactor,
    )
