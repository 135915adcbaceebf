"""Bulk deactivation against a real database."""
import pytest

from prassign.core.domain import NoCandidateError, PullRequest, User
from prassign.core.storage.repositories import SQLPullRequestRepository, SQLUserRepository
from prassign.core.storage.transaction import SQLAlchemyTransactor


@pytest.fixture
def transactor(db):
    return SQLAlchemyTransactor(db)


async def seed_pr(transactor, pull_request_id: str, author_id: str, reviewers: list[str]):
    pr_repo = SQLPullRequestRepository()

    async def work(tx):
        await pr_repo.create_pr(
            tx,
            PullRequest(pull_request_id=pull_request_id, pull_request_name="Change", author_id=author_id),
        )
        await pr_repo.assign_reviewers(tx, pull_request_id, reviewers)

    await transactor.run(work)


async def reviewers_of(transactor, pull_request_id: str) -> list[str]:
    pr = await transactor.run(lambda tx: SQLPullRequestRepository().get_pr(tx, pull_request_id))
    return pr.assigned_reviewers


@pytest.fixture
async def backend(services):
    """u1..u3 active, u4 inactive."""
    members = [
        User(user_id=user_id, username=f"name-{user_id}", team_name="backend", is_active=active)
        for user_id, active in [("u1", True), ("u2", True), ("u3", True), ("u4", False)]
    ]
    await services.teams.create_team("backend", members)


@pytest.mark.asyncio
async def test_later_failure_rolls_back_earlier_reassignment(services, transactor, backend):
    # pr-1 can move to u3; pr-2 already has u3 and only inactive u4 is left
    await seed_pr(transactor, "pr-1", "u1", ["u2"])
    await seed_pr(transactor, "pr-2", "u1", ["u2", "u3"])

    with pytest.raises(NoCandidateError):
        await services.users.bulk_deactivate_team_members("backend", ["u2"])

    assert await reviewers_of(transactor, "pr-1") == ["u2"]
    assert await reviewers_of(transactor, "pr-2") == ["u2", "u3"]
    user = await transactor.run(lambda tx: SQLUserRepository().get_user(tx, "u2"))
    assert user.is_active is True


@pytest.mark.asyncio
async def test_successful_bulk_deactivation_is_persisted(services, transactor, backend):
    await seed_pr(transactor, "pr-1", "u1", ["u2"])

    result = await services.users.bulk_deactivate_team_members("backend", ["u2"])

    assert result.deactivated_user_ids == ["u2"]
    assert [r.new_user_id for r in result.reassignments] == ["u3"]
    assert await reviewers_of(transactor, "pr-1") == ["u3"]
    user = await transactor.run(lambda tx: SQLUserRepository().get_user(tx, "u2"))
    assert user.is_active is False
