"""Tests for user operations and bulk deactivation."""
import pytest

from prassign.core.domain import (
    InvalidArgumentError,
    NoCandidateError,
    NotFoundError,
    PRStatus,
)


@pytest.fixture
def backend(store):
    """Team backend with four active members."""
    store.add_team("backend", [("u1", True), ("u2", True), ("u3", True), ("u4", True)])
    return store


@pytest.mark.asyncio
async def test_bulk_deactivate_reassigns_open_reviews(user_service, backend):
    backend.add_pr("pr-1", author_id="u1", reviewers=["u2", "u3"])

    result = await user_service.bulk_deactivate_team_members("backend", ["u2"])

    assert result.deactivated_user_ids == ["u2"]
    assert len(result.reassignments) == 1
    reassignment = result.reassignments[0]
    assert reassignment.pull_request_id == "pr-1"
    assert reassignment.old_user_id == "u2"
    assert reassignment.new_user_id == "u4"

    assert backend.users["u2"].is_active is False
    assert sorted(backend.prs["pr-1"].assigned_reviewers) == ["u3", "u4"]
    assert result.team.get_member("u2").is_active is False


@pytest.mark.asyncio
async def test_bulk_deactivate_dedupes_and_trims_ids(user_service, backend, transactor):
    result = await user_service.bulk_deactivate_team_members(" backend ", [" u2", "u2", "u3 "])

    assert result.deactivated_user_ids == ["u2", "u3"]
    assert backend.users["u2"].is_active is False
    assert backend.users["u3"].is_active is False
    assert transactor.commits == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "team_name, user_ids",
    [
        ("", ["u2"]),
        ("   ", ["u2"]),
        ("backend", []),
        ("backend", ["u2", "  "]),
    ],
)
async def test_bulk_deactivate_validates_before_persistence(
    user_service, backend, transactor, team_name, user_ids
):
    with pytest.raises(InvalidArgumentError):
        await user_service.bulk_deactivate_team_members(team_name, user_ids)

    assert transactor.runs == 0
    assert backend.writes == []


@pytest.mark.asyncio
async def test_bulk_deactivate_unknown_team(user_service, backend):
    with pytest.raises(NotFoundError):
        await user_service.bulk_deactivate_team_members("frontend", ["u2"])


@pytest.mark.asyncio
async def test_bulk_deactivate_non_member_fails_atomically(user_service, backend):
    backend.add_team("frontend", [("f1", True)])

    with pytest.raises(NotFoundError):
        await user_service.bulk_deactivate_team_members("backend", ["u2", "f1"])

    assert backend.users["u2"].is_active is True
    assert "deactivate_users" not in backend.writes


@pytest.mark.asyncio
async def test_bulk_deactivate_ignores_already_inactive(user_service, store):
    store.add_team("backend", [("u1", True), ("u2", False), ("u3", True)])

    result = await user_service.bulk_deactivate_team_members("backend", ["u2"])

    assert result.deactivated_user_ids == []
    assert result.reassignments == []
    assert "deactivate_users" not in store.writes


@pytest.mark.asyncio
async def test_bulk_deactivate_skips_merged_pull_requests(user_service, backend):
    backend.add_pr("pr-merged", author_id="u1", reviewers=["u2"], status=PRStatus.MERGED)

    result = await user_service.bulk_deactivate_team_members("backend", ["u2"])

    assert result.reassignments == []
    assert backend.prs["pr-merged"].assigned_reviewers == ["u2"]


@pytest.mark.asyncio
async def test_bulk_deactivate_never_picks_another_target(user_service, store):
    store.add_team(
        "backend", [("u1", True), ("u2", True), ("u3", True), ("u4", True), ("u5", True)]
    )
    store.add_pr("pr-1", author_id="u1", reviewers=["u2"])
    store.add_pr("pr-2", author_id="u1", reviewers=["u3"])

    for _ in range(10):
        result = await user_service.bulk_deactivate_team_members("backend", ["u2", "u3", "u4"])
        for reassignment in result.reassignments:
            assert reassignment.new_user_id == "u5"
        for user_id in ("u2", "u3", "u4"):
            store.users[user_id].activate()
        store.prs["pr-1"].assigned_reviewers = ["u2"]
        store.prs["pr-2"].assigned_reviewers = ["u3"]


@pytest.mark.asyncio
async def test_bulk_deactivate_no_candidate_rolls_back(user_service, store):
    store.add_team("backend", [("u1", True), ("u2", True), ("u3", False), ("u4", False)])
    store.add_pr("pr-2", author_id="u1", reviewers=["u2"])

    with pytest.raises(NoCandidateError):
        await user_service.bulk_deactivate_team_members("backend", ["u2"])

    assert store.users["u2"].is_active is True
    assert store.prs["pr-2"].assigned_reviewers == ["u2"]


@pytest.mark.asyncio
async def test_bulk_deactivate_mutual_replacements_fail_together(user_service, store):
    store.add_team("backend", [("u1", True), ("u2", True), ("u3", True)])
    store.add_pr("pr-a", author_id="u1", reviewers=["u2"])
    store.add_pr("pr-b", author_id="u1", reviewers=["u3"])

    with pytest.raises(NoCandidateError):
        await user_service.bulk_deactivate_team_members("backend", ["u2", "u3"])

    assert store.users["u2"].is_active is True
    assert store.users["u3"].is_active is True
    assert store.prs["pr-a"].assigned_reviewers == ["u2"]
    assert store.prs["pr-b"].assigned_reviewers == ["u3"]


@pytest.mark.asyncio
async def test_bulk_deactivate_handles_pr_with_two_targets(user_service, store):
    store.add_team(
        "backend", [("u1", True), ("u2", True), ("u3", True), ("u4", True), ("u5", True)]
    )
    store.add_pr("pr-1", author_id="u1", reviewers=["u2", "u3"])

    result = await user_service.bulk_deactivate_team_members("backend", ["u2", "u3"])

    assert len(result.reassignments) == 2
    reviewers = store.prs["pr-1"].assigned_reviewers
    assert sorted(reviewers) == ["u4", "u5"]


@pytest.mark.asyncio
async def test_set_is_active_only_flips_flag(user_service, backend):
    backend.add_pr("pr-1", author_id="u1", reviewers=["u2"])

    user = await user_service.set_is_active("u2", False)

    assert user.is_active is False
    assert backend.users["u2"].is_active is False
    assert backend.prs["pr-1"].assigned_reviewers == ["u2"]


@pytest.mark.asyncio
async def test_set_is_active_unknown_user(user_service, backend):
    with pytest.raises(NotFoundError):
        await user_service.set_is_active("ghost", True)


@pytest.mark.asyncio
async def test_get_reviews(user_service, backend):
    backend.add_pr("pr-1", author_id="u1", reviewers=["u2"])
    backend.add_pr("pr-2", author_id="u3", reviewers=["u4"])
    backend.add_pr("pr-3", author_id="u4", reviewers=["u2"], status=PRStatus.MERGED)

    prs = await user_service.get_reviews("u2")

    assert sorted(pr.pull_request_id for pr in prs) == ["pr-1", "pr-3"]


@pytest.mark.asyncio
async def test_bulk_deactivate_undoes_earlier_reassignments(user_service, store):
    store.add_team("backend", [("u1", True), ("u2", True), ("u3", True), ("u4", False)])
    store.add_pr("pr-1", author_id="u1", reviewers=["u2"])
    store.add_pr("pr-2", author_id="u1", reviewers=["u2", "u3"])

    with pytest.raises(NoCandidateError):
        await user_service.bulk_deactivate_team_members("backend", ["u2"])

    assert "add_reviewer" in store.writes
    assert store.prs["pr-1"].assigned_reviewers == ["u2"]
    assert store.prs["pr-2"].assigned_reviewers == ["u2", "u3"]
    assert store.users["u2"].is_active is True
