"""Tests for domain entities and the error taxonomy."""
import pytest

from prassign.core.domain import (
    InvalidArgumentError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PRAssignError,
    PRMergedError,
    PRStatus,
    PullRequest,
    Team,
    User,
)


def make_user(user_id: str, is_active: bool = True) -> User:
    return User(user_id=user_id, username=f"name-{user_id}", team_name="backend", is_active=is_active)


def test_user_activity_toggles():
    user = make_user("u1")
    before = user.updated_at

    user.deactivate()
    assert not user.can_be_reviewer()
    assert user.updated_at >= before

    user.set_is_active(True)
    assert user.is_active


def test_team_active_members():
    team = Team(team_name="backend", members=[make_user("u1"), make_user("u2", False), make_user("u3")])

    assert [m.user_id for m in team.active_members()] == ["u1", "u3"]
    assert [m.user_id for m in team.active_members_excluding("u1")] == ["u3"]
    assert team.get_member("u2").is_active is False
    assert team.get_member("missing") is None


def test_team_copy_is_independent():
    team = Team(team_name="backend", members=[make_user("u1"), make_user("u2")])

    future = team.copy()
    future.mark_inactive(["u1", "not-a-member"])

    assert not future.get_member("u1").is_active
    assert team.get_member("u1").is_active


def test_merge_is_idempotent():
    pr = PullRequest(pull_request_id="pr-1", pull_request_name="Fix", author_id="u1")

    pr.merge()
    merged_at = pr.merged_at
    pr.merge()

    assert pr.status == PRStatus.MERGED
    assert pr.merged_at == merged_at
    assert not pr.can_reassign()


def test_replace_reviewer_keeps_position():
    pr = PullRequest(
        pull_request_id="pr-1",
        pull_request_name="Fix",
        author_id="u1",
        assigned_reviewers=["u2", "u3"],
    )

    pr.replace_reviewer("u2", "u4")

    assert pr.assigned_reviewers == ["u4", "u3"]


def test_replace_reviewer_errors():
    pr = PullRequest(
        pull_request_id="pr-1",
        pull_request_name="Fix",
        author_id="u1",
        assigned_reviewers=["u2"],
    )

    with pytest.raises(NotAssignedError):
        pr.replace_reviewer("u9", "u4")

    pr.merge()
    with pytest.raises(PRMergedError):
        pr.replace_reviewer("u2", "u4")


def test_add_reviewer_skips_duplicates():
    pr = PullRequest(pull_request_id="pr-1", pull_request_name="Fix", author_id="u1")

    pr.add_reviewer("u2")
    pr.add_reviewer("u2")

    assert pr.assigned_reviewers == ["u2"]


@pytest.mark.parametrize(
    "error_cls, code",
    [
        (InvalidArgumentError, "INVALID_ARGUMENT"),
        (NotFoundError, "NOT_FOUND"),
        (PRMergedError, "PR_MERGED"),
        (NotAssignedError, "NOT_ASSIGNED"),
        (NoCandidateError, "NO_CANDIDATE"),
    ],
)
def test_errors_carry_codes(error_cls, code):
    error = error_cls("details")

    assert isinstance(error, PRAssignError)
    assert error.code == code
    assert error.message == "details"
    assert error_cls().message
