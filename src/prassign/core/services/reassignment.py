"""Reviewer replacement shared by single and bulk reassignment."""
import logging
from typing import Optional

from ..assignment import AssignmentStrategy
from ..domain import PullRequest, Reassignment, Team
from ..storage.interfaces import PullRequestRepository, Transactor
from ..storage.transaction import Transaction

logger = logging.getLogger(__name__)


async def replace_reviewer(
    transactor: Transactor,
    pr_repo: PullRequestRepository,
    strategy: AssignmentStrategy,
    pr: PullRequest,
    old_user_id: str,
    roster: Team,
    tx: Optional[Transaction] = None,
) -> Reassignment:
    """Swap one reviewer of an open pull request for a random teammate.

    The replacement is drawn from ``roster`` excluding every current reviewer
    and the author. It is chosen before anything is written, so a
    ``NoCandidateError`` leaves the pull request untouched. ``pr`` is updated
    in place to mirror the persisted change.

    Args:
        transactor: Unit-of-work runner
        pr_repo: Pull request repository
        strategy: Reviewer selection strategy
        pr: Current state of the pull request
        old_user_id: Reviewer being replaced
        roster: Team snapshot to draw the replacement from
        tx: Enclosing transaction, if any

    Returns:
        The reassignment that was performed
    """
    exclude = [*pr.assigned_reviewers, pr.author_id]
    new_user_id = strategy.select_replacement_reviewer(roster, exclude)

    async def swap(tx: Transaction) -> None:
        await pr_repo.remove_reviewer(tx, pr.pull_request_id, old_user_id)
        await pr_repo.add_reviewer(tx, pr.pull_request_id, new_user_id)

    await transactor.run(swap, tx=tx)
    pr.replace_reviewer(old_user_id, new_user_id)

    logger.debug(
        f"Replaced reviewer {old_user_id} with {new_user_id} on {pr.pull_request_id}"
    )
    return Reassignment(
        pull_request_id=pr.pull_request_id,
        old_user_id=old_user_id,
        new_user_id=new_user_id,
    )
