"""Randomized reviewer selection."""
import random
import threading
from typing import Iterable, Optional

from ..domain import NoCandidateError, Team

MAX_REVIEWERS = 2


class AssignmentStrategy:
    """Picks reviewers uniformly at random from a team roster.

    The strategy is stateless apart from its random source. The source is
    shared by every request, so each shuffle or draw is taken under a lock.
    Pass a seeded ``random.Random`` to get reproducible selections.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize the strategy.

        Args:
            rng: Random source; a system-seeded one is created when omitted
        """
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.Lock()

    def select_reviewers(self, team: Team, author_id: str) -> list[str]:
        """Choose up to two distinct active reviewers other than the author.

        Args:
            team: Roster snapshot of the author's team
            author_id: Pull request author

        Returns:
            ``min(2, candidates)`` user ids in random order; empty when the
            author has no active teammates
        """
        candidates = team.active_members_excluding(author_id)
        if not candidates:
            return []

        with self._lock:
            self._rng.shuffle(candidates)

        return [c.user_id for c in candidates[:MAX_REVIEWERS]]

    def select_replacement_reviewer(
        self, team: Team, exclude_user_ids: Iterable[str]
    ) -> str:
        """Choose one active member of ``team`` that is not excluded.

        Args:
            team: Roster snapshot the vacancy belongs to
            exclude_user_ids: Current reviewers, the author and any ids
                already chosen earlier in the same operation

        Returns:
            The replacement's user id

        Raises:
            NoCandidateError: If every active member is excluded
        """
        excluded = set(exclude_user_ids)
        candidates = [m for m in team.active_members() if m.user_id not in excluded]
        if not candidates:
            raise NoCandidateError()

        with self._lock:
            chosen = self._rng.choice(candidates)

        return chosen.user_id
