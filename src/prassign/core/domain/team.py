"""Team domain entity."""
import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from .user import User, utcnow


@dataclass
class Team:
    """A named team and its roster.

    Membership is derived from ``User.team_name``; the ``members`` list is a
    snapshot of the users whose team name equals ``team_name``.
    """
    team_name: str
    members: list[User] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def active_members(self) -> list[User]:
        """Members eligible for review."""
        return [m for m in self.members if m.can_be_reviewer()]

    def active_members_excluding(self, user_id: str) -> list[User]:
        """Active members other than ``user_id``."""
        return [m for m in self.members if m.can_be_reviewer() and m.user_id != user_id]

    def get_member(self, user_id: str) -> Optional[User]:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def copy(self) -> "Team":
        """Deep copy of the team, members included."""
        return copy.deepcopy(self)

    def mark_inactive(self, user_ids: Iterable[str]) -> None:
        """Flag the given members as inactive in this snapshot only."""
        ids = set(user_ids)
        for member in self.members:
            if member.user_id in ids:
                member.is_active = False
