"""User domain entity."""
from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A team member.

    Only active users may be selected as reviewers.
    """
    user_id: str
    username: str
    team_name: str
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()

    def set_is_active(self, is_active: bool) -> None:
        if is_active:
            self.activate()
        else:
            self.deactivate()

    def can_be_reviewer(self) -> bool:
        return self.is_active
