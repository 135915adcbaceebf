"""User model."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..storage.database import Base


class UserRecord(Base):
    """A team member and their reviewer eligibility flag."""

    __tablename__ = "users"
    __table_args__ = (Index("idx_users_team_active", "team_name", "is_active"),)

    user_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    username: Mapped[str] = mapped_column(String(200), nullable=False)
    team_name: Mapped[str] = mapped_column(
        String(100), ForeignKey("teams.team_name", ondelete="CASCADE"), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    team: Mapped["TeamRecord"] = relationship("TeamRecord", back_populates="members")

    def __repr__(self) -> str:
        return f"<UserRecord(user_id='{self.user_id}', team_name='{self.team_name}', is_active={self.is_active})>"
