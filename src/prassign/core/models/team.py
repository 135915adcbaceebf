"""Team model."""
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..storage.database import Base


class TeamRecord(Base):
    """A team; members are users whose ``team_name`` points here."""

    __tablename__ = "teams"

    team_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    members: Mapped[list["UserRecord"]] = relationship(
        "UserRecord", back_populates="team", order_by="UserRecord.username"
    )

    def __repr__(self) -> str:
        return f"<TeamRecord(team_name='{self.team_name}')>"
