"""Pull request and reviewer assignment models."""
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..storage.database import Base


class PullRequestRecord(Base):
    """A pull request."""

    __tablename__ = "pull_requests"
    __table_args__ = (CheckConstraint("status IN ('OPEN', 'MERGED')", name="ck_pr_status"),)

    pull_request_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    pull_request_name: Mapped[str] = mapped_column(String(500), nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.user_id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="OPEN", index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    merged_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    reviewers: Mapped[list["PullRequestReviewer"]] = relationship(
        "PullRequestReviewer",
        back_populates="pull_request",
        cascade="all, delete-orphan",
        order_by="PullRequestReviewer.id",
    )

    def __repr__(self) -> str:
        return f"<PullRequestRecord(pull_request_id='{self.pull_request_id}', status='{self.status}')>"


class PullRequestReviewer(Base):
    """Join row between a pull request and an assigned reviewer.

    The autoincrement ``id`` records assignment order.
    """

    __tablename__ = "pr_reviewers"
    __table_args__ = (UniqueConstraint("pull_request_id", "user_id", name="uq_pr_reviewer"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pull_request_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.user_id"), nullable=False, index=True
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    pull_request: Mapped["PullRequestRecord"] = relationship(
        "PullRequestRecord", back_populates="reviewers"
    )

    def __repr__(self) -> str:
        return f"<PullRequestReviewer(pull_request_id='{self.pull_request_id}', user_id='{self.user_id}')>"
