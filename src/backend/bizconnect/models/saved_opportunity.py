"""
SavedOpportunity model - vendor bookmarks.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from bizconnect.db.base import Base


class SavedOpportunity(Base):
    """A (vendor, opportunity) bookmark; the pair is unique."""

    __tablename__ = "saved_opportunities"
    __table_args__ = (
        UniqueConstraint("vendor_id", "opportunity_id", name="uq_saved_opportunities_vendor_opportunity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vendor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    opportunity_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("opportunities.id", ondelete="CASCADE"),
        nullable=False,
    )
    saved_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<SavedOpportunity(vendor={self.vendor_id}, opportunity='{self.opportunity_id}')>"
