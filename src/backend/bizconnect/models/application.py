"""
Application model - a vendor's submission of interest against an opportunity.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from bizconnect.db.base import Base


class ApplicationStatus(str, enum.Enum):
    """Review state of an application."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    AWARDED = "awarded"
    REJECTED = "rejected"


class Application(Base):
    """
    One vendor application per opportunity.

    ``agency_id`` is copied from the opportunity's poster when the
    application is submitted and is not kept in sync afterwards.
    """

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("opportunity_id", "vendor_id", name="uq_applications_opportunity_vendor"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    opportunity_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("opportunities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vendor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    agency_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=ApplicationStatus.PENDING.value,
        server_default=ApplicationStatus.PENDING.value,
    )
    applied_date: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Application(id={self.id}, opportunity='{self.opportunity_id}', "
            f"vendor={self.vendor_id}, status='{self.status}')>"
        )
