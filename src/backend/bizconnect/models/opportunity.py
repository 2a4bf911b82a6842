"""
Opportunity model - contracting postings created by agencies.

Opportunity ids are supplied by the caller (e.g. ``CAL-1234``). New postings
are published unless the agency asks for review, in which case an
administrator approves them.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bizconnect.db.base import Base


class OpportunityStatus(str, enum.Enum):
    """Moderation status of an opportunity."""

    PENDING = "pending"       # Awaiting admin approval
    PUBLISHED = "published"   # Visible to vendors


class Opportunity(Base):
    """A contracting opportunity posted by an agency user."""

    __tablename__ = "opportunities"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Basic Information
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    scope_summary: Mapped[str] = mapped_column(Text, nullable=False)

    # Classification
    district: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    district_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    category_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subcategory: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Value (free text, e.g. "$150,000 - $300,000")
    estimated_value: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Submission
    due_date: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        comment="Free text as entered by the agency; parsed leniently for display",
    )
    due_time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    submission_method: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Tracking
    status: Mapped[OpportunityStatus] = mapped_column(
        Enum(
            OpportunityStatus,
            name="opportunitystatus",
            native_enum=False,
            length=20,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=OpportunityStatus.PUBLISHED,
        server_default=OpportunityStatus.PUBLISHED.value,
        index=True,
    )
    posted_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    posted_date: Mapped[datetime | None] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=True,
    )

    # Optional details
    attachments: Mapped[str | None] = mapped_column(Text, nullable=True, comment="JSON list")
    duration: Mapped[str | None] = mapped_column(Text, nullable=True)
    requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    certifications: Mapped[str | None] = mapped_column(Text, nullable=True)
    experience: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Opportunity(id='{self.id}', title='{self.title[:50]}', status='{self.status}')>"
