"""
Schemas for Opportunity API.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from bizconnect.models.opportunity import OpportunityStatus
from bizconnect.schemas.common import BaseSchema
from bizconnect.services.list_fields import parse_list_field


class OpportunityFields(BaseSchema):
    """Editable fields shared by create and update."""

    title: str = Field(min_length=1, max_length=500)
    scope_summary: str = Field(min_length=1)
    district: str | None = None
    district_name: str | None = None
    category: str | None = None
    category_name: str | None = None
    subcategory: str | None = None
    estimated_value: str | None = None
    due_date: str | None = None
    due_time: str | None = None
    submission_method: str | None = None
    status: OpportunityStatus | None = None
    attachments: list[Any] | str | None = None
    duration: str | None = None
    requirements: str | None = None
    certifications: str | None = None
    experience: str | None = None


class OpportunityCreate(OpportunityFields):
    """
    New posting.

    The id is chosen by the agency (e.g. ``CAL-1234``); ``posted_by`` must
    reference an existing user. Status defaults to published.
    """

    id: str = Field(min_length=1, max_length=64)
    posted_by: int


class OpportunityUpdate(OpportunityFields):
    """Full replacement of the editable fields; an omitted status is kept."""


class OpportunitySummary(BaseSchema):
    id: str
    title: str
    status: OpportunityStatus


class OpportunityResponse(BaseSchema):
    """Schema for a stored opportunity."""

    id: str
    title: str
    scope_summary: str
    district: str | None = None
    district_name: str | None = None
    category: str | None = None
    category_name: str | None = None
    subcategory: str | None = None
    estimated_value: str | None = None
    due_date: str | None = None
    due_time: str | None = None
    submission_method: str | None = None
    status: OpportunityStatus
    posted_by: int | None = None
    posted_date: datetime | None = None
    attachments: list[Any] = Field(default_factory=list)
    duration: str | None = None
    requirements: str | None = None
    certifications: str | None = None
    experience: str | None = None

    @field_validator("attachments", mode="before")
    @classmethod
    def parse_attachments(cls, v: Any) -> list[Any]:
        return parse_list_field(v)


class PublishedOpportunity(OpportunityResponse):
    """Vendor-facing listing item with derived due-date display fields."""

    days_until_due: int | None = None
    due_date_label: str
    is_due_soon: bool = False
    is_closed: bool = False


class SavedOpportunityResponse(OpportunityResponse):
    saved_at: datetime | None = None


class SaveRequest(BaseSchema):
    """Bookmark toggle body."""

    vendor_id: int
    opportunity_id: str = Field(min_length=1)
