"""
Schemas for Application API.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from bizconnect.models.application import ApplicationStatus
from bizconnect.schemas.common import BaseSchema
from bizconnect.services.list_fields import parse_list_field


class ApplicationCreate(BaseSchema):
    opportunity_id: str = Field(min_length=1)
    vendor_id: int
    notes: str | None = None


class ApplicationStatusUpdate(BaseSchema):
    status: ApplicationStatus


class ApplicationResponse(BaseSchema):
    """An application joined with opportunity and party names."""

    id: int
    opportunity_id: str
    vendor_id: int
    agency_id: int | None = None
    status: str
    applied_date: datetime | None = None
    notes: str | None = None
    opportunity_title: str | None = None
    district_name: str | None = None
    due_date: str | None = None
    agency_name: str | None = None
    vendor_name: str | None = None


class OpportunityApplicant(ApplicationResponse):
    """Agency view of an application, with the vendor's contact details."""

    business_name: str | None = None
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    certification_number: str | None = None
    capability_statement: str | None = None
    districts: list[Any] = Field(default_factory=list)
    categories: list[Any] = Field(default_factory=list)

    @field_validator("districts", "categories", mode="before")
    @classmethod
    def parse_list_columns(cls, v: Any) -> list[Any]:
        return parse_list_field(v)
