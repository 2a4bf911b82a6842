"""
Schemas for messages and the public contact form.
"""

from datetime import datetime

from pydantic import Field

from bizconnect.schemas.common import BaseSchema


class MessageCreate(BaseSchema):
    sender_id: int
    receiver_id: int
    opportunity_id: str | None = None
    subject: str | None = None
    body: str = Field(min_length=1)


class MessageCreated(BaseSchema):
    id: int
    message: str = "Message sent"


class MessageResponse(BaseSchema):
    """A message joined with display names and the opportunity title."""

    id: int
    sender_id: int
    receiver_id: int
    opportunity_id: str | None = None
    subject: str | None = None
    body: str
    is_read: bool = False
    created_at: datetime | None = None
    sender_name: str | None = None
    receiver_name: str | None = None
    opportunity_title: str | None = None


class ContactForm(BaseSchema):
    """Public "contact us" submission. Delivered to the log only."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    subject: str | None = None
    message: str = Field(min_length=1)
    issue_type: str | None = None
    page_url: str | None = None
