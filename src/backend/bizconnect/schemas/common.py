"""
Common schemas used across the API.

Every schema uses camelCase on the wire and snake_case in Python. Input
accepts either spelling, so clients never need to send both.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class SuccessResponse(BaseSchema):
    """Generic success response."""

    success: bool = True
    message: str
    data: dict[str, Any] | None = None


class DatabaseHealth(BaseSchema):
    status: str
    detail: str | None = None


class HealthResponse(BaseSchema):
    """Health check response."""

    status: str = Field(default="ok")
    version: str
    environment: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    database: DatabaseHealth
