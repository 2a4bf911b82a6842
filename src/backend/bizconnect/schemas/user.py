"""
Schemas for registration, login and profiles.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, AliasChoices, Field, field_validator

from bizconnect.models.user import UserStatus, UserType
from bizconnect.schemas.common import BaseSchema
from bizconnect.services.list_fields import parse_list_field


def _normalize_email(v: str) -> str:
    return v.strip().lower()


Email = Annotated[str, Field(min_length=3, max_length=255), AfterValidator(_normalize_email)]


class UserRegister(BaseSchema):
    """Self-service registration for vendors and agencies."""

    email: Email
    password: str = Field(min_length=1)
    type: UserType
    business_name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    ein: str | None = None
    certification_number: str | None = None
    organization_name: str | None = None
    address: str | None = Field(
        default=None,
        validation_alias=AliasChoices("address", "businessAddress", "business_address"),
    )
    city: str | None = None
    zip: str | None = Field(
        default=None,
        validation_alias=AliasChoices("zip", "zipCode", "zip_code"),
    )
    website: str | None = None


class UserLogin(BaseSchema):
    email: Email
    password: str = Field(min_length=1)


class ProfileUpdate(BaseSchema):
    """
    Partial profile update.

    Falsy values are ignored by the merge, so clients may send the whole
    form including blank fields.
    """

    business_name: str | None = None
    organization_name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    ein: str | None = None
    certification_number: str | None = None
    website: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = Field(
        default=None,
        validation_alias=AliasChoices("zip", "zipCode", "zip_code"),
    )
    business_description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("business_description", "businessDescription", "description"),
    )
    certifications: str | None = None
    years_in_business: str | None = None
    districts: list[Any] | str | None = Field(
        default=None,
        validation_alias=AliasChoices("districts", "preferredDistricts", "preferred_districts"),
    )
    categories: list[Any] | str | None = Field(
        default=None,
        validation_alias=AliasChoices("categories", "workCategories", "work_categories"),
    )
    capability_statement: str | None = None


class UserResponse(BaseSchema):
    """Public profile; never includes the password hash."""

    id: int
    email: str
    type: UserType
    business_name: str | None = None
    organization_name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    ein: str | None = None
    certification_number: str | None = None
    business_description: str | None = None
    website: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    years_in_business: str | None = None
    certifications: str | None = None
    districts: list[Any] = Field(default_factory=list)
    categories: list[Any] = Field(default_factory=list)
    capability_statement: str | None = None
    status: UserStatus | None = None
    created_at: datetime | None = None

    @field_validator("districts", "categories", mode="before")
    @classmethod
    def parse_list_columns(cls, v: Any) -> list[Any]:
        return parse_list_field(v)


class AuthResponse(BaseSchema):
    """Registration and login result."""

    success: bool = True
    user: UserResponse
    admin_token: str | None = Field(
        default=None,
        description="Signed capability token, issued to administrators only",
    )


class AdminUserCreate(BaseSchema):
    email: Email
    password: str = Field(min_length=1)
    type: UserType
    business_name: str | None = None
    organization_name: str | None = None
    status: UserStatus = UserStatus.ACTIVE


class AdminUserCreated(BaseSchema):
    id: int
    email: str
    type: UserType


class AdminUserUpdate(BaseSchema):
    """Fields an administrator may overwrite; unset or null fields are left alone."""

    business_name: str | None = None
    organization_name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    ein: str | None = None
    status: UserStatus | None = None
    type: UserType | None = None
    password: str | None = None


class UserStatusUpdate(BaseSchema):
    status: UserStatus


class UserStatusResponse(BaseSchema):
    id: int
    status: UserStatus
