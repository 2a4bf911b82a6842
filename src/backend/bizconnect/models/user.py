"""
User model - vendors, agencies and administrators share one table.

The account type decides which profile columns are meaningful:
``business_name`` for vendors, ``organization_name`` for agencies.
"""

import enum

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizconnect.db.base import Base, CreatedAtMixin


class UserType(str, enum.Enum):
    """Account type."""

    VENDOR = "vendor"
    AGENCY = "agency"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """Moderation status set by administrators."""

    ACTIVE = "active"
    SUSPENDED = "suspended"


class User(Base, CreatedAtMixin):
    """
    A registered account.

    ``districts`` and ``categories`` hold JSON-encoded lists as text; older
    rows may contain a bare string instead (see services.list_fields).
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[UserType] = mapped_column(
        Enum(
            UserType,
            name="usertype",
            native_enum=False,
            length=20,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )

    # Profile
    business_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    organization_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ein: Mapped[str | None] = mapped_column(String(50), nullable=True)
    certification_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    business_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Address
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)

    years_in_business: Mapped[str | None] = mapped_column(String(50), nullable=True)
    certifications: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Preferences (JSON text)
    districts: Mapped[str | None] = mapped_column(Text, nullable=True)
    categories: Mapped[str | None] = mapped_column(Text, nullable=True)

    capability_statement: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Public path of the uploaded capability statement",
    )

    status: Mapped[UserStatus] = mapped_column(
        Enum(
            UserStatus,
            name="userstatus",
            native_enum=False,
            length=20,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=UserStatus.ACTIVE,
        server_default=UserStatus.ACTIVE.value,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', type='{self.type}')>"
