"""
SQLAlchemy declarative base and common model utilities.
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Tables keep the plural snake_case names of the existing database, so each
    model declares its own ``__tablename__`` and primary key.
    """


class CreatedAtMixin:
    """
    Mixin that adds a server-side created_at timestamp.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=True,
    )
