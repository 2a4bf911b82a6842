"""
Profile merge for partial user updates.

Only fields that are present and truthy in the update replace stored
values; everything else keeps what the row already holds. An empty update
therefore changes nothing.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from bizconnect.core.exceptions import EntityNotFoundException
from bizconnect.core.logging import get_logger
from bizconnect.models import User
from bizconnect.schemas.user import ProfileUpdate
from bizconnect.services.list_fields import serialize_list_field

logger = get_logger(__name__)

LIST_FIELDS = frozenset({"districts", "categories"})


def merge_profile(user: User, changes: dict[str, Any]) -> list[str]:
    """
    Apply ``changes`` onto ``user`` in place.

    Args:
        user: Row to update
        changes: Field name to new value, typically ``ProfileUpdate.model_dump()``

    Returns:
        Names of the fields that were written.
    """
    written: list[str] = []

    for field, value in changes.items():
        if not value:
            continue
        if field in LIST_FIELDS:
            value = serialize_list_field(value)
        setattr(user, field, value)
        written.append(field)

    return written


async def update_profile(db: AsyncSession, user_id: int, update: ProfileUpdate) -> User:
    """
    Load a user and merge a partial profile update into it.

    Raises:
        EntityNotFoundException: no user with ``user_id``
    """
    user = await db.get(User, user_id)
    if user is None:
        raise EntityNotFoundException("User", user_id)

    written = merge_profile(user, update.model_dump(exclude_unset=True))
    await db.flush()
    await db.refresh(user)

    logger.info("Profile updated", user_id=user_id, fields=written)
    return user
