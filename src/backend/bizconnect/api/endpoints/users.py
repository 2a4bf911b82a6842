"""
Public user directory and profile endpoints.

Mounted at both ``/users`` and ``/vendors``.
"""

from fastapi import APIRouter, Query
from sqlalchemy import or_, select

from bizconnect.api.deps import DB
from bizconnect.core.exceptions import EntityNotFoundException
from bizconnect.core.logging import get_logger
from bizconnect.models import User, UserType
from bizconnect.schemas.user import ProfileUpdate, UserResponse
from bizconnect.services.profile import update_profile

logger = get_logger(__name__)
router = APIRouter()

DIRECTORY_LIMIT = 50


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: DB,
    type: UserType | None = None,
    district: str | None = None,
    category: str | None = None,
    search: str | None = Query(default=None, max_length=200),
) -> list[UserResponse]:
    """
    Directory listing, newest first.

    ``district`` and ``category`` match anywhere in the stored list text;
    ``search`` matches business name, organization name or email.
    """
    query = select(User)

    if type:
        query = query.where(User.type == type)

    if district:
        query = query.where(User.districts.contains(district, autoescape=True))

    if category:
        query = query.where(User.categories.contains(category, autoescape=True))

    if search:
        query = query.where(
            or_(
                User.business_name.contains(search, autoescape=True),
                User.organization_name.contains(search, autoescape=True),
                User.email.contains(search, autoescape=True),
            )
        )

    query = query.order_by(User.created_at.desc(), User.id.desc()).limit(DIRECTORY_LIMIT)
    result = await db.execute(query)
    return [UserResponse.model_validate(user) for user in result.scalars().all()]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(db: DB, user_id: int) -> UserResponse:
    """Public profile. List fields are normalized on the way out."""
    user = await db.get(User, user_id)
    if user is None:
        logger.warning("User not found", user_id=user_id)
        raise EntityNotFoundException("User", user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(db: DB, user_id: int, data: ProfileUpdate) -> UserResponse:
    """Partial profile update; absent or blank fields keep their stored values."""
    user = await update_profile(db, user_id, data)
    return UserResponse.model_validate(user)
