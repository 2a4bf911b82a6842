"""
Administration endpoints.

Everything except the root liveness route requires a signed admin token
(see ``api.deps.require_admin``).
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from bizconnect.api.deps import DB, AdminUser
from bizconnect.core.exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationException,
)
from bizconnect.core.logging import get_logger
from bizconnect.core.security import hash_password
from bizconnect.models import Opportunity, OpportunityStatus, User, UserType
from bizconnect.schemas.admin import (
    ActivityItem,
    AdminDashboard,
    DashboardStats,
    PendingOpportunity,
)
from bizconnect.schemas.common import SuccessResponse
from bizconnect.schemas.user import (
    AdminUserCreate,
    AdminUserCreated,
    AdminUserUpdate,
    UserResponse,
    UserStatusResponse,
    UserStatusUpdate,
)

logger = get_logger(__name__)
router = APIRouter()

RECENT_ACTIVITY_LIMIT = 5


def format_relative_time(moment: datetime | None, now: datetime) -> str:
    """'Just now', 'N hours ago', 'N days ago', or the date after a week."""
    if moment is None:
        return "Unknown"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    hours = int((now - moment).total_seconds() // 3600)
    days = hours // 24

    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hours ago"
    if days < 7:
        return f"{days} days ago"
    return moment.strftime("%m/%d/%Y")


async def _get_user_or_404(db: DB, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise EntityNotFoundException("User", user_id)
    return user


@router.get("", response_model=SuccessResponse)
async def admin_root() -> SuccessResponse:
    return SuccessResponse(message="Admin API is working")


@router.get("/dashboard", response_model=AdminDashboard)
async def get_dashboard(db: DB, admin: AdminUser) -> AdminDashboard:
    """Counts, the moderation queue and the latest registrations."""
    total_vendors = await db.scalar(
        select(func.count(User.id)).where(User.type == UserType.VENDOR)
    ) or 0
    total_agencies = await db.scalar(
        select(func.count(User.id)).where(User.type == UserType.AGENCY)
    ) or 0

    pending_result = await db.execute(
        select(
            Opportunity,
            func.coalesce(User.business_name, User.organization_name).label("poster_name"),
            User.email.label("poster_email"),
        )
        .outerjoin(User, Opportunity.posted_by == User.id)
        .where(Opportunity.status == OpportunityStatus.PENDING)
        .order_by(Opportunity.posted_date.desc(), Opportunity.id)
    )
    pending = [
        PendingOpportunity(
            id=row.Opportunity.id,
            title=row.Opportunity.title,
            posted_date=row.Opportunity.posted_date,
            posted_by=row.Opportunity.posted_by,
            poster_name=row.poster_name,
            poster_email=row.poster_email,
        )
        for row in pending_result.all()
    ]

    recent_result = await db.execute(
        select(User.email, User.type, User.created_at)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
    )
    now = datetime.now(timezone.utc)
    activity = [
        ActivityItem(
            type="user_reg" if row.type == UserType.VENDOR else "agency_reg",
            user=row.email,
            time=format_relative_time(row.created_at, now),
        )
        for row in recent_result.all()
    ]

    return AdminDashboard(
        stats=DashboardStats(
            total_vendors=total_vendors,
            total_agencies=total_agencies,
            pending_approvals=len(pending),
        ),
        pending_opportunities=pending,
        recent_activity=activity,
    )


@router.get("/users", response_model=list[UserResponse])
async def list_all_users(db: DB, admin: AdminUser) -> list[UserResponse]:
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return [UserResponse.model_validate(user) for user in result.scalars().all()]


@router.post("/users", response_model=AdminUserCreated, status_code=status.HTTP_201_CREATED)
async def create_user(db: DB, admin: AdminUser, data: AdminUserCreate) -> AdminUserCreated:
    existing = await db.scalar(select(User.id).where(func.lower(User.email) == data.email))
    if existing is not None:
        raise DuplicateEntityException("User", "email", data.email, message="Email already exists")

    user = User(
        password_hash=hash_password(data.password),
        **data.model_dump(exclude={"password"}),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateEntityException(
            "User", "email", data.email, message="Email already exists"
        ) from e

    logger.info("User created by admin", user_id=user.id, admin_id=admin.id, type=user.type.value)
    return AdminUserCreated(id=user.id, email=user.email, type=user.type)


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(db: DB, admin: AdminUser, user_id: int) -> UserResponse:
    return UserResponse.model_validate(await _get_user_or_404(db, user_id))


@router.put("/users/{user_id}", response_model=SuccessResponse)
async def update_user(db: DB, admin: AdminUser, user_id: int, data: AdminUserUpdate) -> SuccessResponse:
    """
    Overwrite the supplied non-null fields. A new password is hashed before storage.

    Raises:
        ValidationException: the body names no field to update
    """
    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"password"})
    if not changes and not data.password:
        raise ValidationException("No fields to update")

    user = await _get_user_or_404(db, user_id)
    for field, value in changes.items():
        setattr(user, field, value)
    if data.password:
        user.password_hash = hash_password(data.password)

    await db.flush()
    logger.info(
        "User updated by admin",
        user_id=user_id,
        admin_id=admin.id,
        fields=sorted(changes) + (["password"] if data.password else []),
    )
    return SuccessResponse(message="User updated", data={"id": user_id})


@router.put("/users/{user_id}/status", response_model=UserStatusResponse)
async def update_user_status(
    db: DB,
    admin: AdminUser,
    user_id: int,
    data: UserStatusUpdate,
) -> UserStatusResponse:
    user = await _get_user_or_404(db, user_id)
    user.status = data.status
    await db.flush()

    logger.info("User status changed", user_id=user_id, status=data.status.value, admin_id=admin.id)
    return UserStatusResponse(id=user_id, status=data.status)


@router.delete("/users/{user_id}", response_model=SuccessResponse)
async def delete_user(db: DB, admin: AdminUser, user_id: int) -> SuccessResponse:
    """Delete an account. Its applications, bookmarks and messages go with it."""
    result = await db.execute(delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        raise EntityNotFoundException("User", user_id)

    logger.info("User deleted by admin", user_id=user_id, admin_id=admin.id)
    return SuccessResponse(message="User deleted", data={"id": user_id})
