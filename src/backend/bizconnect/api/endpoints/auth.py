"""
Registration, login and self-service profile updates.
"""

from fastapi import APIRouter, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from bizconnect.api.deps import DB
from bizconnect.core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateEntityException,
    ValidationException,
)
from bizconnect.core.logging import get_logger
from bizconnect.core.security import create_admin_token, hash_password, verify_password
from bizconnect.models import User, UserStatus, UserType
from bizconnect.schemas.user import (
    AuthResponse,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
)
from bizconnect.services.profile import update_profile

logger = get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(db: DB, data: UserRegister) -> AuthResponse:
    """Create a vendor or agency account. Administrators are seeded or created by an admin."""
    logger.info("Registration attempt", email=data.email, type=data.type.value)

    if data.type == UserType.ADMIN:
        raise ValidationException(
            "Administrator accounts cannot be self-registered",
            {"type": ["must be vendor or agency"]},
        )

    existing = await db.scalar(select(User.id).where(func.lower(User.email) == data.email))
    if existing is not None:
        logger.warning("Registration rejected, email taken", email=data.email)
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
    await db.refresh(user)

    logger.info("Registration successful", email=user.email, user_id=user.id)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(db: DB, data: UserLogin) -> AuthResponse:
    """
    Verify credentials and return the stored profile.

    Administrators additionally receive a signed token for the admin API.
    """
    user = await db.scalar(select(User).where(func.lower(User.email) == data.email))
    match = verify_password(data.password, user.password_hash) if user else False

    if user is None or not match:
        logger.warning("Login failed", email=data.email, user_found=user is not None)
        raise AuthenticationException()

    if user.status == UserStatus.SUSPENDED:
        logger.warning("Login refused for suspended account", user_id=user.id)
        raise AuthorizationException("Account is suspended")

    admin_token = None
    if user.type == UserType.ADMIN:
        admin_token = create_admin_token(user.id, user.email)

    logger.info("Login successful", user_id=user.id, type=user.type.value)
    return AuthResponse(user=UserResponse.model_validate(user), admin_token=admin_token)


@router.put("/{user_id}", response_model=UserResponse)
async def update_own_profile(db: DB, user_id: int, data: ProfileUpdate) -> UserResponse:
    """Partial profile update; blank fields keep their stored values."""
    user = await update_profile(db, user_id, data)
    return UserResponse.model_validate(user)
