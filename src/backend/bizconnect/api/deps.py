"""
Shared route dependencies.
"""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bizconnect.core.exceptions import AuthenticationException, AuthorizationException
from bizconnect.core.logging import get_logger
from bizconnect.core.security import decode_admin_token
from bizconnect.db.session import get_db
from bizconnect.models import User, UserStatus, UserType

logger = get_logger(__name__)

DB = Annotated[AsyncSession, Depends(get_db)]


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthenticationException("Missing admin token")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationException("Authorization header must be 'Bearer <token>'")
    return parts[1].strip()


async def require_admin(
    request: Request,
    db: DB,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """
    Resolve the administrator behind a signed admin token.

    Raises:
        AuthenticationException: header missing, malformed or token invalid
        AuthorizationException: the account is gone, suspended or not an admin
    """
    user_id = decode_admin_token(_bearer_token(authorization))

    user = await db.get(User, user_id)
    if user is None or user.type != UserType.ADMIN or user.status == UserStatus.SUSPENDED:
        logger.warning("Admin access denied", user_id=user_id, path=request.url.path)
        raise AuthorizationException()

    request.state.user_id = user.id
    return user


AdminUser = Annotated[User, Depends(require_admin)]
