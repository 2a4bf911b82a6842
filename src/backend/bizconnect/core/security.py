"""
Password hashing and admin capability tokens.

Passwords are stored as bcrypt hashes. Admin routes accept a short-lived
HS256 token issued at login; ordinary vendor and agency accounts receive no
token at all.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from bizconnect.core.config import get_settings
from bizconnect.core.exceptions import AuthenticationException

BCRYPT_ROUNDS = 10
ADMIN_SCOPE = "admin"


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_admin_token(user_id: int, email: str) -> str:
    """Issue a signed admin capability token for the given account."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "scope": ADMIN_SCOPE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.admin_token_expire_minutes)).timestamp()),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.admin_token_algorithm)


def decode_admin_token(token: str) -> int:
    """
    Verify an admin capability token.

    Returns:
        The user id the token was issued to.

    Raises:
        AuthenticationException: signature, expiry or scope is invalid.
    """
    if not token:
        raise AuthenticationException("Missing admin token")

    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.admin_token_algorithm],
        )
    except JWTError as e:
        raise AuthenticationException(f"Invalid admin token: {e}") from e

    if claims.get("scope") != ADMIN_SCOPE:
        raise AuthenticationException("Token does not carry the admin scope")

    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise AuthenticationException("Token subject is missing") from e
