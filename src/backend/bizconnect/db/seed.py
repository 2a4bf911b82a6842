"""
Demo account seeding.

Run with ``python -m bizconnect.db.seed``. Existing accounts are skipped,
so the command can be repeated safely.
"""

import asyncio
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizconnect.core.config import get_settings
from bizconnect.core.logging import get_logger, setup_logging
from bizconnect.core.security import hash_password
from bizconnect.db.migrations import init_database
from bizconnect.db.session import close_db, get_db_context, get_engine
from bizconnect.models import User, UserStatus, UserType

logger = get_logger(__name__)

DEFAULT_USERS: tuple[dict[str, Any], ...] = (
    {"email": "admin@caltransbizconnect.org", "type": UserType.ADMIN, "business_name": "Caltrans Admin"},
    {"email": "vendor@test.com", "type": UserType.VENDOR, "business_name": "Test Vendor Co."},
    {"email": "agency@test.com", "type": UserType.AGENCY, "organization_name": "Test Agency"},
)


async def seed_users(db: AsyncSession, users: tuple[dict[str, Any], ...], password: str) -> list[str]:
    """
    Create each account that does not exist yet.

    Returns:
        Emails of the accounts that were created.
    """
    created: list[str] = []

    for account in users:
        email = account["email"].strip().lower()
        existing = await db.scalar(select(User.id).where(func.lower(User.email) == email))
        if existing is not None:
            logger.info("Seed user already exists, skipping", email=email, user_id=existing)
            continue

        db.add(
            User(
                email=email,
                password_hash=hash_password(account.get("password") or password),
                type=account["type"],
                business_name=account.get("business_name"),
                organization_name=account.get("organization_name"),
                status=UserStatus.ACTIVE,
            )
        )
        await db.flush()
        created.append(email)
        logger.info("Seed user created", email=email, type=UserType(account["type"]).value)

    return created


async def main() -> None:
    setup_logging()
    settings = get_settings()

    await init_database(get_engine())
    async with get_db_context() as db:
        created = await seed_users(db, DEFAULT_USERS, settings.seed_user_password)
    await close_db()

    logger.info("Seeding complete", created=len(created))


if __name__ == "__main__":
    asyncio.run(main())
