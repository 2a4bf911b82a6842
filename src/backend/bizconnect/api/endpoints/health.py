"""
Liveness and database reachability probe.
"""

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bizconnect.api.deps import DB
from bizconnect.core.config import get_settings
from bizconnect.core.exceptions import DatabaseUnavailableException
from bizconnect.core.logging import get_logger
from bizconnect.schemas.common import DatabaseHealth, HealthResponse

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DB) -> HealthResponse:
    """
    Health check endpoint for load balancers and monitoring.

    Raises:
        DatabaseUnavailableException: ``SELECT 1`` failed
    """
    settings = get_settings()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check database probe failed", error=str(e))
        raise DatabaseUnavailableException(str(e)) from e

    return HealthResponse(
        version=settings.app_version,
        environment=settings.environment,
        database=DatabaseHealth(status="connected"),
    )
