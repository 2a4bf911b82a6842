from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bizconnect.api.router import api_router
from bizconnect.core.config import get_settings
from bizconnect.core.exceptions import AppException, DatabaseException, ValidationException
from bizconnect.core.logging import get_logger, setup_logging
from bizconnect.db.migrations import init_database
from bizconnect.db.session import close_db, get_engine
from bizconnect.middleware.access_log import AccessLogMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Manages startup and shutdown operations including:
    - Logging configuration
    - Schema creation and lazy column migration
    - Resource cleanup
    """
    # Startup
    setup_logging()
    settings = get_settings()

    logger.info(
        "Application starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database(get_engine())
        logger.info("Database ready", database_url=settings.database_url)
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("Application shutting down")
    await close_db()
    logger.info("Database connections closed")


def _field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(loc) or "body", []).append(error.get("msg", "invalid"))
    return errors


def create_application() -> FastAPI:
    """
    Application factory.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Marketplace connecting Caltrans agencies with small business vendors",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AccessLogMiddleware, exclude_paths={"/health", f"{settings.api_prefix}/health"})

    # Include API routes; the unprefixed copy serves proxies that strip the prefix
    app.include_router(api_router, prefix=settings.api_prefix)
    if settings.mount_unprefixed:
        app.include_router(api_router, include_in_schema=False)

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "Application exception",
            error_code=exc.error_code,
            message=exc.message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed or missing request fields as 400."""
        error = ValidationException("Missing or invalid fields", _field_errors(exc))
        logger.warning(
            "Request validation failed",
            path=request.url.path,
            fields=sorted(error.details["field_errors"]),
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Database failures surface as 500 with the driver's message."""
        logger.error("Database error", error=str(exc), path=request.url.path)
        error = DatabaseException(str(exc.orig) if getattr(exc, "orig", None) else str(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
        )
        content: dict[str, Any] = {
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) or "An unexpected error occurred",
                "details": {},
            }
        }
        return JSONResponse(status_code=500, content=content)

    return app


# Create application instance
app = create_application()
