"""
Main API router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from bizconnect.api.endpoints import (
    admin,
    applications,
    auth,
    files,
    health,
    messages,
    opportunities,
    users,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, tags=["Health"])

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"],
)

api_router.include_router(
    opportunities.router,
    prefix="/opportunities",
    tags=["Opportunities"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    users.router,
    prefix="/vendors",
    tags=["Users"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)

api_router.include_router(
    messages.router,
    prefix="/messages",
    tags=["Messages"],
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
)

api_router.include_router(files.router, tags=["Files"])
