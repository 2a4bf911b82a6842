"""
Pydantic schemas for API request/response validation.
"""

from bizconnect.schemas.admin import (
    ActivityItem,
    AdminDashboard,
    DashboardStats,
    PendingOpportunity,
)
from bizconnect.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    OpportunityApplicant,
)
from bizconnect.schemas.common import (
    BaseSchema,
    DatabaseHealth,
    HealthResponse,
    SuccessResponse,
)
from bizconnect.schemas.files import UploadResponse
from bizconnect.schemas.message import (
    ContactForm,
    MessageCreate,
    MessageCreated,
    MessageResponse,
)
from bizconnect.schemas.opportunity import (
    OpportunityCreate,
    OpportunityResponse,
    OpportunitySummary,
    OpportunityUpdate,
    PublishedOpportunity,
    SavedOpportunityResponse,
    SaveRequest,
)
from bizconnect.schemas.user import (
    AdminUserCreate,
    AdminUserCreated,
    AdminUserUpdate,
    AuthResponse,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserStatusResponse,
    UserStatusUpdate,
)

__all__ = [
    # Common
    "BaseSchema",
    "DatabaseHealth",
    "HealthResponse",
    "SuccessResponse",
    # Users
    "AdminUserCreate",
    "AdminUserCreated",
    "AdminUserUpdate",
    "AuthResponse",
    "ProfileUpdate",
    "UserLogin",
    "UserRegister",
    "UserResponse",
    "UserStatusResponse",
    "UserStatusUpdate",
    # Opportunities
    "OpportunityCreate",
    "OpportunityResponse",
    "OpportunitySummary",
    "OpportunityUpdate",
    "PublishedOpportunity",
    "SavedOpportunityResponse",
    "SaveRequest",
    # Applications
    "ApplicationCreate",
    "ApplicationResponse",
    "ApplicationStatusUpdate",
    "OpportunityApplicant",
    # Messages
    "ContactForm",
    "MessageCreate",
    "MessageCreated",
    "MessageResponse",
    # Admin
    "ActivityItem",
    "AdminDashboard",
    "DashboardStats",
    "PendingOpportunity",
    # Files
    "UploadResponse",
]
