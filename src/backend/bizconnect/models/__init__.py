"""
SQLAlchemy ORM models for the marketplace.
"""

from bizconnect.models.user import User, UserStatus, UserType
from bizconnect.models.opportunity import Opportunity, OpportunityStatus
from bizconnect.models.application import Application, ApplicationStatus
from bizconnect.models.saved_opportunity import SavedOpportunity
from bizconnect.models.message import Message

__all__ = [
    # User
    "User",
    "UserStatus",
    "UserType",
    # Opportunity
    "Opportunity",
    "OpportunityStatus",
    # Application
    "Application",
    "ApplicationStatus",
    # Saved Opportunity
    "SavedOpportunity",
    # Message
    "Message",
]
