"""
Schemas for the admin dashboard.
"""

from datetime import datetime

from bizconnect.schemas.common import BaseSchema


class DashboardStats(BaseSchema):
    total_vendors: int
    total_agencies: int
    pending_approvals: int


class PendingOpportunity(BaseSchema):
    id: str
    title: str
    posted_date: datetime | None = None
    posted_by: int | None = None
    poster_name: str | None = None
    poster_email: str | None = None


class ActivityItem(BaseSchema):
    """A recent registration rendered for the activity feed."""

    type: str
    user: str
    time: str


class AdminDashboard(BaseSchema):
    stats: DashboardStats
    pending_opportunities: list[PendingOpportunity]
    recent_activity: list[ActivityItem]
