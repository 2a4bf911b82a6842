"""
Vendor-facing opportunity visibility and filtering.

These functions work on rows that were already fetched; nothing here
touches the database. ``now`` is always passed explicitly so listings and
tests agree on the clock.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable

from dateutil import parser as date_parser

from bizconnect.models import OpportunityStatus

SECONDS_PER_DAY = 86400
DUE_SOON_DAYS = 7
NOT_SPECIFIED = "Not specified"


@dataclass(frozen=True)
class OpportunityFilters:
    """Conjunctive filters; a ``None`` or empty field is not applied."""

    district: str | None = None
    category: str | None = None
    due_within: int | None = None
    keyword: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.district or self.category or self.due_within is not None or self.keyword)


def parse_due_date(value: Any) -> datetime | None:
    """
    Parse a stored due date leniently.

    Naive values are read as UTC. Returns ``None`` when the value is absent
    or cannot be parsed.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.parse(str(value))
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_until_due(due_date: Any, now: datetime) -> int | None:
    """Whole days until the due date, rounded up; ``None`` when unknown."""
    due = parse_due_date(due_date)
    if due is None:
        return None
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.ceil((due - now).total_seconds() / SECONDS_PER_DAY)


def due_date_label(due_date: Any) -> str:
    """Long US date (``March 15, 2026``) or ``Not specified``."""
    due = parse_due_date(due_date)
    if due is None:
        return NOT_SPECIFIED
    return f"{due:%B} {due.day}, {due.year}"


def is_due_soon(days: int | None) -> bool:
    return days is not None and 0 <= days <= DUE_SOON_DAYS


def is_closed(days: int | None) -> bool:
    return days is not None and days < 0


def is_published(opportunity: Any) -> bool:
    """Only published opportunities are visible to vendors."""
    return getattr(opportunity, "status", None) == OpportunityStatus.PUBLISHED


def searchable_text(opportunity: Any) -> str:
    """Lowercased haystack for keyword search."""
    parts = (
        getattr(opportunity, "title", None),
        getattr(opportunity, "scope_summary", None),
        getattr(opportunity, "district_name", None),
        getattr(opportunity, "category_name", None),
        getattr(opportunity, "subcategory", None),
    )
    return " ".join(part or "" for part in parts).lower()


def matches_filters(opportunity: Any, filters: OpportunityFilters, now: datetime) -> bool:
    """Apply district, category, due-within and keyword filters in order."""
    if filters.district and getattr(opportunity, "district", None) != filters.district:
        return False

    if filters.category and getattr(opportunity, "category", None) != filters.category:
        return False

    if filters.due_within is not None:
        days = days_until_due(getattr(opportunity, "due_date", None), now)
        if days is None or days > filters.due_within:
            return False

    if filters.keyword:
        if filters.keyword.lower() not in searchable_text(opportunity):
            return False

    return True


def filter_published(
    opportunities: Iterable[Any],
    filters: OpportunityFilters,
    now: datetime,
) -> list[Any]:
    """Published opportunities that pass every active filter, order preserved."""
    return [
        opp
        for opp in opportunities
        if is_published(opp) and matches_filters(opp, filters, now)
    ]
