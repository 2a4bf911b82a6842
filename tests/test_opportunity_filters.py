"""Tests for vendor-facing visibility, due-date math and filters."""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from bizconnect.models import OpportunityStatus
from bizconnect.services.opportunity_filters import (
    OpportunityFilters,
    days_until_due,
    due_date_label,
    filter_published,
    is_closed,
    is_due_soon,
    matches_filters,
    parse_due_date,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@dataclass
class Row:
    id: str
    status: OpportunityStatus = OpportunityStatus.PUBLISHED
    title: str = "Bridge Maintenance"
    scope_summary: str = "Technical assistance for bridges"
    district: str | None = "04"
    district_name: str | None = "D04 - Bay Area / Oakland"
    category: str | None = "services"
    category_name: str | None = "Support Services"
    subcategory: str | None = "Technical Assistance"
    due_date: str | None = "2026-03-05"


class TestDueDates:
    def test_days_round_up(self):
        # 2.5 days away
        assert days_until_due("2026-03-04", NOW) == 3

    def test_past_due_is_negative(self):
        assert days_until_due("2026-02-20", NOW) == -9

    def test_unparsable_is_none(self):
        assert parse_due_date("soon") is None
        assert days_until_due("TBD", NOW) is None
        assert days_until_due(None, NOW) is None

    def test_label(self):
        assert due_date_label("2026-03-15") == "March 15, 2026"
        assert due_date_label("TBD") == "Not specified"
        assert due_date_label(None) == "Not specified"

    @pytest.mark.parametrize(
        "days, soon, closed",
        [(None, False, False), (-1, False, True), (0, True, False), (7, True, False), (8, False, False)],
    )
    def test_badges(self, days, soon, closed):
        assert is_due_soon(days) is soon
        assert is_closed(days) is closed


class TestFilters:
    def test_no_filters_pass_everything_published(self):
        rows = [Row("a"), Row("b", status=OpportunityStatus.PENDING)]
        assert [r.id for r in filter_published(rows, OpportunityFilters(), NOW)] == ["a"]

    def test_district_and_category_are_exact(self):
        row = Row("a")
        assert matches_filters(row, OpportunityFilters(district="04"), NOW)
        assert not matches_filters(row, OpportunityFilters(district="4"), NOW)
        assert not matches_filters(row, OpportunityFilters(category="construction"), NOW)

    def test_due_within_excludes_later_and_unknown_dates(self):
        filters = OpportunityFilters(due_within=7)
        assert matches_filters(Row("a", due_date="2026-03-05"), filters, NOW)
        assert not matches_filters(Row("b", due_date="2026-04-30"), filters, NOW)
        assert not matches_filters(Row("c", due_date="TBD"), filters, NOW)
        assert not matches_filters(Row("d", due_date=None), filters, NOW)

    def test_keyword_is_case_insensitive_over_names(self):
        row = Row("a")
        assert matches_filters(row, OpportunityFilters(keyword="OAKLAND"), NOW)
        assert matches_filters(row, OpportunityFilters(keyword="technical assist"), NOW)
        assert not matches_filters(row, OpportunityFilters(keyword="asphalt"), NOW)

    def test_filters_are_conjunctive(self):
        rows = [
            Row("a"),
            Row("b", district="07"),
            Row("c", title="Paving", scope_summary="Asphalt", subcategory=None, category_name=None),
        ]
        filters = OpportunityFilters(district="04", keyword="bridge")
        assert [r.id for r in filter_published(rows, filters, NOW)] == ["a"]

    def test_is_empty(self):
        assert OpportunityFilters().is_empty
        assert not OpportunityFilters(due_within=0).is_empty
