"""Tests for month grid bucketing"""

from datetime import date

from contract_manager.models import CalendarEvent
from contract_manager.services.calendar_grid import (
    bucket_events_by_day,
    build_month_grid,
    leading_padding,
)


def _event(event_id, day):
    return CalendarEvent(id=event_id, document_id="d1", date=day, title=event_id)


class TestLeadingPadding:

    def test_month_starting_on_monday(self):
        # 1 September 2025 is a Monday
        assert leading_padding(9, 2025) == 0

    def test_month_starting_on_sunday(self):
        # 1 June 2025 is a Sunday
        assert leading_padding(6, 2025) == 6

    def test_month_starting_on_saturday(self):
        # 1 February 2025 is a Saturday
        assert leading_padding(2, 2025) == 5


class TestBucketEvents:

    def test_sparse_and_ordered(self):
        events = [
            _event("a", date(2025, 6, 15)),
            _event("b", date(2025, 6, 3)),
            _event("c", date(2025, 6, 15)),
            _event("other-month", date(2025, 7, 15)),
            _event("other-year", date(2024, 6, 15)),
        ]
        buckets = bucket_events_by_day(events, 6, 2025)
        assert set(buckets) == {3, 15}
        assert [e.id for e in buckets[15]] == ["a", "c"]

    def test_no_events(self):
        assert bucket_events_by_day([], 6, 2025) == {}


class TestBuildMonthGrid:

    def test_leap_february(self):
        grid = build_month_grid([], 2, 2024)
        assert len(grid.days) == 29
        assert grid.leading_padding == 3  # Thursday

    def test_today_and_events(self):
        events = [_event("a", date(2025, 6, 15))]
        grid = build_month_grid(events, 6, 2025, today=date(2025, 6, 10))
        assert len(grid.days) == 30
        assert [c.day for c in grid.days if c.is_today] == [10]
        assert [e.id for e in grid.days[14].events] == ["a"]
        assert grid.days[0].events == []
