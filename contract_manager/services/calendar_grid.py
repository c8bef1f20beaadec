"""Month grid layout for the calendar view (Monday-first)"""

import calendar
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel

from contract_manager.models.event import CalendarEvent

WEEKDAY_NAMES = {
    "es": ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"],
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
}


class DayCell(BaseModel):
    """One day in the month grid"""
    day: int
    is_today: bool = False
    events: List[CalendarEvent] = []


class MonthGrid(BaseModel):
    """A month laid out for a seven-column, Monday-first grid"""
    year: int
    month: int
    leading_padding: int
    days: List[DayCell]


def bucket_events_by_day(
    events: Iterable[CalendarEvent],
    month: int,
    year: int,
) -> dict[int, List[CalendarEvent]]:
    """Group the events of one month by day of month.

    Sparse: days without events have no key. Input order is kept per day.
    """
    buckets: dict[int, List[CalendarEvent]] = {}
    for event in events:
        if event.date.year == year and event.date.month == month:
            buckets.setdefault(event.date.day, []).append(event)
    return buckets


def leading_padding(month: int, year: int) -> int:
    """Empty cells before day 1 in a Monday-first week.

    Equals (weekday_of_first + 6) % 7 with Sunday=0, i.e. Python's weekday().
    """
    return date(year, month, 1).weekday()


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def build_month_grid(
    events: Iterable[CalendarEvent],
    month: int,
    year: int,
    today: Optional[date] = None,
) -> MonthGrid:
    """Full grid for a month: padding count plus one cell per day"""
    buckets = bucket_events_by_day(events, month, year)
    days = [
        DayCell(
            day=day,
            is_today=today is not None and today == date(year, month, day),
            events=buckets.get(day, []),
        )
        for day in range(1, days_in_month(month, year) + 1)
    ]
    return MonthGrid(
        year=year,
        month=month,
        leading_padding=leading_padding(month, year),
        days=days,
    )
