"""Urgency classification for documents and calendar events"""

from datetime import date, datetime
from typing import Union

from contract_manager.models.contract import ContractDocument
from contract_manager.models.event import CalendarEvent, UrgencyStatus
from contract_manager.utils.dates import to_date

EVENT_URGENT_DAYS = 7
EVENT_UPCOMING_DAYS = 30


def classify_urgency(
    days_until: int,
    threshold_urgent: int,
    threshold_upcoming: int,
) -> UrgencyStatus:
    """Map a day count to an urgency status.

    Negative counts are always expired. Both thresholds are inclusive.
    """
    if days_until < 0:
        return UrgencyStatus.EXPIRED
    if days_until <= threshold_urgent:
        return UrgencyStatus.URGENT
    if days_until <= threshold_upcoming:
        return UrgencyStatus.UPCOMING
    return UrgencyStatus.ACTIVE


def days_until(target: Union[date, datetime], now: Union[date, datetime]) -> int:
    """Whole calendar days from now until target (negative once passed)"""
    return (to_date(target) - to_date(now)).days


def document_status(document: ContractDocument, now: Union[date, datetime]) -> UrgencyStatus:
    """Status of a document's renewal, using its own notice period.

    A document without a renewal date has nothing pending and counts as active.
    """
    if document.renewal_date is None:
        return UrgencyStatus.ACTIVE
    notice = document.notice_period_days
    return classify_urgency(days_until(document.renewal_date, now), notice, notice * 2)


def event_status(
    event: CalendarEvent,
    now: Union[date, datetime],
    urgent_days: int = EVENT_URGENT_DAYS,
    upcoming_days: int = EVENT_UPCOMING_DAYS,
) -> UrgencyStatus:
    """Status of a generic event, using fixed thresholds"""
    return classify_urgency(days_until(event.date, now), urgent_days, upcoming_days)


def renewal_badge(days: int) -> str:
    """Badge shown in the contracts table next to the renewal date"""
    if days < 0:
        return "expired"
    if days <= 30:
        return "due_soon"
    if days <= 90:
        return "upcoming"
    return "active"
