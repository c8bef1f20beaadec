"""Tests for urgency classification"""

from datetime import date, datetime

import pytest

from contract_manager.models import CalendarEvent, EventCategory, UrgencyStatus
from contract_manager.services.status import (
    classify_urgency,
    days_until,
    document_status,
    event_status,
    renewal_badge,
)

NOW = date(2025, 2, 15)


class TestClassifyUrgency:

    @pytest.mark.parametrize("days,expected", [
        (-1, UrgencyStatus.EXPIRED),
        (0, UrgencyStatus.URGENT),
        (7, UrgencyStatus.URGENT),
        (8, UrgencyStatus.UPCOMING),
        (30, UrgencyStatus.UPCOMING),
        (31, UrgencyStatus.ACTIVE),
    ])
    def test_event_thresholds(self, days, expected):
        assert classify_urgency(days, 7, 30) == expected

    @pytest.mark.parametrize("urgent,upcoming", [(0, 0), (7, 30), (60, 120), (365, 730)])
    def test_negative_days_always_expired(self, urgent, upcoming):
        assert classify_urgency(-1, urgent, upcoming) == UrgencyStatus.EXPIRED
        assert classify_urgency(-400, urgent, upcoming) == UrgencyStatus.EXPIRED

    @pytest.mark.parametrize("urgent,upcoming", [(7, 30), (10, 20), (60, 120)])
    def test_monotonic_in_days(self, urgent, upcoming):
        order = [UrgencyStatus.EXPIRED, UrgencyStatus.URGENT, UrgencyStatus.UPCOMING, UrgencyStatus.ACTIVE]
        ranks = [order.index(classify_urgency(d, urgent, upcoming)) for d in range(-5, 200)]
        assert ranks == sorted(ranks)


class TestDocumentStatus:

    def test_renewal_in_14_days_with_30_day_notice_is_urgent(self, make_document):
        doc = make_document(renewal_date=date(2025, 3, 1), notice_period_days=30)
        assert days_until(doc.renewal_date, NOW) == 14
        assert document_status(doc, NOW) == UrgencyStatus.URGENT

    def test_short_notice_is_upcoming(self, make_document):
        doc = make_document(renewal_date=date(2025, 3, 7), notice_period_days=10)
        assert document_status(doc, NOW) == UrgencyStatus.UPCOMING

    def test_long_notice_is_urgent(self, make_document):
        doc = make_document(renewal_date=date(2025, 3, 7), notice_period_days=60)
        assert document_status(doc, NOW) == UrgencyStatus.URGENT

    def test_past_renewal_is_expired(self, make_document):
        doc = make_document(renewal_date=date(2025, 2, 14))
        assert document_status(doc, NOW) == UrgencyStatus.EXPIRED

    def test_renewal_today_is_urgent(self, make_document):
        doc = make_document(renewal_date=NOW)
        assert document_status(doc, NOW) == UrgencyStatus.URGENT

    def test_far_renewal_is_active(self, make_document):
        doc = make_document(renewal_date=date(2025, 12, 31))
        assert document_status(doc, NOW) == UrgencyStatus.ACTIVE

    def test_no_renewal_date_is_active(self, make_document):
        doc = make_document(renewal_date=None)
        assert document_status(doc, NOW) == UrgencyStatus.ACTIVE

    def test_time_of_day_is_ignored(self, make_document):
        doc = make_document(renewal_date=date(2025, 3, 1))
        late = datetime(2025, 2, 15, 23, 59)
        assert document_status(doc, late) == UrgencyStatus.URGENT


class TestEventStatus:

    def _event(self, day):
        return CalendarEvent(
            id="e1", document_id="d1", event_type=EventCategory.PAYMENT,
            date=day, title="Fecha de pago",
        )

    def test_fixed_thresholds(self):
        assert event_status(self._event(date(2025, 2, 22)), NOW) == UrgencyStatus.URGENT
        assert event_status(self._event(date(2025, 3, 17)), NOW) == UrgencyStatus.UPCOMING
        assert event_status(self._event(date(2025, 3, 18)), NOW) == UrgencyStatus.ACTIVE
        assert event_status(self._event(date(2025, 2, 1)), NOW) == UrgencyStatus.EXPIRED


class TestRenewalBadge:

    @pytest.mark.parametrize("days,expected", [
        (-5, "expired"),
        (0, "due_soon"),
        (30, "due_soon"),
        (31, "upcoming"),
        (90, "upcoming"),
        (91, "active"),
    ])
    def test_badge(self, days, expected):
        assert renewal_badge(days) == expected
