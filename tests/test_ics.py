"""Tests for iCalendar export"""

from datetime import date

from contract_manager.models import CalendarEvent, EventCategory
from contract_manager.services.ics import export_ics, format_utc, parse_ics_dates


def _payment():
    return CalendarEvent(
        id="doc1-Fecha de pago",
        document_id="doc1",
        file_name="Alquiler.pdf",
        event_type=EventCategory.PAYMENT,
        date=date(2025, 6, 15),
        title="Fecha de pago",
        description="15/06/2025",
    )


class TestExportIcs:

    def test_single_event_layout(self):
        expected = "\n".join([
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            "PRODID:-//YSN Solutions//Calendar//EN",
            "BEGIN:VEVENT",
            "UID:doc1-Fecha de pago@ysnsolutions.com",
            "DTSTAMP:20250615T000000Z",
            "DTSTART:20250615T000000Z",
            "SUMMARY:💰 Pago: Alquiler.pdf",
            "DESCRIPTION:Fecha de pago: 15/06/2025",
            "END:VEVENT",
            "END:VCALENDAR",
        ])
        assert export_ics([_payment()], "ysnsolutions.com") == expected

    def test_english_labels(self):
        text = export_ics([_payment()], "example.com", language="en")
        assert "SUMMARY:💰 Payment: Alquiler.pdf" in text
        assert "UID:doc1-Fecha de pago@example.com" in text

    def test_empty_calendar(self):
        text = export_ics([], "ysnsolutions.com")
        assert text == "BEGIN:VCALENDAR\nVERSION:2.0\nPRODID:-//YSN Solutions//Calendar//EN\nEND:VCALENDAR"

    def test_deterministic(self):
        events = [_payment(), _payment().model_copy(update={"id": "x", "date": date(2025, 1, 2)})]
        assert export_ics(events, "a.com") == export_ics(events, "a.com")

    def test_one_vevent_per_event_with_dates(self):
        events = [
            _payment(),
            _payment().model_copy(update={"id": "doc1-renewal", "event_type": EventCategory.RENEWAL,
                                          "date": date(2026, 1, 31)}),
        ]
        text = export_ics(events, "ysnsolutions.com")
        assert text.count("BEGIN:VEVENT") == 2
        assert parse_ics_dates(text) == [date(2025, 6, 15), date(2026, 1, 31)]

    def test_missing_description(self):
        event = _payment().model_copy(update={"description": None})
        assert "DESCRIPTION:Fecha de pago: \n" in export_ics([event], "a.com")


def test_format_utc():
    assert format_utc(date(2025, 3, 1)) == "20250301T000000Z"
