"""Tests for date extraction from free-text field values"""

from datetime import date, datetime

from contract_manager.utils.dates import extract_date, parse_date, parse_datetime


class TestExtractDate:

    def test_iso(self):
        assert extract_date("Vence el 2025-06-15") == date(2025, 6, 15)

    def test_slash_is_day_first(self):
        assert extract_date("15/06/2025") == date(2025, 6, 15)
        assert extract_date("01/02/2025") == date(2025, 2, 1)

    def test_spanish_long_form(self):
        assert extract_date("firmado el 3 de marzo de 2024") == date(2024, 3, 3)

    def test_spanish_long_form_case_insensitive(self):
        assert extract_date("15 de Septiembre de 2025") == date(2025, 9, 15)

    def test_unknown_month_name(self):
        assert extract_date("3 de march de 2024") is None

    def test_no_date(self):
        assert extract_date("Important stuff") is None
        assert extract_date("") is None

    def test_invalid_calendar_date_is_dropped(self):
        assert extract_date("2025-02-30") is None

    def test_first_pattern_decides(self):
        # ISO is tried first even when it appears later in the text
        assert extract_date("15/06/2025 o 2025-07-01") == date(2025, 7, 1)

    def test_invalid_iso_does_not_fall_through(self):
        assert extract_date("2025-13-01 o 15/06/2025") is None


class TestParseStoredValues:

    def test_parse_date_variants(self):
        assert parse_date("2025-03-01") == date(2025, 3, 1)
        assert parse_date("2025-03-01T10:00:00Z") == date(2025, 3, 1)
        assert parse_date(datetime(2025, 3, 1, 9, 30)) == date(2025, 3, 1)
        assert parse_date(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_parse_date_never_raises(self):
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("not a date") is None
        assert parse_date(12345) is None

    def test_parse_datetime(self):
        assert parse_datetime("2025-03-01T10:00:00") == datetime(2025, 3, 1, 10, 0)
        assert parse_datetime("garbage") is None
        assert parse_datetime(None) is None
