"""Date helpers for extracted contract values (ISO, DD/MM/YYYY, Spanish long form)"""

import re
from datetime import date, datetime
from typing import Optional, Union

SPANISH_MONTHS = {
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "setiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
}

ISO_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
SLASH_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})")
LONG_FORM_PATTERN = re.compile(r"(\d{1,2}) de (\w+) de (\d{4})", re.IGNORECASE)


def _from_iso(match: re.Match) -> Optional[date]:
    year, month, day = (int(g) for g in match.groups())
    return _safe_date(year, month, day)


def _from_slash(match: re.Match) -> Optional[date]:
    # Day first; MM/DD/YYYY inputs are not disambiguated
    day, month, year = (int(g) for g in match.groups())
    return _safe_date(year, month, day)


def _from_long_form(match: re.Match) -> Optional[date]:
    day, month_name, year = match.groups()
    month = SPANISH_MONTHS.get(month_name.lower())
    if month is None:
        return None
    return _safe_date(int(year), month, int(day))


# Order matters: first pattern that matches wins, even if it then fails to parse
DATE_PATTERNS = [
    (ISO_PATTERN, _from_iso),
    (SLASH_PATTERN, _from_slash),
    (LONG_FORM_PATTERN, _from_long_form),
]


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def extract_date(text: str) -> Optional[date]:
    """Find the first date-like substring in free text and parse it.

    Patterns are tried in order (ISO, slash, Spanish long form). The first
    pattern that matches decides; a match that is not a real calendar date
    (e.g. 2025-02-30) yields None instead of falling through.
    """
    if not text:
        return None
    for pattern, parser in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            return parser(match)
    return None


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Parse a stored date column (date, datetime or ISO string). Never raises."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    match = ISO_PATTERN.match(text)
    if match:
        return _from_iso(match)
    return None


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a stored timestamp column. Never raises."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def to_date(value: Union[date, datetime]) -> date:
    """Collapse a datetime to its calendar date"""
    return value.date() if isinstance(value, datetime) else value
