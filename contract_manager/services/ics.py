"""iCalendar (.ics) export of derived calendar events"""

import re
from datetime import date
from typing import Iterable, List

from contract_manager.models.event import CATEGORY_STYLES, CalendarEvent

PRODID = "-//YSN Solutions//Calendar//EN"
EXPORT_FILENAME = "eventos_calendario.ics"

DTSTART_PATTERN = re.compile(r"^DTSTART:(\d{4})(\d{2})(\d{2})T\d{6}Z$", re.MULTILINE)


def format_utc(value: date) -> str:
    """Basic UTC format YYYYMMDDTHHMMSSZ; events are all-day so time is midnight"""
    return f"{value.strftime('%Y%m%d')}T000000Z"


def event_to_vevent(event: CalendarEvent, org_domain: str, language: str = "es") -> str:
    """Render one VEVENT block"""
    stamp = format_utc(event.date)
    style = CATEGORY_STYLES[event.event_type]
    lines = [
        "BEGIN:VEVENT",
        f"UID:{event.id}@{org_domain}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{stamp}",
        f"SUMMARY:{style.icon} {style.label(language)}: {event.file_name}",
        f"DESCRIPTION:{event.title}: {event.description or ''}",
        "END:VEVENT",
    ]
    return "\n".join(lines)


def export_ics(
    events: Iterable[CalendarEvent],
    org_domain: str,
    language: str = "es",
) -> str:
    """Render a VCALENDAR document.

    Output depends only on the events, domain and language, so the same
    inputs give the same bytes.
    """
    blocks = [event_to_vevent(e, org_domain, language) for e in events]
    parts = ["BEGIN:VCALENDAR", "VERSION:2.0", f"PRODID:{PRODID}"]
    if blocks:
        parts.append("\n".join(blocks))
    parts.append("END:VCALENDAR")
    return "\n".join(parts)


def parse_ics_dates(text: str) -> List[date]:
    """DTSTART dates of every VEVENT, in file order"""
    return [
        date(int(y), int(m), int(d))
        for y, m, d in DTSTART_PATTERN.findall(text)
    ]
