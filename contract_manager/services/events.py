"""Event derivation: documents + extracted fields + tasks -> one sorted calendar"""

import logging
import re
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from contract_manager.models.contract import ContractDocument, TextValue
from contract_manager.models.event import CalendarEvent, CustomTask, EventCategory
from contract_manager.services.status import EVENT_UPCOMING_DAYS, EVENT_URGENT_DAYS, event_status
from contract_manager.utils.dates import extract_date

logger = logging.getLogger(__name__)

# Checked top to bottom against the field name; first hit wins
EVENT_CATEGORY_PATTERNS: List[tuple[EventCategory, re.Pattern]] = [
    (EventCategory.RENEWAL, re.compile(r"renovación|renewal|prórroga|extension", re.IGNORECASE)),
    (EventCategory.PAYMENT, re.compile(r"pago|payment|factura|invoice|cuota|prima|renta", re.IGNORECASE)),
    (EventCategory.AUDIT, re.compile(r"auditoría|audit|inspección|inspection", re.IGNORECASE)),
    (EventCategory.REVIEW, re.compile(r"revisión|review|evaluación|assessment", re.IGNORECASE)),
    (EventCategory.DEADLINE, re.compile(r"límite|deadline|plazo|notice|preaviso", re.IGNORECASE)),
    (EventCategory.EXPIRY, re.compile(r"vencimiento|expiry|caducidad|vigencia|effective", re.IGNORECASE)),
]

CUSTOM_DOCUMENT_ID = "custom"

RENEWAL_TITLES = {"es": "Renovación", "en": "Renewal"}
MANUAL_TASK_NAMES = {"es": "Tarea Manual", "en": "Manual Task"}


def classify_field(field_name: str) -> EventCategory:
    """Pick the event category for an extracted field by its name"""
    for category, pattern in EVENT_CATEGORY_PATTERNS:
        if pattern.search(field_name):
            return category
    return EventCategory.OTHER


def renewal_event(document: ContractDocument, language: str = "es") -> Optional[CalendarEvent]:
    """The renewal event of a document, if it has a renewal date"""
    if document.renewal_date is None:
        return None
    prefix = RENEWAL_TITLES.get(language, RENEWAL_TITLES["en"])
    return CalendarEvent(
        id=f"{document.id}-renewal",
        document_id=document.id,
        file_name=document.file_name,
        sector=document.sector,
        event_type=EventCategory.RENEWAL,
        date=document.renewal_date,
        title=f"{prefix}: {document.file_name}",
        description=document.contract_type,
    )


def extracted_field_events(document: ContractDocument) -> List[CalendarEvent]:
    """One event per extracted text field whose value carries a date"""
    events = []
    for key, value in document.extracted_data.items():
        if not isinstance(value, TextValue) or not value.value:
            continue
        found = extract_date(value.value)
        if found is None:
            continue
        events.append(CalendarEvent(
            id=f"{document.id}-{key}",
            document_id=document.id,
            file_name=document.file_name,
            sector=document.sector,
            event_type=classify_field(key),
            date=found,
            title=key,
            description=value.value,
        ))
    return events


def task_event(task: CustomTask, language: str = "es") -> CalendarEvent:
    """Surface a user task as a calendar event"""
    return CalendarEvent(
        id=task.id,
        document_id=CUSTOM_DOCUMENT_ID,
        file_name=MANUAL_TASK_NAMES.get(language, MANUAL_TASK_NAMES["en"]),
        event_type=task.event_type or EventCategory.OTHER,
        date=task.date,
        title=task.title,
        description=task.description,
    )


def derive_events(
    documents: Iterable[ContractDocument],
    tasks: Iterable[CustomTask] = (),
    language: str = "es",
) -> List[CalendarEvent]:
    """Build the full calendar, sorted ascending by date.

    Renewal events, dated extracted fields and user tasks are gathered in
    that order and then sorted, so input order never matters beyond ties.
    """
    events: List[CalendarEvent] = []
    for document in documents:
        renewal = renewal_event(document, language)
        if renewal is not None:
            events.append(renewal)
        for event in extracted_field_events(document):
            # The renewal date already has its event; a renewal field repeating it adds nothing
            if renewal is not None and event.event_type == EventCategory.RENEWAL and event.date == renewal.date:
                continue
            events.append(event)

    events.extend(task_event(task, language) for task in tasks)

    events.sort(key=lambda e: e.date)
    logger.debug(f"Derived {len(events)} calendar events")
    return events


def filter_events(
    events: Iterable[CalendarEvent],
    now: Union[date, datetime],
    search: str = "",
    event_type: Optional[str] = None,
    status: Optional[str] = None,
    urgent_days: int = EVENT_URGENT_DAYS,
    upcoming_days: int = EVENT_UPCOMING_DAYS,
) -> List[CalendarEvent]:
    """Filter events by search text (file name or title), category and urgency"""
    term = search.lower()
    result = []
    for event in events:
        if term and term not in event.file_name.lower() and term not in event.title.lower():
            continue
        if event_type and event_type != "all" and event.event_type.value != event_type:
            continue
        if status and status != "all" and event_status(event, now, urgent_days, upcoming_days).value != status:
            continue
        result.append(event)
    return result
