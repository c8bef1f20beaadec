"""Calendar service — loads documents and tasks, derives and exports events."""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from contract_manager.db.base import ContractStore
from contract_manager.models.contract import ContractDocument
from contract_manager.models.event import CalendarEvent, CustomTask, EventCategory
from contract_manager.models.stats import DashboardStats, Stats
from contract_manager.services.calendar_grid import MonthGrid, build_month_grid
from contract_manager.services.events import derive_events, filter_events
from contract_manager.services.ics import export_ics
from contract_manager.services.ingest import document_from_record, task_from_record
from contract_manager.services.stats import compute_dashboard_stats, compute_stats
from contract_manager.utils.config import get_settings
from contract_manager.utils.dates import to_date

logger = logging.getLogger(__name__)


class CalendarService:
    """Builds the calendar view for one user from the current store contents."""

    def __init__(self, store: Optional[ContractStore] = None, language: Optional[str] = None):
        self.settings = get_settings()
        self._store = store
        self.language = language or self.settings.language

    @property
    def store(self) -> ContractStore:
        """Lazy-load store client."""
        if self._store is None:
            from contract_manager.db.supabase import get_store
            self._store = get_store()
        return self._store

    def load_documents(self, user_id: Optional[str] = None) -> List[ContractDocument]:
        documents = []
        for record in self.store.list_contracts(user_id):
            try:
                documents.append(document_from_record(record))
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping malformed contract {record.get('id')}: {e}")
        return documents

    def load_tasks(self, user_id: Optional[str]) -> List[CustomTask]:
        if not user_id:
            return []
        tasks = (task_from_record(r) for r in self.store.list_calendar_events(user_id))
        return [t for t in tasks if t is not None]

    def events(self, user_id: Optional[str] = None) -> List[CalendarEvent]:
        """All calendar events of a user, sorted by date"""
        return derive_events(self.load_documents(user_id), self.load_tasks(user_id), self.language)

    def filtered_events(
        self,
        user_id: Optional[str],
        now: Union[date, datetime],
        search: str = "",
        event_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[CalendarEvent]:
        return filter_events(
            self.events(user_id), now, search, event_type, status,
            self.settings.event_urgent_days, self.settings.event_upcoming_days,
        )

    def stats(self, user_id: Optional[str], now: Union[date, datetime]) -> Stats:
        documents = self.load_documents(user_id)
        events = derive_events(documents, self.load_tasks(user_id), self.language)
        return compute_stats(documents, events, now)

    def dashboard(self, user_id: Optional[str], now: Union[date, datetime]) -> DashboardStats:
        return compute_dashboard_stats(self.load_documents(user_id), now)

    def month_grid(
        self,
        user_id: Optional[str],
        year: int,
        month: int,
        today: Optional[Union[date, datetime]] = None,
    ) -> MonthGrid:
        return build_month_grid(
            self.events(user_id), month, year, to_date(today) if today else None
        )

    def export(self, events: List[CalendarEvent]) -> str:
        """Render events as an .ics document for this service's language"""
        return export_ics(events, self.settings.org_domain, self.language)

    def add_task(
        self,
        user_id: str,
        title: str,
        task_date: date,
        description: str = "",
        event_type: EventCategory = EventCategory.OTHER,
        assigned_to: Optional[str] = None,
    ) -> CustomTask:
        """Persist a user task and return it as stored"""
        if not title or not title.strip():
            raise ValueError("Title is required")
        record = self.store.insert_calendar_event({
            "title": title.strip(),
            "description": description,
            "date": task_date.isoformat(),
            "color": "blue",
            "event_type": event_type.value,
            "assigned_to_member": assigned_to,
            "user_id": user_id,
        })
        task = task_from_record(record)
        logger.info(f"Created calendar task {task.id} on {task_date}")
        return task

    def delete_task(self, task_id: str) -> bool:
        return self.store.delete_calendar_event(task_id)
