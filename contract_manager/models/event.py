"""Calendar event models"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class EventCategory(str, Enum):
    """Category of a calendar event"""
    RENEWAL = "renewal"
    PAYMENT = "payment"
    AUDIT = "audit"
    REVIEW = "review"
    DEADLINE = "deadline"
    EXPIRY = "expiry"
    OTHER = "other"


class UrgencyStatus(str, Enum):
    """Time-based urgency of a document or event"""
    EXPIRED = "expired"
    URGENT = "urgent"
    UPCOMING = "upcoming"
    ACTIVE = "active"


class CategoryStyle(BaseModel):
    """Display settings for an event category"""
    color: str
    icon: str
    label_es: str
    label_en: str

    def label(self, language: str = "es") -> str:
        return self.label_es if language == "es" else self.label_en


CATEGORY_STYLES: dict[EventCategory, CategoryStyle] = {
    EventCategory.RENEWAL: CategoryStyle(color="emerald", icon="🔄", label_es="Renovación", label_en="Renewal"),
    EventCategory.PAYMENT: CategoryStyle(color="blue", icon="💰", label_es="Pago", label_en="Payment"),
    EventCategory.AUDIT: CategoryStyle(color="purple", icon="🔍", label_es="Auditoría", label_en="Audit"),
    EventCategory.REVIEW: CategoryStyle(color="amber", icon="📋", label_es="Revisión", label_en="Review"),
    EventCategory.DEADLINE: CategoryStyle(color="red", icon="⏰", label_es="Fecha límite", label_en="Deadline"),
    EventCategory.EXPIRY: CategoryStyle(color="orange", icon="📅", label_es="Vencimiento", label_en="Expiry"),
    EventCategory.OTHER: CategoryStyle(color="slate", icon="📌", label_es="Otro", label_en="Other"),
}

STATUS_LABELS: dict[UrgencyStatus, tuple[str, str]] = {
    UrgencyStatus.EXPIRED: ("Vencido", "Expired"),
    UrgencyStatus.URGENT: ("Urgente", "Urgent"),
    UrgencyStatus.UPCOMING: ("Próximo", "Upcoming"),
    UrgencyStatus.ACTIVE: ("Activo", "Active"),
}


class CalendarEvent(BaseModel):
    """A date-bearing fact derived from documents or tasks (never persisted)"""
    id: str
    document_id: str
    file_name: str = ""
    sector: Optional[str] = None
    event_type: EventCategory = EventCategory.OTHER
    date: date
    title: str
    description: Optional[str] = None


class CustomTask(BaseModel):
    """A user-authored calendar task"""
    id: str = ""
    title: str
    description: Optional[str] = None
    date: date
    event_type: EventCategory = EventCategory.OTHER
    assigned_to: Optional[str] = None
    assigned_to_name: Optional[str] = None
