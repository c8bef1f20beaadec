"""Request/response schemas for the contract management API"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from contract_manager.models import (
    CalendarEvent,
    ContractDocument,
    EventCategory,
    MemberRole,
    Stats,
    TaskPriority,
    TaskStatus,
)
from contract_manager.services.calendar_grid import MonthGrid


class HealthResponse(BaseModel):
    """Health check response"""
    status: str  # "ok" | "error"
    db_mode: str
    version: str = "0.1.0"


# =========================================================
# Contracts
# =========================================================

class ContractRow(BaseModel):
    """A contract in the contracts table"""
    document: ContractDocument
    status: str
    badge: Optional[str] = None


class ContractPageResponse(BaseModel):
    """One page of the contracts table"""
    items: List[ContractRow] = []
    total: int = 0
    page: int = 1
    page_size: int = 10
    page_count: int = 1


class RenameRequest(BaseModel):
    """Request to rename a contract file"""
    file_name: str = Field(..., min_length=1, max_length=255)


class FieldsUpdateRequest(BaseModel):
    """User corrections to extracted fields"""
    fields: dict[str, str]


class DraftRequest(BaseModel):
    """Unsaved field edits"""
    fields: dict[str, str]


class DeleteResponse(BaseModel):
    """Generic delete result"""
    deleted: bool = True
    id: str


# =========================================================
# Calendar
# =========================================================

class EventItem(BaseModel):
    """A calendar event with its current urgency"""
    event: CalendarEvent
    status: str
    label: str
    icon: str
    color: str


class EventListResponse(BaseModel):
    """Filtered calendar events"""
    events: List[EventItem] = []
    total: int = 0


class StatsResponse(BaseModel):
    """Calendar statistics"""
    stats: Stats
    generated_at: datetime = Field(default_factory=datetime.now)


class GridResponse(BaseModel):
    """Month grid for the calendar view"""
    grid: MonthGrid
    weekdays: List[str] = []


class TaskCreateRequest(BaseModel):
    """Request to add a custom calendar task"""
    title: str = Field(..., min_length=1, max_length=200)
    date: date
    description: str = ""
    event_type: EventCategory = EventCategory.OTHER
    assigned_to: Optional[str] = None


# =========================================================
# Team
# =========================================================

class MemberCreateRequest(BaseModel):
    """Request to add a team member"""
    name: str
    email: str
    avatar: Optional[str] = None
    role: MemberRole = MemberRole.MEMBER


class TeamTaskCreateRequest(BaseModel):
    """Request to create a team task"""
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    contract_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority = TaskPriority.MEDIUM


class TeamTaskUpdateRequest(BaseModel):
    """Request to change a team task's status or assignee"""
    status: Optional[TaskStatus] = None
    assigned_to: Optional[str] = None
