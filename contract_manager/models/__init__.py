"""Data models"""

from contract_manager.models.contract import (
    AbusiveClause,
    ContractDocument,
    ExtractedValue,
    JsonValue,
    Severity,
    TextValue,
)
from contract_manager.models.event import (
    CATEGORY_STYLES,
    CalendarEvent,
    CategoryStyle,
    CustomTask,
    EventCategory,
    UrgencyStatus,
)
from contract_manager.models.team import (
    MemberRole,
    MemberStatus,
    Task,
    TaskPriority,
    TaskStatus,
    TeamMember,
)
from contract_manager.models.stats import (
    AlertRun,
    DashboardStats,
    RenewalAlert,
    SectorCount,
    Stats,
)

__all__ = [
    "AbusiveClause",
    "ContractDocument",
    "ExtractedValue",
    "JsonValue",
    "Severity",
    "TextValue",
    "CATEGORY_STYLES",
    "CalendarEvent",
    "CategoryStyle",
    "CustomTask",
    "EventCategory",
    "UrgencyStatus",
    "MemberRole",
    "MemberStatus",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TeamMember",
    "AlertRun",
    "DashboardStats",
    "RenewalAlert",
    "SectorCount",
    "Stats",
]
