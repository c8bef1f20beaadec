"""Team collaboration models"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel


class MemberRole(str, Enum):
    """Role of a team member"""
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class MemberStatus(str, Enum):
    """Invitation status of a team member"""
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class TaskStatus(str, Enum):
    """Progress of a team task"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Priority of a team task"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


TASK_STATUS_LABELS = {
    TaskStatus.PENDING: ("Pendiente", "Pending"),
    TaskStatus.IN_PROGRESS: ("En progreso", "In progress"),
    TaskStatus.COMPLETED: ("Completada", "Completed"),
}

MEMBER_STATUS_LABELS = {
    MemberStatus.PENDING: ("Invitación pendiente", "Invitation pending"),
    MemberStatus.ACTIVE: ("Activo", "Active"),
    MemberStatus.INACTIVE: ("Inactivo", "Inactive"),
}


def status_label(status: Union[TaskStatus, MemberStatus], language: str = "es") -> str:
    """Human label for a task or member status"""
    # Both enums share the "pending" value, so look up by type
    labels = MEMBER_STATUS_LABELS if isinstance(status, MemberStatus) else TASK_STATUS_LABELS
    es, en = labels[status]
    return es if language == "es" else en


class TeamMember(BaseModel):
    """A collaborator that can be assigned tasks"""
    id: str = ""
    name: str
    email: str
    avatar: str = "👤"
    role: MemberRole = MemberRole.MEMBER
    status: MemberStatus = MemberStatus.ACTIVE
    created_at: Optional[datetime] = None


class Task(BaseModel):
    """A team task, optionally linked to a contract"""
    id: str = ""
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    contract_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    created_at: Optional[datetime] = None
