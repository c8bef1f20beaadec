"""Team members and team tasks"""

import logging
from datetime import date
from typing import List, Optional

from contract_manager.db.base import ContractStore
from contract_manager.models.team import (
    MemberRole,
    Task,
    TaskPriority,
    TaskStatus,
    TeamMember,
)
from contract_manager.services.ingest import member_from_record, validate_team_member
from contract_manager.utils.dates import parse_date, parse_datetime

logger = logging.getLogger(__name__)


def task_from_row(record: dict) -> Task:
    """Build a Task from a tasks row"""
    try:
        priority = TaskPriority(record.get("priority") or "medium")
    except ValueError:
        priority = TaskPriority.MEDIUM
    try:
        status = TaskStatus(record.get("status") or "pending")
    except ValueError:
        status = TaskStatus.PENDING
    return Task(
        id=str(record.get("id", "")),
        title=record.get("title") or "",
        description=record.get("description"),
        assigned_to=record.get("assigned_to"),
        contract_id=record.get("contract_id"),
        due_date=parse_date(record.get("due_date")),
        priority=priority,
        status=status,
        created_at=parse_datetime(record.get("created_at")),
    )


class TeamService:
    """CRUD for a user's team members and team tasks."""

    def __init__(self, store: Optional[ContractStore] = None):
        self._store = store

    @property
    def store(self) -> ContractStore:
        """Lazy-load store client."""
        if self._store is None:
            from contract_manager.db.supabase import get_store
            self._store = get_store()
        return self._store

    def list_members(self, user_id: str) -> List[TeamMember]:
        return [member_from_record(r) for r in self.store.list_team_members(user_id)]

    def add_member(
        self,
        user_id: str,
        name: str,
        email: str,
        avatar: Optional[str] = None,
        role: MemberRole = MemberRole.MEMBER,
    ) -> TeamMember:
        """Validate and store a team member. Raises ValueError on bad input."""
        name = (name or "").strip()
        email = (email or "").strip().lower()
        validate_team_member(name, email)
        record = self.store.insert_team_member({
            "user_id": user_id,
            "name": name,
            "email": email,
            "avatar": avatar or "👤",
            "role": role.value,
        })
        logger.info(f"Added team member {record.get('id')} for {user_id}")
        return member_from_record(record)

    def remove_member(self, user_id: str, member_id: str) -> bool:
        return self.store.delete_team_member(member_id, user_id)

    def list_tasks(self, user_id: str) -> List[Task]:
        return [task_from_row(r) for r in self.store.list_tasks(user_id)]

    def create_task(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        assigned_to: Optional[str] = None,
        contract_id: Optional[str] = None,
        due_date: Optional[date] = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> Task:
        if not title or not title.strip():
            raise ValueError("Title is required")
        if assigned_to and assigned_to not in {m.id for m in self.list_members(user_id)}:
            raise ValueError(f"Unknown team member: {assigned_to}")
        record = self.store.insert_task({
            "created_by": user_id,
            "assigned_to": assigned_to,
            "contract_id": contract_id,
            "title": title.strip(),
            "description": description,
            "due_date": due_date.isoformat() if due_date else None,
            "priority": priority.value,
            "status": TaskStatus.PENDING.value,
        })
        task = task_from_row(record)
        if assigned_to:
            # Notification delivery is handled by the mail provider
            logger.info(f"Task {task.id} assigned to member {assigned_to}")
        return task

    def update_task(
        self,
        task_id: str,
        status: Optional[TaskStatus] = None,
        assigned_to: Optional[str] = None,
    ) -> Optional[Task]:
        updates = {}
        if status is not None:
            updates["status"] = status.value
        if assigned_to is not None:
            updates["assigned_to"] = assigned_to
        if not updates:
            raise ValueError("Nothing to update")
        record = self.store.update_task(task_id, updates)
        return task_from_row(record) if record else None

    def delete_task(self, task_id: str) -> bool:
        return self.store.delete_task(task_id)
