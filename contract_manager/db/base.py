"""Abstract store interface — strategy pattern for SQLite/Supabase switching"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional


class StoreError(RuntimeError):
    """A backend call failed; callers surface it as an error state."""


class ContractStore(ABC):
    """Abstract interface for persistence of contracts, calendar tasks and teams.
    Implemented by both SQLite and Supabase backends. Rows are plain dicts
    with snake_case columns; mapping to models happens in services.ingest."""

    @abstractmethod
    def init_db(self) -> None:
        """Initialize or verify the schema."""

    # Contracts

    @abstractmethod
    def list_contracts(self, user_id: Optional[str] = None) -> List[dict]:
        """List contracts, newest first. None lists every user's contracts."""

    @abstractmethod
    def get_contract(self, contract_id: str) -> Optional[dict]:
        """Get contract by ID."""

    @abstractmethod
    def insert_contract(self, record: dict, user_id: Optional[str] = None) -> str:
        """Insert an analyzed contract. Returns contract ID."""

    @abstractmethod
    def update_contract(self, contract_id: str, updates: dict) -> Optional[dict]:
        """Update columns of a contract. Returns the updated row or None."""

    @abstractmethod
    def delete_contract(self, contract_id: str) -> bool:
        """Delete a contract and its stored file. Returns True if it existed."""

    @abstractmethod
    def contracts_renewing_on(self, day: date) -> List[dict]:
        """Contracts whose renewal_date is exactly the given day."""

    # Calendar tasks (user-authored events)

    @abstractmethod
    def list_calendar_events(self, user_id: str) -> List[dict]:
        """User tasks ordered by date."""

    @abstractmethod
    def insert_calendar_event(self, record: dict) -> dict:
        """Insert a user task. Returns the stored row."""

    @abstractmethod
    def delete_calendar_event(self, event_id: str) -> bool:
        """Delete a user task."""

    # Team

    @abstractmethod
    def list_team_members(self, user_id: str) -> List[dict]:
        """Team members of a user, oldest first."""

    @abstractmethod
    def insert_team_member(self, record: dict) -> dict:
        """Insert a team member. Returns the stored row."""

    @abstractmethod
    def delete_team_member(self, member_id: str, user_id: str) -> bool:
        """Delete a team member owned by the user."""

    @abstractmethod
    def list_tasks(self, user_id: str) -> List[dict]:
        """Team tasks created by or assigned to the user, newest first."""

    @abstractmethod
    def insert_task(self, record: dict) -> dict:
        """Insert a team task. Returns the stored row."""

    @abstractmethod
    def update_task(self, task_id: str, updates: dict) -> Optional[dict]:
        """Update a team task. Returns the updated row or None."""

    @abstractmethod
    def delete_task(self, task_id: str) -> bool:
        """Delete a team task."""

    @abstractmethod
    def get_status(self) -> dict:
        """Get store status info (table counts, connection status)."""
