"""Supabase store implementing ContractStore"""

import logging
from datetime import date, datetime
from typing import List, Optional

from contract_manager.db.base import ContractStore, StoreError
from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)

# Lazy imports to avoid requiring supabase when using sqlite mode
_supabase_client = None
_service_client = None


def _get_supabase_client():
    """Get or create the singleton Supabase client (anon key)."""
    global _supabase_client
    if _supabase_client is None:
        from supabase import ClientOptions, create_client

        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_KEY must be set when DB_MODE=supabase"
            )
        _supabase_client = create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(
                postgrest_client_timeout=10,
                storage_client_timeout=30,
            ),
        )
    return _supabase_client


def _get_service_client():
    """Get or create the singleton Supabase service-role client (bypasses RLS)."""
    global _service_client
    if _service_client is None:
        from supabase import ClientOptions, create_client

        settings = get_settings()
        key = settings.supabase_service_key or settings.supabase_key
        if not settings.supabase_url or not key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY must be set for write operations"
            )
        _service_client = create_client(
            settings.supabase_url,
            key,
            options=ClientOptions(
                postgrest_client_timeout=10,
                storage_client_timeout=30,
            ),
        )
    return _service_client


def _clean(record: dict) -> dict:
    """Drop None values and serialize dates for PostgREST"""
    data = {}
    for key, value in record.items():
        if value is None:
            continue
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        data[key] = value
    return data


class SupabaseStore(ContractStore):
    """Supabase implementation of ContractStore.

    Row-level security only admits requests carrying a user JWT, so data
    queries go through the service client and filter on user_id themselves.
    The anon client is used for the schema check only.
    """

    def __init__(self):
        self._read = _get_supabase_client
        self._write = _get_service_client
        self.bucket = get_settings().storage_bucket

    def _execute(self, query, action: str):
        try:
            return query.execute()
        except Exception as e:
            logger.error(f"Supabase {action} failed: {e}")
            raise StoreError(f"{action} failed: {e}") from e

    def init_db(self) -> None:
        """Verify the schema exists. Tables are created in the Supabase SQL Editor."""
        client = self._read()
        try:
            client.table("contracts").select("id").limit(1).execute()
            logger.info("Supabase schema verified: tables accessible")
        except Exception as e:
            raise RuntimeError(
                f"Supabase schema not initialized. Create the contracts tables first. Error: {e}"
            ) from e

    # Contracts

    def list_contracts(self, user_id: Optional[str] = None) -> List[dict]:
        query = self._write().table("contracts").select("*")
        if user_id is not None:
            query = query.eq("user_id", user_id)
        result = self._execute(query.order("created_at", desc=True), "list contracts")
        return result.data or []

    def get_contract(self, contract_id: str) -> Optional[dict]:
        result = self._execute(
            self._write().table("contracts").select("*").eq("id", contract_id),
            "get contract",
        )
        return result.data[0] if result.data else None

    def insert_contract(self, record: dict, user_id: Optional[str] = None) -> str:
        data = _clean(record)
        if user_id is not None:
            data["user_id"] = user_id
        result = self._execute(self._write().table("contracts").insert(data), "insert contract")
        return result.data[0]["id"]

    def update_contract(self, contract_id: str, updates: dict) -> Optional[dict]:
        data = {k: v for k, v in _clean(updates).items() if k != "id"}
        result = self._execute(
            self._write().table("contracts").update(data).eq("id", contract_id),
            "update contract",
        )
        return result.data[0] if result.data else None

    def delete_contract(self, contract_id: str) -> bool:
        """Delete the row, then its file in storage."""
        existing = self.get_contract(contract_id)
        if existing is None:
            return False
        self._execute(
            self._write().table("contracts").delete().eq("id", contract_id),
            "delete contract",
        )
        file_path = existing.get("file_path")
        if file_path:
            try:
                self._write().storage.from_(self.bucket).remove([file_path])
            except Exception as e:
                # Row is already gone; an orphaned file is cleaned up by the storage sweep
                logger.warning(f"Could not remove stored file {file_path}: {e}")
        return True

    def contracts_renewing_on(self, day: date) -> List[dict]:
        result = self._execute(
            self._write()
            .table("contracts")
            .select("id, file_name, renewal_date, user_id")
            .eq("renewal_date", day.isoformat()),
            "contracts renewing",
        )
        return result.data or []

    # Calendar tasks

    def list_calendar_events(self, user_id: str) -> List[dict]:
        result = self._execute(
            self._write()
            .table("calendar_events")
            .select("*")
            .eq("user_id", user_id)
            .order("date"),
            "list calendar events",
        )
        return result.data or []

    def insert_calendar_event(self, record: dict) -> dict:
        result = self._execute(
            self._write().table("calendar_events").insert(_clean(record)),
            "insert calendar event",
        )
        return result.data[0]

    def delete_calendar_event(self, event_id: str) -> bool:
        result = self._execute(
            self._write().table("calendar_events").delete().eq("id", event_id),
            "delete calendar event",
        )
        return bool(result.data)

    # Team

    def list_team_members(self, user_id: str) -> List[dict]:
        result = self._execute(
            self._write()
            .table("team_members")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at"),
            "list team members",
        )
        return result.data or []

    def insert_team_member(self, record: dict) -> dict:
        result = self._execute(
            self._write().table("team_members").insert(_clean(record)),
            "insert team member",
        )
        return result.data[0]

    def delete_team_member(self, member_id: str, user_id: str) -> bool:
        result = self._execute(
            self._write()
            .table("team_members")
            .delete()
            .eq("id", member_id)
            .eq("user_id", user_id),
            "delete team member",
        )
        return bool(result.data)

    def list_tasks(self, user_id: str) -> List[dict]:
        client = self._write()
        member_ids = [m["id"] for m in self.list_team_members(user_id)]
        query = client.table("tasks").select("*")
        if member_ids:
            query = query.or_(f"created_by.eq.{user_id},assigned_to.in.({','.join(member_ids)})")
        else:
            query = query.eq("created_by", user_id)
        result = self._execute(query.order("created_at", desc=True), "list tasks")
        return result.data or []

    def insert_task(self, record: dict) -> dict:
        result = self._execute(self._write().table("tasks").insert(_clean(record)), "insert task")
        return result.data[0]

    def update_task(self, task_id: str, updates: dict) -> Optional[dict]:
        allowed = {"status", "assigned_to", "priority", "due_date", "title", "description"}
        data = {k: v for k, v in updates.items() if k in allowed}
        result = self._execute(
            self._write().table("tasks").update(_clean(data)).eq("id", task_id),
            "update task",
        )
        return result.data[0] if result.data else None

    def delete_task(self, task_id: str) -> bool:
        result = self._execute(
            self._write().table("tasks").delete().eq("id", task_id),
            "delete task",
        )
        return bool(result.data)

    def get_status(self) -> dict:
        """Get store status info."""
        client = self._write()
        settings = get_settings()
        try:
            contracts = client.table("contracts").select("id", count="exact").execute()
            events = client.table("calendar_events").select("id", count="exact").execute()
            return {
                "mode": "supabase",
                "url": settings.supabase_url,
                "contracts": contracts.count or 0,
                "calendar_events": events.count or 0,
                "status": "connected",
            }
        except Exception as e:
            return {
                "mode": "supabase",
                "url": settings.supabase_url,
                "status": f"error: {e}",
            }


def get_store(mode: str = None) -> ContractStore:
    """Factory: returns appropriate store implementation.

    mode: 'supabase' or 'sqlite'. Defaults to DB_MODE env var.
    """
    if mode is None:
        mode = get_settings().db_mode

    if mode == "supabase":
        return SupabaseStore()
    else:
        # Import here to avoid circular imports
        from contract_manager.db.sqlite import SQLiteStore

        return SQLiteStore()
