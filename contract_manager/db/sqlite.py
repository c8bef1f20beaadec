"""SQLite store implementing ContractStore (local mode and tests)"""

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from contract_manager.db.base import ContractStore, StoreError
from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)

JSON_COLUMNS = {"extracted_data", "data_sources", "abusive_clauses", "alerts", "tags"}

CONTRACT_COLUMNS = [
    "id", "user_id", "file_name", "file_path", "contract_type", "sector",
    "effective_date", "renewal_date", "notice_period_days",
    "termination_clause_reference", "summary", "risk_score", "risk_level",
    "extracted_data", "data_sources", "abusive_clauses", "alerts", "tags",
    "created_at", "last_modified",
]

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS contracts (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        file_name TEXT NOT NULL,
        file_path TEXT,
        contract_type TEXT,
        sector TEXT,
        effective_date DATE,
        renewal_date DATE,
        notice_period_days INTEGER DEFAULT 30,
        termination_clause_reference TEXT,
        summary TEXT,
        risk_score REAL,
        risk_level TEXT,
        extracted_data TEXT DEFAULT '{}',
        data_sources TEXT DEFAULT '{}',
        abusive_clauses TEXT DEFAULT '[]',
        alerts TEXT DEFAULT '[]',
        tags TEXT DEFAULT '[]',
        created_at TIMESTAMP,
        last_modified TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_contracts_renewal ON contracts(renewal_date)",
    "CREATE INDEX IF NOT EXISTS idx_contracts_user ON contracts(user_id)",
    """
    CREATE TABLE IF NOT EXISTS calendar_events (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        date TEXT NOT NULL,
        color TEXT,
        event_type TEXT DEFAULT 'other',
        assigned_to_member TEXT,
        created_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS team_members (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        avatar TEXT,
        role TEXT DEFAULT 'member',
        status TEXT DEFAULT 'active',
        created_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        created_by TEXT NOT NULL,
        assigned_to TEXT,
        contract_id TEXT,
        title TEXT NOT NULL,
        description TEXT,
        due_date DATE,
        priority TEXT DEFAULT 'medium',
        status TEXT DEFAULT 'pending',
        created_at TIMESTAMP
    )
    """,
]


def _encode(column: str, value):
    if column in JSON_COLUMNS:
        if value is None:
            value = {} if column in ("extracted_data", "data_sources") else []
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _decode(row: sqlite3.Row) -> dict:
    record = dict(row)
    for column in JSON_COLUMNS & record.keys():
        raw = record[column]
        record[column] = json.loads(raw) if raw else None
    return record


class SQLiteStore(ContractStore):
    """SQLite implementation of ContractStore."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = Path(db_path or get_settings().database_path)

    @contextmanager
    def get_connection(self):
        """Get a database connection as context manager"""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"SQLite error: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        with self.get_connection() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
        logger.info(f"SQLite schema ready at {self.db_path}")

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[dict]:
        with self.get_connection() as conn:
            return [_decode(r) for r in conn.execute(sql, params).fetchall()]

    def _fetch_one(self, sql: str, params: tuple = ()) -> Optional[dict]:
        rows = self._fetch_all(sql, params)
        return rows[0] if rows else None

    def _insert(self, table: str, record: dict) -> dict:
        record = dict(record)
        record.setdefault("id", str(uuid.uuid4()))
        record.setdefault("created_at", datetime.now().isoformat())
        columns = list(record.keys())
        placeholders = ", ".join("?" for _ in columns)
        with self.get_connection() as conn:
            conn.execute(
                f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                tuple(_encode(c, record[c]) for c in columns),
            )
        return self._fetch_one(f"SELECT * FROM {table} WHERE id = ?", (record["id"],))

    def _update(self, table: str, row_id: str, updates: dict) -> Optional[dict]:
        if updates:
            assignments = ", ".join(f"{c} = ?" for c in updates)
            with self.get_connection() as conn:
                conn.execute(
                    f"UPDATE {table} SET {assignments} WHERE id = ?",
                    tuple(_encode(c, v) for c, v in updates.items()) + (row_id,),
                )
        return self._fetch_one(f"SELECT * FROM {table} WHERE id = ?", (row_id,))

    def _delete(self, table: str, row_id: str, extra: str = "", params: tuple = ()) -> bool:
        with self.get_connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?{extra}", (row_id,) + params)
            return cursor.rowcount > 0

    # Contracts

    def list_contracts(self, user_id: Optional[str] = None) -> List[dict]:
        if user_id is None:
            return self._fetch_all("SELECT * FROM contracts ORDER BY created_at DESC")
        return self._fetch_all(
            "SELECT * FROM contracts WHERE user_id = ? ORDER BY created_at DESC", (user_id,)
        )

    def get_contract(self, contract_id: str) -> Optional[dict]:
        return self._fetch_one("SELECT * FROM contracts WHERE id = ?", (contract_id,))

    def insert_contract(self, record: dict, user_id: Optional[str] = None) -> str:
        data = {k: v for k, v in record.items() if k in CONTRACT_COLUMNS and v is not None}
        if user_id is not None:
            data["user_id"] = user_id
        return self._insert("contracts", data)["id"]

    def update_contract(self, contract_id: str, updates: dict) -> Optional[dict]:
        data = {k: v for k, v in updates.items() if k in CONTRACT_COLUMNS and k != "id"}
        return self._update("contracts", contract_id, data)

    def delete_contract(self, contract_id: str) -> bool:
        # Local mode keeps no uploaded files, so there is nothing else to cascade
        return self._delete("contracts", contract_id)

    def contracts_renewing_on(self, day: date) -> List[dict]:
        return self._fetch_all(
            "SELECT * FROM contracts WHERE renewal_date = ?", (day.isoformat(),)
        )

    # Calendar tasks

    def list_calendar_events(self, user_id: str) -> List[dict]:
        return self._fetch_all(
            "SELECT * FROM calendar_events WHERE user_id = ? ORDER BY date ASC", (user_id,)
        )

    def insert_calendar_event(self, record: dict) -> dict:
        return self._insert("calendar_events", record)

    def delete_calendar_event(self, event_id: str) -> bool:
        return self._delete("calendar_events", event_id)

    # Team

    def list_team_members(self, user_id: str) -> List[dict]:
        return self._fetch_all(
            "SELECT * FROM team_members WHERE user_id = ? ORDER BY created_at ASC", (user_id,)
        )

    def insert_team_member(self, record: dict) -> dict:
        return self._insert("team_members", record)

    def delete_team_member(self, member_id: str, user_id: str) -> bool:
        return self._delete("team_members", member_id, " AND user_id = ?", (user_id,))

    def list_tasks(self, user_id: str) -> List[dict]:
        return self._fetch_all(
            """
            SELECT t.* FROM tasks t
            LEFT JOIN team_members m ON m.id = t.assigned_to
            WHERE t.created_by = ? OR m.user_id = ?
            ORDER BY t.created_at DESC
            """,
            (user_id, user_id),
        )

    def insert_task(self, record: dict) -> dict:
        return self._insert("tasks", record)

    def update_task(self, task_id: str, updates: dict) -> Optional[dict]:
        allowed = {"status", "assigned_to", "priority", "due_date", "title", "description"}
        return self._update("tasks", task_id, {k: v for k, v in updates.items() if k in allowed})

    def delete_task(self, task_id: str) -> bool:
        return self._delete("tasks", task_id)

    def get_status(self) -> dict:
        try:
            with self.get_connection() as conn:
                counts = {
                    table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                    for table in ("contracts", "calendar_events", "team_members", "tasks")
                }
            return {"mode": "sqlite", "path": str(self.db_path), "status": "connected", **counts}
        except StoreError as e:
            return {"mode": "sqlite", "path": str(self.db_path), "status": f"error: {e}"}
