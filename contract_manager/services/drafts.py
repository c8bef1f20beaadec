"""Saved edit drafts for contract field corrections"""

import hashlib
import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)


class Draft(BaseModel):
    """Unsaved edits to a contract's extracted fields"""
    contract_id: str
    fields: dict[str, str] = {}
    saved_at: datetime


class DraftStore:
    """File-backed draft store; drafts older than the TTL are discarded on load."""

    def __init__(self, directory: Optional[str] = None, ttl_hours: Optional[int] = None):
        settings = get_settings()
        self.directory = Path(directory or settings.drafts_path)
        self.ttl = timedelta(hours=ttl_hours if ttl_hours is not None else settings.draft_ttl_hours)

    def _path(self, contract_id: str) -> Path:
        # Hashed so any id maps to a distinct, path-safe file name
        digest = hashlib.sha256(contract_id.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    def save(self, contract_id: str, fields: dict[str, str], now: Optional[datetime] = None) -> Draft:
        """Persist the draft, replacing any previous one for the contract"""
        draft = Draft(contract_id=contract_id, fields=fields, saved_at=now or datetime.now())
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(contract_id).write_text(draft.model_dump_json(), encoding="utf-8")
        logger.debug(f"Saved draft for {contract_id} ({len(fields)} fields)")
        return draft

    def load(self, contract_id: str, now: Optional[datetime] = None) -> Optional[Draft]:
        """Return the draft if it exists and is fresh; stale drafts are deleted"""
        path = self._path(contract_id)
        if not path.exists():
            return None
        try:
            draft = Draft.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Discarding unreadable draft {path.name}: {e}")
            path.unlink(missing_ok=True)
            return None
        if self.is_stale(draft, now):
            logger.info(f"Discarding stale draft for {contract_id}")
            path.unlink(missing_ok=True)
            return None
        return draft

    def is_stale(self, draft: Draft, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now()) - draft.saved_at > self.ttl

    def discard(self, contract_id: str) -> None:
        self._path(contract_id).unlink(missing_ok=True)
