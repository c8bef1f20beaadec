"""Pytest configuration and fixtures"""

from datetime import date

import pytest

from contract_manager.db.sqlite import SQLiteStore
from contract_manager.models import ContractDocument, TextValue


@pytest.fixture(autouse=True)
def test_env(tmp_path, monkeypatch):
    """Set up test environment with temporary database"""
    monkeypatch.setenv("DB_MODE", "sqlite")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "test.db"))
    monkeypatch.setenv("DRAFTS_PATH", str(tmp_path / "drafts"))
    monkeypatch.setenv("LANGUAGE", "es")
    monkeypatch.setenv("CRON_SECRET", "test_secret")
    monkeypatch.delenv("ENABLE_WORKER", raising=False)

    yield

    # Cleanup handled by tmp_path fixture


@pytest.fixture
def store():
    """SQLite store with the schema created"""
    s = SQLiteStore()
    s.init_db()
    return s


@pytest.fixture
def make_document():
    """Factory for contract documents with sensible defaults"""
    def _make(doc_id="doc1", **overrides):
        fields = overrides.pop("fields", {})
        data = {
            "id": doc_id,
            "file_name": f"{doc_id}.pdf",
            "contract_type": "Servicios",
            "sector": "Tecnología",
            "renewal_date": date(2025, 3, 1),
            "notice_period_days": 30,
            "extracted_data": {k: TextValue(value=v) for k, v in fields.items()},
        }
        data.update(overrides)
        return ContractDocument(**data)

    return _make
