"""Database modules"""

from contract_manager.db.base import ContractStore, StoreError
from contract_manager.db.supabase import SupabaseStore, get_store
from contract_manager.db.sqlite import SQLiteStore

__all__ = [
    "ContractStore",
    "StoreError",
    "SupabaseStore",
    "SQLiteStore",
    "get_store",
]
