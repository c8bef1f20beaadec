"""Contract management service — table view, edits, re-analysis and drafts."""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from contract_manager.db.base import ContractStore
from contract_manager.models.contract import ContractDocument
from contract_manager.services.drafts import Draft, DraftStore
from contract_manager.services.ingest import (
    document_from_record,
    document_to_record,
    merge_reanalysis,
)
from contract_manager.services.status import days_until, document_status, renewal_badge
from contract_manager.services.table import SortDirection, SortState, TableController, TablePage
from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS = ["file_name", "contract_type", "sector"]
SORTABLE_FIELDS = {
    "file_name",
    "contract_type",
    "effective_date",
    "renewal_date",
    "notice_period_days",
    "termination_clause_reference",
    "risk_score",
    "created_at",
}


class ContractService:
    """Contract table operations over the configured store."""

    def __init__(self, store: Optional[ContractStore] = None, drafts: Optional[DraftStore] = None):
        self.settings = get_settings()
        self._store = store
        self._drafts = drafts

    @property
    def store(self) -> ContractStore:
        """Lazy-load store client."""
        if self._store is None:
            from contract_manager.db.supabase import get_store
            self._store = get_store()
        return self._store

    @property
    def drafts(self) -> DraftStore:
        if self._drafts is None:
            self._drafts = DraftStore()
        return self._drafts

    def list_documents(self, user_id: Optional[str] = None) -> List[ContractDocument]:
        return [document_from_record(r) for r in self.store.list_contracts(user_id)]

    def get(self, contract_id: str) -> Optional[ContractDocument]:
        record = self.store.get_contract(contract_id)
        return document_from_record(record) if record else None

    def table(
        self,
        user_id: Optional[str] = None,
        search: str = "",
        sort_field: str = "renewal_date",
        direction: SortDirection = SortDirection.ASC,
        page: int = 1,
        page_size: Optional[int] = None,
        status: Optional[str] = None,
        now: Optional[Union[date, datetime]] = None,
    ) -> TablePage:
        """One page of the contracts table.

        `status` filters by renewal urgency evaluated at `now`.
        """
        if sort_field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by '{sort_field}'")
        documents = self.list_documents(user_id)
        if status and status != "all":
            when = now or datetime.now()
            documents = [d for d in documents if document_status(d, when).value == status]

        controller = TableController(
            SEARCHABLE_FIELDS,
            page_size=page_size or self.settings.page_size,
            sort=SortState(field=sort_field, direction=direction),
        )
        controller.set_search(search)
        controller.set_page(page)
        return controller.apply(documents)

    def badge(self, document: ContractDocument, now: Union[date, datetime]) -> Optional[str]:
        """Renewal badge for the table row, None without a renewal date"""
        if document.renewal_date is None:
            return None
        return renewal_badge(days_until(document.renewal_date, now))

    def save(self, document: ContractDocument, user_id: Optional[str] = None) -> str:
        """Persist a freshly analyzed contract"""
        record = document_to_record(document)
        record["created_at"] = record["created_at"] or datetime.now().isoformat()
        contract_id = self.store.insert_contract(record, user_id)
        logger.info(f"Saved contract {contract_id} ({document.file_name})")
        return contract_id

    def rename(self, contract_id: str, new_name: str) -> Optional[ContractDocument]:
        name = (new_name or "").strip()
        if not name:
            raise ValueError("File name cannot be empty")
        record = self.store.update_contract(contract_id, {
            "file_name": name,
            "last_modified": datetime.now().isoformat(),
        })
        return document_from_record(record) if record else None

    def update_tags(self, contract_id: str, tags: List[str]) -> Optional[ContractDocument]:
        record = self.store.update_contract(contract_id, {
            "tags": sorted(set(tags)),
            "last_modified": datetime.now().isoformat(),
        })
        return document_from_record(record) if record else None

    def update_fields(self, contract_id: str, fields: dict[str, str]) -> Optional[ContractDocument]:
        """Apply user corrections to extracted fields and drop any saved draft"""
        document = self.get(contract_id)
        if document is None:
            return None
        extracted = {k: v.value for k, v in document.extracted_data.items()}
        extracted.update(fields)
        record = self.store.update_contract(contract_id, {
            "extracted_data": extracted,
            "last_modified": datetime.now().isoformat(),
        })
        self.drafts.discard(contract_id)
        return document_from_record(record) if record else None

    def apply_reanalysis(
        self,
        contract_id: str,
        extracted: dict,
        sources: Optional[dict] = None,
    ) -> Optional[ContractDocument]:
        """Merge newly extracted fields from a re-analysis run"""
        document = self.get(contract_id)
        if document is None:
            return None
        merged = merge_reanalysis(document, extracted, sources)
        record = self.store.update_contract(contract_id, {
            "extracted_data": {k: v.value for k, v in merged.extracted_data.items()},
            "data_sources": merged.data_sources,
            "last_modified": merged.last_modified.isoformat(),
        })
        return document_from_record(record) if record else None

    def delete(self, contract_id: str) -> bool:
        deleted = self.store.delete_contract(contract_id)
        if deleted:
            self.drafts.discard(contract_id)
            logger.info(f"Deleted contract {contract_id}")
        return deleted

    def save_draft(self, contract_id: str, fields: dict[str, str], now: Optional[datetime] = None) -> Draft:
        return self.drafts.save(contract_id, fields, now)

    def load_draft(self, contract_id: str, now: Optional[datetime] = None) -> Optional[Draft]:
        return self.drafts.load(contract_id, now)
