"""Contract table API routes"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from contract_manager.api.deps import get_user_id
from contract_manager.api.schemas import (
    ContractPageResponse,
    ContractRow,
    DeleteResponse,
    DraftRequest,
    FieldsUpdateRequest,
    RenameRequest,
)
from contract_manager.models import ContractDocument
from contract_manager.services.contracts import ContractService
from contract_manager.services.drafts import Draft
from contract_manager.services.status import document_status
from contract_manager.services.table import SortDirection

logger = logging.getLogger(__name__)

router = APIRouter()


def _row(service: ContractService, document: ContractDocument, now: datetime) -> ContractRow:
    return ContractRow(
        document=document,
        status=document_status(document, now).value,
        badge=service.badge(document, now),
    )


def _get_owned(service: ContractService, contract_id: str, user_id: str) -> ContractDocument:
    record = service.store.get_contract(contract_id)
    if record is None or record.get("user_id") != user_id:
        raise HTTPException(status_code=404, detail="Contract not found")
    return service.get(contract_id)


@router.get("/api/contracts", response_model=ContractPageResponse)
async def list_contracts(
    search: str = "",
    sort: str = "renewal_date",
    direction: SortDirection = SortDirection.ASC,
    page: int = 1,
    page_size: Optional[int] = None,
    status: Optional[str] = None,
    user_id: str = Depends(get_user_id),
):
    """Search, sort and paginate the user's contracts."""
    service = ContractService()
    now = datetime.now()
    try:
        result = service.table(
            user_id=user_id,
            search=search,
            sort_field=sort,
            direction=direction,
            page=page,
            page_size=page_size,
            status=status,
            now=now,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ContractPageResponse(
        items=[_row(service, d, now) for d in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        page_count=result.page_count,
    )


@router.get("/api/contracts/{contract_id}", response_model=ContractRow)
async def get_contract(contract_id: str, user_id: str = Depends(get_user_id)):
    service = ContractService()
    return _row(service, _get_owned(service, contract_id, user_id), datetime.now())


@router.patch("/api/contracts/{contract_id}/rename", response_model=ContractRow)
async def rename_contract(
    contract_id: str,
    request: RenameRequest,
    user_id: str = Depends(get_user_id),
):
    service = ContractService()
    _get_owned(service, contract_id, user_id)
    try:
        document = service.rename(contract_id, request.file_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if document is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    return _row(service, document, datetime.now())


@router.patch("/api/contracts/{contract_id}/fields", response_model=ContractRow)
async def update_fields(
    contract_id: str,
    request: FieldsUpdateRequest,
    user_id: str = Depends(get_user_id),
):
    """Save corrected extracted fields. Any pending draft is discarded."""
    service = ContractService()
    _get_owned(service, contract_id, user_id)
    document = service.update_fields(contract_id, request.fields)
    if document is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    return _row(service, document, datetime.now())


@router.put("/api/contracts/{contract_id}/draft", response_model=Draft)
async def save_draft(
    contract_id: str,
    request: DraftRequest,
    user_id: str = Depends(get_user_id),
):
    service = ContractService()
    _get_owned(service, contract_id, user_id)
    return service.save_draft(contract_id, request.fields)


@router.get("/api/contracts/{contract_id}/draft", response_model=Draft)
async def load_draft(contract_id: str, user_id: str = Depends(get_user_id)):
    service = ContractService()
    _get_owned(service, contract_id, user_id)
    draft = service.load_draft(contract_id)
    if draft is None:
        raise HTTPException(status_code=404, detail="No draft saved")
    return draft


@router.delete("/api/contracts/{contract_id}", response_model=DeleteResponse)
async def delete_contract(contract_id: str, user_id: str = Depends(get_user_id)):
    service = ContractService()
    _get_owned(service, contract_id, user_id)
    if not service.delete(contract_id):
        raise HTTPException(status_code=404, detail="Contract not found")
    return DeleteResponse(id=contract_id)
