"""Custom calendar task routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from contract_manager.api.deps import get_user_id
from contract_manager.api.schemas import DeleteResponse, TaskCreateRequest
from contract_manager.models import CustomTask
from contract_manager.services.calendar import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/events", response_model=list[CustomTask])
async def list_tasks(user_id: str = Depends(get_user_id)):
    return CalendarService().load_tasks(user_id)


@router.post("/api/events", response_model=CustomTask, status_code=201)
async def create_task(request: TaskCreateRequest, user_id: str = Depends(get_user_id)):
    try:
        return CalendarService().add_task(
            user_id,
            request.title,
            request.date,
            description=request.description,
            event_type=request.event_type,
            assigned_to=request.assigned_to,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/api/events/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: str, user_id: str = Depends(get_user_id)):
    service = CalendarService()
    if task_id not in {t.id for t in service.load_tasks(user_id)}:
        raise HTTPException(status_code=404, detail="Event not found")
    service.delete_task(task_id)
    return DeleteResponse(id=task_id)
