"""Team member and team task routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from contract_manager.api.deps import get_user_id
from contract_manager.api.schemas import (
    DeleteResponse,
    MemberCreateRequest,
    TeamTaskCreateRequest,
    TeamTaskUpdateRequest,
)
from contract_manager.models import Task, TeamMember
from contract_manager.services.team import TeamService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/team-members", response_model=list[TeamMember])
async def list_members(user_id: str = Depends(get_user_id)):
    return TeamService().list_members(user_id)


@router.post("/api/team-members", response_model=TeamMember, status_code=201)
async def add_member(request: MemberCreateRequest, user_id: str = Depends(get_user_id)):
    try:
        return TeamService().add_member(
            user_id, request.name, request.email, avatar=request.avatar, role=request.role
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/api/team-members/{member_id}", response_model=DeleteResponse)
async def remove_member(member_id: str, user_id: str = Depends(get_user_id)):
    if not TeamService().remove_member(user_id, member_id):
        raise HTTPException(status_code=404, detail="Team member not found")
    return DeleteResponse(id=member_id)


@router.get("/api/team/tasks", response_model=list[Task])
async def list_tasks(user_id: str = Depends(get_user_id)):
    """Tasks the user created or that are assigned to one of their members."""
    return TeamService().list_tasks(user_id)


@router.post("/api/team/tasks", response_model=Task, status_code=201)
async def create_task(request: TeamTaskCreateRequest, user_id: str = Depends(get_user_id)):
    try:
        return TeamService().create_task(
            user_id,
            request.title,
            description=request.description,
            assigned_to=request.assigned_to,
            contract_id=request.contract_id,
            due_date=request.due_date,
            priority=request.priority,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _ensure_visible(service: TeamService, task_id: str, user_id: str) -> None:
    if task_id not in {t.id for t in service.list_tasks(user_id)}:
        raise HTTPException(status_code=404, detail="Task not found")


@router.patch("/api/team/tasks/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    request: TeamTaskUpdateRequest,
    user_id: str = Depends(get_user_id),
):
    service = TeamService()
    _ensure_visible(service, task_id, user_id)
    try:
        task = service.update_task(task_id, status=request.status, assigned_to=request.assigned_to)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/api/team/tasks/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: str, user_id: str = Depends(get_user_id)):
    service = TeamService()
    _ensure_visible(service, task_id, user_id)
    service.delete_task(task_id)
    return DeleteResponse(id=task_id)
