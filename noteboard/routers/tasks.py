"""Task + subtask endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.database import get_db
from noteboard.schemas.task import (
    SubtaskCreate,
    SubtaskResponse,
    SubtaskUpdate,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from noteboard.services import task_service

router = APIRouter()


@router.get("/", response_model=list[TaskResponse])
@router.get("", response_model=list[TaskResponse], include_in_schema=False)
async def list_tasks(db: AsyncSession = Depends(get_db)):
    return await task_service.list_tasks(db)


@router.post("/", response_model=TaskResponse, status_code=201)
@router.post("", response_model=TaskResponse, status_code=201, include_in_schema=False)
async def create_task(data: TaskCreate, db: AsyncSession = Depends(get_db)):
    return await task_service.create_task(db, data)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, db: AsyncSession = Depends(get_db)):
    task = await task_service.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: str, data: TaskUpdate, db: AsyncSession = Depends(get_db)):
    task = await task_service.update_task(db, task_id, data)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await task_service.delete_task(db, task_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)


# ── Subtasks ─────────────────────────────────────────────────────────


@router.post("/{task_id}/subtasks", response_model=SubtaskResponse, status_code=201)
async def add_subtask(task_id: str, data: SubtaskCreate, db: AsyncSession = Depends(get_db)):
    subtask = await task_service.add_subtask(db, task_id, data)
    if not subtask:
        raise HTTPException(status_code=404, detail="Task not found")
    return subtask


@router.put("/{task_id}/subtasks/{subtask_id}", response_model=SubtaskResponse)
async def update_subtask(
    task_id: str, subtask_id: str, data: SubtaskUpdate, db: AsyncSession = Depends(get_db)
):
    if not data.model_dump(exclude_none=True):
        raise HTTPException(status_code=400, detail="No fields to update")
    subtask = await task_service.update_subtask(db, task_id, subtask_id, data)
    if not subtask:
        raise HTTPException(status_code=404, detail="Subtask not found")
    return subtask


@router.delete("/{task_id}/subtasks/{subtask_id}", status_code=204)
async def delete_subtask(task_id: str, subtask_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await task_service.delete_subtask(db, task_id, subtask_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Subtask not found")
    return Response(status_code=204)
