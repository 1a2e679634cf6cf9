"""Task service — tasks and their subtasks."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.models.task import Subtask, Task
from noteboard.schemas.task import SubtaskCreate, SubtaskUpdate, TaskCreate, TaskUpdate
from noteboard.utils.dates import utcnow


async def list_tasks(db: AsyncSession) -> list[Task]:
    result = await db.execute(select(Task).order_by(Task.updated_at.desc()))
    return list(result.scalars().all())


async def list_overdue_tasks(db: AsyncSession, now: datetime) -> list[Task]:
    stmt = (
        select(Task)
        .where(Task.completed.is_(False), Task.due_date.is_not(None), Task.due_date < now)
        .order_by(Task.due_date.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_task(db: AsyncSession, task_id: str) -> Task | None:
    return await db.get(Task, task_id)


async def create_task(db: AsyncSession, data: TaskCreate) -> Task:
    now = utcnow()
    task = Task(
        title=data.title,
        description=(data.description or "").strip() or None,
        due_date=data.due_date,
        created_at=now,
        updated_at=now,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task, attribute_names=["subtasks"])
    return task


async def update_task(db: AsyncSession, task_id: str, data: TaskUpdate) -> Task | None:
    task = await db.get(Task, task_id)
    if not task:
        return None

    changes = data.model_dump(exclude_unset=True)
    if "description" in changes:
        changes["description"] = (changes["description"] or "").strip() or None
    for field, value in changes.items():
        # title/completed are NOT NULL; an explicit null leaves them as they are
        if value is None and field in ("title", "completed"):
            continue
        setattr(task, field, value)
    task.updated_at = utcnow()

    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task_id: str) -> bool:
    task = await db.get(Task, task_id)
    if not task:
        return False

    await db.delete(task)
    await db.commit()
    return True


async def add_subtask(db: AsyncSession, task_id: str, data: SubtaskCreate) -> Subtask | None:
    task = await db.get(Task, task_id)
    if not task:
        return None

    subtask = Subtask(task_id=task_id, title=data.title)
    db.add(subtask)
    await db.commit()
    await db.refresh(subtask)
    return subtask


async def update_subtask(
    db: AsyncSession, task_id: str, subtask_id: str, data: SubtaskUpdate
) -> Subtask | None:
    subtask = await _get_subtask(db, task_id, subtask_id)
    if not subtask:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(subtask, field, value)

    await db.commit()
    await db.refresh(subtask)
    return subtask


async def delete_subtask(db: AsyncSession, task_id: str, subtask_id: str) -> bool:
    subtask = await _get_subtask(db, task_id, subtask_id)
    if not subtask:
        return False

    await db.delete(subtask)
    await db.commit()
    return True


async def _get_subtask(db: AsyncSession, task_id: str, subtask_id: str) -> Subtask | None:
    result = await db.execute(
        select(Subtask).where(Subtask.id == subtask_id, Subtask.task_id == task_id)
    )
    return result.scalar_one_or_none()
