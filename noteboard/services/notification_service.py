"""Overdue reminders for tasks and secrets with a past due date."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.schemas.notification import Notification
from noteboard.services import task_service
from noteboard.services.secret_service import SecretVault


async def list_overdue(db: AsyncSession, vault: SecretVault, now: datetime) -> list[Notification]:
    """Newest due date first. Secret due dates are advisory; nothing is enforced here."""
    items: list[Notification] = []

    for task in await task_service.list_overdue_tasks(db, now):
        items.append(
            Notification(id=f"task:{task.id}", type="task", title=f"Task: {task.title}", due=task.due_date)
        )

    for meta in await vault.list_secret_metadata():
        if meta.due_date and meta.due_date < now:
            items.append(
                Notification(
                    id=f"secret:{meta.name}", type="secret", title=f"Secret: {meta.name}", due=meta.due_date
                )
            )

    items.sort(key=lambda n: n.due, reverse=True)
    return items
