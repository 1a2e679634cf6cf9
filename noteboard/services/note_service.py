"""Note service — plain CRUD."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.models.note import Note
from noteboard.schemas.note import NoteCreate, NoteUpdate
from noteboard.utils.dates import utcnow


async def list_notes(db: AsyncSession) -> list[Note]:
    result = await db.execute(select(Note).order_by(Note.updated_at.desc()))
    return list(result.scalars().all())


async def get_note(db: AsyncSession, note_id: str) -> Note | None:
    return await db.get(Note, note_id)


async def create_note(db: AsyncSession, data: NoteCreate) -> Note:
    now = utcnow()
    note = Note(title=data.title, content=data.content, created_at=now, updated_at=now)
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


async def update_note(db: AsyncSession, note_id: str, data: NoteUpdate) -> Note | None:
    note = await db.get(Note, note_id)
    if not note:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(note, field, value)

    await db.commit()
    await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, note_id: str) -> bool:
    note = await db.get(Note, note_id)
    if not note:
        return False

    await db.delete(note)
    await db.commit()
    return True
