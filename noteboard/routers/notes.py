"""Note CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.database import get_db
from noteboard.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteboard.services import note_service

router = APIRouter()


@router.get("/", response_model=list[NoteResponse])
@router.get("", response_model=list[NoteResponse], include_in_schema=False)
async def list_notes(db: AsyncSession = Depends(get_db)):
    return await note_service.list_notes(db)


@router.post("/", response_model=NoteResponse, status_code=201)
@router.post("", response_model=NoteResponse, status_code=201, include_in_schema=False)
async def create_note(data: NoteCreate, db: AsyncSession = Depends(get_db)):
    return await note_service.create_note(db, data)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: str, db: AsyncSession = Depends(get_db)):
    note = await note_service.get_note(db, note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(note_id: str, data: NoteUpdate, db: AsyncSession = Depends(get_db)):
    note = await note_service.update_note(db, note_id, data)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.delete("/{note_id}", status_code=204)
async def delete_note(note_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await note_service.delete_note(db, note_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Note not found")
    return Response(status_code=204)
