"""Note request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    title: str = Field(..., max_length=256)
    content: str = ""


class NoteUpdate(BaseModel):
    title: str | None = Field(None, max_length=256)
    content: str | None = None


class NoteResponse(BaseModel):
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
