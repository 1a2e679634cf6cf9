"""Task / subtask request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from noteboard.utils.dates import to_naive_utc


class _TitleMixin(BaseModel):
    @field_validator("title", check_fields=False)
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class TaskCreate(_TitleMixin):
    title: str = Field(..., max_length=256)
    description: str | None = None
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class TaskUpdate(_TitleMixin):
    title: str | None = Field(None, max_length=256)
    description: str | None = None
    due_date: datetime | None = None
    completed: bool | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class SubtaskCreate(_TitleMixin):
    title: str = Field(..., max_length=256)


class SubtaskUpdate(_TitleMixin):
    title: str | None = Field(None, max_length=256)
    completed: bool | None = None


class SubtaskResponse(BaseModel):
    id: str
    task_id: str
    title: str
    completed: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str | None
    due_date: datetime | None
    completed: bool
    created_at: datetime
    updated_at: datetime
    subtasks: list[SubtaskResponse] = []

    model_config = {"from_attributes": True}
