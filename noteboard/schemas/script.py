"""Script request/response schemas."""

import json
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

VariableType = Literal["text", "password", "number", "url"]


class VariableIn(BaseModel):
    name: str = ""
    placeholder: str = ""
    description: str | None = None
    default_value: str | None = None
    required: bool = False
    type: VariableType = "text"

    @property
    def is_blank(self) -> bool:
        return not self.name.strip() or not self.placeholder.strip()


class ScriptWrite(BaseModel):
    """Body for both create and full-replace update."""

    name: str = Field(..., max_length=256)
    description: str | None = None
    content: str
    variables: list[VariableIn] = []

    @field_validator("name", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @model_validator(mode="after")
    def unique_variable_names(self) -> "ScriptWrite":
        seen: set[str] = set()
        for var in self.variables:
            if var.is_blank:
                continue
            name = var.name.strip()
            if name in seen:
                raise ValueError(f"duplicate variable name '{name}'")
            seen.add(name)
        return self


class VariableResponse(BaseModel):
    id: str
    name: str
    placeholder: str
    description: str | None
    default_value: str | None
    required: bool
    type: str

    model_config = {"from_attributes": True}


class ScriptResponse(BaseModel):
    id: str
    name: str
    description: str | None
    content: str
    created_at: datetime
    updated_at: datetime
    variables: list[VariableResponse]

    model_config = {"from_attributes": True}


class ScriptExecute(BaseModel):
    """Execute a script with the provided name → value mapping."""
    variables: dict[str, str] = {}


class ScriptResult(BaseModel):
    script_id: str
    processed_content: str
    variables_used: dict[str, str]
    executed_at: datetime


class ExecutionResponse(BaseModel):
    id: str
    script_id: str
    variables_used: dict[str, Any]
    processed_content: str
    executed_at: datetime

    @field_validator("variables_used", mode="before")
    @classmethod
    def parse_variables(cls, v: Any) -> dict[str, Any]:
        if isinstance(v, str):
            return json.loads(v) if v else {}
        return v

    model_config = {"from_attributes": True}
