"""Notification response schema."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class Notification(BaseModel):
    id: str  # "task:<id>" | "secret:<name>"
    type: Literal["task", "secret"]
    title: str
    due: datetime
