"""Secret request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from noteboard.utils.dates import to_naive_utc


class SecretSet(BaseModel):
    value: str = Field(..., min_length=1)  # plaintext, encrypted before storage
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class SecretValue(BaseModel):
    name: str
    value: str
    due_date: datetime | None


class SecretMetadata(BaseModel):
    name: str
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime
    # ciphertext / nonce / tag / value are NEVER returned

    model_config = {"from_attributes": True}
