"""Script ORM models — templates, their declared variables and execution history."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteboard.database import Base
from noteboard.utils.dates import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class Script(Base):
    __tablename__ = "scripts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(256))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text)  # template with $J{NAME} placeholders
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    variables: Mapped[list["ScriptVariable"]] = relationship(
        back_populates="script",
        order_by="ScriptVariable.name",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ScriptVariable(Base):
    __tablename__ = "script_variables"
    __table_args__ = (UniqueConstraint("script_id", "name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    script_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("scripts.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(128))
    placeholder: Mapped[str] = mapped_column(String(256))  # UI hint text
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    required: Mapped[bool] = mapped_column(Boolean, default=False)
    type: Mapped[str] = mapped_column(String(16), default="text")  # text | password | number | url

    script: Mapped[Script] = relationship(back_populates="variables")


class ScriptExecution(Base):
    """Append-only history; removed only by the cascade from its script."""

    __tablename__ = "script_executions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    script_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("scripts.id", ondelete="CASCADE"), index=True
    )
    variables_used: Mapped[str] = mapped_column(Text, default="{}")  # JSON object
    processed_content: Mapped[str] = mapped_column(Text)
    executed_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
