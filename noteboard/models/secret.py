"""Secret ORM model — AES-GCM encrypted value store keyed by name."""

from datetime import datetime

from sqlalchemy import DateTime, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from noteboard.database import Base
from noteboard.utils.dates import utcnow


class Secret(Base):
    __tablename__ = "secrets"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    # ciphertext, nonce and tag always come from the same encrypt() call
    ciphertext: Mapped[bytes] = mapped_column(LargeBinary)
    nonce: Mapped[bytes] = mapped_column(LargeBinary(12))
    tag: Mapped[bytes] = mapped_column(LargeBinary(16))
    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)  # advisory only
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
