"""Secret vault — encrypted key-value store with upsert semantics.

Values are sealed with AES-256-GCM before they reach the database and
opened again only on an explicit read by name. The listing path works on
metadata columns alone, so ciphertext and key material never leave the
vault through it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.models.secret import Secret
from noteboard.schemas.secret import SecretMetadata, SecretValue
from noteboard.utils.crypto import SecretCipher
from noteboard.utils.dates import utcnow

logger = logging.getLogger(__name__)


class SecretVault:
    """Encrypts on write, decrypts on read.

    Example:
        >>> vault = SecretVault(db, cipher)
        >>> await vault.set_secret("GITHUB_TOKEN", "ghp_xxx")
        >>> await vault.get_secret("GITHUB_TOKEN")
        'ghp_xxx'
    """

    def __init__(
        self,
        db: AsyncSession,
        cipher: SecretCipher,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.db = db
        self._cipher = cipher
        self._clock = clock

    async def set_secret(self, name: str, value: str, due_date: datetime | None = None) -> None:
        """Insert or replace ``name``; ``created_at`` survives replacement."""
        sealed = self._cipher.encrypt(value)
        now = self._clock()

        stmt = insert(Secret).values(
            name=name,
            ciphertext=sealed.ciphertext,
            nonce=sealed.nonce,
            tag=sealed.tag,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Secret.name],
            set_={
                "ciphertext": stmt.excluded.ciphertext,
                "nonce": stmt.excluded.nonce,
                "tag": stmt.excluded.tag,
                "due_date": stmt.excluded.due_date,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.db.execute(stmt)
        await self.db.commit()
        logger.info("Stored secret '%s'", name)

    async def get_secret(self, name: str) -> str | None:
        """Return the plaintext, or None if no such secret.

        Raises CryptoIntegrityError if the stored record fails authentication.
        """
        revealed = await self.reveal(name)
        return None if revealed is None else revealed.value

    async def reveal(self, name: str) -> SecretValue | None:
        """Plaintext and due date read from the same row."""
        secret = await self._load(name)
        if secret is None:
            return None
        value = self._cipher.decrypt(secret.ciphertext, secret.nonce, secret.tag)
        return SecretValue(name=secret.name, value=value, due_date=secret.due_date)

    async def list_secret_metadata(self) -> list[SecretMetadata]:
        stmt = select(
            Secret.name, Secret.due_date, Secret.created_at, Secret.updated_at
        ).order_by(Secret.name)
        result = await self.db.execute(stmt)
        return [SecretMetadata.model_validate(row) for row in result.all()]

    async def delete_secret(self, name: str) -> None:
        """Remove ``name``; absent names are not an error."""
        await self.db.execute(delete(Secret).where(Secret.name == name))
        await self.db.commit()

    async def _load(self, name: str) -> Secret | None:
        # Always read the current row, never a cached identity from an earlier call.
        result = await self.db.execute(
            select(Secret).where(Secret.name == name).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
