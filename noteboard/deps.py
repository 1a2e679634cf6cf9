"""Shared FastAPI dependencies."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.database import get_db
from noteboard.services.secret_service import SecretVault
from noteboard.utils.crypto import SecretCipher


def get_cipher(request: Request) -> SecretCipher:
    """The cipher built once at startup (see main.lifespan)."""
    return request.app.state.cipher


async def get_vault(
    db: AsyncSession = Depends(get_db), cipher: SecretCipher = Depends(get_cipher)
) -> SecretVault:
    return SecretVault(db, cipher)
