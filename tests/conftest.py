"""Shared fixtures: a throwaway in-memory database and a fixed test key."""

import os

# Before any noteboard import: keep the module-level engine off the real database file.
os.environ.setdefault("NOTEBOARD_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("NOTEBOARD_ENV", "development")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import noteboard.models  # noqa: F401  (register tables)
from noteboard.database import Base, enable_foreign_keys, get_db
from noteboard.main import app
from noteboard.services.secret_service import SecretVault
from noteboard.utils.crypto import SecretCipher, derive_key

TEST_PASSPHRASE = "test-passphrase-not-for-production"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def cipher() -> SecretCipher:
    return SecretCipher(derive_key(TEST_PASSPHRASE))


@pytest.fixture
def vault(db, cipher) -> SecretVault:
    return SecretVault(db, cipher)


@pytest_asyncio.fixture
async def client(session_factory, cipher) -> AsyncGenerator[AsyncClient, None]:
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.state.cipher = cipher
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
