"""Pytest configuration: local SQLite databases and temporary upload roots."""

import asyncio
import os
from collections.abc import AsyncIterator, Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

# Tests never touch PostgreSQL/Redis; set before photoprint modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./photoprint-test.db")
os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")

import photoprint.models  # noqa: E402, F401
from photoprint.services.storage import UploadStorage  # noqa: E402

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class FrozenClock:
    """Clock returning a fixed time that tests can move forward."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def set_mtime(path: Path, mtime: datetime) -> None:
    """Set a file's mtime exactly (nanosecond API, no float rounding)."""
    delta = mtime - EPOCH
    ns = (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1000
    os.utime(path, ns=(ns, ns))


def write_upload(root: Path, name: str, mtime: datetime, data: bytes = b"\xff\xd8jpeg") -> Path:
    path = root / name
    path.write_bytes(data)
    set_mtime(path, mtime)
    return path


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[AsyncEngine]:
    # NullPool: no connection outlives the event loop that opened it, so the
    # same engine works from anyio tests and from TestClient's own loop.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_all() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    asyncio.run(create_all())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_maker() as s:
        yield s


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def storage(upload_root: Path) -> UploadStorage:
    return UploadStorage(upload_root)


@pytest.fixture
def seed(session_maker: async_sessionmaker[AsyncSession]):
    """Insert model instances from synchronous tests."""

    def _seed(*instances: SQLModel) -> None:
        async def _add() -> None:
            async with session_maker() as s:
                s.add_all(instances)
                await s.commit()

        asyncio.run(_add())

    return _seed


@pytest.fixture
def client(session_maker, storage: UploadStorage, clock: FrozenClock):
    """TestClient with database, upload storage and clock overridden."""
    from fastapi.testclient import TestClient

    from photoprint.api.v1.dependencies import get_clock, get_upload_storage
    from photoprint.db import get_session
    from photoprint.main import app

    async def override_get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_upload_storage] = lambda: storage
    app.dependency_overrides[get_clock] = lambda: clock
    asyncio.run(app.state.rate_limit_store.reset())

    yield TestClient(app)

    app.dependency_overrides.clear()
