from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the accounts package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.core import config as core_config  # noqa: E402
from accounts.db.session import Database  # noqa: E402
from accounts.services.user_service import UserService  # noqa: E402


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Points DATABASE_URL at a temporary SQLite file and resets cached settings."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("APP_ENV", "test")
    core_config.get_settings.cache_clear()
    yield db_file
    core_config.get_settings.cache_clear()


@pytest.fixture()
async def database(db_env, anyio_backend):
    db = Database()
    await db.connect()
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture()
async def service(database, anyio_backend):
    return UserService(database)


@pytest.fixture()
async def alice(service, anyio_backend):
    return await service.register("alice", "alice@x.com", "secret123", "Alice", "A")
