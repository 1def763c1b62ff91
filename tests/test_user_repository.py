"""
Smoke tests for the UserRepository against a temporary SQLite database.
"""
from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from accounts.db.session import Database
from accounts.repositories.user_repository import UserRepository

pytestmark = pytest.mark.anyio


async def test_create_and_lookup_by_each_key(database):
    repo = UserRepository(database)
    user = await repo.create(username="carol", email="carol@x.com", password_hash="hash", fname="Carol", lname="C")

    assert len(user.id) == 36
    assert (await repo.get_by_id(user.id)).username == "carol"
    assert (await repo.get_by_username("carol")).id == user.id
    assert (await repo.get_by_email("carol@x.com")).id == user.id
    assert await repo.id_for_username("carol") == user.id
    assert await repo.id_for_email("nobody@x.com") is None


async def test_unique_columns_raise_integrity_error(database):
    repo = UserRepository(database)
    await repo.create(username="dave", email="dave@x.com", password_hash="h", fname="D", lname="D")

    with pytest.raises(IntegrityError):
        await repo.create(username="dave", email="other@x.com", password_hash="h", fname="D", lname="D")


async def test_update_field_and_delete_report_rowcount(database):
    repo = UserRepository(database)
    user = await repo.create(username="erin", email="erin@x.com", password_hash="h", fname="E", lname="E")

    assert await repo.update_field(user.id, "email", "erin2@x.com") == 1
    assert (await repo.get_by_id(user.id)).email == "erin2@x.com"
    assert await repo.update_field("missing", "email", "x@x.com") == 0

    with pytest.raises(ValueError):
        await repo.update_field(user.id, "id", "new-id")

    assert await repo.delete(user.id) == 1
    assert await repo.delete(user.id) == 0
    assert await repo.get_by_id(user.id) is None


async def test_session_requires_connect(db_env, anyio_backend):
    db = Database()
    with pytest.raises(RuntimeError):
        async with db.session():
            pass
    await db.connect()
    await db.dispose()
    assert not db.connected


async def test_create_tables_helper_builds_schema_on_fresh_database(db_env, anyio_backend):
    from accounts.db.create_tables import create_all

    await create_all()

    db = Database()
    await db.connect()
    try:
        repo = UserRepository(db)
        user = await repo.create(username="fay", email="fay@x.com", password_hash="h", fname="F", lname="F")
        assert await repo.id_for_username("fay") == user.id
    finally:
        await db.dispose()
