"""Async data access helpers for user records, backed by SQLAlchemy."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import selectinload

from accounts.db.models import User
from accounts.db.session import Database


class UserRepository:
    """CRUD primitives on the ``users`` table.

    Each call runs in its own session so concurrent operations never share
    one. Unique constraint violations surface as
    ``sqlalchemy.exc.IntegrityError``; translating them is up to the caller.
    """

    def __init__(self, database: Database):
        self.database = database

    # -------------------------- reads --------------------------
    async def get_by_id(self, user_id: str, *, with_notes: bool = False) -> Optional[User]:
        async with self.database.session() as session:
            stmt = select(User).where(User.id == user_id)
            if with_notes:
                stmt = stmt.options(selectinload(User.notes))
            return (await session.execute(stmt)).scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        async with self.database.session() as session:
            stmt = select(User).where(User.username == username)
            return (await session.execute(stmt)).scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        async with self.database.session() as session:
            stmt = select(User).where(User.email == email)
            return (await session.execute(stmt)).scalar_one_or_none()

    async def id_for_username(self, username: str) -> Optional[str]:
        async with self.database.session() as session:
            stmt = select(User.id).where(User.username == username).limit(1)
            return (await session.execute(stmt)).scalar_one_or_none()

    async def id_for_email(self, email: str) -> Optional[str]:
        async with self.database.session() as session:
            stmt = select(User.id).where(User.email == email).limit(1)
            return (await session.execute(stmt)).scalar_one_or_none()

    # -------------------------- writes --------------------------
    async def create(self, *, username: str, email: str, password_hash: str, fname: str, lname: str) -> User:
        entity = User(username=username, email=email, password=password_hash, fname=fname, lname=lname)
        async with self.database.session() as session:
            session.add(entity)
            try:
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            await session.refresh(entity)
            return entity

    async def update_field(self, user_id: str, field: str, value: str) -> int:
        """Overwrite a single column and return the number of rows touched."""
        if field not in {"username", "email", "password"}:
            raise ValueError(f"Field {field!r} cannot be updated")
        async with self.database.session() as session:
            stmt = update(User).where(User.id == user_id).values({field: value})
            try:
                result = await session.execute(stmt)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            return result.rowcount

    async def delete(self, user_id: str) -> int:
        async with self.database.session() as session:
            result = await session.execute(delete(User).where(User.id == user_id))
            await session.commit()
            return result.rowcount
