"""Utility script to create the initial database schema."""
from __future__ import annotations

import asyncio

from sqlalchemy.exc import SQLAlchemyError

from .session import Database


async def create_all(database: Database | None = None) -> None:
    db = database or Database()
    owned = not db.connected
    await db.connect()
    try:
        await db.create_all()
    finally:
        if owned:
            await db.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(create_all())
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
