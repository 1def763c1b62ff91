"""Security helpers (hashing and verification)."""

from __future__ import annotations

from functools import lru_cache

import anyio
import bcrypt

from accounts.core.config import get_settings

# bcrypt only reads the first 72 bytes; bcrypt>=5 refuses anything longer
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int | None = None) -> str:
    """Create a salted bcrypt hash using the configured work factor."""
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost))
    return hashed.decode("ascii")


@lru_cache
def dummy_hash(rounds: int) -> str:
    """Fixed hash checked when no account matches, so misses cost the same as hits."""
    return hash_password("dummy-password-for-timing", rounds)


def verify_password(password: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("ascii"))
    except ValueError:
        # malformed or non-bcrypt hash
        return False


async def hash_password_async(password: str, rounds: int | None = None) -> str:
    """Run ``hash_password`` in a worker thread so the event loop keeps serving."""
    return await anyio.to_thread.run_sync(hash_password, password, rounds)


async def verify_password_async(password: str, stored_hash: str | None) -> bool:
    return await anyio.to_thread.run_sync(verify_password, password, stored_hash)


async def verify_dummy_async(password: str, rounds: int) -> bool:
    """Burn one bcrypt check against ``dummy_hash`` for the unknown-account path."""
    return await anyio.to_thread.run_sync(lambda: verify_password(password, dummy_hash(rounds)))
