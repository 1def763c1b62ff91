"""
Configuration helpers for the account service.

Routers, services and the database layer read settings through
``get_settings()`` instead of fetching ``os.environ`` directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./accounts.db"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    sql_echo: bool
    bcrypt_rounds: int
    log_level: str
    log_file: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    # bcrypt accepts work factors in [4, 31]
    rounds = min(31, max(4, _int(os.getenv("BCRYPT_ROUNDS", "12"), 12)))

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL).strip(),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
        bcrypt_rounds=rounds,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
    )
