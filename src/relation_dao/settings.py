"""Application settings via Pydantic BaseSettings.

Each settings class reads its own RD_* environment variable prefix.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings


class RedisSettings(BaseSettings):
    """Redis connection settings for ``RedisDAO``."""

    model_config = {"env_prefix": "RD_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None

    # Every key written by a RedisDAO starts with this prefix
    key_prefix: str = "dao:"

    # Max documents fetched per MGET during select
    mget_batch_size: int = 500


class MemorySettings(BaseSettings):
    """In-memory DAO behaviour."""

    model_config = {"env_prefix": "RD_MEMORY_"}

    # Return deep copies from find/select so callers cannot mutate stored state
    clone_on_read: bool = True
