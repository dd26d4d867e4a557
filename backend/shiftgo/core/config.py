"""Application configuration utilities."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel


class Settings(BaseModel):
    LOG_LEVEL: str = "INFO"
    TZ: str = "Asia/Taipei"
    DEFAULT_MAX_DAYS_PER_MONTH: int = 8
    DEFAULT_DEADLINE_DAYS: int = 7


@lru_cache
def get_settings() -> Settings:
    return Settings(
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        TZ=os.getenv("TZ", "Asia/Taipei"),
        DEFAULT_MAX_DAYS_PER_MONTH=int(
            os.getenv("DEFAULT_MAX_DAYS_PER_MONTH", "8")
        ),
        DEFAULT_DEADLINE_DAYS=int(os.getenv("DEFAULT_DEADLINE_DAYS", "7")),
    )


settings = get_settings()
