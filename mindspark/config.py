from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

import structlog

logger = structlog.get_logger()

# Keys shorter than this are treated as placeholders, not credentials.
MIN_API_KEY_LENGTH = 20


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_setting", name=name, value=raw, default=default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("invalid_setting", name=name, value=raw, default=default)
        return default


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    question_model: str = "gpt-4o-mini"
    timeout_seconds: float = 8.0
    temperature: float = 0.8
    default_topic: str = "General Knowledge"
    history_limit: int = 10
    history_max_topics: int = 500
    history_redis_url: Optional[str] = None
    generation_rate_limit: str = "30/minute"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    def has_api_key(self) -> bool:
        key = (self.openai_api_key or "").strip()
        return len(key) >= MIN_API_KEY_LENGTH


def load_settings() -> Settings:
    """Read settings from the environment. Bad numbers fall back to defaults."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        question_model=os.getenv("QUESTION_MODEL", "gpt-4o-mini"),
        timeout_seconds=_env_float("QUESTION_TIMEOUT_SECONDS", 8.0),
        temperature=_env_float("QUESTION_TEMPERATURE", 0.8),
        default_topic=os.getenv("DEFAULT_TOPIC", "").strip() or "General Knowledge",
        history_limit=max(1, _env_int("HISTORY_LIMIT", 10)),
        history_max_topics=max(1, _env_int("HISTORY_MAX_TOPICS", 500)),
        history_redis_url=os.getenv("HISTORY_REDIS_URL") or None,
        generation_rate_limit=os.getenv("GENERATION_RATE_LIMIT", "30/minute"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
