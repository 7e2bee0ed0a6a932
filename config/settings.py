from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    # Seed asset: local path or http(s) URL
    seed_url: str

    # Durable storage
    db_path: str
    storage_key: str

    log_level: str
    run_env: str

    # HTTP
    http_timeout_seconds: int
    max_retries: int

    # Behaviour switches
    seed_overwrite: bool = False
    strict_storage: bool = False
    enforce_unique_id_number: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    max_retries = _as_int("MAX_RETRIES", "3")
    if max_retries < 1:
        raise RuntimeError("MAX_RETRIES must be at least 1")
    http_timeout_seconds = _as_int("HTTP_TIMEOUT_SECONDS", "10")
    if http_timeout_seconds < 1:
        raise RuntimeError("HTTP_TIMEOUT_SECONDS must be at least 1")
    return Settings(
        seed_url=os.getenv("SEED_URL", "assets/students.json"),
        db_path=os.getenv("DB_PATH", "roster.db"),
        storage_key=os.getenv("STORAGE_KEY", "students"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        http_timeout_seconds=http_timeout_seconds,
        max_retries=max_retries,
        seed_overwrite=_as_bool(os.getenv("SEED_OVERWRITE")),
        strict_storage=_as_bool(os.getenv("STRICT_STORAGE")),
        enforce_unique_id_number=_as_bool(os.getenv("ENFORCE_UNIQUE_ID_NUMBER"), default=True),
    )
