from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Optional

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.roster_store'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


class MemoryStorage:
    """Dict-backed stand-in for durable storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1


class StaticSource:
    source_name = "static_seed"
    kind = "file"

    def __init__(self, payload=None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


SCENARIO_SEED = [
    {"firstName": "A", "lastName": "B", "idNumber": "1234567", "phone": "0500000000", "email": "a@b.com"},
]


@pytest.fixture(autouse=True)
def _fresh_settings():
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def sample_fields():
    return [
        {"firstName": "Noa", "lastName": "Levi", "idNumber": "2034567", "phone": "0521234567", "email": "noa@example.com"},
        {"firstName": "Yosef", "lastName": "Cohen", "idNumber": "3187654", "phone": "0549876543", "email": "yosef@example.com"},
        {"firstName": "Maya", "lastName": "Friedman", "idNumber": "1203456", "phone": "036541234", "email": "maya@example.org"},
    ]
