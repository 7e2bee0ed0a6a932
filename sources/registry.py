from __future__ import annotations

from typing import Any, Dict
from urllib.parse import urlparse


_REGISTRY: Dict[str, Any] = {}


def register(name: str, factory) -> None:
    _REGISTRY[name] = factory


def get_source(name: str, location: str, settings=None):
    if name not in _REGISTRY:
        raise KeyError(f"Unknown source: {name}")
    return _REGISTRY[name](location, settings)


def source_for(location: str, settings=None):
    """Pick the seed source by URL scheme; bare paths read from disk."""
    scheme = (urlparse(location).scheme or "").lower()
    name = scheme if scheme in ("http", "https") else "file"
    return get_source(name, location, settings)


def available_sources() -> Dict[str, Any]:
    return dict(_REGISTRY)
