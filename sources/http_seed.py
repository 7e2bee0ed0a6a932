"""
HTTP seed source: GET the static roster JSON asset with bounded retries.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests

from config.settings import Settings, get_settings
from services.errors import SeedFetchError
from sources.registry import register


logger = logging.getLogger(__name__)


class HttpSeedSource:
    source_name = "http_seed"
    kind = "http"

    def __init__(self, url: str, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.url = url

    def fetch(self) -> Any:
        last_error: Optional[str] = None
        for attempt in range(self.settings.max_retries):
            try:
                logger.info(f"Fetching seed asset {self.url} (attempt {attempt + 1})")
                response = requests.get(self.url, timeout=self.settings.http_timeout_seconds)
                if response.status_code == 200:
                    try:
                        return response.json()
                    except ValueError as e:
                        # Malformed body will not improve on retry
                        raise SeedFetchError(f"Seed asset at {self.url} is not valid JSON: {e}")
                last_error = f"HTTP {response.status_code}"
                if 400 <= response.status_code < 500:
                    break
                logger.warning(f"Seed request failed with status {response.status_code}")
            except requests.exceptions.RequestException as e:
                last_error = str(e)
                logger.warning(f"Seed request error on attempt {attempt + 1}: {e}")
            if attempt < self.settings.max_retries - 1:
                time.sleep(2 ** attempt)  # Exponential backoff
        raise SeedFetchError(f"Could not fetch seed asset {self.url}: {last_error}")


def _register():
    register("http", HttpSeedSource)
    register("https", HttpSeedSource)


_register()
