from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from config.settings import Settings
from services.errors import SeedFetchError
from sources.registry import register


class FileSeedSource:
    source_name = "file_seed"
    kind = "file"

    def __init__(self, location: str, settings: Optional[Settings] = None):
        # Accept file:// URLs as well as plain paths
        self.path = Path(location[len("file://"):] if location.startswith("file://") else location)

    def fetch(self) -> Any:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SeedFetchError(f"Could not read seed asset {self.path}: {e}")
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SeedFetchError(f"Seed asset {self.path} is not valid JSON: {e.msg}")


def _register():
    register(FileSeedSource.kind, FileSeedSource)


_register()
