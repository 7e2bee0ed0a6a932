from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Literal, Optional

from pydantic import ValidationError

from models import StudentRecord
from ports import KeyValueStoragePort, SeedSourcePort
from services.errors import SeedFetchError
from services.roster_store import dump_records


logger = logging.getLogger(__name__)

SeedStatus = Literal["seeded", "skipped", "failed"]


@dataclass
class SeedResult:
    status: SeedStatus
    count: int = 0
    error: Optional[SeedFetchError] = None


def _to_records(payload: Any) -> List[StudentRecord]:
    if not isinstance(payload, list):
        raise SeedFetchError(f"Seed asset must be a JSON array, got {type(payload).__name__}")
    records: List[StudentRecord] = []
    for i, row in enumerate(payload):
        if not isinstance(row, dict):
            raise SeedFetchError(f"Seed row {i} is not an object")
        try:
            # Seed rows never carry ids; any present are kept
            records.append(StudentRecord.model_validate(row))
        except ValidationError as e:
            raise SeedFetchError(f"Seed row {i} failed validation: {e.error_count()} error(s)")
    return records


class SeedLoader:
    """Write the seed asset into storage when the roster key is still empty.

    With ``overwrite=True`` the asset replaces whatever is stored, discarding
    local edits on every start.
    """

    def __init__(
        self,
        source: SeedSourcePort,
        storage: KeyValueStoragePort,
        key: str = "students",
        overwrite: bool = False,
    ) -> None:
        self.source = source
        self.storage = storage
        self.key = key
        self.overwrite = overwrite

    def _already_seeded(self) -> bool:
        existing = self.storage.get(self.key)
        return existing is not None and existing.strip() not in ("", "[]")

    def run(self) -> SeedResult:
        if not self.overwrite and self._already_seeded():
            logger.info("Storage already holds a roster; seed skipped", extra={"op": "seed", "status": "skipped"})
            return SeedResult(status="skipped")
        try:
            records = _to_records(self.source.fetch())
        except SeedFetchError as e:
            logger.error(
                "Error fetching or storing seed data",
                extra={"op": "seed", "status": "failed", "error": str(e)},
            )
            return SeedResult(status="failed", error=e)
        self.storage.set(self.key, dump_records(records))
        logger.info(
            "Seeded %d records from %s", len(records), self.source.source_name,
            extra={"op": "seed", "status": "seeded"},
        )
        return SeedResult(status="seeded", count=len(records))
