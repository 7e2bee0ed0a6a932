from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from models import StudentRecord, new_record_id
from ports import KeyValueStoragePort
from services.errors import DuplicateIdentifier, RecordNotFound, RosterError, StorageCorrupt


logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    ok: bool
    record: Optional[StudentRecord] = None
    error: Optional[RosterError] = None


def parse_records(raw: str, key: str) -> tuple[List[StudentRecord], bool]:
    """Parse a stored JSON array into records.

    Returns (records, backfilled) where backfilled is True if any row lacked an id.
    Raises StorageCorrupt on anything that is not an array of record objects.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageCorrupt(key, f"invalid JSON ({e.msg})")
    if not isinstance(data, list):
        raise StorageCorrupt(key, f"expected a JSON array, got {type(data).__name__}")
    records: List[StudentRecord] = []
    backfilled = False
    for i, row in enumerate(data):
        if not isinstance(row, dict):
            raise StorageCorrupt(key, f"row {i} is not an object")
        if not row.get("id"):
            backfilled = True
            row = {**row, "id": new_record_id()}
        try:
            records.append(StudentRecord.model_validate(row))
        except ValidationError as e:
            raise StorageCorrupt(key, f"row {i} failed validation: {e.error_count()} error(s)")
    return records, backfilled


def dump_records(records: List[StudentRecord]) -> str:
    return json.dumps([r.to_storage() for r in records], ensure_ascii=False)


class RosterStore:
    """In-memory ordered roster mirrored to key-value storage after every mutation."""

    def __init__(
        self,
        storage: KeyValueStoragePort,
        key: str = "students",
        enforce_unique_id_number: bool = True,
        strict: bool = False,
    ) -> None:
        self.storage = storage
        self.key = key
        self.enforce_unique_id_number = enforce_unique_id_number
        self.strict = strict
        self._records: List[StudentRecord] = []
        self._filtered: List[StudentRecord] = []
        self.search_term = ""
        # Set while the stored value is unreadable; mutations are refused
        self.corrupt: Optional[StorageCorrupt] = None
        self._issued: Set[str] = set()

    @property
    def records(self) -> List[StudentRecord]:
        return list(self._records)

    @property
    def filtered(self) -> List[StudentRecord]:
        return list(self._filtered)

    def __len__(self) -> int:
        return len(self._records)

    # --- Persistence ---
    def load(self) -> Outcome:
        raw = self.storage.get(self.key)
        self.corrupt = None
        if raw is None or not raw.strip():
            self._records = []
            self._update_filtered()
            return Outcome(ok=True)
        try:
            records, backfilled = parse_records(raw, self.key)
        except StorageCorrupt as e:
            if self.strict:
                raise
            logger.warning(
                "Stored roster unreadable, starting empty",
                extra={"op": "load", "status": "corrupt", "error": e.reason},
            )
            self.corrupt = e
            self._records = []
            self._update_filtered()
            return Outcome(ok=False, error=e)
        self._records = records
        self._issued.update(r.id for r in records)
        self._update_filtered()
        if backfilled:
            # Ids must survive the next restart for selections to keep resolving
            self.persist()
        logger.info("Loaded %d records", len(records), extra={"op": "load", "status": "ok"})
        return Outcome(ok=True)

    def persist(self) -> None:
        if self.corrupt is not None:
            logger.warning("Refusing to overwrite unreadable roster", extra={"op": "persist", "status": self.corrupt.kind})
            return
        self.storage.set(self.key, dump_records(self._records))

    # --- Search ---
    def search(self, term: str) -> List[StudentRecord]:
        self.search_term = term or ""
        self._update_filtered()
        return self.filtered

    def _update_filtered(self) -> None:
        term = self.search_term
        self._filtered = [r for r in self._records if term in r.id_number]

    # --- Lookup ---
    def get(self, record_id: str) -> Optional[StudentRecord]:
        index = self._index_of(record_id)
        return self._records[index] if index is not None else None

    def find_matching(self, record: StudentRecord) -> Optional[StudentRecord]:
        """First record equal to ``record`` in all five fields."""
        for r in self._records:
            if r.same_fields(record):
                return r
        return None

    def issued(self, record_id: Optional[str]) -> bool:
        """True for any id this store has loaded or created, including deleted ones."""
        return bool(record_id) and record_id in self._issued

    def _index_of(self, record_id: Optional[str]) -> Optional[int]:
        if not record_id:
            return None
        for i, r in enumerate(self._records):
            if r.id == record_id:
                return i
        return None

    def _duplicate_of(self, id_number: str, exclude_id: Optional[str] = None) -> Optional[StudentRecord]:
        if not self.enforce_unique_id_number:
            return None
        for r in self._records:
            if r.id_number == id_number and r.id != exclude_id:
                return r
        return None

    # --- Mutations ---
    def add(self, fields: Dict[str, Any]) -> Outcome:
        if self.corrupt is not None:
            return self._reject("add", self.corrupt)
        record = StudentRecord.from_fields(fields)
        existing = self._duplicate_of(record.id_number)
        if existing is not None:
            return self._reject("add", DuplicateIdentifier(record.id_number, existing.id))
        self._records.append(record)
        self._issued.add(record.id)
        self._update_filtered()
        self.persist()
        logger.info("Added record", extra={"op": "add", "status": "ok", "record_id": record.id})
        return Outcome(ok=True, record=record)

    def update(self, record_id: Optional[str], fields: Dict[str, Any]) -> Outcome:
        if self.corrupt is not None:
            return self._reject("update", self.corrupt)
        index = self._index_of(record_id)
        if index is None:
            return self._reject("update", RecordNotFound(record_id))
        record = StudentRecord.from_fields(fields, record_id=record_id)
        existing = self._duplicate_of(record.id_number, exclude_id=record_id)
        if existing is not None:
            return self._reject("update", DuplicateIdentifier(record.id_number, existing.id))
        self._records[index] = record
        self._update_filtered()
        self.persist()
        logger.info("Updated record", extra={"op": "update", "status": "ok", "record_id": record_id})
        return Outcome(ok=True, record=record)

    def delete(self, record_id: Optional[str]) -> Outcome:
        if self.corrupt is not None:
            return self._reject("delete", self.corrupt)
        index = self._index_of(record_id)
        if index is None:
            return self._reject("delete", RecordNotFound(record_id))
        record = self._records.pop(index)
        self._update_filtered()
        self.persist()
        logger.info("Deleted record", extra={"op": "delete", "status": "ok", "record_id": record_id})
        return Outcome(ok=True, record=record)

    def _reject(self, op: str, error: RosterError) -> Outcome:
        record_id = getattr(error, "record_id", None) or getattr(error, "existing_id", None) or "-"
        logger.warning(str(error), extra={"op": op, "status": error.kind, "record_id": record_id})
        return Outcome(ok=False, error=error)
