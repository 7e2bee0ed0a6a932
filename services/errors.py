from __future__ import annotations

from typing import Dict, List, Optional


class RosterError(Exception):
    """Base for the reported, non-fatal roster conditions."""

    kind: str = "roster_error"


class SeedFetchError(RosterError):
    kind = "seed_fetch_failed"


class StorageCorrupt(RosterError):
    kind = "storage_corrupt"

    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored data under {key!r} is unreadable: {reason}")
        self.key = key
        self.reason = reason


class RecordNotFound(RosterError):
    kind = "record_not_found"

    def __init__(self, record_id: Optional[str]):
        super().__init__(f"No record with id {record_id!r}")
        self.record_id = record_id


class DuplicateIdentifier(RosterError):
    kind = "duplicate_identifier"

    def __init__(self, id_number: str, existing_id: str):
        super().__init__(f"idNumber {id_number!r} already belongs to record {existing_id}")
        self.id_number = id_number
        self.existing_id = existing_id


class FormInvalid(RosterError):
    kind = "form_invalid"

    def __init__(self, field_errors: Dict[str, List[str]]):
        summary = ", ".join(f"{name}: {'/'.join(kinds)}" for name, kinds in field_errors.items())
        super().__init__(f"Form has invalid fields ({summary})")
        self.field_errors = field_errors
