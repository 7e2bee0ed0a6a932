from __future__ import annotations

from typing import Dict, List, Optional

from models import StudentRecord


COLUMNS = [
    ("id", 32),
    ("firstName", 14),
    ("lastName", 14),
    ("idNumber", 10),
    ("phone", 11),
    ("email", 28),
]


def format_table(records: List[StudentRecord]) -> str:
    """Fixed-width results grid, one row per record."""
    header = " ".join(name.ljust(width) for name, width in COLUMNS)
    lines = [header, "-" * len(header)]
    for r in records:
        data = r.to_storage()
        lines.append(" ".join(str(data.get(name, "")).ljust(width) for name, width in COLUMNS))
    return "\n".join(lines)


def print_roster(records: List[StudentRecord], total: int, term: Optional[str] = None) -> None:
    print(format_table(records))
    if term:
        print(f"\n{len(records)} of {total} records match '{term}'")
    else:
        print(f"\n{total} records")


def print_field_errors(field_errors: Dict[str, List[str]]) -> None:
    print("Form is invalid:")
    for name, kinds in field_errors.items():
        print(f"  {name}: {', '.join(kinds)}")
