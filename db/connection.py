from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open the roster SQLite file, creating its parent directory if needed.

    - WAL journal so a reader never blocks the single writer
    - foreign_keys ON for any future tables
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn
