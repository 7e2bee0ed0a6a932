from __future__ import annotations

import sqlite3
from typing import List, Optional


class KeyValueRepo:
    """String-keyed durable storage on a single SQLite table.

    Satisfies ``ports.KeyValueStoragePort``; ``set`` overwrites, so concurrent
    writers to the same file resolve as last-write-wins.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, key: str) -> Optional[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = cur.fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            (
                "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now')) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at"
            ),
            (key, value),
        )
        self.conn.commit()

    def keys(self) -> List[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT key FROM kv_store ORDER BY key")
        return [r[0] for r in cur.fetchall()]
