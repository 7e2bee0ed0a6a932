from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the key-value table backing durable storage (idempotent)."""
    cur = conn.cursor()
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS kv_store (\n"
            "  key TEXT PRIMARY KEY,\n"
            "  value TEXT NOT NULL,\n"
            "  updated_at TEXT NOT NULL DEFAULT (datetime('now'))\n"
            ")"
        )
    )
    conn.commit()
