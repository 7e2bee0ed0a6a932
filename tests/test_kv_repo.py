from __future__ import annotations

import sqlite3

from db import schema
from db.connection import get_connection
from db.repos.kv_repo import KeyValueRepo
from services.roster_store import RosterStore


def test_get_missing_key_returns_none(tmp_path):
    conn = get_connection(str(tmp_path / "t.db"))
    try:
        schema.bootstrap(conn)
        assert KeyValueRepo(conn).get("students") is None
    finally:
        conn.close()


def test_set_overwrites_and_survives_reopen(tmp_path):
    db_path = tmp_path / "nested" / "t.db"
    conn = get_connection(str(db_path))
    repo = KeyValueRepo(conn)
    schema.bootstrap(conn)
    repo.set("students", "[1]")
    repo.set("students", "[2]")
    assert repo.keys() == ["students"]
    conn.close()

    conn = sqlite3.connect(str(db_path))
    try:
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*), value FROM kv_store WHERE key = ?", ("students",))
        assert cur.fetchone() == (1, "[2]")
    finally:
        conn.close()


def test_store_round_trip_through_sqlite(tmp_path, sample_fields):
    db_path = str(tmp_path / "roster.db")
    conn = get_connection(db_path)
    schema.bootstrap(conn)
    store = RosterStore(KeyValueRepo(conn))
    store.load()
    for fields in sample_fields:
        store.add(fields)
    conn.close()

    conn = get_connection(db_path)
    try:
        reloaded = RosterStore(KeyValueRepo(conn))
        reloaded.load()
        assert [r.fields() for r in reloaded.records] == sample_fields
    finally:
        conn.close()
