"""
networth/store.py  —  Optional SQLite persistence

The whole PortfolioInput is saved as one JSON document under a key, so the
store never needs to know the engine's data model. The engine works without
it: open_store() returns None when the database cannot be opened and the CLI
carries on in memory.

Schema
──────
  kv : key TEXT PRIMARY KEY, value TEXT (JSON), updated_at TEXT
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from networth.defaults import DB_FILE
from networth.models import PortfolioInput

logger = logging.getLogger(__name__)

INPUT_KEY = "input"

_SCHEMA = """
PRAGMA journal_mode = WAL;

CREATE TABLE IF NOT EXISTS kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def _connect(path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.executescript(_SCHEMA)
    return conn


@contextmanager
def _tx(conn: sqlite3.Connection):
    """Commit on success, roll back on error."""
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise


class Store:
    def __init__(self, path: str = DB_FILE):
        self.path = path
        self.conn = _connect(path)

    def get(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        with _tx(self.conn):
            self.conn.execute("""
                INSERT INTO kv (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value      = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, value, datetime.now().isoformat()))

    def updated_at(self, key: str = INPUT_KEY) -> Optional[str]:
        row = self.conn.execute("SELECT updated_at FROM kv WHERE key = ?", (key,)).fetchone()
        return row["updated_at"] if row else None

    def load(self) -> Optional[PortfolioInput]:
        """Saved input, or None if nothing (readable) was saved."""
        raw = self.get(INPUT_KEY)
        if raw is None:
            return None
        try:
            return PortfolioInput.from_dict(json.loads(raw))
        except (json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable saved portfolio in %s: %s", self.path, e)
            return None

    def save(self, inp: PortfolioInput) -> None:
        self.put(INPUT_KEY, json.dumps(inp.to_dict(), indent=2, ensure_ascii=False))

    def close(self) -> None:
        self.conn.close()


def open_store(path: str = DB_FILE) -> Optional[Store]:
    try:
        return Store(path)
    except sqlite3.Error as e:
        logger.warning("Could not open %s (%s), changes will not be saved", path, e)
        return None
