# backend/DB/sqlite_store.py
from __future__ import annotations
import sqlite3
from typing import Iterable, Iterator, Tuple
from .api import WordStore

_SCHEMA = """
CREATE TABLE IF NOT EXISTS words (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  word TEXT NOT NULL UNIQUE,
  source TEXT NOT NULL DEFAULT ''
);
"""


class SQLiteStore(WordStore):
    """Scanned words in one SQLite table; rows come back in insertion order."""
    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self.conn: sqlite3.Connection = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.executescript(_SCHEMA)

    # ---- Create ----
    def bulk_add(self, items: Iterable[Tuple[str, str]]) -> int:
        rows = [(w, src) for w, src in items if w]
        before = self.count()
        self.conn.executemany("INSERT OR IGNORE INTO words(word, source) VALUES (?,?)", rows)
        self.conn.commit()
        return self.count() - before

    # ---- Read ----
    def iter_words(self) -> Iterator[str]:
        rows = self.conn.execute("SELECT word FROM words ORDER BY id").fetchall()
        return (w for (w,) in rows)

    def count(self) -> int:
        return int(self.conn.execute("SELECT COUNT(*) FROM words").fetchone()[0])

    # ---- Delete ----
    def delete(self, word: str) -> None:
        self.conn.execute("DELETE FROM words WHERE word=?", (word,))
        self.conn.commit()

    def clear(self) -> None:
        self.conn.execute("DELETE FROM words")
        self.conn.commit()

    # ---- lifecycle ----
    def close(self) -> None:
        self.conn.close()
