# backend/DB/api.py
from __future__ import annotations
import os
from typing import Iterable, Iterator, Protocol, Tuple


class WordStore(Protocol):
    """Persistence for scanned words: (word, source) rows, word unique."""
    # Create
    def bulk_add(self, items: Iterable[Tuple[str, str]]) -> int: ...
    # Read
    def iter_words(self) -> Iterator[str]: ...
    def count(self) -> int: ...
    # Delete
    def delete(self, word: str) -> None: ...
    def clear(self) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str) -> WordStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (file and table are created if missing)
      - memory://      -> MemoryStore
    """
    if dsn.startswith("sqlite:///"):
        path = dsn.removeprefix("sqlite:///")
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        from .sqlite_store import SQLiteStore
        return SQLiteStore(path)
    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()
    raise ValueError(f"Unsupported store DSN: {dsn}")
