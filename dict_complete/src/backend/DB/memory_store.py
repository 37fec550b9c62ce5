# backend/DB/memory_store.py
from __future__ import annotations
from typing import Dict, Iterable, Iterator, Tuple
from .api import WordStore


class MemoryStore(WordStore):
    """Simple in-memory store (useful for tests or ephemeral runs)."""
    def __init__(self) -> None:
        self._rows: Dict[str, str] = {}   # word -> source, insertion ordered

    # C
    def bulk_add(self, items: Iterable[Tuple[str, str]]) -> int:
        n = 0
        for word, source in items:
            if word and word not in self._rows:
                self._rows[word] = source
                n += 1
        return n

    # R
    def iter_words(self) -> Iterator[str]:
        return iter(list(self._rows))

    def count(self) -> int:
        return len(self._rows)

    # D
    def delete(self, word: str) -> None:
        self._rows.pop(word, None)

    def clear(self) -> None:
        self._rows.clear()

    def close(self) -> None:
        self._rows.clear()
