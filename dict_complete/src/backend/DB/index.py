from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Protocol, Sequence, Set, Tuple


class WordIndexView(Protocol):
    """Read side of a dictionary, as seen by the search pipeline."""
    def bucket(self, ch: str) -> Sequence[str]: ...
    def all_buckets(self) -> Iterator[Tuple[str, Sequence[str]]]: ...


class WordIndex:
    """
    Dictionary words bucketed by their literal first character.

    Keys are NOT normalized: "Apple" lives under "A", "apple" under "a" and
    "élan" under "é". Case and diacritic tolerance is resolved at query time
    by the candidate selector, never at storage time.
    """
    def __init__(self, words: Iterable[str] = ()) -> None:
        self._buckets: Dict[str, List[str]] = {}
        self._words: Set[str] = set()
        self.bulk_insert(words)

    # ---- Build ----
    def insert(self, word: str) -> bool:
        """Store word under word[0]. Returns False for empty or already known words."""
        if not word or word in self._words:
            return False
        self._words.add(word)
        self._buckets.setdefault(word[0], []).append(word)
        return True

    def bulk_insert(self, words: Iterable[str]) -> int:
        n = 0
        for w in words:
            if self.insert(w):
                n += 1
        return n

    def remove(self, word: str) -> bool:
        if word not in self._words:
            return False
        self._words.discard(word)
        bucket = self._buckets[word[0]]
        bucket.remove(word)
        if not bucket:
            del self._buckets[word[0]]
        return True

    # ---- Query ----
    def bucket(self, ch: str) -> Sequence[str]:
        return self._buckets.get(ch, ())

    def all_buckets(self) -> Iterator[Tuple[str, Sequence[str]]]:
        return iter(self._buckets.items())

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    # ---- Snapshot ----
    def freeze(self) -> "FrozenWordIndex":
        """Immutable copy; later inserts into this index do not show up in it."""
        return FrozenWordIndex({ch: tuple(ws) for ch, ws in self._buckets.items()})


class FrozenWordIndex:
    """
    Read-only snapshot of a WordIndex.
    Providers swap the whole object on rebuild, so a query holding a reference
    keeps a stable view for its entire run.
    """
    __slots__ = ("_buckets", "_size")

    def __init__(self, buckets: Mapping[str, Tuple[str, ...]]) -> None:
        self._buckets = MappingProxyType(dict(buckets))
        self._size = sum(len(ws) for ws in buckets.values())

    def bucket(self, ch: str) -> Sequence[str]:
        return self._buckets.get(ch, ())

    def all_buckets(self) -> Iterator[Tuple[str, Sequence[str]]]:
        return iter(self._buckets.items())

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        return word in self._buckets.get(word[0], ())


EMPTY_INDEX = FrozenWordIndex({})
