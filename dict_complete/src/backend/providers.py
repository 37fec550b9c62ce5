"""
Dictionary providers.

A provider is anything with `dictionary()` and `is_active(settings)`; the
search pipeline only relies on that capability. A provider may also define
`insertion_suffix(settings)`; its result is appended to the insertion text
of every suggestion it produces. The classes below are
independent implementations, composed by the Engine.

Each provider keeps a mutable WordIndex for building and publishes an
immutable snapshot of it. Rebuilds replace the published snapshot in one
assignment, so a query that already holds the old one is unaffected.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol

from .DB.index import EMPTY_INDEX, FrozenWordIndex, WordIndex, WordIndexView
from .config import FRONT_MATTER_TAG_SUFFIX
from .loader import (
    extract_words, front_matter_tags, iter_wordlists, load_wordlist, read_front_matter,
    scan_front_matter, scan_roots,
)

if TYPE_CHECKING:
    from .DB.api import WordStore
    from .models import Settings

log = logging.getLogger(__name__)


class DictionaryProvider(Protocol):
    def dictionary(self) -> WordIndexView: ...
    def is_active(self, settings: "Settings") -> bool: ...


class _SnapshotIndex:
    """Mutable index plus the frozen view currently handed out to queries."""
    def __init__(self) -> None:
        self._index = WordIndex()
        self._published: FrozenWordIndex = EMPTY_INDEX

    def dictionary(self) -> FrozenWordIndex:
        return self._published

    def publish(self) -> None:
        self._published = self._index.freeze()

    def __len__(self) -> int:
        return len(self._index)


class WordListProvider(_SnapshotIndex):
    """Words from static word list files (one word per line)."""

    def is_active(self, settings: "Settings") -> bool:
        return settings.word_list_provider_enabled

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WordListProvider":
        p = cls()
        p.add_words(words)
        return p

    def add_words(self, words: Iterable[str]) -> int:
        n = self._index.bulk_insert(words)
        self.publish()
        return n

    def load_files(self, paths: Iterable[str], min_word_length: int) -> int:
        """Replace the dictionary with the words of the given files/directories."""
        index = WordIndex()
        files = 0
        for path in iter_wordlists(paths):
            index.bulk_insert(load_wordlist(path, min_word_length))
            files += 1
        self._index = index
        self.publish()
        log.info("Loaded %d words from %d word list file(s)", len(index), files)
        return len(index)


class FileScannerProvider(_SnapshotIndex):
    """
    Words found by scanning documents. When a store is attached, newly seen
    words are persisted so a later load() can skip the scan.
    """
    def __init__(self, store: Optional["WordStore"] = None) -> None:
        super().__init__()
        self.store = store

    def is_active(self, settings: "Settings") -> bool:
        return settings.file_scanner_provider_enabled

    def scan_roots(self, roots: Iterable[str], settings: "Settings") -> int:
        """Rebuild from every document under roots. Returns the number of distinct words."""
        index = WordIndex()
        rows: List[tuple[str, str]] = []
        for path, words in scan_roots(roots, settings.character_regex, settings.min_word_length):
            for w in words:
                if index.insert(w):
                    rows.append((w, path))
        if self.store is not None:
            self.store.clear()
            self.store.bulk_add(rows)
        self._index = index
        self.publish()
        log.info("Scanned %d distinct words", len(index))
        return len(index)

    def scan_text(self, text: str, settings: "Settings", source: str = "") -> int:
        """Add the words of one document. Returns how many were new."""
        new: List[tuple[str, str]] = []
        for w in extract_words(text, settings.character_regex, settings.min_word_length):
            if self._index.insert(w):
                new.append((w, source))
        if new:
            if self.store is not None:
                self.store.bulk_add(new)
            self.publish()
        return len(new)

    def load_store(self) -> int:
        """Rebuild from the attached store without touching any document."""
        if self.store is None:
            raise RuntimeError("FileScannerProvider has no store to load from")
        index = WordIndex(self.store.iter_words())
        self._index = index
        self.publish()
        log.info("Restored %d scanned words from store", len(index))
        return len(index)

    def forget(self, words: Iterable[str]) -> int:
        """Drop words from the dictionary and the store. Returns how many were known."""
        gone = [w for w in dict.fromkeys(words) if self._index.remove(w)]
        if gone:
            if self.store is not None:
                for w in gone:
                    self.store.delete(w)
            self.publish()
            log.info("Forgot %d scanned word(s)", len(gone))
        return len(gone)


class FrontMatterProvider(_SnapshotIndex):
    """
    Tags declared in the YAML front matter of notes. Accepted tags are
    inserted with FRONT_MATTER_TAG_SUFFIX appended when
    front_matter_tag_append_suffix is set, ready for the next tag.
    """

    def is_active(self, settings: "Settings") -> bool:
        return settings.front_matter_provider_enabled

    def insertion_suffix(self, settings: "Settings") -> str:
        return FRONT_MATTER_TAG_SUFFIX if settings.front_matter_tag_append_suffix else ""

    def scan_roots(self, roots: Iterable[str]) -> int:
        index = WordIndex()
        for _path, tags in scan_front_matter(roots):
            index.bulk_insert(tags)
        self._index = index
        self.publish()
        log.info("Collected %d front matter tag(s)", len(index))
        return len(index)

    def scan_text(self, text: str, source: str = "") -> int:
        n = self._index.bulk_insert(front_matter_tags(read_front_matter(text, source)))
        if n:
            self.publish()
        return n
