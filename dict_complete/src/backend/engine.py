# backend/engine.py
from __future__ import annotations

import os
import logging
from typing import Iterable, List, Optional

from . import config as CFG
from .models import Settings, Suggestion
from .providers import DictionaryProvider, FileScannerProvider, FrontMatterProvider, WordListProvider
from .search import complete_query
from .DB.api import WordStore, make_store

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - word storage via a WordStore (SQLite or in-memory),
      - the dictionary providers (front matter tags, scanned documents, word lists),
      - the matching pipeline (search.complete_query).

    Public API (used by CLI/Flask/GUI):
      * build(roots, ...): scan -> persist -> publish dictionaries
      * load(...):         restore scanned words from a store -> publish
      * scan_document(...): add the words and tags of one edited document
      * forget(words):     drop scanned words from the dictionary and store
      * complete(query, settings): return ranked suggestions
      * shutdown():        close underlying resources

    Storage DSNs (via backend.DB.api.make_store):
      - "sqlite:///path/to/words.sqlite"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.scanner = FileScannerProvider()
        self.word_list = WordListProvider()
        self.front_matter = FrontMatterProvider()
        self._store: Optional[WordStore] = None
        self._ready = False

    @property
    def providers(self) -> List[DictionaryProvider]:
        # order matters: earlier providers win on duplicate suggestions
        return [self.front_matter, self.scanner, self.word_list]

    # /* ~~~ Scan documents and word lists and wire up storage ~~~ */
    def build(
        self,
        roots: Iterable[str] = (),
        *,
        wordlists: Iterable[str] = (),
        db_dsn: Optional[str] = None,       # e.g., "sqlite:///./words.sqlite" or "memory://"
        verbose: bool = False,
    ) -> None:
        _setup_verbose(verbose)

        roots = list(roots)
        wordlists = list(wordlists)
        if not roots and not wordlists:
            raise ValueError("build(): at least one root folder or word list is required")

        self._open_store(db_dsn or CFG.DEFAULT_DSN)

        if roots:
            log.info("Scanning documents under %s", roots)
            self.scanner.scan_roots(roots, self.settings)
            self.front_matter.scan_roots(roots)
        if wordlists:
            log.info("Loading word lists %s", wordlists)
            self.word_list.load_files(wordlists, self.settings.min_word_length)

        self._ready = True
        log.info(
            "Engine build() complete: tags=%d scanned=%d listed=%d",
            len(self.front_matter), len(self.scanner), len(self.word_list),
        )

    # /* ~~~ Restore previously scanned words without rescanning ~~~ */
    def load(
        self,
        *,
        db_dsn: Optional[str] = None,
        wordlists: Iterable[str] = (),
        verbose: bool = False,
    ) -> None:
        _setup_verbose(verbose)
        if not db_dsn:
            raise ValueError("load(): db_dsn is required to restore scanned words")

        self._open_store(db_dsn)
        self.scanner.load_store()

        wordlists = list(wordlists)
        if wordlists:
            self.word_list.load_files(wordlists, self.settings.min_word_length)

        self._ready = True
        log.info(
            "Engine load() complete: scanned=%d listed=%d",
            len(self.scanner), len(self.word_list),
        )

    # /* ~~~ Rescan one document (e.g. the file being edited) ~~~ */
    def scan_document(self, text: str, source: str = "") -> int:
        """Returns the number of new scanned words; new front matter tags are added too."""
        if not self.settings.file_scanner_scan_current:
            return 0
        self.front_matter.scan_text(text, source=source)
        n = self.scanner.scan_text(text, self.settings, source=source)
        self._ready = True
        if n:
            log.info("Added %d new word(s) from %s", n, source or "<document>")
        return n

    # /* ~~~ Drop scanned words (deleted notes, unwanted suggestions) ~~~ */
    def forget(self, words: Iterable[str]) -> int:
        return self.scanner.forget(words)

    # ------------- query -------------

    def complete(self, query: str, settings: Optional[Settings] = None) -> List[Suggestion]:
        if not self._ready:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return complete_query(query, self.providers, settings or self.settings)

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self.scanner.store = None
            self._ready = False
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _open_store(self, dsn: str) -> None:
        if self._store is not None:
            self._store.close()
        log.info("Initializing word store: %s", dsn)
        self._store = make_store(dsn)
        self.scanner.store = self._store


def _setup_verbose(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO)
        os.environ["DICTCOMPLETE_VERBOSE"] = "1"
