"""Module-level API over a single Engine (used by the desktop editor)."""
from __future__ import annotations
import time
from typing import Iterable, List, Optional

from backend.engine import Engine
from backend.models import Settings, Suggestion

_engine: Engine | None = None


def initialize(roots: Iterable[str] = (),
               wordlists: Iterable[str] = (),
               db: Optional[str] = None,
               settings: Optional[Settings] = None,
               verbose: bool = False) -> int:
    """
    (Re)build the module engine from document roots and/or word lists.
    Returns the number of dictionary words available afterwards.
    """
    global _engine
    t0 = time.perf_counter()
    eng = Engine(settings)
    eng.build(roots=roots, wordlists=wordlists, db_dsn=db, verbose=verbose)

    old, _engine = _engine, eng
    if old is not None:
        old.shutdown()
    if verbose:
        print(f"[ready] init complete in {time.perf_counter() - t0:.2f}s")
    return len(eng.front_matter) + len(eng.scanner) + len(eng.word_list)


def complete(query: str, settings: Optional[Settings] = None) -> List[Suggestion]:
    """Return ranked suggestions (list[Suggestion])."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.complete(query, settings)


def shutdown() -> None:
    global _engine
    if _engine is not None:
        _engine.shutdown()
        _engine = None


def scan_document(text: str, source: str = "") -> int:
    """Add the words of one document to the live dictionary. Returns how many were new."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.scan_document(text, source)


def forget(words: Iterable[str]) -> int:
    """Drop scanned words (and their stored rows). Returns how many were known."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.forget(words)
