"""
Dictionary word completion engine.

Given a partial word and a dictionary of known words, return the words whose
characters contain the typed ones in order ("fzy" -> "fuzzy"), shortest first.

Example Usage:
    from backend import Engine

    eng = Engine()
    eng.build(roots=["./notes"])
    for s in eng.complete("compl"):
        print(s.display_text)
"""
from .context import QueryContext, apply_suggestion, extract_query
from .engine import Engine
from .models import Policy, Settings, Suggestion, WordInsertionMode
from .search import complete_query, suggest

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "Policy",
    "Settings",
    "Suggestion",
    "WordInsertionMode",
    "QueryContext",
    "apply_suggestion",
    "extract_query",
    "complete_query",
    "suggest",
]
