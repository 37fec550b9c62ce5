from __future__ import annotations
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from .models import Settings, Suggestion


@dataclass(frozen=True, slots=True)
class QueryContext:
    query: str
    start: int   # index in the line where the query begins
    end: int     # cursor position, exclusive end of the query


@lru_cache(maxsize=16)
def _char_re(character_regex: str) -> re.Pattern:
    try:
        return re.compile("[" + character_regex + "]")
    except re.error as exc:
        raise ValueError(f"Invalid character regex {character_regex!r}: {exc}") from exc


def extract_query(line: str, cursor: int, settings: Settings) -> Optional[QueryContext]:
    """
    Find the word being typed: walk back from cursor over word characters,
    at most max_look_back_distance of them. None when the cursor does not
    follow a word character.
    """
    cursor = max(0, min(int(cursor), len(line)))
    is_word_char = _char_re(settings.character_regex).fullmatch
    limit = max(0, cursor - settings.max_look_back_distance)

    start = cursor
    while start > limit and is_word_char(line[start - 1]):
        start -= 1
    if start == cursor:
        return None
    return QueryContext(query=line[start:cursor], start=start, end=cursor)


def apply_suggestion(line: str, ctx: QueryContext, suggestion: Suggestion) -> Tuple[str, int]:
    """Replace the query span with the suggestion. Returns (new_line, new_cursor)."""
    text = suggestion.insertion_text
    return line[:ctx.start] + text + line[ctx.end:], ctx.start + len(text)
