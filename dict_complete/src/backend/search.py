from __future__ import annotations
import logging
import re
from typing import Iterable, List, Optional, Sequence

from .models import Policy, Settings, Suggestion, WordInsertionMode
from .normalize import fold_case, normalize_word, strip_diacritics
from .DB.index import WordIndexView
from .providers import DictionaryProvider

log = logging.getLogger(__name__)

# Characters allowed between two consecutive query characters.
# Word characters are ASCII only; CJK blocks are listed explicitly.
_CJK_BLOCKS = (
    "\u4e00-\u9fff"   # CJK unified ideographs
    "\u31c0-\u31ef"   # CJK strokes
    "\u31f0-\u31ff"   # katakana phonetic extensions
    "\u3200-\u32ff"   # enclosed CJK letters and months
    "\u3300-\u33ff"   # CJK compatibility
    "\u3400-\u4dbf"   # CJK unified ideographs extension A
    "\u4dc0-\u4dff"   # Yijing hexagram symbols
)
FILLER = r"[A-Za-z0-9_\s()" + _CJK_BLOCKS + "]*"


# /* ~~~ PatternBuilder ~~~ */
def build_pattern(query_norm: str) -> re.Pattern:
    """
    Compile an unanchored "ordered subsequence with bounded filler" matcher.

    Every query character is matched literally, so "a+b" means the three
    characters a, +, b and never "one or more a". Use .search(), not
    .fullmatch(): a candidate matches when the pattern occurs anywhere in it.
    """
    return re.compile(FILLER.join(re.escape(ch) for ch in query_norm))


# /* ~~~ CandidateSelector ~~~ */
def select_candidates(index: WordIndexView, first_char: str, policy: Policy) -> List[Sequence[str]]:
    """
    Pick the buckets worth scanning for a query starting with first_char.

    Buckets are returned as-is (never merged into one list); a bucket key is
    selected at most once so a word cannot be suggested twice.
    """
    keys: List[str] = [first_char]
    if policy.ignore_case:
        keys.append(first_char.upper())
    if policy.ignore_diacritics:
        # full key scan: catches "É…"/"é…" words for a query starting with "e"
        for key, _ in index.all_buckets():
            if strip_diacritics(fold_case(key, policy.ignore_case)) == first_char:
                keys.append(key)

    buckets: List[Sequence[str]] = []
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            continue
        seen.add(key)
        bucket = index.bucket(key)
        if bucket:
            buckets.append(bucket)
    return buckets


# /* ~~~ MatchMapper ~~~ */
def map_matches(
    buckets: Iterable[Sequence[str]],
    pattern: re.Pattern,
    raw_query: str,
    query_norm: str,
    policy: Policy,
) -> List[Suggestion]:
    append = policy.insertion_mode is WordInsertionMode.IGNORE_CASE_APPEND
    cut = len(query_norm)
    out: List[Suggestion] = []
    for bucket in buckets:
        for word in bucket:
            if pattern.search(normalize_word(word, policy)) is None:
                continue
            if append:
                # keep what the user typed, take the rest from the word (empty if shorter)
                out.append(Suggestion.from_string(raw_query + word[cut:]))
            else:
                out.append(Suggestion.from_string(word))
    return out


# /* ~~~ Ranker ~~~ */
def rank(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """Shorter first. sorted() is stable, so equal lengths keep scan order."""
    return sorted(suggestions, key=lambda s: len(s.display_text))


def suggest(index: WordIndexView, raw_query: str, policy: Policy) -> List[Suggestion]:
    """Run the whole matching pipeline against one dictionary."""
    if not raw_query or len(raw_query) < policy.min_trigger_length:
        return []
    query_norm = normalize_word(raw_query, policy)
    if not query_norm:
        return []

    buckets = select_candidates(index, query_norm[0], policy)
    if not buckets:
        return []

    pattern = build_pattern(query_norm)
    hits = map_matches(buckets, pattern, raw_query, query_norm, policy)
    log.debug("query=%r buckets=%d hits=%d", raw_query, len(buckets), len(hits))
    return rank(hits)


def provider_suggestions(
    provider: DictionaryProvider,
    query: str,
    settings: Settings,
    policy: Optional[Policy] = None,
) -> List[Suggestion]:
    if not provider.is_active(settings):
        return []
    policy = policy or settings.policy()
    if not query or len(query) < policy.min_trigger_length:
        return []
    # one snapshot for the whole call
    rows = suggest(provider.dictionary(), query, policy)
    suffix_of = getattr(provider, "insertion_suffix", None)
    suffix = suffix_of(settings) if suffix_of is not None else ""
    return [s.with_suffix(suffix) for s in rows] if suffix else rows


def complete_query(query: str, providers: Iterable[DictionaryProvider], settings: Settings) -> List[Suggestion]:
    """
    Ask every active provider and concatenate their ranked lists in provider
    order. A display text already produced by an earlier provider is skipped.
    """
    policy = settings.policy()
    if not query or len(query) < policy.min_trigger_length:
        return []

    results: List[Suggestion] = []
    seen: set[str] = set()
    for provider in providers:
        for s in provider_suggestions(provider, query, settings, policy):
            if s.display_text in seen:
                continue
            seen.add(s.display_text)
            results.append(s)
    return results
