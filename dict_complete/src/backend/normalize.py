from __future__ import annotations
import re
import unicodedata

from .models import Policy

# combining diacritical marks block
_DIACRITICS_RE = re.compile("[\u0300-\u036f]")


def fold_case(text: str, ignore_case: bool) -> str:
    """Simple lowercase when ignoring case. No locale, no casefold() expansions."""
    return text.lower() if ignore_case else text


def strip_diacritics(text: str) -> str:
    """NFD-decompose and drop combining marks U+0300..U+036F ("café" -> "cafe")."""
    return _DIACRITICS_RE.sub("", unicodedata.normalize("NFD", text))


def normalize_word(text: str, policy: Policy) -> str:
    """
    Normalize a query or a candidate word for comparison.
    Both sides of a comparison must go through this same function.
    """
    folded = fold_case(text, policy.ignore_case)
    if policy.ignore_diacritics:
        return strip_diacritics(folded)
    return folded
