# backend/models.py
"""
Data models for the completion engine.

- WordInsertionMode: how a chosen suggestion replaces the typed word.
- Policy: the frozen matching options of one query.
- Suggestion: the result item returned to callers.
- Settings: the user-facing options a Policy is derived from.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping

from . import config as CFG


class WordInsertionMode(str, Enum):
    MATCH_CASE_REPLACE = "Match-Case & Replace"
    IGNORE_CASE_REPLACE = "Ignore-Case & Replace"
    IGNORE_CASE_APPEND = "Ignore-Case & Append"

    @classmethod
    def parse(cls, value: "str | WordInsertionMode") -> "WordInsertionMode":
        """Accept a member, its display value or its name (any case, '-' or '_')."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for mode in cls:
            if text == mode.value:
                return mode
        key = text.upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown word insertion mode: {value!r}") from None


@dataclass(frozen=True, slots=True)
class Policy:
    """
    Matching options for a single query. Built fresh per call and discarded.

    ignore_case and ignore_diacritics apply to both the query and every
    candidate word; min_trigger_length is the shortest query that is
    evaluated at all.
    """
    ignore_case: bool
    ignore_diacritics: bool
    insertion_mode: WordInsertionMode
    min_trigger_length: int = 0


@dataclass(frozen=True, slots=True)
class Suggestion:
    """
    display_text is shown to the user, insertion_text is written into the
    document. The matching pipeline emits identical texts; a provider may
    extend the insertion text afterwards (see with_suffix).
    """
    display_text: str
    insertion_text: str

    @classmethod
    def from_string(cls, text: str) -> "Suggestion":
        return cls(display_text=text, insertion_text=text)

    def with_suffix(self, suffix: str) -> "Suggestion":
        return Suggestion(self.display_text, self.insertion_text + suffix)

    def to_dict(self) -> dict[str, str]:
        return {"display_text": self.display_text, "insertion_text": self.insertion_text}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(slots=True)
class Settings:
    character_regex: str = CFG.CHARACTER_REGEX
    max_look_back_distance: int = CFG.MAX_LOOK_BACK_DISTANCE
    min_word_length: int = CFG.MIN_WORD_LENGTH
    min_word_trigger_length: int = CFG.MIN_WORD_TRIGGER_LENGTH
    word_insertion_mode: WordInsertionMode = WordInsertionMode.parse(CFG.WORD_INSERTION_MODE)
    ignore_diacritics_when_filtering: bool = CFG.IGNORE_DIACRITICS
    file_scanner_provider_enabled: bool = CFG.FILE_SCANNER_ENABLED
    file_scanner_scan_current: bool = CFG.FILE_SCANNER_SCAN_CURRENT
    word_list_provider_enabled: bool = CFG.WORD_LIST_ENABLED
    front_matter_provider_enabled: bool = CFG.FRONT_MATTER_ENABLED
    front_matter_tag_append_suffix: bool = CFG.FRONT_MATTER_TAG_APPEND_SUFFIX
    enable_tab_key_for_completion_insertion: bool = CFG.TAB_INSERTS_COMPLETION

    def policy(self) -> Policy:
        # only the match-case mode compares case-sensitively
        return Policy(
            ignore_case=self.word_insertion_mode is not WordInsertionMode.MATCH_CASE_REPLACE,
            ignore_diacritics=self.ignore_diacritics_when_filtering,
            insertion_mode=self.word_insertion_mode,
            min_trigger_length=self.min_word_trigger_length,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        """Build settings from a loose mapping; unknown keys are ignored."""
        s = cls()
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            raw = data[f.name]
            default = getattr(s, f.name)
            if f.name == "word_insertion_mode":
                value: Any = WordInsertionMode.parse(raw)
            elif isinstance(default, bool):
                value = _as_bool(raw)
            elif isinstance(default, int):
                value = int(raw)
            else:
                value = str(raw)
            setattr(s, f.name, value)
        return s
