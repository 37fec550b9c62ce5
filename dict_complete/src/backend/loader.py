from __future__ import annotations
import logging
import os
import re
from functools import lru_cache
from typing import Any, Iterable, Iterator, List, Optional, Sequence

import yaml

from .config import EXCLUDE_DIRS, FRONT_MATTER_EXTS, MIN_WORD_LENGTH, SCAN_EXTS, WORDLIST_EXTS, CHARACTER_REGEX

log = logging.getLogger(__name__)

# Progress logging (set DICTCOMPLETE_VERBOSE=1 to enable)
PROGRESS_EVERY_FILES = 500


def _verbose() -> bool:
    return os.environ.get("DICTCOMPLETE_VERBOSE") == "1"


@lru_cache(maxsize=16)
def word_pattern(character_regex: str) -> re.Pattern:
    """
    Scanner regex: math ($..$, $$..$$), inline code, [[wiki links]] and URLs
    are consumed without a capture, so only group 1 ever holds a word.
    """
    try:
        return re.compile(
            r"\$+.*?\$+|`+.*?`+|\[\[.*?\]\]|https?://[^\n\s]+|([" + character_regex + r"]+)",
            re.S,
        )
    except re.error as exc:
        raise ValueError(f"Invalid character regex {character_regex!r}: {exc}") from exc


def extract_words(text: str,
                  character_regex: str = CHARACTER_REGEX,
                  min_word_length: int = MIN_WORD_LENGTH) -> Iterator[str]:
    """Yield every word of text, in order, duplicates included."""
    for m in word_pattern(character_regex).finditer(text):
        word = m.group(1)
        if word and len(word) >= min_word_length:
            yield word


def iter_files(roots: Iterable[str],
               exts: Sequence[str] = SCAN_EXTS,
               exclude_dirs: Optional[set[str]] = None) -> Iterator[str]:
    """Yield files with one of exts recursively under each root, in a stable order."""
    exts_l = {e.lower() for e in exts}
    skip = {d.lower() for d in (exclude_dirs if exclude_dirs is not None else EXCLUDE_DIRS)}
    for root in roots:
        root = os.path.abspath(root)
        if not os.path.isdir(root):
            raise FileNotFoundError(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d.lower() not in skip)
            for fn in sorted(filenames):
                if os.path.splitext(fn)[1].lower() in exts_l:
                    yield os.path.join(dirpath, fn)


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()


def scan_roots(roots: Iterable[str],
               character_regex: str = CHARACTER_REGEX,
               min_word_length: int = MIN_WORD_LENGTH) -> Iterator[tuple[str, List[str]]]:
    """Yield (path, words) for every scannable file under roots."""
    n_files = 0
    n_words = 0
    for path in iter_files(roots):
        try:
            text = read_text(path)
        except OSError:
            continue
        words = list(dict.fromkeys(extract_words(text, character_regex, min_word_length)))
        n_files += 1
        n_words += len(words)
        if _verbose() and n_files % PROGRESS_EVERY_FILES == 0:
            print(f"[scanned] files={n_files:,} words={n_words:,}")
        yield path, words
    if _verbose():
        print(f"[done] files={n_files:,} words={n_words:,}")


def load_wordlist(path: str, min_word_length: int = MIN_WORD_LENGTH) -> List[str]:
    """
    Read a plain-text word list: one word per line, surrounding whitespace
    stripped, blank lines and words shorter than min_word_length skipped.
    """
    words: List[str] = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            word = line.strip()
            if word and len(word) >= min_word_length:
                words.append(word)
    return words


def iter_wordlists(paths: Iterable[str]) -> Iterator[str]:
    """Expand word list arguments: files as-is, directories to their *.txt files."""
    for p in paths:
        if os.path.isdir(p):
            yield from iter_files([p], exts=WORDLIST_EXTS)
        elif os.path.isfile(p):
            yield os.path.abspath(p)
        else:
            raise FileNotFoundError(p)


# /* ~~~ YAML front matter ~~~ */
_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$", re.S | re.M)


def read_front_matter(text: str, source: str = "") -> dict[str, Any]:
    """
    Parse the leading "---" block of a note. Returns {} when there is none,
    when it is not a mapping, or when the YAML is broken (logged, not raised).
    """
    m = _FRONT_MATTER_RE.match(text)
    if not m:
        return {}
    try:
        data = yaml.safe_load(m.group(1))
    except yaml.YAMLError as exc:
        log.warning("Skipping malformed front matter in %s: %s", source or "<text>", exc)
        return {}
    return data if isinstance(data, dict) else {}


def front_matter_tags(meta: dict[str, Any]) -> List[str]:
    """
    Tags of a parsed front matter block, from "tags" or "tag": a YAML list or
    a comma/space separated string. A leading '#' is dropped.
    """
    raw = meta.get("tags", meta.get("tag"))
    if raw is None:
        return []
    items = raw if isinstance(raw, list) else re.split(r"[,\s]+", str(raw))
    tags: List[str] = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip().lstrip("#")
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def scan_front_matter(roots: Iterable[str]) -> Iterator[tuple[str, List[str]]]:
    """Yield (path, tags) for every note under roots that declares tags."""
    for path in iter_files(roots, exts=FRONT_MATTER_EXTS):
        try:
            text = read_text(path)
        except OSError:
            continue
        tags = front_matter_tags(read_front_matter(text, path))
        if tags:
            yield path, tags
