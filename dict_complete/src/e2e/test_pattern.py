import pytest

from backend.search import build_pattern


def matches(query: str, word: str) -> bool:
    return build_pattern(query).search(word) is not None


@pytest.mark.parametrize("query,word", [
    ("fzy", "fuzzy"),
    ("wrd", "word"),
    ("fx", "f(x)"),              # parentheses are filler
    ("ab", "a b"),               # whitespace is filler
    ("ple", "apple"),            # unanchored containment
    ("中人", "中国人"),          # CJK ideograph as filler
    ("あい", "あ㈱い"),          # enclosed CJK block
])
def test_ordered_subsequence_with_filler(query, word):
    assert matches(query, word)


@pytest.mark.parametrize("query,word", [
    ("yzf", "fuzzy"),            # order matters
    ("ab", "a-b"),               # '-' is not filler
    ("ab", "aéb"),               # word characters are ASCII only
    ("中人", "中，人"),          # full-width comma is not filler
])
def test_non_matches(query, word):
    assert not matches(query, word)


def test_plus_is_literal():
    assert matches("a+b", "a+b")
    assert not matches("a+b", "aXb")
    assert not matches("a+b", "aab")


@pytest.mark.parametrize("query", ["a.c", "(x", "x)", "^a", "a$", "a|b", "a?", "[a", "a*", "a\\b", "{2}"])
def test_metacharacters_never_break_or_act_as_operators(query):
    # the query itself always matches, a plain letter string never does
    assert matches(query, query)
    assert not matches(query, "zzz")
