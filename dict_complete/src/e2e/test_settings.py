import pytest

from backend.models import Settings, WordInsertionMode as M


def test_default_policy():
    p = Settings().policy()
    assert p.ignore_case is True
    assert p.ignore_diacritics is False
    assert p.insertion_mode is M.IGNORE_CASE_REPLACE
    assert p.min_trigger_length == 3


def test_only_match_case_mode_is_case_sensitive():
    assert Settings(word_insertion_mode=M.MATCH_CASE_REPLACE).policy().ignore_case is False
    assert Settings(word_insertion_mode=M.IGNORE_CASE_APPEND).policy().ignore_case is True


@pytest.mark.parametrize("raw,expected", [
    (M.IGNORE_CASE_APPEND, M.IGNORE_CASE_APPEND),
    ("Ignore-Case & Append", M.IGNORE_CASE_APPEND),
    ("MATCH_CASE_REPLACE", M.MATCH_CASE_REPLACE),
    ("ignore-case-replace", M.IGNORE_CASE_REPLACE),
    ("match case replace", M.MATCH_CASE_REPLACE),
])
def test_mode_parse(raw, expected):
    assert M.parse(raw) is expected


def test_mode_parse_rejects_unknown():
    with pytest.raises(ValueError):
        M.parse("shout")


def test_from_dict_coerces_and_ignores_unknown():
    s = Settings.from_dict({
        "min_word_trigger_length": "1",
        "ignore_diacritics_when_filtering": "yes",
        "word_insertion_mode": None,
        "word_list_provider_enabled": "off",
        "no_such_option": 42,
    })
    assert s.min_word_trigger_length == 1
    assert s.ignore_diacritics_when_filtering is True
    assert s.word_insertion_mode is M.IGNORE_CASE_REPLACE
    assert s.word_list_provider_enabled is False


def test_from_dict_bad_values_raise():
    with pytest.raises(ValueError):
        Settings.from_dict({"min_word_trigger_length": "three"})
    with pytest.raises(ValueError):
        Settings.from_dict({"word_insertion_mode": "loud"})


def test_editor_and_front_matter_defaults():
    s = Settings()
    assert s.front_matter_provider_enabled is True
    assert s.front_matter_tag_append_suffix is True
    assert s.enable_tab_key_for_completion_insertion is False

    s = Settings.from_dict({"enable_tab_key_for_completion_insertion": "true",
                            "front_matter_tag_append_suffix": "0"})
    assert s.enable_tab_key_for_completion_insertion is True
    assert s.front_matter_tag_append_suffix is False
