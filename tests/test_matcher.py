"""Tests for pattern compilation and group resolution."""

import pytest

from summitt.errors import PatternCompileError
from summitt.matcher import DEFAULT_KEY_GROUP, DEFAULT_VALUE_GROUP, Matcher


def test_unnamed_groups_use_positional_defaults() -> None:
    m = Matcher.compile(r"(\d+) (\w+)")
    assert m.value_index == DEFAULT_VALUE_GROUP == 1
    assert m.key_index == DEFAULT_KEY_GROUP == 2
    assert list(m.extract("12 abc")) == [("abc", "12")]


def test_named_groups_override_positions() -> None:
    m = Matcher.compile(r"(?P<k>\w+)=(?P<v>\d+)")
    assert m.key_index == 1
    assert m.value_index == 2
    assert list(m.extract("size=42")) == [("size", "42")]


def test_only_one_named_group_keeps_other_default() -> None:
    m = Matcher.compile(r"(?P<v>\d+) (\w+)")
    assert m.value_index == 1
    assert m.key_index == 2


def test_all_non_overlapping_matches_are_returned() -> None:
    m = Matcher.compile(r"(\d+):(\w+)")
    assert list(m.extract("1:a 2:b 3:a")) == [("a", "1"), ("b", "2"), ("a", "3")]


def test_short_match_is_skipped_silently() -> None:
    m = Matcher.compile(r"(\d+)")
    assert not m.usable
    assert list(m.extract("1 2 3")) == []


def test_named_key_without_second_group_is_skipped() -> None:
    # Only two captures in total: whole match and k
    m = Matcher.compile(r"(?P<k>\w+)")
    assert list(m.extract("abc")) == []


def test_non_participating_group_yields_empty_string() -> None:
    m = Matcher.compile(r"(\d+)(?: (\w+))?")
    assert list(m.extract("7")) == [("", "7")]


def test_invalid_pattern_raises_in_strict_mode() -> None:
    with pytest.raises(PatternCompileError) as exc_info:
        Matcher.compile("(unclosed", ignore_errors=False)
    assert exc_info.value.pattern == "(unclosed"
    assert "(unclosed" in str(exc_info.value)


def test_invalid_pattern_is_inert_when_ignored(caplog) -> None:
    with caplog.at_level("WARNING", logger="summitt"):
        m = Matcher.compile("(unclosed", ignore_errors=True)
    assert m.inert
    assert m.pattern == "(unclosed"
    assert list(m.extract("(unclosed 1 2")) == []
    assert "(unclosed" in caplog.text


def test_empty_match_adjacent_to_previous_match_is_dropped() -> None:
    m = Matcher.compile(r"(\d*)(x?)")
    assert [mt.span() for mt in m.finditer("1x")] == [(0, 2)]
    assert list(m.extract("1x")) == [("x", "1")]


def test_empty_matches_not_adjacent_to_a_match_are_kept() -> None:
    m = Matcher.compile(r"(\d*)(x?)")
    assert [mt.span() for mt in m.finditer("a1x")] == [(0, 0), (1, 3)]
