"""Tests for the support-set string parser."""
from __future__ import annotations

import pytest

from nashfinder.core.errors import SupportSetError
from nashfinder.formats.supports import format_support_sets, parse_support_set, parse_support_sets
from nashfinder.models.support import SupportSet

PLAYERS = ("P1", "P2")


class TestParseSupportSets:
    def test_two_brackets(self):
        first, second = parse_support_sets("[H,T][T]", PLAYERS)
        assert first == SupportSet(player="P1", actions=("H", "T"))
        assert second == SupportSet(player="P2", actions=("T",))

    def test_whitespace_is_ignored(self):
        first, second = parse_support_sets("  [ H , T ] [T] ", PLAYERS)
        assert first.actions == ("H", "T")
        assert second.actions == ("T",)

    def test_action_names_with_spaces(self):
        first, _ = parse_support_sets("[Go left,Stay][x]", PLAYERS)
        assert first.actions == ("Go left", "Stay")

    @pytest.mark.parametrize("text", ["[H,T]", "[H][T][H]", "", "H,T"])
    def test_wrong_number_of_sets(self, text):
        with pytest.raises(SupportSetError):
            parse_support_sets(text, PLAYERS)

    @pytest.mark.parametrize("text", ["[H,T]x[T]", "[H,T][T", "[H][T]]"])
    def test_text_outside_brackets(self, text):
        with pytest.raises(SupportSetError):
            parse_support_sets(text, PLAYERS)

    @pytest.mark.parametrize("text", ["[][T]", "[H,,T][T]", "[H,][T]"])
    def test_empty_actions(self, text):
        with pytest.raises(SupportSetError, match="wrong format"):
            parse_support_sets(text, PLAYERS)


class TestParseSupportSet:
    def test_single(self):
        assert parse_support_set("a,b", "P") == SupportSet(player="P", actions=("a", "b"))

    def test_duplicates_collapse(self):
        assert parse_support_set("a,a", "P").actions == ("a",)


def test_format_support_sets():
    supports = parse_support_sets("[H,T][T]", PLAYERS)
    assert format_support_sets(supports) == "[H,T][T]"
