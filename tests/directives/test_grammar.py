"""
Unit tests for directive grammar patterns and parsers.
"""

import time

import pytest

from tdr.directives import grammar
from tdr.ir.enums import Base, CaseModifier


class TestConversionGrammar:

    def test_conversion_pair(self):
        match = grammar.CONVERSION_PAIR.search("value 101(bin)(hex) here")
        directive = grammar.parse_conversion_pair(match)

        assert directive.subject == "101"
        assert directive.from_base is Base.BIN
        assert directive.to_base is Base.HEX
        assert directive.raw == "101(bin)(hex)"

    def test_conversion_pair_allows_spaces(self):
        assert grammar.CONVERSION_PAIR.search("ff ( hex ) (bin)") is not None

    def test_conversion_pair_yields_to_longer_chain(self):
        assert grammar.CONVERSION_PAIR.search("10(hex)(bin)(up)") is None
        assert grammar.CONVERSION_PAIR.search("10(hex)(bin)(hex)") is None

    def test_conversion_pair_needs_word_start(self):
        assert grammar.CONVERSION_PAIR.search("x101(bin)(hex)") is None

    def test_explicit_literal(self):
        match = grammar.EXPLICIT_LITERAL.search("(hex, -12)")
        directive = grammar.parse_explicit_literal(match)

        assert directive.to_base is Base.HEX
        assert directive.literal == -12

    def test_chain_operations_split_by_kind(self):
        match = grammar.CHAIN.search("ff(up)(hex)(bin)")
        directive = grammar.parse_chain(match)

        assert directive.subject == "ff"
        assert directive.operations == [CaseModifier.UP, Base.HEX, Base.BIN]
        assert directive.case_modifiers == [CaseModifier.UP]
        assert directive.conversions == [Base.HEX, Base.BIN]

    def test_marker_count(self):
        text = "1(hex) 2 (hex) (bin)"
        assert grammar.count_markers(text) == 3
        assert grammar.count_markers(text, Base.HEX) == 2


class TestCaseGrammar:

    def test_scoped_case(self):
        match = grammar.SCOPED_CASE.search("one two three (up, 2)")
        directive = grammar.parse_scoped_case(match)

        assert directive.subject == "one two three"
        assert directive.modifier is CaseModifier.UP
        assert directive.word_count == 2

    def test_scoped_case_negative_count(self):
        match = grammar.SCOPED_CASE.search("the quick brown fox (up, -2)")
        directive = grammar.parse_scoped_case(match)

        assert directive.subject == "the quick brown fox"
        assert directive.word_count == -2

    def test_scoped_case_ignores_nested_form(self):
        assert grammar.SCOPED_CASE.search("word (up, 2 more words)") is None

    def test_nested_group_matches_innermost_only(self):
        matches = list(grammar.NESTED_GROUP.finditer("(up, 1 a (low, -2 B C) d)"))

        assert len(matches) == 1
        directive = grammar.parse_nested_group(matches[0])
        assert directive.subject == "B C"
        assert directive.modifier is CaseModifier.LOW
        assert directive.word_count == -2

    def test_case_chain(self):
        match = grammar.CASE_CHAIN.search("word(up)(low) next")
        directive = grammar.parse_case_chain(match)

        assert directive.subject == "word"
        assert directive.case_modifiers == [CaseModifier.UP, CaseModifier.LOW]
        assert directive.conversions == []

    def test_group_count(self):
        assert grammar.count_groups("(a (b) (c))") == 3
        assert grammar.count_groups("plain") == 0


class TestPatternCost:
    """Long unmatched runs must be scanned in linear time."""

    @pytest.mark.parametrize("pattern", [
        grammar.BASE_MARKER[Base.HEX],
        grammar.BASE_MARKER[Base.BIN],
        grammar.CASE_MARKER,
        grammar.SCOPED_CASE,
        grammar.SINGLE_CASE,
        grammar.CASE_CHAIN,
        grammar.CONVERSION_PAIR,
        grammar.CHAIN,
        grammar.SINGLE_CONVERSION[Base.HEX],
        grammar.SINGLE_CONVERSION[Base.BIN],
    ])
    @pytest.mark.parametrize("text", [
        "x" * 50000,
        "a" + " " * 50000 + "b",
        "1" * 50000,
        "word " * 10000,
    ])
    def test_no_match_is_fast(self, pattern, text):
        start = time.perf_counter()
        assert pattern.search(text) is None
        assert time.perf_counter() - start < 2.0
