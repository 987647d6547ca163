"""Unit tests for protected-range detection.

WHY: A protected range is a promise that no page will ever cut through
a list item's opening words or a short quotation. If detection is off
by one word, a page starts with a lone closing quote or ends with a
dangling "3.".

HOW: Tests cover both sub-detectors:
  - Numbered items: marker forms, protected length, truncation, no overlap
  - Delimited content: each delimiter pair, nesting, the 64-char cap,
    unmatched openers, source text with irregular whitespace
  - The word-span table used to map characters back to words

RULES:
- Range bounds are inclusive word positions.
- Expected char counts are computed by hand from the example text.
"""

import pytest

from readalong_pagination.core.ir import (
    BRACES,
    BRACKETS,
    GUILLEMETS,
    NUMBERED_ITEM,
    PARENTHESES,
    QUOTES,
)
from readalong_pagination.core.protected import (
    build_word_spans,
    find_numbered_item_breaks,
    find_protected_content_breaks,
)


def _spans(result):
    return [(r.start, r.end, r.type) for r in result.protected_ranges]


class TestNumberedItems:
    """List markers protect themselves and the next few words."""

    def test_bare_marker_protects_three_following_words(self):
        result = find_numbered_item_breaks(["1.", "Buy", "milk", "and", "eggs", "today."])
        assert _spans(result) == [(0, 3, NUMBERED_ITEM)]
        assert result.breaks == [3]
        assert result.protected_ranges[0].char_count == len("1. Buy milk and")

    def test_marker_with_attached_text_protects_three_words_total(self):
        result = find_numbered_item_breaks(["1.Buy", "milk", "and", "eggs."])
        assert _spans(result) == [(0, 2, NUMBERED_ITEM)]
        assert result.breaks == [2]

    @pytest.mark.parametrize("marker", ["2.)", "10:", "3)", "#4.", "5]"])
    def test_marker_variants(self, marker):
        result = find_numbered_item_breaks([marker, "a", "b", "c", "d"])
        assert _spans(result) == [(0, 3, NUMBERED_ITEM)]

    def test_bare_number_with_dash_word_includes_dash(self):
        result = find_numbered_item_breaks(["#4", "-", "Stir", "the", "sauce", "now."])
        assert _spans(result) == [(0, 4, NUMBERED_ITEM)]
        assert result.breaks == [4]

    def test_bare_number_without_dash_is_not_a_marker(self):
        result = find_numbered_item_breaks(["4", "apples", "and", "pears."])
        assert result.protected_ranges == []
        assert result.breaks == []

    def test_marker_must_start_the_word(self):
        result = find_numbered_item_breaks(["A1.", "sauce."])
        assert result.protected_ranges == []

    def test_truncated_at_end_of_text(self):
        result = find_numbered_item_breaks(["1.", "Go"])
        assert _spans(result) == [(0, 1, NUMBERED_ITEM)]
        assert result.breaks == [1]

    def test_consecutive_items(self):
        words = ["1.", "a", "b", "c", "2.", "d", "e", "f"]
        result = find_numbered_item_breaks(words)
        assert _spans(result) == [(0, 3, NUMBERED_ITEM), (4, 7, NUMBERED_ITEM)]
        assert result.breaks == [3, 7]

    def test_ranges_never_overlap(self):
        result = find_numbered_item_breaks(["1.", "2.", "3.", "4.", "5."])
        assert _spans(result) == [(0, 3, NUMBERED_ITEM), (4, 4, NUMBERED_ITEM)]
        for a, b in zip(result.protected_ranges, result.protected_ranges[1:]):
            assert a.end < b.start

    def test_empty_input(self):
        result = find_numbered_item_breaks([])
        assert result.protected_ranges == []
        assert result.breaks == []


class TestDelimitedContent:
    """Short delimited spans map to word ranges ending at the closer."""

    def test_quotes(self):
        words = ["He", "said", '"Hello', 'world"', "to", "me."]
        result = find_protected_content_breaks(words)
        assert _spans(result) == [(2, 3, QUOTES)]
        assert result.protected_ranges[0].char_count == 11
        assert result.breaks == [3]

    def test_parentheses_nest(self):
        result = find_protected_content_breaks(["see", "(a", "(b)", "c)", "now."])
        assert _spans(result) == [(1, 3, PARENTHESES)]
        assert result.protected_ranges[0].char_count == len("a (b) c")

    def test_brackets_and_braces(self):
        result = find_protected_content_breaks(["[one", "two]", "then", "{three}", "end."])
        assert _spans(result) == [(0, 1, BRACKETS), (3, 3, BRACES)]
        assert result.breaks == [1, 3]

    def test_doubled_angle_brackets(self):
        result = find_protected_content_breaks(["<<Bonjour", "ami>>", "said", "he."])
        assert _spans(result) == [(0, 1, GUILLEMETS)]
        assert result.protected_ranges[0].char_count == len("Bonjour ami")

    def test_single_angle_brackets_are_not_delimiters(self):
        result = find_protected_content_breaks(["a", "<b", "c>", "d."])
        assert result.protected_ranges == []

    def test_unmatched_opener_is_ignored(self):
        result = find_protected_content_breaks(["he", "said", '"hi', "there."])
        assert result.protected_ranges == []
        assert result.breaks == []

    def test_content_at_cap_is_protected(self):
        word = '"' + "x" * 64 + '"'
        result = find_protected_content_breaks([word, "next."])
        assert _spans(result) == [(0, 0, QUOTES)]
        assert result.protected_ranges[0].char_count == 64

    def test_content_over_cap_is_skipped(self):
        word = '"' + "x" * 65 + '"'
        result = find_protected_content_breaks([word, "next."])
        assert result.protected_ranges == []

    def test_scan_resumes_inside_skipped_span(self):
        words = ['"' + "a" * 70, "(b)", 'c"']
        result = find_protected_content_breaks(words)
        assert _spans(result) == [(1, 1, PARENTHESES)]

    def test_custom_cap(self):
        result = find_protected_content_breaks(["(abcdef)", "x."], max_chars=5)
        assert result.protected_ranges == []

    def test_ranges_sorted_by_start(self):
        result = find_protected_content_breaks(["(x)", '"y"', "z."])
        assert _spans(result) == [(0, 0, PARENTHESES), (1, 1, QUOTES)]

    def test_source_text_with_irregular_whitespace(self):
        words = ["He", "said", "(quietly)", "go."]
        text = "He  said\t(quietly)\n go."
        result = find_protected_content_breaks(words, text)
        assert _spans(result) == [(2, 2, PARENTHESES)]
        assert result.breaks == [2]


class TestBuildWordSpans:
    """Words are located in the text in order, whatever the whitespace."""

    def test_irregular_whitespace(self):
        assert build_word_spans(["a", "b"], "a   b") == [(0, 1), (4, 5)]

    def test_repeated_words_map_in_order(self):
        assert build_word_spans(["the", "the"], "the the") == [(0, 3), (4, 7)]

    def test_missing_word_gets_zero_width_span(self):
        assert build_word_spans(["a", "zzz", "b"], "a b") == [(0, 1), (1, 1), (2, 3)]
