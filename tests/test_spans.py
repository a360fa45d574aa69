"""Tests for spans.py: occurrence finding and interval merging."""

import itertools

from models import Span
from spans import contains_any, find_all_spans, find_spans, fold_case, merge_spans


class TestFindSpans:

    def test_single_occurrence(self):
        assert find_spans("Wien heute", "heute") == [Span(5, 10)]

    def test_case_insensitive(self):
        assert find_spans("WIEN wien Wien", "wien") == [Span(0, 4), Span(5, 9), Span(10, 14)]

    def test_substring_inside_word(self):
        assert find_spans("category", "cat") == [Span(0, 3)]

    def test_non_overlapping_for_one_token(self):
        assert find_spans("aaaa", "aa") == [Span(0, 2), Span(2, 4)]

    def test_empty_token(self):
        assert find_spans("text", "") == []

    def test_empty_text(self):
        assert find_spans("", "abc") == []

    def test_no_match(self):
        assert find_spans("Zeit im Bild", "wetter") == []

    def test_regex_characters_are_literal(self):
        assert find_spans("a.b a+b", "a+b") == [Span(4, 7)]

    def test_spans_stay_in_bounds_for_expanding_lowercase(self):
        text = "İstanbul istanbul"
        spans = find_spans(text, "istanbul")
        assert spans == [Span(0, 8), Span(9, 17)]
        assert all(0 <= s.start < s.end <= len(text) for s in spans)


class TestFoldCase:

    def test_preserves_length(self):
        for text in ("ÄÖÜ", "İİ", "Straße", ""):
            assert len(fold_case(text)) == len(text)

    def test_lowercases(self):
        assert fold_case("ÄrGeR") == "ärger"

    def test_expanding_character_keeps_first_code_point(self):
        assert fold_case("İstanbul") == "istanbul"

    def test_idempotent(self):
        for text in ("İstanbul", "ÄÖÜ", "Straße"):
            assert fold_case(fold_case(text)) == fold_case(text)


class TestMergeSpans:

    def test_overlapping_merge(self):
        assert merge_spans([Span(0, 5), Span(3, 8)]) == [Span(0, 8)]

    def test_touching_merge(self):
        assert merge_spans([Span(0, 3), Span(3, 6)]) == [Span(0, 6)]

    def test_separated_stay_distinct(self):
        assert merge_spans([Span(0, 3), Span(4, 6)]) == [Span(0, 3), Span(4, 6)]

    def test_contained_span(self):
        assert merge_spans([Span(0, 10), Span(2, 4)]) == [Span(0, 10)]

    def test_unsorted_input(self):
        assert merge_spans([Span(10, 12), Span(0, 2), Span(1, 3)]) == [Span(0, 3), Span(10, 12)]

    def test_empty(self):
        assert merge_spans([]) == []

    def test_permutation_invariant(self):
        spans = [Span(0, 2), Span(1, 4), Span(6, 7), Span(7, 9), Span(12, 13)]
        expected = [Span(0, 4), Span(6, 9), Span(12, 13)]
        for perm in itertools.permutations(spans):
            assert merge_spans(perm) == expected


class TestFindAllSpans:

    def test_tokens_merged(self):
        assert find_all_spans("breaking news", ["break", "king"]) == [Span(0, 8)]

    def test_token_order_irrelevant(self):
        text = "Nationalrat und Bundesrat beraten"
        a = find_all_spans(text, ["rat", "national", "bundes"])
        b = find_all_spans(text, ["bundes", "rat", "national"])
        assert a == b == [Span(0, 11), Span(16, 25), Span(28, 31)]

    def test_no_tokens(self):
        assert find_all_spans("text", []) == []


class TestContainsAny:

    def test_any_token(self):
        assert contains_any("Zeit im Bild", ["wetter", "bild"])

    def test_none_match(self):
        assert not contains_any("Zeit im Bild", ["wetter"])

    def test_empty_inputs(self):
        assert not contains_any("", ["a"])
        assert not contains_any("abc", [])
