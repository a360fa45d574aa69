"""Tests for grouper.py: snippet window construction."""

from grouper import CONTEXT_SIZE, group_cues, matching_indices
from models import Cue


def make_cues(n: int, hits: dict[int, str] | None = None) -> list[Cue]:
    hits = hits or {}
    return [
        Cue(index=i, time=f"00:{i:02d}", text=hits.get(i, f"filler line {i}"))
        for i in range(n)
    ]


def indices(cues) -> list[int]:
    return [c.index for c in cues]


class TestGroupCuesSnippetMode:

    def test_no_tokens(self):
        assert group_cues(make_cues(5), []) == []

    def test_no_matches(self):
        assert group_cues(make_cues(5), ["wahl"]) == []

    def test_single_match_window(self):
        cues = make_cues(21, {10: "Die Wahl ist entschieden"})
        windows = group_cues(cues, ["wahl"])
        assert len(windows) == 1
        assert indices(windows[0].matches) == [10]
        assert indices(windows[0].context) == [5, 6, 7, 8, 9, 11, 12, 13, 14, 15]

    def test_far_match_starts_new_window(self):
        cues = make_cues(40, {10: "Wahl", 30: "Wahl"})
        windows = group_cues(cues, ["wahl"])
        assert len(windows) == 2
        assert indices(windows[0].matches) == [10]
        assert indices(windows[1].matches) == [30]
        assert indices(windows[1].context) == [25, 26, 27, 28, 29, 31, 32, 33, 34, 35]

    def test_near_match_joins_window(self):
        cues = make_cues(40, {10: "Wahl", 18: "Wahl"})
        windows = group_cues(cues, ["wahl"])
        assert len(windows) == 1
        window = windows[0]
        assert indices(window.matches) == [10, 18]
        bound = sorted(indices(window.matches) + indices(window.context))
        assert bound == list(range(5, 24))

    def test_threshold_is_inclusive(self):
        cues = make_cues(40, {10: "Wahl", 20: "Wahl"})
        assert len(group_cues(cues, ["wahl"])) == 1
        cues = make_cues(40, {10: "Wahl", 21: "Wahl"})
        assert len(group_cues(cues, ["wahl"])) == 2

    def test_chained_matches_single_linkage(self):
        cues = make_cues(60, {5: "Wahl", 15: "Wahl", 25: "Wahl", 35: "Wahl"})
        windows = group_cues(cues, ["wahl"])
        assert len(windows) == 1
        assert indices(windows[0].matches) == [5, 15, 25, 35]

    def test_bounds_clamped(self):
        cues = make_cues(4, {0: "Wahl", 3: "Wahl"})
        windows = group_cues(cues, ["wahl"])
        assert len(windows) == 1
        assert indices(windows[0].context) == [1, 2]

    def test_matches_and_context_disjoint(self):
        cues = make_cues(50, {3: "Wahl", 7: "Wahl", 20: "Regierung", 44: "wahlkampf"})
        windows = group_cues(cues, ["wahl", "regierung"])
        seen = []
        for w in windows:
            assert not set(indices(w.matches)) & set(indices(w.context))
            seen.extend(indices(w.matches))
        assert sorted(seen) == matching_indices(cues, ["wahl", "regierung"])
        assert len(seen) == len(set(seen))

    def test_custom_context_size(self):
        cues = make_cues(20, {10: "Wahl"})
        windows = group_cues(cues, ["wahl"], context_size=1)
        assert indices(windows[0].context) == [9, 11]

    def test_default_context_size(self):
        assert CONTEXT_SIZE == 5


class TestGroupCuesFullTranscript:

    def test_single_window_with_all_cues(self):
        cues = make_cues(30, {4: "Wahl", 25: "Wahl"})
        windows = group_cues(cues, ["wahl"], show_full_transcript=True)
        assert len(windows) == 1
        assert list(windows[0].context) == cues
        assert indices(windows[0].matches) == [4, 25]

    def test_full_mode_without_matches(self):
        cues = make_cues(3)
        windows = group_cues(cues, ["wahl"], show_full_transcript=True)
        assert len(windows) == 1
        assert windows[0].matches == ()
        assert list(windows[0].context) == cues

    def test_full_mode_without_tokens(self):
        assert group_cues(make_cues(3), [], show_full_transcript=True) == []


class TestSnippetWindowOrdered:

    def test_ordered_flags_matches(self):
        cues = make_cues(20, {10: "Wahl", 12: "Wahl"})
        window = group_cues(cues, ["wahl"])[0]
        ordered = window.ordered()
        assert [c.index for c, _ in ordered] == list(range(5, 18))
        assert [c.index for c, hit in ordered if hit] == [10, 12]

    def test_ordered_full_mode_no_duplicates(self):
        cues = make_cues(5, {2: "Wahl"})
        window = group_cues(cues, ["wahl"], show_full_transcript=True)[0]
        assert [c.index for c, _ in window.ordered()] == [0, 1, 2, 3, 4]
