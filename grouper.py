"""Group matching transcript cues into context-padded snippet windows."""

from __future__ import annotations

from typing import Sequence

from models import Cue, SnippetWindow
from spans import contains_any

CONTEXT_SIZE = 5


def matching_indices(cues: Sequence[Cue], tokens: Sequence[str]) -> list[int]:
    """Positions in *cues* whose text contains at least one token."""
    return [pos for pos, cue in enumerate(cues) if contains_any(cue.text, tokens)]


def _cluster(indices: Sequence[int], max_gap: int) -> list[list[int]]:
    """Single-linkage clustering of sorted indices.

    An index joins the current group when it is at most *max_gap* away
    from the group's last index.
    """
    groups: list[list[int]] = []
    for idx in indices:
        if groups and idx <= groups[-1][-1] + max_gap:
            groups[-1].append(idx)
        else:
            groups.append([idx])
    return groups


def _build_window(cues: Sequence[Cue], group: Sequence[int], context_size: int) -> SnippetWindow:
    start = max(0, group[0] - context_size)
    end = min(len(cues) - 1, group[-1] + context_size)
    in_group = set(group)
    return SnippetWindow(
        matches=tuple(cues[i] for i in group),
        context=tuple(cues[i] for i in range(start, end + 1) if i not in in_group),
    )


def group_cues(
    cues: Sequence[Cue],
    tokens: Sequence[str],
    show_full_transcript: bool = False,
    context_size: int = CONTEXT_SIZE,
) -> list[SnippetWindow]:
    """Build the snippet windows to render for one transcript.

    In full-transcript mode a single window is returned whose context is
    the whole transcript and whose matches are the matching cues (so the
    two overlap). Otherwise matches closer than ``2 * context_size`` to
    the previous match share a window, and each window's context holds the
    non-matching cues within ``context_size`` of its first and last match.
    """
    if not tokens:
        return []

    positions = matching_indices(cues, tokens)

    if show_full_transcript:
        return [
            SnippetWindow(
                matches=tuple(cues[i] for i in positions),
                context=tuple(cues),
            )
        ]

    if not positions:
        return []

    return [
        _build_window(cues, group, context_size)
        for group in _cluster(positions, context_size * 2)
    ]
