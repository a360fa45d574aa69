"""Case-insensitive occurrence spans and interval merging."""

from __future__ import annotations

from typing import Iterable, Sequence

from models import Span


def fold_case(text: str) -> str:
    """Lowercase *text* without changing its length.

    Characters whose lowercase form is longer than one code point (e.g.
    ``"İ"`` -> ``"i̇"``) keep only its first character, so offsets stay
    aligned with *text*. Queries and texts must both go through this.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(ch.lower()[:1] or ch for ch in text)


def _find_folded(folded: str, token: str) -> list[Span]:
    spans: list[Span] = []
    if not token:
        return spans
    size = len(token)
    pos = folded.find(token)
    while pos != -1:
        spans.append(Span(pos, pos + size))
        pos = folded.find(token, pos + size)
    return spans


def find_spans(text: str, token: str) -> list[Span]:
    """Return every occurrence of *token* in *text*, left to right.

    Literal substring matching: ``"cat"`` matches inside ``"category"``.
    Scanning resumes at the end of each match.
    """
    if not text or not token:
        return []
    return _find_folded(fold_case(text), fold_case(token))


def merge_spans(spans: Iterable[Span]) -> list[Span]:
    """Collapse overlapping or touching spans into a sorted disjoint list."""
    merged: list[Span] = []
    for span in sorted(spans, key=lambda s: (s.start, s.end)):
        if merged and span.start <= merged[-1].end:
            last = merged[-1]
            if span.end > last.end:
                merged[-1] = Span(last.start, span.end)
        else:
            merged.append(span)
    return merged


def find_all_spans(text: str, tokens: Sequence[str]) -> list[Span]:
    """Find spans for every token over *text* and merge them."""
    if not text or not tokens:
        return []
    folded = fold_case(text)
    found: list[Span] = []
    for token in tokens:
        found.extend(_find_folded(folded, fold_case(token)))
    return merge_spans(found)


def contains_any(text: str, tokens: Sequence[str]) -> bool:
    """True when at least one token occurs in *text*.

    Item search and the cue grouper both use this so that what is reported
    as a match is exactly what gets highlighted.
    """
    if not text or not tokens:
        return False
    folded = fold_case(text)
    return any(token and fold_case(token) in folded for token in tokens)
