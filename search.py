"""Query tokenization and containment search over loaded broadcasts."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional, Sequence

from models import Broadcast, SearchResult
from spans import contains_any, fold_case

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


class SearchError(Exception):
    """Search called with unusable arguments."""


def tokenize(query: str) -> list[str]:
    """Split *query* into lowercase search tokens.

    Queries shorter than ``MIN_QUERY_LENGTH`` after trimming yield no
    tokens, which means "no text filter" rather than "match nothing".
    Duplicates are dropped, first occurrence wins.
    """
    if not isinstance(query, str):
        raise SearchError("Search query must be a string")
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []
    return list(dict.fromkeys(fold_case(query).split()))


def item_matches(item: Broadcast, tokens: Sequence[str], search_subtitles: bool) -> bool:
    """True when any token occurs in any searchable field of *item*."""
    if contains_any(item.title, tokens) or contains_any(item.description, tokens):
        return True
    for seg in item.segments:
        if contains_any(seg.title, tokens) or contains_any(seg.description, tokens):
            return True
    if search_subtitles:
        return any(contains_any(cue.text, tokens) for cue in item.all_cues())
    return False


def _select(items: Iterable[Broadcast], selected_titles: Optional[Iterable[str]]) -> list[Broadcast]:
    if not selected_titles:
        return list(items)
    wanted = set(selected_titles)
    return [item for item in items if item.title in wanted]


def search_broadcasts(
    query: str,
    items: Iterable[Broadcast],
    search_subtitles: bool = True,
    selected_titles: Optional[Iterable[str]] = None,
) -> SearchResult:
    """Filter *items* down to those containing any query token.

    Args:
        query: Free-text query; words are OR'ed together.
        items: Broadcasts in display order. The order is preserved.
        search_subtitles: Also look inside transcript cues.
        selected_titles: Optional manual broadcast selection applied after
                         the text filter. Empty or None keeps every title.

    Returns:
        SearchResult with the matching items and the tokens used, which
        callers pass on to the highlighter and cue grouper.
    """
    if items is None or isinstance(items, (str, bytes)):
        raise SearchError("items must be an iterable of broadcasts")
    if isinstance(selected_titles, (str, bytes)):
        raise SearchError("selected_titles must be a collection of titles, not a string")

    tokens = tokenize(query)
    if not tokens:
        return SearchResult(items=tuple(_select(items, selected_titles)), tokens=())

    started = time.perf_counter()
    matched = [item for item in items if item_matches(item, tokens, search_subtitles)]
    matched = _select(matched, selected_titles)
    logger.debug(
        "Search for %r took %.1f ms (%d matches)",
        tokens, (time.perf_counter() - started) * 1000, len(matched),
    )
    return SearchResult(items=tuple(matched), tokens=tuple(tokens))


def broadcast_titles(items: Iterable[Broadcast]) -> list[str]:
    """Sorted unique broadcast titles, for building a selection filter."""
    return sorted({item.title for item in items})
