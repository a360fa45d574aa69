"""Inline match highlighting for titles, descriptions and cue text."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from markupsafe import escape as _markup_escape

from models import Fragment
from spans import find_all_spans

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"

EscapePolicy = Callable[[str], str]


def html_escape(text: str) -> str:
    """Escape policy for HTML rendering contexts."""
    return str(_markup_escape(text))


def highlight_segments(text: str, tokens: Sequence[str]) -> list[Fragment]:
    """Split *text* into raw and marked fragments.

    The fragments partition *text*: joining their ``text`` fields gives
    back the input exactly. Empty slices are omitted.
    """
    if not text:
        return []
    if not tokens:
        return [Fragment(text)]

    fragments: list[Fragment] = []
    last = 0
    for span in find_all_spans(text, tokens):
        if span.start > last:
            fragments.append(Fragment(text[last:span.start]))
        fragments.append(Fragment(text[span.start:span.end], marked=True))
        last = span.end
    if last < len(text):
        fragments.append(Fragment(text[last:]))
    return fragments


def highlight(
    text: str,
    tokens: Sequence[str],
    *,
    escape: Optional[EscapePolicy] = None,
    open_tag: str = MARK_OPEN,
    close_tag: str = MARK_CLOSE,
) -> str:
    """Wrap every token occurrence in *text* with ``open_tag``/``close_tag``.

    No escaping happens unless an *escape* policy is given, in which case
    it is applied to every slice of *text* but never to the tags.
    """
    if not tokens:
        return escape(text) if escape and text else text

    chunks: list[str] = []
    for frag in highlight_segments(text, tokens):
        body = escape(frag.text) if escape else frag.text
        chunks.append(f"{open_tag}{body}{close_tag}" if frag.marked else body)
    return "".join(chunks)
