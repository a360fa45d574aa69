"""WebVTT cue parser: converts a raw transcript blob to ordered cues."""

from __future__ import annotations

from typing import Optional

from models import Cue

_BLOCK_SEPARATOR = "\n\n"
_MIN_BLOCK_LINES = 3


def parse_cues(raw: Optional[str]) -> list[Cue]:
    """Parse a captioned transcript into a list of cues.

    The first block (``WEBVTT`` header) is always skipped. Every other
    block is ``identifier``, ``time label``, then one or more text lines,
    which are joined with a single space. Blocks with fewer than three
    lines are dropped; indices count kept cues only.
    """
    if not raw or not isinstance(raw, str):
        return []

    blocks = raw.replace("\r\n", "\n").split(_BLOCK_SEPARATOR)[1:]

    cues: list[Cue] = []
    for block in blocks:
        lines = block.split("\n")
        if len(lines) < _MIN_BLOCK_LINES:
            continue
        cues.append(Cue(index=len(cues), time=lines[1], text=" ".join(lines[2:])))
    return cues

