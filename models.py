"""Immutable data structures for broadcasts, transcripts and search results."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Cue:
    """Single subtitle entry.

    ``index`` is the cue's position in the parsed transcript and stays
    stable across filtering.
    """

    index: int
    time: str
    text: str


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` within one text."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Fragment:
    """Slice of a highlighted text, either raw or inside a marker."""

    text: str
    marked: bool = False


@dataclass(frozen=True)
class SnippetWindow:
    """Matched cues plus the padding cues shown around them."""

    matches: tuple[Cue, ...]
    context: tuple[Cue, ...]

    def ordered(self) -> list[tuple[Cue, bool]]:
        """Return every cue of the window by index, flagged when it matched."""
        match_indices = {c.index for c in self.matches}
        seen: dict[int, Cue] = {}
        for cue in (*self.context, *self.matches):
            seen.setdefault(cue.index, cue)
        return [(seen[i], i in match_indices) for i in sorted(seen)]

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Segment:
    """One part of a broadcast, optionally with its transcript."""

    title: str
    description: str = ""
    duration_seconds: int = 0
    subtitles: Optional[str] = None
    cues: tuple[Cue, ...] = ()

    @property
    def has_subtitles(self) -> bool:
        return bool(self.subtitles)

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Broadcast:
    """Schedule entry as loaded from a daily snapshot."""

    title: str
    description: str = ""
    date: str = ""
    genre: str = ""
    image_url: Optional[str] = None
    segments: tuple[Segment, ...] = ()

    def all_cues(self) -> list[Cue]:
        """Cues of every segment, in segment order."""
        cues: list[Cue] = []
        for seg in self.segments:
            cues.extend(seg.cues)
        return cues

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class SearchResult:
    """Matched broadcasts and the tokens used to match them."""

    items: tuple[Broadcast, ...]
    tokens: tuple[str, ...]

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)
