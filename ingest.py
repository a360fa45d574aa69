"""Snapshot loading: validates schedule JSON into Broadcast records."""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

from cache import TTLCache
from config import DEFAULT_GENRE, load_config
from cues import parse_cues
from models import Broadcast, Segment

logger = logging.getLogger(__name__)

_cache = TTLCache(ttl_seconds=load_config().cache_ttl)

SNAPSHOT_TEMPLATE = "simple-schedule-{date}.json"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class IngestError(Exception):
    """Schedule data could not be turned into broadcasts."""


# ---------------------------------------------------------------------------
# Record validation
# ---------------------------------------------------------------------------

def _str_field(record: dict, key: str, default: Optional[str] = "", required: bool = False) -> Optional[str]:
    value = record.get(key)
    if value is None:
        if required:
            raise IngestError(f"Record is missing required field '{key}'")
        return default
    if not isinstance(value, str):
        raise IngestError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _int_field(record: dict, key: str) -> int:
    value = record.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise IngestError(f"Field '{key}' must be a number, got {type(value).__name__}")
    return int(value)


def parse_segment(record: Any, with_subtitles: bool = True) -> Segment:
    """Validate one segment record."""
    if not isinstance(record, dict):
        raise IngestError("Segment record must be an object")
    subtitles = _str_field(record, "subtitles", default=None) if with_subtitles else None
    return Segment(
        title=_str_field(record, "title", required=True),
        description=_str_field(record, "description") or "",
        duration_seconds=_int_field(record, "durationInSeconds"),
        subtitles=subtitles,
        cues=tuple(parse_cues(subtitles)),
    )


def parse_broadcast(record: Any, with_subtitles: bool = True) -> Broadcast:
    """Validate one broadcast record from a schedule snapshot.

    Raises:
        IngestError: If ``title`` is missing or a field has the wrong type.
    """
    if not isinstance(record, dict):
        raise IngestError("Broadcast record must be an object")

    raw_segments = record.get("segments") or []
    if not isinstance(raw_segments, list):
        raise IngestError("Field 'segments' must be a list")

    return Broadcast(
        title=_str_field(record, "title", required=True),
        description=_str_field(record, "description") or "",
        date=_str_field(record, "date") or "",
        genre=_str_field(record, "genre") or "",
        image_url=_str_field(record, "playerImage", default=None),
        segments=tuple(parse_segment(s, with_subtitles) for s in raw_segments),
    )


def parse_broadcasts(records: Any, with_subtitles: bool = True) -> list[Broadcast]:
    """Validate a list of broadcast records."""
    if not isinstance(records, list):
        raise IngestError("Schedule snapshot must be a JSON array")
    return [parse_broadcast(r, with_subtitles) for r in records]


# ---------------------------------------------------------------------------
# Snapshot files
# ---------------------------------------------------------------------------

def load_snapshot(path: str | os.PathLike, with_subtitles: bool = True) -> list[Broadcast]:
    """Read and validate one ``simple-schedule-*.json`` file.

    Results are cached by path, modification time and subtitle flag.
    """
    path = Path(path)
    try:
        mtime = path.stat().st_mtime_ns
        cache_key = (str(path), mtime, with_subtitles)
        cached = _cache.get(cache_key)
        if cached is not None:
            return list(cached)
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise IngestError(f"Could not read snapshot {path}: {exc}") from exc

    broadcasts = parse_broadcasts(records, with_subtitles)
    _cache.set(cache_key, tuple(broadcasts))
    return broadcasts


def _parse_date(value: str) -> dt.date:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise IngestError("Invalid date format. Use YYYY-MM-DD")
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise IngestError("Invalid date values") from exc


def date_range(start: str, end: Optional[str] = None) -> list[str]:
    """Every ISO date from *start* to *end* inclusive.

    *end* defaults to *start*.
    """
    first = _parse_date(start)
    last = _parse_date(end) if end else first
    if first > last:
        raise IngestError("Start date must be before or equal to end date")
    return [(first + dt.timedelta(days=n)).isoformat() for n in range((last - first).days + 1)]


def _sort_key(item: Broadcast) -> dt.datetime:
    try:
        parsed = dt.datetime.fromisoformat(item.date.replace("Z", "+00:00"))
    except ValueError:
        return dt.datetime.min.replace(tzinfo=dt.timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def load_range(
    data_dir: str | os.PathLike,
    start: str,
    end: Optional[str] = None,
    with_subtitles: bool = True,
    genre: Optional[str] = DEFAULT_GENRE,
) -> list[Broadcast]:
    """Load every snapshot between *start* and *end*, newest broadcast first.

    Missing days are skipped. Unreadable or invalid snapshots are logged
    and skipped so one bad file does not hide the rest of the range.
    Only broadcasts of *genre* are kept; an empty genre keeps all.
    """
    items: list[Broadcast] = []
    for day in date_range(start, end):
        path = Path(data_dir) / SNAPSHOT_TEMPLATE.format(date=day)
        if not path.exists():
            continue
        try:
            items.extend(load_snapshot(path, with_subtitles))
        except IngestError as exc:
            logger.error("Error reading snapshot for %s: %s", day, exc)

    if genre:
        items = [item for item in items if item.genre == genre]
    items.sort(key=_sort_key, reverse=True)
    logger.info("Loaded %d broadcasts for %s..%s", len(items), start, end or start)
    return items


def list_snapshots(data_dir: str | os.PathLike) -> list[str]:
    """Dates of all snapshots present in *data_dir*, oldest first."""
    root = Path(data_dir)
    if not root.is_dir():
        return []
    dates = []
    for path in root.glob(SNAPSHOT_TEMPLATE.format(date="*")):
        day = path.name[len("simple-schedule-"):-len(".json")]
        if _DATE_RE.match(day):
            dates.append(day)
    return sorted(dates)
