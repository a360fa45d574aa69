"""OpenORF MCP Server: search broadcast schedules and their transcripts."""

from __future__ import annotations

import asyncio
import dataclasses
import datetime as dt
import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from config import configure_logging, load_config
from grouper import group_cues
from health import check_health
from highlight import highlight
from ingest import IngestError, load_range
from models import Broadcast, Cue, Segment
from search import SearchError, broadcast_titles, search_broadcasts as _search_broadcasts

_settings = load_config()
configure_logging(_settings)

mcp = FastMCP("openorf")


def _today() -> str:
    return dt.date.today().isoformat()


def _cue_view(cue: Cue, tokens: tuple[str, ...], is_match: bool) -> dict:
    return {
        "index": cue.index,
        "time": cue.time,
        "text": highlight(cue.text, tokens),
        "match": is_match,
    }


def _windows_view(cues: tuple[Cue, ...], tokens: tuple[str, ...], full_transcript: bool) -> list[list[dict]]:
    return [
        [_cue_view(cue, tokens, hit) for cue, hit in window.ordered()]
        for window in group_cues(cues, tokens, show_full_transcript=full_transcript)
    ]


def _segment_view(seg: Segment, tokens: tuple[str, ...], full_transcript: bool) -> dict:
    return {
        "title": highlight(seg.title, tokens),
        "description": highlight(seg.description, tokens),
        "duration_seconds": seg.duration_seconds,
        "has_subtitles": seg.has_subtitles,
        "snippets": _windows_view(seg.cues, tokens, full_transcript),
    }


def _broadcast_view(item: Broadcast, tokens: tuple[str, ...], full_transcript: bool) -> dict:
    return {
        "title": highlight(item.title, tokens),
        "date": item.date,
        "genre": item.genre,
        "image_url": item.image_url,
        "description": highlight(item.description, tokens),
        "segments": [_segment_view(s, tokens, full_transcript) for s in item.segments],
    }


@mcp.tool()
async def search_broadcasts(
    query: str,
    start: Optional[str] = None,
    end: Optional[str] = None,
    subtitles: bool = True,
    broadcasts: Optional[list[str]] = None,
    full_transcript: bool = False,
) -> str:
    """Search broadcast titles, descriptions and subtitles.

    Args:
        query: Free-text query. Words are matched independently (any word
               matches); queries under 3 characters return every broadcast.
        start: First date (YYYY-MM-DD), default today.
        end: Last date (YYYY-MM-DD), default same as start.
        subtitles: Also search inside transcripts.
        broadcasts: Optional list of broadcast titles to restrict results to.
        full_transcript: Return whole transcripts instead of snippets.

    Returns:
        JSON string with matched broadcasts (matches wrapped in <mark>, other
        text left unescaped) and the tokens used, or error details.
    """
    try:
        start = start or _today()
        items = await asyncio.to_thread(
            load_range, _settings.data_dir, start, end, subtitles, _settings.genre
        )
        result = _search_broadcasts(query, items, subtitles, broadcasts)
        data = {
            "tokens": list(result.tokens),
            "count": len(result.items),
            "items": [_broadcast_view(i, result.tokens, full_transcript) for i in result.items],
        }
        return json.dumps(data, ensure_ascii=False, indent=2)
    except IngestError as exc:
        return json.dumps({"error": "InvalidRequest", "message": str(exc)})
    except SearchError as exc:
        return json.dumps({"error": "SearchError", "message": str(exc)})
    except Exception as exc:
        return json.dumps({"error": "UnexpectedError", "message": str(exc)})



@mcp.tool()
async def list_broadcasts(start: Optional[str] = None, end: Optional[str] = None) -> str:
    """List the distinct broadcast titles available in a date range.

    Args:
        start: First date (YYYY-MM-DD), default today.
        end: Last date (YYYY-MM-DD), default same as start.

    Returns:
        JSON string with the sorted titles, usable as the ``broadcasts``
        filter of search_broadcasts.
    """
    try:
        start = start or _today()
        items = await asyncio.to_thread(
            load_range, _settings.data_dir, start, end, False, _settings.genre
        )
        return json.dumps({"titles": broadcast_titles(items)}, ensure_ascii=False, indent=2)
    except IngestError as exc:
        return json.dumps({"error": "InvalidRequest", "message": str(exc)})
    except Exception as exc:
        return json.dumps({"error": "UnexpectedError", "message": str(exc)})


@mcp.tool()
async def health_check() -> str:
    """Check OpenORF environment health (snapshot directory availability).

    Returns:
        JSON string with health status details.
    """
    return json.dumps(dataclasses.asdict(check_health(_settings)), ensure_ascii=False, indent=2)


if __name__ == "__main__":
    mcp.run()
