"""Client for a running OpenORF server's news endpoint."""

import logging

import httpx

from ingest import IngestError, parse_broadcasts
from models import Broadcast

logger = logging.getLogger(__name__)

NEWS_API = "/api/news"
HEADERS = {"Accept": "application/json"}


class FetchError(Exception):
    """The server could not deliver schedule data."""


async def fetch_news(
    client: httpx.AsyncClient,
    start: str,
    end: str | None = None,
    subtitles: bool = True,
) -> list[Broadcast]:
    """Fetch broadcasts for a date range and validate them."""
    params = {"start": start, "end": end or start, "subs": "true" if subtitles else "false"}
    try:
        resp = await client.get(NEWS_API, params=params, headers=HEADERS)
    except httpx.HTTPError as exc:
        raise FetchError(f"Request to {NEWS_API} failed: {exc}") from exc

    if resp.status_code != 200:
        try:
            message = resp.json().get("error", resp.text)
        except ValueError:
            message = resp.text
        raise FetchError(f"Server returned {resp.status_code}: {message}")

    try:
        items = parse_broadcasts(resp.json(), with_subtitles=subtitles)
    except (ValueError, IngestError) as exc:
        raise FetchError(f"Malformed response: {exc}") from exc
    logger.info("Fetched %d broadcasts for %s..%s", len(items), start, params["end"])
    return items


async def load(server_url: str, start: str, end: str | None = None, subtitles: bool = True) -> list[Broadcast]:
    """Open a client against *server_url* and fetch one date range."""
    async with httpx.AsyncClient(base_url=server_url, timeout=30) as client:
        return await fetch_news(client, start, end, subtitles)
