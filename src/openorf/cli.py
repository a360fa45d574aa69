"""CLI entry point for OpenORF search."""

import argparse
import asyncio
import datetime as dt
import io
import logging
import sys

from config import configure_logging, load_config
from ingest import IngestError, load_range
from openorf.client import FetchError, load
from openorf.render import format_result
from search import search_broadcasts

logger = logging.getLogger(__name__)


async def run(args: argparse.Namespace) -> None:
    settings = load_config()
    end = args.end or dt.date.today().isoformat()
    start = args.start or (dt.date.fromisoformat(end) - dt.timedelta(days=args.days)).isoformat()
    subtitles = not args.no_subs
    try:
        if args.data_dir:
            items = await asyncio.to_thread(
                load_range, args.data_dir, start, end, subtitles, settings.genre
            )
        else:
            items = await load(args.server or settings.server_url, start, end, subtitles)
    except (IngestError, FetchError) as e:
        print(f"Loading failed: {e}", file=sys.stderr)
        sys.exit(1)

    result = search_broadcasts(args.query, items, subtitles, selected_titles=args.broadcast)
    print(format_result(result, full_transcript=args.full_transcript))


def main():
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    configure_logging(load_config())
    parser = argparse.ArgumentParser(description="OpenORF - search news broadcasts and their subtitles")
    parser.add_argument("query", nargs="?", default="", help="search text (under 3 characters lists everything)")
    parser.add_argument("--start", help="first date, YYYY-MM-DD")
    parser.add_argument("--end", help="last date, YYYY-MM-DD (default today)")
    parser.add_argument("--days", type=int, default=30, help="range length when --start is omitted")
    parser.add_argument("--no-subs", action="store_true", help="do not search subtitles")
    parser.add_argument(
        "--broadcast",
        action="append",
        help="restrict to a broadcast title (repeatable)",
    )
    parser.add_argument("--full-transcript", action="store_true", help="print whole transcripts")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--server", help="OpenORF server URL (default OPENORF_SERVER_URL)")
    source.add_argument("--data-dir", help="read snapshots from this directory instead")
    args = parser.parse_args()
    try:
        asyncio.run(run(args))
    except ValueError as e:
        logger.debug("Invalid arguments", exc_info=True)
        print(f"Invalid arguments: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
