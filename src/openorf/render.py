"""Format search results as plain text for the terminal."""

from grouper import group_cues
from highlight import highlight
from models import Broadcast, Cue, SearchResult

MARK = ("»", "«")


def _format_duration(seconds: int) -> str:
    if seconds <= 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return " ".join(parts)


def _format_snippets(cues: tuple[Cue, ...], tokens, full_transcript: bool, mark: tuple[str, str]) -> list[str]:
    lines = []
    for i, window in enumerate(group_cues(cues, tokens, show_full_transcript=full_transcript)):
        if i:
            lines.append("    ...")
        for cue, is_match in window.ordered():
            text = highlight(cue.text, tokens, open_tag=mark[0], close_tag=mark[1])
            lines.append(f"  {'*' if is_match else ' '} {cue.time}  {text}")
    return lines


def format_broadcast(item: Broadcast, tokens, full_transcript: bool = False, mark: tuple[str, str] = MARK) -> str:
    """Render one broadcast with its segments and transcript snippets."""
    def hl(text: str) -> str:
        return highlight(text, tokens, open_tag=mark[0], close_tag=mark[1])

    lines = [f"== {hl(item.title)}  ({item.date[:16].replace('T', ' ')})"]
    if item.description and not item.segments:
        lines.append(hl(item.description))
    for seg in item.segments:
        lines.append(f"- {hl(seg.title)}  [{_format_duration(seg.duration_seconds)}]")
        if seg.description:
            lines.append(f"  {hl(seg.description)}")
        lines.extend(_format_snippets(seg.cues, tokens, full_transcript, mark))
    return "\n".join(lines)


def format_result(result: SearchResult, full_transcript: bool = False) -> str:
    """Render a whole search result, headed by the match count."""
    count = len(result.items)
    lines = [f"Found {count} {'broadcast' if count == 1 else 'broadcasts'}", ""]
    for item in result.items:
        lines.append(format_broadcast(item, result.tokens, full_transcript))
        lines.append("")
    return "\n".join(lines)
