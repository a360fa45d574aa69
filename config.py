"""Configuration loader: reads data location and search settings from env vars.

Every setting is read from ``OPENORF_{KEY}``; blank values fall back to the
default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_DATA_DIR = "/data"
DEFAULT_GENRE = "ZIB & Info"
DEFAULT_SERVER_URL = "http://localhost:3333"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_CACHE_TTL = 600.0


def _env(key: str, default: str = "") -> str:
    """Resolve ``OPENORF_{key}``, ignoring blank values."""
    val = os.environ.get(f"OPENORF_{key}", "").strip()
    return val if val else default


@dataclass(frozen=True)
class Settings:
    data_dir: str = DEFAULT_DATA_DIR
    genre: str = DEFAULT_GENRE
    server_url: str = DEFAULT_SERVER_URL
    log_level: str = DEFAULT_LOG_LEVEL
    cache_ttl: float = DEFAULT_CACHE_TTL


def load_config() -> Settings:
    """Build settings from environment variables.

    Environment variables:
        OPENORF_DATA_DIR   : directory holding simple-schedule-*.json snapshots
        OPENORF_GENRE      : genre kept when loading a date range
                              ("*" keeps every genre)
        OPENORF_SERVER_URL : base URL of a running OpenORF server
        OPENORF_LOG_LEVEL  : logging level name (e.g. DEBUG, INFO)
        OPENORF_CACHE_TTL  : snapshot cache lifetime in seconds

    Invalid numeric values fall back to the default.
    """
    genre = _env("GENRE", DEFAULT_GENRE)
    if genre == "*":
        genre = ""

    try:
        cache_ttl = float(_env("CACHE_TTL", str(DEFAULT_CACHE_TTL)))
    except ValueError:
        cache_ttl = DEFAULT_CACHE_TTL

    return Settings(
        data_dir=_env("DATA_DIR", DEFAULT_DATA_DIR),
        genre=genre,
        server_url=_env("SERVER_URL", DEFAULT_SERVER_URL).rstrip("/"),
        log_level=_env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        cache_ttl=cache_ttl,
    )


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level to the root logger."""
    level = getattr(logging, settings.log_level, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
