"""Environment health checks for the snapshot directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from config import Settings, load_config
from ingest import list_snapshots


@dataclass(frozen=True)
class HealthStatus:
    data_dir: str
    data_dir_available: bool
    data_dir_message: str
    snapshot_count: int
    latest_snapshot: Optional[str]
    genre: str


def check_health(settings: Optional[Settings] = None) -> HealthStatus:
    """Check environment health. Never raises."""
    settings = settings or load_config()

    available = False
    try:
        available = os.path.isdir(settings.data_dir) and os.access(settings.data_dir, os.R_OK)
    except OSError:
        pass

    snapshots: list[str] = []
    if available:
        try:
            snapshots = list_snapshots(settings.data_dir)
        except OSError:
            snapshots = []

    if not available:
        message = (
            f"Data directory {settings.data_dir} not found or not readable. "
            "Set OPENORF_DATA_DIR to the directory holding simple-schedule-*.json files."
        )
    elif not snapshots:
        message = "Data directory is empty. Run the scraper to produce snapshots."
    else:
        message = "Data directory is available"

    return HealthStatus(
        data_dir=settings.data_dir,
        data_dir_available=available,
        data_dir_message=message,
        snapshot_count=len(snapshots),
        latest_snapshot=snapshots[-1] if snapshots else None,
        genre=settings.genre,
    )
