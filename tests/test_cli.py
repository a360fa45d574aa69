"""Tests for openorf.cli: the run coroutine."""

import argparse
import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest

from ingest import _cache
from models import Broadcast
from openorf.cli import run
from openorf.client import FetchError


def make_args(**overrides) -> argparse.Namespace:
    values = {
        "query": "",
        "start": "2025-01-01",
        "end": "2025-01-02",
        "days": 30,
        "no_subs": False,
        "broadcast": None,
        "full_transcript": False,
        "server": None,
        "data_dir": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestRun:

    def setup_method(self):
        _cache.clear()

    def test_data_dir_search(self, tmp_path, capsys):
        snapshot = [
            {"title": "ZIB 1", "description": "Budget", "genre": "ZIB & Info"},
            {"title": "Wetter", "description": "Sonne", "genre": "ZIB & Info"},
        ]
        (tmp_path / "simple-schedule-2025-01-02.json").write_text(json.dumps(snapshot), encoding="utf-8")
        asyncio.run(run(make_args(query="budget", data_dir=str(tmp_path))))
        out = capsys.readouterr().out
        assert out.startswith("Found 1 broadcast\n")
        assert "== ZIB 1" in out
        assert "»Budget«" in out

    def test_server_source(self, capsys):
        items = [Broadcast(title="ZIB 2")]
        with patch("openorf.cli.load", new=AsyncMock(return_value=items)) as mock:
            asyncio.run(run(make_args(server="http://orf.test", no_subs=True)))
        mock.assert_awaited_once_with("http://orf.test", "2025-01-01", "2025-01-02", False)
        assert "Found 1 broadcast" in capsys.readouterr().out

    def test_fetch_error_exits(self, capsys):
        with patch("openorf.cli.load", new=AsyncMock(side_effect=FetchError("down"))):
            with pytest.raises(SystemExit) as exc:
                asyncio.run(run(make_args()))
        assert exc.value.code == 1
        assert "Loading failed: down" in capsys.readouterr().err

    def test_days_sets_start(self, tmp_path, capsys):
        asyncio.run(run(make_args(start=None, days=2, data_dir=str(tmp_path))))
        assert "Found 0 broadcasts" in capsys.readouterr().out
