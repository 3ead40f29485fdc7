"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Make the package importable when the tests run from a plain checkout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jellytui import config, logs  # noqa: E402
from jellytui.models import SessionProfile  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    """Run AnyIO tests on asyncio only."""

    return "asyncio"


@pytest.fixture
def profile() -> SessionProfile:
    return SessionProfile(server_url="https://media.test", api_key="secret")


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config and log files at a temporary directory."""

    monkeypatch.setattr(config, "config_dir", tmp_path / "config")
    monkeypatch.setattr(config, "config_file", tmp_path / "config" / "config")
    monkeypatch.setattr(logs, "log_file", tmp_path / "state" / "jellyfin-tui.log")
    return tmp_path
