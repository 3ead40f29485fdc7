"""Tests for loading and saving the session profile."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jellytui import config
from jellytui.errors import ConfigError
from jellytui.models import SessionProfile


def test_save_then_load_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "profile"
    profile = SessionProfile(server_url="http://nas:8096", api_key="abc123")

    config.save_profile(profile, path)

    assert config.load_profile(path) == profile
    assert json.loads(path.read_text()) == {"server_url": "http://nas:8096", "api_key": "abc123"}


def test_default_location_is_used_without_a_path() -> None:
    profile = SessionProfile(server_url="http://nas:8096", api_key="abc123")

    config.save_profile(profile)

    assert config.config_file.is_file()
    assert config.load_profile() == profile


def test_missing_file_falls_back_and_persists_placeholder(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config"

    profile = config.load_profile(path)

    assert profile == SessionProfile(server_url="https://jellyfin.example.com", api_key="your_api_key_here")
    assert json.loads(path.read_text()) == {
        "server_url": "https://jellyfin.example.com",
        "api_key": "your_api_key_here",
    }


def test_empty_file_falls_back_and_persists_placeholder(tmp_path: Path) -> None:
    path = tmp_path / "config"
    path.write_text("")

    profile = config.load_profile(path)

    assert profile == config.default_profile()
    assert json.loads(path.read_text())["api_key"] == "your_api_key_here"


def test_unparsable_file_is_replaced(tmp_path: Path) -> None:
    path = tmp_path / "config"
    path.write_text("{not json")

    assert config.load_profile(path) == config.default_profile()
    assert json.loads(path.read_text())["server_url"] == "https://jellyfin.example.com"


def test_read_profile_reports_bad_shapes(tmp_path: Path) -> None:
    path = tmp_path / "config"
    path.write_text('["server", "key"]')

    with pytest.raises(ConfigError):
        config.read_profile(path)


def test_unwritable_location_raises_config_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")

    with pytest.raises(ConfigError):
        config.save_profile(SessionProfile(), blocker / "config")


def test_failed_default_persist_still_returns_placeholder(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")

    assert config.load_profile(blocker / "config") == config.default_profile()


def test_save_leaves_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "config"

    config.save_profile(SessionProfile(api_key="one"), path)
    config.save_profile(SessionProfile(api_key="two"), path)

    assert [p.name for p in tmp_path.iterdir()] == ["config"]
    assert config.read_profile(path).api_key == "two"
