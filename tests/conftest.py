"""Shared fixtures: keep tests away from the real config.json."""

import json

import pytest

from CalcEngine import config_manager


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point config_manager at an empty settings file in a temp directory."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({}), encoding="utf-8")
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


@pytest.fixture
def settings():
    return dict(config_manager.DEFAULT_SETTINGS)
