"""Tests for loading and saving settings."""

import json

import pytest

from CalcEngine import config_manager
from CalcEngine import error as E


class TestLoadSettings:

    def test_defaults_fill_missing_keys(self, config_file):
        config_file.write_text(json.dumps({"decimal_places": 4}), encoding="utf-8")
        all_settings = config_manager.load_setting_value("all")
        assert all_settings["decimal_places"] == 4
        assert all_settings["fractions"] is False

    def test_single_value(self, config_file):
        config_file.write_text(json.dumps({"degree_mode": True}), encoding="utf-8")
        assert config_manager.load_setting_value("degree_mode") is True

    def test_unknown_key_returns_zero(self, config_file):
        assert config_manager.load_setting_value("darkmode") == 0

    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing.json")
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS

    def test_corrupt_file_uses_defaults(self, config_file):
        config_file.write_text("{not json", encoding="utf-8")
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS

    def test_shipped_config_matches_defaults(self):
        with open(config_manager.config_json, encoding="utf-8") as f:
            assert json.load(f) == config_manager.DEFAULT_SETTINGS


class TestSaveSettings:

    def test_save_and_reload(self, config_file):
        all_settings = config_manager.load_setting_value("all")
        all_settings["fractions"] = True
        assert config_manager.save_setting(all_settings) == all_settings
        assert config_manager.load_setting_value("fractions") is True

    def test_update_setting_converts_types(self, config_file):
        config_manager.update_setting("decimal_places", "3")
        config_manager.update_setting("degree_mode", "on")
        assert config_manager.load_setting_value("decimal_places") == 3
        assert config_manager.load_setting_value("degree_mode") is True

    @pytest.mark.parametrize("key_value, raw_value, code", [
        ("darkmode", "true", "5001"),
        ("fractions", "maybe", "5002"),
        ("decimal_places", "two", "5002"),
        ("decimal_places", "-1", "5002"),
    ])
    def test_update_setting_rejects_bad_input(self, config_file, key_value, raw_value, code):
        with pytest.raises(E.MathError) as excinfo:
            config_manager.update_setting(key_value, raw_value)
        assert excinfo.value.code == code

    def test_update_setting_reports_unwritable_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing" / "config.json")
        with pytest.raises(E.MathError) as excinfo:
            config_manager.update_setting("decimal_places", "3")
        assert excinfo.value.code == "5000"
