# config_manager.py
"""""
Loads and saves the calculator settings stored in config.json.

Missing keys (or a missing / unreadable file) fall back to DEFAULT_SETTINGS,
so the engine always sees a complete settings dictionary.
"""""

import json
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent / "config.json"


DEFAULT_SETTINGS = {
    "decimal_places": 10,
    "fractions": False,
    "degree_mode": False,
    "simplify_first": False,
    "show_steps": False,
    "debug": False,
}


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        settings_dict = {}

    if not isinstance(settings_dict, dict):
        settings_dict = {}

    merged = dict(DEFAULT_SETTINGS)
    merged.update(settings_dict)

    if key_value == "all":
        return merged

    else:
        return merged.get(key_value, 0)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return {}


def convert_setting(key_value, raw_value):
    """Convert a user-typed string into the type of the setting's default."""
    if key_value not in DEFAULT_SETTINGS:
        raise E.MathError(f"Unknown setting: {key_value}", code="5001")

    default = DEFAULT_SETTINGS[key_value]
    if isinstance(default, bool):
        if raw_value.lower() in ("true", "1", "on", "yes"):
            return True
        if raw_value.lower() in ("false", "0", "off", "no"):
            return False
        raise E.MathError(f"Setting '{key_value}' expects true or false, got '{raw_value}'", code="5002")

    try:
        value = int(raw_value)
    except ValueError:
        raise E.MathError(f"Setting '{key_value}' expects a whole number, got '{raw_value}'", code="5002")
    if value < 0:
        raise E.MathError(f"Setting '{key_value}' must not be negative", code="5002")
    return value


def update_setting(key_value, raw_value):
    """Change one setting and write the file. Returns the saved settings."""
    all_settings = load_setting_value("all")
    all_settings[key_value] = convert_setting(key_value, raw_value)
    saved = save_setting(all_settings)
    if not saved:
        raise E.MathError(f"Settings file could not be written: {config_json}", code="5000")
    return saved
