# config_manager.py
import json
import logging
from pathlib import Path

from . import error as E
from .Operators import EvaluationMode

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent / "config.json"
ui_strings = Path(__file__).resolve().parent / "ui_strings.json"


def _load_json(path, key_value):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning("Could not read %s", path)
        return {}

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_value(key_value):
    return _load_json(config_json, key_value)


def load_setting_description(key_value):
    return _load_json(ui_strings, key_value)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4, ensure_ascii=False)
            return settings_dict

    except OSError:
        logger.error("Could not write %s", config_json)
        return {}


def load_evaluation_mode():
    """Angle mode from the settings, degrees if missing or unknown."""
    value = load_setting_value("angle_mode")
    try:
        return EvaluationMode(value)
    except (ValueError, TypeError):
        logger.warning("%s%r", E.ERROR_MESSAGES["5001"], value)
        return EvaluationMode.DEGREES


def save_evaluation_mode(mode):
    all_settings = load_setting_value("all")
    all_settings["angle_mode"] = mode.value
    return save_setting(all_settings)
