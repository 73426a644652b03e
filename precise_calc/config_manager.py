# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent / "config.json"

DEFAULT_SETTINGS = {
    "angle_mode": "radians",
    "precise_display": True,
}


def load_setting_value(key_value):
    """Return one setting (or every setting for "all"), falling back to DEFAULT_SETTINGS."""
    try:
        with open(config_json, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.debug("Using default settings, could not read %s: %s", config_json, e)
        settings_dict = {}

    if not isinstance(settings_dict, dict):
        logger.debug("Ignoring %s: top level is not an object", config_json)
        settings_dict = {}

    if key_value == "all":
        return {**DEFAULT_SETTINGS, **settings_dict}

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value))
