"""
ResxSync Settings Module
Handles loading and saving of engine settings.
"""

import json
from pathlib import Path

import resxsync_config as config
from resxsync_models import RowEvaluationConfig
from resxsync_logger import get_logger
logger = get_logger("settings")


def get_default_settings():
    """Return a fresh dict of default settings."""
    return {
        "add_default_values_on_language_add": config.DEFAULT_ADD_DEFAULT_VALUES_ON_LANGUAGE_ADD,
        "translatable_in_brackets": config.DEFAULT_TRANSLATABLE_IN_BRACKETS,
        "comments_in_all_languages": config.DEFAULT_COMMENTS_IN_ALL_LANGUAGES,
        "hide_empty_resources": config.DEFAULT_HIDE_EMPTY_RESOURCES,
        "hide_nontranslated_resources": config.DEFAULT_HIDE_NONTRANSLATED_RESOURCES,
        "default_language": config.DEFAULT_BASE_LANGUAGE,
        "batch_size": config.TRANSLATE_BATCH_SIZE,
        "batch_delay": config.TRANSLATE_BATCH_DELAY,
        "active_engine": config.DEFAULT_ENGINE_ID,
        "enabled_languages": [],
        "last_project_path": None,
    }


def _validate(settings, defaults):
    """Reset invalid values to their defaults, in place."""
    for key in ("add_default_values_on_language_add", "translatable_in_brackets",
                "comments_in_all_languages", "hide_empty_resources",
                "hide_nontranslated_resources"):
        if not isinstance(settings.get(key), bool):
            logger.warning(f"Invalid '{key}' value ({settings.get(key)}). Using default.")
            settings[key] = defaults[key]

    batch_size = settings.get("batch_size")
    if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1:
        logger.warning(f"Invalid 'batch_size' value ({batch_size}). Using default.")
        settings["batch_size"] = defaults["batch_size"]

    batch_delay = settings.get("batch_delay")
    if not isinstance(batch_delay, (int, float)) or isinstance(batch_delay, bool) or batch_delay < 0:
        logger.warning(f"Invalid 'batch_delay' value ({batch_delay}). Using default.")
        settings["batch_delay"] = defaults["batch_delay"]

    if not isinstance(settings.get("default_language"), str) or not settings["default_language"]:
        logger.warning("Invalid 'default_language' value. Using default.")
        settings["default_language"] = defaults["default_language"]

    if not isinstance(settings.get("enabled_languages"), list):
        logger.warning("Invalid 'enabled_languages' value. Using default.")
        settings["enabled_languages"] = defaults["enabled_languages"]


def load_settings(settings_file=None):
    """Load settings from JSON file, or return defaults if not found."""
    settings_file = Path(settings_file or config.SETTINGS_FILE_PATH)
    default_settings = get_default_settings()

    if not settings_file.is_file():
        logger.info(f"Settings file not found ({settings_file}). Using defaults.")
        return default_settings

    try:
        logger.debug(f"Loading settings: {settings_file}")
        with settings_file.open('r', encoding='utf-8') as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError:
        logger.error(f"Settings file ({settings_file}) is corrupt (invalid JSON). Using defaults.")
        return default_settings
    except OSError as e:
        logger.error(f"Error reading settings ({settings_file}): {e}. Using defaults.")
        return default_settings

    if not isinstance(loaded_data, dict):
        logger.warning("Settings file format is invalid (not a dict). Using defaults.")
        return default_settings

    settings = default_settings.copy()
    settings.update(loaded_data)
    _validate(settings, default_settings)
    logger.debug("Settings loaded.")
    return settings


def save_settings(settings_data, settings_file=None):
    """Save settings to JSON file."""
    settings_file = Path(settings_file or config.SETTINGS_FILE_PATH)
    try:
        logger.debug(f"Saving settings: {settings_file}")
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        with settings_file.open('w', encoding='utf-8') as f:
            json.dump(settings_data, f, indent=4, ensure_ascii=False)
        logger.info("Settings saved.")
        return True
    except (OSError, TypeError) as e:
        logger.critical(f"Could not save settings ({settings_file}): {e}")
        return False


def evaluation_config_from_settings(settings) -> RowEvaluationConfig:
    """Build the explicit row-flag policy from a settings dict."""
    return RowEvaluationConfig(
        translatable_in_brackets=bool(settings.get("translatable_in_brackets", False)),
    )
