from pathlib import Path

VERSION = "0.4.0"

# Resource files
RESX_EXTENSION = ".resx"
RESX_ENCODING = "utf-8"

# Column name used for the neutral (base) resource in translate configs.
# Never a valid culture tag, so it cannot collide with a real locale.
DEFAULT_LANGUAGE = "(Default)"

# Language the base resource is written in, used when talking to engines.
DEFAULT_BASE_LANGUAGE = "en"

# Batch translation: provider request limit and cool-down between requests
TRANSLATE_BATCH_SIZE = 50
TRANSLATE_BATCH_DELAY = 5.0

# Bracket policy markers ("translate only if default value is in brackets")
TRANSLATABLE_BRACKET_OPEN = "["
TRANSLATABLE_BRACKET_CLOSE = "]"

DEFAULT_ADD_DEFAULT_VALUES_ON_LANGUAGE_ADD = False
DEFAULT_TRANSLATABLE_IN_BRACKETS = False
DEFAULT_COMMENTS_IN_ALL_LANGUAGES = False
DEFAULT_HIDE_EMPTY_RESOURCES = False
DEFAULT_HIDE_NONTRANSLATED_RESOURCES = False

DEFAULT_ENGINE_ID = "resxsync.engine.google_free"

SETTINGS_DIR = Path.home() / ".resxsync"
SETTINGS_FILE_PATH = SETTINGS_DIR / "settings.json"

__all__ = [
    "VERSION", "RESX_EXTENSION", "RESX_ENCODING",
    "DEFAULT_LANGUAGE", "DEFAULT_BASE_LANGUAGE",
    "TRANSLATE_BATCH_SIZE", "TRANSLATE_BATCH_DELAY",
    "TRANSLATABLE_BRACKET_OPEN", "TRANSLATABLE_BRACKET_CLOSE",
    "DEFAULT_ADD_DEFAULT_VALUES_ON_LANGUAGE_ADD", "DEFAULT_TRANSLATABLE_IN_BRACKETS",
    "DEFAULT_COMMENTS_IN_ALL_LANGUAGES", "DEFAULT_HIDE_EMPTY_RESOURCES",
    "DEFAULT_HIDE_NONTRANSLATED_RESOURCES", "DEFAULT_ENGINE_ID",
    "SETTINGS_DIR", "SETTINGS_FILE_PATH",
]

# Import logger at the end to avoid circular imports
from resxsync_logger import get_logger
_logger = get_logger("config")
_logger.debug("resxsync_config.py loaded")
