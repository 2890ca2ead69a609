"""Configuration and localisation helpers."""
from __future__ import annotations

import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    CONFIG_FILE,
    DEFAULT_CATEGORIES,
    DEFAULT_LANG_CODE,
    DEFAULT_LANG_KEYS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROFILE,
    DEFAULT_TECHNOLOGIES,
    DEFAULT_THEME,
    DEFAULT_THUMBNAIL_SIZE,
    LANG_DIR,
    PROFILE_FILE,
    VOCABULARIES_FILE,
)

logger = logging.getLogger(__name__)


def load_json_config(filepath: str, default_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Load a JSON configuration file with optional defaults."""
    if os.path.exists(filepath):
        try:
            with open(filepath, "r", encoding="utf-8") as handle:
                data = json.load(handle)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring %s: top-level value is not an object", filepath)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s: %s", filepath, exc)

    return copy.deepcopy(default_data) if default_data is not None else {}


def load_language_file(lang_code: str) -> Optional[Dict[str, str]]:
    """Load a single language file."""
    lang_file_path = os.path.join(LANG_DIR, f"{lang_code}.json")
    try:
        with open(lang_file_path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        logger.warning("Could not parse language file %s: %s", lang_file_path, exc)
        return None


def load_language_config(lang_code: str) -> Tuple[Dict[str, str], Optional[str], Optional[str]]:
    """Load language configuration returning language data, warning, and critical error.

    Missing keys always fall back to ``DEFAULT_LANG_KEYS`` so validation
    messages exist even without any language file on disk.
    """
    lang_data = load_language_file(lang_code)
    warning = None
    error = None

    if lang_data is None and lang_code != DEFAULT_LANG_CODE:
        warning = DEFAULT_LANG_KEYS["lang_load_error"].format(lang_code=lang_code, lang_dir=LANG_DIR)
        lang_data = load_language_file(DEFAULT_LANG_CODE)

    if lang_data is None:
        error = DEFAULT_LANG_KEYS["lang_default_load_error"].format(lang_code=DEFAULT_LANG_CODE)
        return dict(DEFAULT_LANG_KEYS), warning, error

    merged = dict(DEFAULT_LANG_KEYS)
    merged.update(lang_data)
    return merged, warning, error


def load_main_config() -> Dict[str, Any]:
    """Load the main application configuration."""
    default_config = {
        "language": DEFAULT_LANG_CODE,
        "theme": DEFAULT_THEME,
        "log_level": DEFAULT_LOG_LEVEL,
        "thumbnail_size": list(DEFAULT_THUMBNAIL_SIZE),
    }
    loaded = load_json_config(CONFIG_FILE, default_config)
    for key, value in default_config.items():
        loaded.setdefault(key, value)
    return loaded


def _clean_vocabulary(values: Any, fallback: List[str]) -> List[str]:
    if not isinstance(values, list):
        return list(fallback)

    cleaned: List[str] = []
    for value in values:
        if isinstance(value, str) and value.strip() and value not in cleaned:
            cleaned.append(value)
    return cleaned


def load_vocabularies_config() -> Dict[str, List[str]]:
    """Load the category and technology vocabularies with defaults."""
    default_vocabularies = {
        "categories": list(DEFAULT_CATEGORIES),
        "technologies": list(DEFAULT_TECHNOLOGIES),
    }
    loaded = load_json_config(VOCABULARIES_FILE, default_vocabularies)
    return {
        "categories": _clean_vocabulary(loaded.get("categories"), DEFAULT_CATEGORIES),
        "technologies": _clean_vocabulary(loaded.get("technologies"), DEFAULT_TECHNOLOGIES),
    }


def load_profile_config() -> Dict[str, Any]:
    """Load the seed profile shown when the editor starts."""
    return load_json_config(PROFILE_FILE, DEFAULT_PROFILE)
