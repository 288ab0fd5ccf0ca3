from __future__ import annotations

"""
Internationalization (i18n) Utility.

Resolves user-facing CLI strings from JSON locale files using dot-notation
keys (``cli.errors.pipeline_fail``) with ``str.format`` interpolation.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """Loads one locale dictionary and serves formatted strings from it."""

    def __init__(self, locale: str = DEFAULT_LOCALE, locales_path: str = ""):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = locales_path or os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load the dictionary of a locale; a missing or corrupt file leaves it empty.

        Args:
            locale: ISO identifier, e.g. 'en'.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Corrupted locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False
            return

        self._locale = locale
        self.is_loaded = True

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        """
        Resolve and format a string by its dot-notation key.

        Args:
            key: Hierarchical identifier, e.g. 'cli.args.dir'.
            default: Text used when the key is missing; the key itself otherwise.
            **kwargs: Values interpolated with str.format.

        Returns:
            str: The formatted string.
        """
        current: Any = self._translations
        for part in key.split("."):
            current = current.get(part) if isinstance(current, dict) else None

        template = current if isinstance(current, str) else (default if default is not None else key)
        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            logger.debug(f"I18n: Interpolation failed for '{key}'")
            return template


# Application-wide instance
i18n = I18n(DEFAULT_LOCALE)
