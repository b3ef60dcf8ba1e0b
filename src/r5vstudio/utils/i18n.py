from __future__ import annotations

"""
Internationalization (i18n) Utility.

Message catalogs live as nested JSON objects in `interface/locales`. Keys are
dotted paths into those objects and values are `str.format` templates.
Selecting a locale that has no catalog keeps the current one; a key without
a message resolves to the key itself.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "interface", "locales")
)


class I18n:
    """Holds the active message catalog and resolves dotted keys against it."""

    def __init__(self, locale: str = DEFAULT_LOCALE, locales_path: str = LOCALES_DIR):
        self._locales_path = locales_path
        self._locale = locale
        self._catalog: Dict[str, Any] = {}
        self.is_loaded = False
        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def available_locales(self) -> List[str]:
        """Locale codes that ship a catalog file, sorted."""
        try:
            names = os.listdir(self._locales_path)
        except OSError:
            return []
        return sorted(n[:-5] for n in names if n.endswith(".json"))

    def load_locale(self, locale: str) -> bool:
        """
        Switch to the catalog of `locale`.

        Args:
            locale: Catalog name, e.g. "en" or "es".

        Returns:
            bool: True if the catalog was loaded. On failure the previously
                  active catalog stays in place.
        """
        catalog = self._read_catalog(locale)
        if catalog is None:
            return False

        self._catalog = catalog
        self._locale = locale
        self.is_loaded = True
        logger.debug(f"I18n: active locale is now '{locale}'")
        return True

    def t(self, key: str, **kwargs: Any) -> str:
        """
        Resolve `key` and interpolate `kwargs` into the message.

        Returns:
            str: The formatted message, the raw template if interpolation
                 fails, or `key` when no message exists.
        """
        message = self._lookup(key)
        if message is None:
            return key
        if not kwargs:
            return message
        try:
            return message.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: cannot format '{key}': {e}")
            return message

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _lookup(self, key: str) -> Optional[str]:
        node: Any = self._catalog
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def _read_catalog(self, locale: str) -> Optional[Dict[str, Any]]:
        file_path = os.path.join(self._locales_path, f"{locale}.json")
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"I18n: no catalog for locale '{locale}' at {file_path}")
            return None
        except (OSError, ValueError) as e:
            logger.error(f"I18n: unreadable catalog {file_path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"I18n: catalog {file_path} is not a JSON object")
            return None
        return data


i18n = I18n(DEFAULT_LOCALE)
