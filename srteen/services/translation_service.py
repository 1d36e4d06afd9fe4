"""Translation catalogs for the localized client UI.

Catalogs are plain JSON objects stored as ``<lang>.json`` files in a single
directory and loaded once at startup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

Catalog = dict[str, Any]


def load_catalogs(locales_dir: Path) -> dict[str, Catalog]:
    """Read every ``*.json`` catalog in ``locales_dir``.

    A missing directory yields no catalogs. Unreadable or malformed files
    are logged and skipped so one bad locale cannot take the service down.

    Args:
        locales_dir: Directory containing ``<lang>.json`` files.

    Returns:
        Mapping of language code (file stem) to catalog.
    """
    catalogs: dict[str, Catalog] = {}
    if not locales_dir.is_dir():
        logger.error("locales.dir_missing", extra={"locales_dir": str(locales_dir)})
        return catalogs

    for path in sorted(locales_dir.glob("*.json")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error(
                "locales.load_failed",
                extra={"file_name": path.name, "error_type": type(exc).__name__},
            )
            continue
        if not isinstance(data, dict):
            logger.error("locales.not_an_object", extra={"file_name": path.name})
            continue
        catalogs[path.stem] = data

    logger.info("locales.loaded", extra={"languages": sorted(catalogs)})
    return catalogs


class TranslationCatalog:
    """Read-only lookup over the loaded catalogs."""

    def __init__(self, catalogs: dict[str, Catalog], *, default_language: str = "en") -> None:
        self._catalogs = dict(catalogs)
        self._default_language = default_language

    @classmethod
    def from_directory(cls, locales_dir: Path, *, default_language: str = "en") -> "TranslationCatalog":
        return cls(load_catalogs(locales_dir), default_language=default_language)

    @property
    def languages(self) -> list[str]:
        return sorted(self._catalogs)

    def get(self, lang: str | None) -> Catalog:
        """Return the catalog for ``lang``.

        Falls back to the default language, then to an empty catalog.
        """
        if lang and lang in self._catalogs:
            return self._catalogs[lang]
        return self._catalogs.get(self._default_language, {})
