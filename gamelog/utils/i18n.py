"""JSON-backed translations and the global ``t()`` lookup.

Strings live under ``resources/i18n``: language-agnostic files (log lines)
at the root, one subdirectory per locale beside them. A lookup tries the
active locale, then English, then the shared files. Assignment
explanations, conflict messages and log lines all go through ``t()`` so
the engines never hard-code user-facing text.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

__all__ = ["I18n", "init_i18n", "t"]

logger = logging.getLogger("gamelog.i18n")

FALLBACK_LOCALE = "en"


def _merge_into(target: dict[str, Any], update: dict[str, Any]) -> None:
    for key, value in update.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge_into(current, value)
        else:
            target[key] = value


def _read_layer(directory: Path) -> dict[str, Any]:
    """All ``*.json`` files of one directory, merged in name order.

    Unreadable files are logged and left out.
    """
    layer: dict[str, Any] = {}
    if not directory.is_dir():
        return layer
    for path in sorted(directory.glob("*.json")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error loading i18n file %s: %s", path.name, e)
            continue
        if isinstance(data, dict):
            _merge_into(layer, data)
    return layer


class I18n:
    """Translations for one locale, with English and shared strings behind it."""

    def __init__(self, locale: str = FALLBACK_LOCALE) -> None:
        from gamelog.utils.paths import get_resources_dir

        self.locale = locale
        root = get_resources_dir() / "i18n"
        locales = [locale] if locale == FALLBACK_LOCALE else [locale, FALLBACK_LOCALE]
        # Highest priority first
        self._layers = [_read_layer(root / code) for code in locales] + [_read_layer(root)]

    def _lookup(self, key: str) -> str | None:
        parts = key.split(".")
        for layer in self._layers:
            node: Any = layer
            for part in parts:
                node = node.get(part) if isinstance(node, dict) else None
            if isinstance(node, str):
                return node
        return None

    def t(self, key: str, **kwargs: Any) -> str:
        """Translated string for a dot-separated key.

        Args:
            key: Key path such as ``classifier.reason.dimensions``.
            **kwargs: Values for ``str.format`` placeholders.

        Returns:
            The string, the unformatted template when the placeholders do
            not fit ``kwargs``, or ``[key]`` when no layer has the key.
        """
        template = self._lookup(key)
        if template is None:
            return f"[{key}]"
        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (ValueError, KeyError, IndexError):
            return template


_active: I18n | None = None


def init_i18n(locale: str = FALLBACK_LOCALE) -> I18n:
    """Loads ``locale`` and makes it the one ``t()`` reads from."""
    global _active
    _active = I18n(locale)
    return _active


def t(key: str, **kwargs: Any) -> str:
    """``I18n.t`` on the active locale, loading English on first use."""
    if _active is None:
        init_i18n()
    return _active.t(key, **kwargs)
