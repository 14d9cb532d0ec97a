from __future__ import annotations

import json
import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)

DEFAULT_MESSAGES: dict[str, str] = {
    "board.header": "Ticket Tracker",
    "board.empty": "No tickets yet",
    "editor.new": "New Ticket",
    "editor.edit": "Edit Ticket",
    "notice.missing_title": "Missing Info",
    "notice.missing_body": "Please fill all fields",
    "notice.error_title": "Error",
    "delete.title": "Delete",
    "delete.body": "Are you sure?",
}


class I18N:
    def __init__(
        self,
        base_dir: Path | None,
        default_locale: str,
        fallback: dict[str, str] | None = None,
    ) -> None:
        self.base_dir = base_dir
        self.default_locale = default_locale
        self.fallback = dict(DEFAULT_MESSAGES if fallback is None else fallback)
        self._messages: dict[str, dict[str, str]] = {}

    def load_locale(self, locale: str) -> dict[str, str]:
        # Misses are cached as empty catalogs so a missing file is only looked up once.
        messages: dict[str, str] = {}
        path = None if self.base_dir is None else self.base_dir / f"{locale}.json"
        if path is not None and path.exists():
            payload = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(payload, dict):
                messages = {str(k): str(v) for k, v in payload.items()}
            else:
                LOGGER.warning("Ignoring locale file %s: expected a JSON object", path)
        elif path is not None:
            LOGGER.debug("No locale file for %s at %s", locale, path)
        self._messages[locale] = messages
        return messages

    def t(self, key: str, locale: str | None = None, **kwargs: object) -> str:
        """Look ``key`` up in ``locale``, then the default locale, then the built-in messages."""
        for candidate in dict.fromkeys((locale or self.default_locale, self.default_locale)):
            catalog = self._messages.get(candidate)
            if catalog is None:
                catalog = self.load_locale(candidate)
            if key in catalog:
                return catalog[key].format(**kwargs)
        return self.fallback.get(key, key).format(**kwargs)
