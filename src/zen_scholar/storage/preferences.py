# src/zen_scholar/storage/preferences.py

from __future__ import annotations

import json
import logging

from ..core.ports import KeyValueStore

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "zenScholarDarkMode"


class PreferenceStore:
    """UI preferences kept next to the task list in the same substrate."""

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def load_dark_mode(self) -> bool:
        raw = self._kv.get(DARK_MODE_KEY)
        if raw is None:
            return False
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored dark mode preference is not valid JSON; using default.")
            return False
        return value if isinstance(value, bool) else False

    def save_dark_mode(self, enabled: bool) -> None:
        self._kv.set(DARK_MODE_KEY, json.dumps(bool(enabled)))
