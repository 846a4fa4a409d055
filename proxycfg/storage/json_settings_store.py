from __future__ import annotations

import json
import logging
from pathlib import Path

from proxycfg.core.errors import SettingsParseError
from proxycfg.storage.atomic import atomic_write_text

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "gui-config.json"


class JsonSettingsFile:
    """Settings document stored as a JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict:
        # FileNotFoundError propagates: a missing file is an expected state
        try:
            raw = self._path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise SettingsParseError(f"{self._path}: not valid UTF-8: {e}") from e
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise SettingsParseError(f"{self._path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsParseError(
                f"{self._path}: expected a JSON object, got {type(data).__name__}"
            )
        return data

    def write(self, data: dict) -> None:
        atomic_write_text(
            self._path, json.dumps(data, indent=2, ensure_ascii=False) + "\n",
        )
        logger.debug("Saved settings to %s", self._path)
