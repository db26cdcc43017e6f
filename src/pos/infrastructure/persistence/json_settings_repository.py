"""JSON-file-backed settings store.

The file is meant to be hand-editable, so a missing or corrupt file
yields default settings instead of an error.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from pos.domain.model.settings import BillSettings
from pos.domain.repository.settings_repository import SettingsRepository
from pos.infrastructure.persistence.json_file import read_json, write_json

logger = structlog.get_logger()


class JsonSettingsRepository(SettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> BillSettings:
        if not self._file_path.exists():
            return BillSettings()
        try:
            raw = read_json(self._file_path)
        except json.JSONDecodeError as exc:
            logger.warning("settings_unreadable", path=str(self._file_path), error=str(exc))
            return BillSettings()
        if not isinstance(raw, dict):
            logger.warning("settings_unreadable", path=str(self._file_path), error="not an object")
            return BillSettings()
        return BillSettings.from_mapping(raw)

    def save(self, settings: BillSettings) -> None:
        write_json(self._file_path, settings.to_mapping())
