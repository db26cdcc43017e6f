"""Abstract store for bill settings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.settings import BillSettings


class SettingsRepository(ABC):

    @abstractmethod
    def load(self) -> BillSettings:
        """Return the stored settings, defaults filled in for anything missing."""

    @abstractmethod
    def save(self, settings: BillSettings) -> None:
        """Persist *settings*, replacing what was stored."""
