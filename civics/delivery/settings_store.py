"""
Persisted user settings: flagged-subset mode and dynamic answers.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from civics.core.models import AppSettings, DynamicAnswerSet, DynamicField
from civics.delivery.storage import StoragePort, load_model, save_model


class SettingsStore:
    """Owns the AppSettings blob. Same load/persist rules as ProgressStore."""

    DEFAULT_KEY = "uscis-civics-settings"

    def __init__(self, storage: StoragePort, key: str = DEFAULT_KEY):
        self.storage = storage
        self.key = key
        self._settings = load_model(storage, key, AppSettings, AppSettings())

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def flagged_only(self) -> bool:
        return self._settings.flagged_only

    @property
    def dynamic_answers(self) -> DynamicAnswerSet:
        return self._settings.dynamic_answers

    def update_settings(self, flagged_only: bool | None = None) -> AppSettings:
        if flagged_only is not None:
            self._settings = self._settings.model_copy(update={"flagged_only": bool(flagged_only)})
            logger.info(f"Flagged-subset mode {'on' if flagged_only else 'off'}")
        self._persist()
        return self._settings

    def update_dynamic_answers(self, changes: Mapping[DynamicField | str, str]) -> DynamicAnswerSet:
        """
        Merge new values into the dynamic answer set.

        Raises:
            ValueError: if a key is not a known dynamic field
        """
        answers = self._settings.dynamic_answers.merged(dict(changes))
        self._settings = self._settings.model_copy(update={"dynamic_answers": answers})
        self._persist()
        return answers

    def reset_dynamic_answers(self) -> DynamicAnswerSet:
        """Restore the default office holders."""
        self._settings = self._settings.model_copy(update={"dynamic_answers": DynamicAnswerSet()})
        self._persist()
        return self._settings.dynamic_answers

    def _persist(self) -> bool:
        return save_model(self.storage, self.key, self._settings)
