"""
Persistence for settings and progress.

- storage: StoragePort with JSON-file and in-memory backends
- progress_store: per-question attempt ledger
- settings_store: flagged-subset toggle and dynamic answers
"""

from civics.delivery.progress_store import ProgressStore
from civics.delivery.settings_store import SettingsStore
from civics.delivery.storage import InMemoryStorage, JsonFileStorage, StoragePort

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "ProgressStore",
    "SettingsStore",
    "StoragePort",
]
