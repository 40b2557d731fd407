"""
Progress ledger for civics questions.

Persists per-question attempt history and difficulty tags. Loaded once at
construction; every mutation is written through immediately.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from types import MappingProxyType

from loguru import logger

from civics.core.models import Difficulty, ProgressLedger, ProgressRecord
from civics.delivery.storage import StoragePort, load_model, save_model


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProgressStore:
    """
    Durable per-question progress.

    Handles:
    - Answer recording (seen/correct/incorrect counters)
    - Subjective difficulty tags
    - Full reset (no per-question deletion)

    Load failures fall back to an empty store; write failures are logged
    and leave the in-memory ledger intact.
    """

    DEFAULT_KEY = "uscis-civics-progress"

    def __init__(
        self,
        storage: StoragePort,
        key: str = DEFAULT_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the store and load persisted progress.

        Args:
            storage: Backend for the serialized ledger
            key: Storage key for the ledger blob
            clock: Source of "now" for last_seen_at
        """
        self.storage = storage
        self.key = key
        self.clock = clock

        ledger = load_model(storage, key, ProgressLedger, ProgressLedger())
        self._records: dict[int, ProgressRecord] = dict(ledger.records)

        logger.debug(f"ProgressStore loaded {len(self._records)} record(s) from '{key}'")

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def records(self) -> Mapping[int, ProgressRecord]:
        """Read-only view of all records."""
        return MappingProxyType(self._records)

    def get(self, question_id: int) -> ProgressRecord | None:
        return self._records.get(question_id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._records

    # =========================================================================
    # Mutations
    # =========================================================================

    def record_answer(self, question_id: int, was_correct: bool) -> ProgressRecord:
        """
        Record one answer for a question.

        Creates the record on first answer. Increments seen_count and
        exactly one of correct_count/incorrect_count.

        Returns:
            The updated record
        """
        existing = self._records.get(question_id) or ProgressRecord()
        updated = existing.with_answer(bool(was_correct), self.clock())
        self._records[question_id] = updated
        self._persist()
        return updated

    def mark_difficulty(self, question_id: int, tag: Difficulty | str | None) -> ProgressRecord:
        """
        Set or clear the difficulty tag without touching counters.

        Args:
            question_id: Question to tag (need not have been answered)
            tag: "easy", "hard", or None to clear

        Raises:
            ValueError: if tag is not a known difficulty
        """
        difficulty = Difficulty(tag) if tag is not None else None
        existing = self._records.get(question_id) or ProgressRecord()
        updated = existing.model_copy(update={"difficulty": difficulty})
        self._records[question_id] = updated
        self._persist()
        return updated

    def reset(self) -> None:
        """Clear all progress. Irreversible; callers confirm with the user first."""
        count = len(self._records)
        self._records = {}
        self._persist()
        logger.info(f"Progress reset ({count} record(s) cleared)")

    def _persist(self) -> bool:
        return save_model(self.storage, self.key, ProgressLedger(records=self._records))
