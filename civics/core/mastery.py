"""
Core Mastery Module.

Ratio-based mastery classification and progress aggregation.

Design:
- MasteryLevel: four-way label derived from correct/incorrect counts
- ProgressStats: aggregate counts for the progress screen
- StatsAggregator: classification + aggregation over a progress ledger

Thresholds are exact: a rate of 0.8 is mastered, a rate of 0.6 is still
learning, anything below 0.6 needs work. Fewer than two attempts is always
learning.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from civics.core.models import Category, ProgressRecord, Question

MASTERED_RATE = 0.8
NEEDS_WORK_RATE = 0.6
MIN_ATTEMPTS = 2


class MasteryLevel(str, Enum):
    """Mastery label for a single question."""

    NOT_SEEN = "not-seen"
    LEARNING = "learning"
    MASTERED = "mastered"
    NEEDS_WORK = "needs-work"

    @classmethod
    def from_record(cls, record: ProgressRecord | None) -> MasteryLevel:
        """
        Classify a progress record.

        Args:
            record: Progress for one question, or None if never answered

        Returns:
            Corresponding MasteryLevel
        """
        if record is None:
            return cls.NOT_SEEN

        total = record.attempts
        if total < MIN_ATTEMPTS:
            return cls.LEARNING

        rate = record.correct_count / total
        if rate >= MASTERED_RATE:
            return cls.MASTERED
        elif rate < NEEDS_WORK_RATE:
            return cls.NEEDS_WORK
        else:
            return cls.LEARNING

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.replace("-", " ").title()


@dataclass(frozen=True)
class ProgressStats:
    """Aggregate progress counts. The four buckets always sum to total."""

    total: int
    seen: int
    not_seen: int
    seen_percentage: int
    mastered: int
    needs_work: int
    learning: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "seen": self.seen,
            "not_seen": self.not_seen,
            "seen_percentage": self.seen_percentage,
            "mastered": self.mastered,
            "needs_work": self.needs_work,
            "learning": self.learning,
        }


def round_percentage(part: int, whole: int) -> int:
    """round(100 * part / whole) with halves rounded up, in exact integer math."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


class StatsAggregator:
    """Derive mastery labels and aggregate counts from progress records."""

    def classify(self, record: ProgressRecord | None) -> MasteryLevel:
        return MasteryLevel.from_record(record)

    def aggregate(
        self, records: Mapping[int, ProgressRecord], total_questions: int
    ) -> ProgressStats:
        """
        Summarize a progress ledger against a dense 1..total_questions catalog.

        Records for ids outside that range are ignored so the buckets
        partition total_questions exactly.
        """
        total_questions = max(total_questions, 0)
        in_range = [
            record
            for question_id, record in records.items()
            if 1 <= question_id <= total_questions
        ]
        return self._summarize(in_range, total_questions)

    def aggregate_questions(
        self, questions: Iterable[Question], records: Mapping[int, ProgressRecord]
    ) -> ProgressStats:
        """Summarize progress over an explicit question list (e.g. one category)."""
        ids = [q.id for q in questions]
        present = [records[qid] for qid in ids if qid in records]
        return self._summarize(present, len(ids))

    def aggregate_by_category(
        self, questions: Iterable[Question], records: Mapping[int, ProgressRecord]
    ) -> dict[Category, ProgressStats]:
        grouped: dict[Category, list[Question]] = {}
        for question in questions:
            grouped.setdefault(question.category, []).append(question)
        return {
            category: self.aggregate_questions(members, records)
            for category, members in grouped.items()
        }

    def status_by_question(
        self, questions: Iterable[Question], records: Mapping[int, ProgressRecord]
    ) -> dict[int, MasteryLevel]:
        return {q.id: self.classify(records.get(q.id)) for q in questions}

    def _summarize(self, present: list[ProgressRecord], total: int) -> ProgressStats:
        mastered = needs_work = learning = 0
        for record in present:
            level = self.classify(record)
            if level is MasteryLevel.MASTERED:
                mastered += 1
            elif level is MasteryLevel.NEEDS_WORK:
                needs_work += 1
            else:
                learning += 1

        seen = len(present)
        return ProgressStats(
            total=total,
            seen=seen,
            not_seen=total - seen,
            seen_percentage=round_percentage(seen, total),
            mastered=mastered,
            needs_work=needs_work,
            learning=learning,
        )
