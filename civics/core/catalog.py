"""
Question catalog: the read-only, ordered bank of civics questions.

Lookups by id never raise for unknown ids; they return a QuestionLookup
whose ``found`` flag callers must check.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from civics.core.models import Category, Question


@dataclass(frozen=True)
class QuestionLookup:
    """Result of a catalog lookup by id."""

    question_id: int
    question: Question | None = None
    previous_id: int | None = None
    next_id: int | None = None

    @property
    def found(self) -> bool:
        return self.question is not None


class QuestionCatalog:
    """
    Immutable ordered collection of questions.

    Ids must be unique and positive; catalog order is preserved for
    iteration and previous/next navigation.
    """

    def __init__(self, questions: Iterable[Question]):
        self._questions: tuple[Question, ...] = tuple(questions)
        self._by_id: dict[int, int] = {}

        for position, question in enumerate(self._questions):
            if question.id in self._by_id:
                raise ValueError(f"Duplicate question id {question.id}")
            self._by_id[question.id] = position

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> QuestionCatalog:
        return cls(Question.model_validate(record) for record in records)

    @classmethod
    def from_json_file(cls, path: Path | str) -> QuestionCatalog:
        """
        Load a catalog from a JSON array of question records.

        Raises:
            OSError: if the file cannot be read
            ValueError: if the content is not a valid catalog
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Catalog {path} must contain a JSON array")

        catalog = cls.from_records(data)
        logger.info(f"Loaded {len(catalog)} questions from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def get(self, question_id: int) -> QuestionLookup:
        """Look up a question by id, with neighbours for navigation."""
        position = self._by_id.get(question_id)
        if position is None:
            return QuestionLookup(question_id=question_id)

        previous_id = self._questions[position - 1].id if position > 0 else None
        next_id = (
            self._questions[position + 1].id if position < len(self._questions) - 1 else None
        )
        return QuestionLookup(
            question_id=question_id,
            question=self._questions[position],
            previous_id=previous_id,
            next_id=next_id,
        )

    def flagged(self) -> list[Question]:
        """Questions eligible for the reduced (65/20) exemption track."""
        return [q for q in self._questions if q.is_asterisk]

    def categories(self) -> list[Category]:
        seen: list[Category] = []
        for question in self._questions:
            if question.category not in seen:
                seen.append(question.category)
        return seen

    def filter(
        self,
        category: Category | str | None = None,
        flagged_only: bool = False,
        query: str = "",
    ) -> list[Question]:
        """
        Filter questions for browsing.

        Args:
            category: Restrict to one category (None for all)
            flagged_only: Keep only asterisk questions
            query: Case-insensitive substring matched against prompt and answers

        Returns:
            Matching questions in catalog order
        """
        wanted = Category(category) if category is not None else None
        needle = query.strip().lower()

        matches = []
        for question in self._questions:
            if wanted is not None and question.category != wanted:
                continue
            if flagged_only and not question.is_asterisk:
                continue
            if needle and not (
                needle in question.prompt.lower()
                or any(needle in answer.lower() for answer in question.answers)
            ):
                continue
            matches.append(question)
        return matches
