"""
Dynamic answer resolution.

Questions about current office holders carry a dynamic_field; the learner's
DynamicAnswerSet supplies the value at display time so catalog data never
needs to change when officials do.
"""

from __future__ import annotations

from civics.core.models import DynamicAnswerSet, Question


class DynamicAnswerResolver:
    """Resolve the answers to display for a question."""

    def resolve(self, question: Question, dynamic_answers: DynamicAnswerSet) -> list[str]:
        """
        Get the display answers for a question.

        A non-empty dynamic value replaces the static answers entirely;
        an empty one falls back to the static list.

        Args:
            question: Catalog question
            dynamic_answers: Current values for dynamic fields

        Returns:
            List of acceptable answers
        """
        if not question.is_dynamic_answer or question.dynamic_field is None:
            return list(question.answers)

        value = dynamic_answers.get(question.dynamic_field)
        if value:
            return [value]

        return list(question.answers)


def resolve_answers(question: Question, dynamic_answers: DynamicAnswerSet) -> list[str]:
    """Module-level shortcut for DynamicAnswerResolver().resolve()."""
    return DynamicAnswerResolver().resolve(question, dynamic_answers)
