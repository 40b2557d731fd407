"""
Core Module - Shared domain models.

Components:
- models: Question, DynamicAnswerSet, ProgressRecord, AppSettings
- catalog: Read-only question catalog with not-found lookups
- answers: Dynamic answer resolution (current office holders)
- mastery: Ratio-based mastery classification and aggregation
"""

from civics.core.answers import DynamicAnswerResolver, resolve_answers
from civics.core.catalog import QuestionCatalog, QuestionLookup
from civics.core.mastery import MasteryLevel, ProgressStats, StatsAggregator
from civics.core.models import (
    AppSettings,
    Category,
    Difficulty,
    DynamicAnswerSet,
    DynamicField,
    ProgressRecord,
    Question,
)

__all__ = [
    # Models
    "AppSettings",
    "Category",
    "Difficulty",
    "DynamicAnswerSet",
    "DynamicField",
    "ProgressRecord",
    "Question",
    # Catalog
    "QuestionCatalog",
    "QuestionLookup",
    # Answers
    "DynamicAnswerResolver",
    "resolve_answers",
    # Mastery
    "MasteryLevel",
    "ProgressStats",
    "StatsAggregator",
]
