"""
Core domain models for the civics question bank.

Design:
- Question: immutable catalog record
- DynamicField / DynamicAnswerSet: time-sensitive answers (current officials)
- ProgressRecord: per-question attempt ledger entry
- AppSettings: user preferences persisted alongside progress
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Stored data and catalog files may use the camelCase keys of the web app
CAMEL_INPUT = ConfigDict(
    alias_generator=AliasGenerator(validation_alias=to_camel),
    populate_by_name=True,
)


class Category(str, Enum):
    """Top-level catalog categories."""

    AMERICAN_GOVERNMENT = "American Government"
    AMERICAN_HISTORY = "American History"
    INTEGRATED_CIVICS = "Integrated Civics"


class DynamicField(str, Enum):
    """Catalog fields whose correct value changes over time."""

    PRESIDENT = "president"
    VICE_PRESIDENT = "vice_president"
    SPEAKER_OF_HOUSE = "speaker_of_house"
    CHIEF_JUSTICE = "chief_justice"
    NUMBER_OF_JUSTICES = "number_of_justices"
    PRESIDENT_PARTY = "president_party"
    SENATOR = "senator"
    REPRESENTATIVE = "representative"
    GOVERNOR = "governor"
    STATE_CAPITAL = "state_capital"

    @classmethod
    def _missing_(cls, value: object) -> DynamicField | None:
        # "vicePresident" -> "vice_president"
        if isinstance(value, str):
            snake = re.sub(r"(?<!^)(?=[A-Z])", "_", value).lower()
            if snake != value:
                return cls.__members__.get(snake.upper())
        return None

    @property
    def label(self) -> str:
        """Human-readable name for settings screens."""
        return {
            DynamicField.PRESIDENT: "President of the United States",
            DynamicField.VICE_PRESIDENT: "Vice President of the United States",
            DynamicField.SPEAKER_OF_HOUSE: "Speaker of the House",
            DynamicField.CHIEF_JUSTICE: "Chief Justice of the United States",
            DynamicField.NUMBER_OF_JUSTICES: "Number of Supreme Court Justices",
            DynamicField.PRESIDENT_PARTY: "Political Party of the President",
            DynamicField.SENATOR: "Your State's U.S. Senator(s)",
            DynamicField.REPRESENTATIVE: "Your U.S. Representative",
            DynamicField.GOVERNOR: "Your State's Governor",
            DynamicField.STATE_CAPITAL: "Your State's Capital",
        }[self]


class Difficulty(str, Enum):
    """Subjective difficulty tag set by the learner."""

    EASY = "easy"
    HARD = "hard"


class Question(BaseModel):
    """A single catalog question. Immutable once loaded."""

    model_config = ConfigDict(frozen=True, **CAMEL_INPUT)

    id: int = Field(gt=0)
    prompt: str = Field(min_length=1, validation_alias=AliasChoices("prompt", "question"))
    answers: tuple[str, ...]
    category: Category
    subcategory: str = ""
    is_asterisk: bool = False
    is_dynamic_answer: bool = False
    dynamic_field: DynamicField | None = None

    @field_validator("dynamic_field", mode="before")
    @classmethod
    def _coerce_dynamic_field(cls, value: Any) -> Any:
        if isinstance(value, str):
            return DynamicField(value)
        return value


class DynamicAnswerSet(BaseModel):
    """Current values for every dynamic field. Defaults are never empty."""

    model_config = CAMEL_INPUT

    president: str = "Donald Trump"
    vice_president: str = "JD Vance"
    speaker_of_house: str = "Mike Johnson"
    chief_justice: str = "John Roberts"
    number_of_justices: str = "nine (9)"
    president_party: str = "Republican"
    senator: str = 'Charles "Chuck" Schumer, Kirsten Gillibrand'
    representative: str = "Jerrold Nadler"
    governor: str = "Kathy Hochul"
    state_capital: str = "Albany, NY"

    def get(self, field: DynamicField | str) -> str:
        return getattr(self, DynamicField(field).value)

    def merged(self, changes: dict[DynamicField | str, str]) -> DynamicAnswerSet:
        """
        Return a copy with *changes* applied.

        Raises:
            ValueError: if a key is not a known dynamic field
        """
        update = {DynamicField(key).value: str(value) for key, value in changes.items()}
        return self.model_copy(update=update)


class AppSettings(BaseModel):
    """Persisted user preferences."""

    model_config = CAMEL_INPUT

    flagged_only: bool = Field(
        default=False, validation_alias=AliasChoices("flagged_only", "is6520Mode")
    )
    dynamic_answers: DynamicAnswerSet = Field(default_factory=DynamicAnswerSet)


class ProgressRecord(BaseModel):
    """
    Attempt history for one question.

    seen_count always equals correct_count + incorrect_count; a stored
    record that breaks this is rejected as corrupt.
    """

    model_config = CAMEL_INPUT

    seen_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)
    last_seen_at: datetime | None = None
    difficulty: Difficulty | None = None

    @field_validator("last_seen_at", mode="before")
    @classmethod
    def _blank_timestamp(cls, value: Any) -> Any:
        return None if value == "" else value

    @model_validator(mode="after")
    def _check_counts(self) -> ProgressRecord:
        if self.seen_count != self.correct_count + self.incorrect_count:
            raise ValueError(
                f"seen_count {self.seen_count} != correct_count {self.correct_count}"
                f" + incorrect_count {self.incorrect_count}"
            )
        return self

    @property
    def attempts(self) -> int:
        return self.correct_count + self.incorrect_count

    def with_answer(self, was_correct: bool, at: datetime) -> ProgressRecord:
        """Return a new record with one more attempt applied."""
        return self.model_copy(
            update={
                "seen_count": self.seen_count + 1,
                "correct_count": self.correct_count + (1 if was_correct else 0),
                "incorrect_count": self.incorrect_count + (0 if was_correct else 1),
                "last_seen_at": at,
            }
        )


class ProgressLedger(BaseModel):
    """Serialized form of the progress store."""

    records: dict[int, ProgressRecord] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_mapping(cls, data: Any) -> Any:
        # the web app stored the id -> record mapping without the wrapper
        if isinstance(data, dict) and "records" not in data:
            return {"records": data}
        return data
