"""
Configuration settings for the civics coach library.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CIVICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".civics_coach",
        description="Directory holding the persisted settings and progress blobs",
    )
    settings_key: str = Field(
        default="uscis-civics-settings",
        description="Storage key for app settings (flagged mode, dynamic answers)",
    )
    progress_key: str = Field(
        default="uscis-civics-progress",
        description="Storage key for the per-question progress ledger",
    )

    # ========================================
    # Question Catalog
    # ========================================
    catalog_path: Path | None = Field(
        default=None,
        description="JSON file with the question catalog (array of records)",
    )

    # ========================================
    # Sessions
    # ========================================
    practice_question_counts: list[int] = Field(
        default=[5, 10, 15, 20],
        description="Question counts offered on the practice setup screen",
    )
    practice_default_count: int = Field(
        default=10,
        description="Default practice session length",
    )
    exam_question_count: int = Field(
        default=10,
        description="Questions asked in an exam simulation",
    )
    exam_passing_score: int = Field(
        default=6,
        description="Correct answers needed to pass an exam simulation",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    @field_validator("practice_question_counts")
    @classmethod
    def _counts_positive(cls, value: list[int]) -> list[int]:
        if not value or any(count <= 0 for count in value):
            raise ValueError("practice_question_counts must be non-empty positive integers")
        return sorted(set(value))

    @model_validator(mode="after")
    def _passing_score_fits_exam(self) -> Settings:
        if not 1 <= self.exam_passing_score <= self.exam_question_count:
            raise ValueError("exam_passing_score must be between 1 and exam_question_count")
        return self

    def get_session_config(self) -> dict[str, int | list[int]]:
        """Session presets for the setup screens."""
        return {
            "practice_counts": list(self.practice_question_counts),
            "practice_default": self.practice_default_count,
            "exam_count": self.exam_question_count,
            "exam_passing_score": self.exam_passing_score,
        }


def configure_logging(settings: Settings | None = None) -> None:
    """Replace loguru's default sink with the configured ones."""
    settings = settings or get_settings()

    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level, rotation="1 MB")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
