"""
Study context: the single, explicitly owned holder of settings and progress.

Constructed once by the host application and passed to every screen. Keeps
the engine, aggregator, sampler and resolver free of ambient state.
"""

from __future__ import annotations

from loguru import logger

from config import Settings, get_settings
from civics.core.answers import DynamicAnswerResolver
from civics.core.catalog import QuestionCatalog, QuestionLookup
from civics.core.mastery import MasteryLevel, ProgressStats, StatsAggregator
from civics.core.models import Category, Question
from civics.delivery.progress_store import ProgressStore
from civics.delivery.settings_store import SettingsStore
from civics.delivery.storage import JsonFileStorage, StoragePort
from civics.quiz.selection import SelectionService
from civics.study.session_engine import SessionEngine, SessionMode


class StudyContext:
    """
    Composition root for the civics coach.

    Owns:
    - SettingsStore (flagged mode, dynamic answers)
    - ProgressStore (per-question ledger)
    - QuestionCatalog (read-only)
    """

    def __init__(
        self,
        catalog: QuestionCatalog,
        storage: StoragePort,
        settings: Settings | None = None,
        selector: SelectionService | None = None,
    ):
        self.config = settings or get_settings()
        self.catalog = catalog
        self.storage = storage
        self.selector = selector or SelectionService()
        self.resolver = DynamicAnswerResolver()
        self.aggregator = StatsAggregator()

        self.settings_store = SettingsStore(storage, key=self.config.settings_key)
        self.progress = ProgressStore(storage, key=self.config.progress_key)

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, catalog: QuestionCatalog | None = None
    ) -> StudyContext:
        """
        Build a context backed by JSON files in settings.data_dir.

        Raises:
            ValueError: if no catalog is given and settings.catalog_path is unset
        """
        settings = settings or get_settings()
        if catalog is None:
            if settings.catalog_path is None:
                raise ValueError("No question catalog given and CIVICS_CATALOG_PATH is unset")
            catalog = QuestionCatalog.from_json_file(settings.catalog_path)

        logger.info(f"Study context using data dir {settings.data_dir}")
        return cls(catalog, JsonFileStorage(settings.data_dir), settings=settings)

    # =========================================================================
    # Sessions
    # =========================================================================

    def practice_session(self, question_count: int | None = None) -> SessionEngine:
        """New practice engine in SETUP, honouring the flagged-subset toggle."""
        count = question_count if question_count is not None else self.config.practice_default_count
        return self._engine(SessionMode.PRACTICE, count, passing_score=None)

    def exam_session(self) -> SessionEngine:
        """New exam engine in SETUP using the configured length and pass mark."""
        return self._engine(
            SessionMode.EXAM,
            self.config.exam_question_count,
            passing_score=self.config.exam_passing_score,
        )

    def _engine(
        self, mode: SessionMode, count: int, passing_score: int | None
    ) -> SessionEngine:
        return SessionEngine(
            pool=self.catalog.questions,
            progress=self.progress,
            mode=mode,
            question_count=count,
            flagged_only=lambda: self.settings_store.flagged_only,
            passing_score=passing_score,
            dynamic_answers=lambda: self.settings_store.dynamic_answers,
            selector=self.selector,
            resolver=self.resolver,
        )

    # =========================================================================
    # Browsing and stats
    # =========================================================================

    def lookup(self, question_id: int) -> QuestionLookup:
        return self.catalog.get(question_id)

    def display_answers(self, question: Question) -> list[str]:
        return self.resolver.resolve(question, self.settings_store.dynamic_answers)

    def question_status(self, question_id: int) -> MasteryLevel:
        return self.aggregator.classify(self.progress.get(question_id))

    def browse(
        self,
        category: Category | str | None = None,
        flagged_only: bool | None = None,
        query: str = "",
    ) -> list[tuple[Question, MasteryLevel]]:
        """Filtered questions with their mastery labels, for the study list."""
        if flagged_only is None:
            flagged_only = self.settings_store.flagged_only
        questions = self.catalog.filter(category=category, flagged_only=flagged_only, query=query)
        return [(q, self.question_status(q.id)) for q in questions]

    def stats(self) -> ProgressStats:
        return self.aggregator.aggregate_questions(self.catalog, self.progress.records)

    def stats_by_category(self) -> dict[Category, ProgressStats]:
        return self.aggregator.aggregate_by_category(self.catalog, self.progress.records)
