"""
Session engine for practice (quiz) and exam (test) runs.

State machine:

    SETUP --start()--> ACTIVE --submit() on last question--> RESULTS
                         ^                                     |
                         +--------------restart()--------------+

Revealing the answer is a display toggle inside ACTIVE, not a transition.
Each run samples a fresh question list; nothing carries over between runs
except what was already written to the ProgressStore.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from civics.core.answers import DynamicAnswerResolver
from civics.core.mastery import round_percentage
from civics.core.models import DynamicAnswerSet, Question
from civics.delivery.progress_store import ProgressStore
from civics.quiz.selection import SelectionService

EXAM_PASSING_SCORE = 6


class SessionError(Exception):
    """Base class for session engine errors."""


class SessionConfigurationError(SessionError):
    """Raised when a session cannot start with its configuration (e.g. no questions)."""


class SessionStateError(SessionError):
    """Raised when an operation is called in the wrong phase."""


class SessionMode(str, Enum):
    PRACTICE = "practice"
    EXAM = "exam"


class SessionPhase(str, Enum):
    SETUP = "setup"
    ACTIVE = "active"
    RESULTS = "results"


@dataclass(frozen=True)
class Outcome:
    """One answered question."""

    question_id: int
    was_correct: bool


@dataclass
class SessionState:
    """In-memory state of one run. Never persisted."""

    mode: SessionMode
    phase: SessionPhase = SessionPhase.SETUP
    questions: list[Question] = field(default_factory=list)
    current_index: int = 0
    outcomes: list[Outcome] = field(default_factory=list)
    answer_revealed: bool = False


@dataclass(frozen=True)
class SessionResults:
    """Summary of a finished run."""

    mode: SessionMode
    total: int
    correct_count: int
    incorrect_count: int
    score_percentage: int
    passing_score: int | None
    missed: tuple[Question, ...]

    @property
    def passed(self) -> bool | None:
        """Exam verdict; None for practice runs."""
        if self.passing_score is None:
            return None
        return self.correct_count >= self.passing_score


class SessionEngine:
    """
    Drives one practice or exam run.

    Composes SelectionService (sampling), DynamicAnswerResolver (display
    answers) and ProgressStore (durable outcomes). Not thread-safe; callers
    serialize user actions.
    """

    def __init__(
        self,
        pool: Sequence[Question],
        progress: ProgressStore,
        mode: SessionMode | str = SessionMode.PRACTICE,
        question_count: int = 10,
        restrict_to_flagged: bool | None = None,
        passing_score: int | None = None,
        dynamic_answers: Callable[[], DynamicAnswerSet] | None = None,
        flagged_only: Callable[[], bool] | None = None,
        selector: SelectionService | None = None,
        resolver: DynamicAnswerResolver | None = None,
    ):
        """
        Initialize the engine in SETUP.

        Args:
            pool: Questions to sample from (usually the whole catalog)
            progress: Store receiving every submitted outcome
            mode: practice or exam
            question_count: Questions requested per run
            restrict_to_flagged: Fixed flagged-subset choice; None defers to flagged_only
            passing_score: Exam pass mark (defaults to 6); must be None for practice
            dynamic_answers: Callable returning the current dynamic answer set
            flagged_only: Callable returning the current flagged-subset setting,
                read at every start() and restart()
            selector: Sampler (inject a seeded one for deterministic runs)
            resolver: Dynamic answer resolver

        Raises:
            SessionConfigurationError: if passing_score is given for practice mode,
                or is outside 1..question_count for exam mode
        """
        self.pool = tuple(pool)
        self.progress = progress
        self.selector = selector or SelectionService()
        self.resolver = resolver or DynamicAnswerResolver()
        self._dynamic_answers = dynamic_answers or DynamicAnswerSet
        self._flagged_only = flagged_only or (lambda: False)

        mode = SessionMode(mode)
        if mode is SessionMode.PRACTICE and passing_score is not None:
            raise SessionConfigurationError("Practice sessions have no passing score")
        if mode is SessionMode.EXAM and passing_score is None:
            passing_score = EXAM_PASSING_SCORE

        self.passing_score = passing_score
        self.question_count = question_count
        self.restrict_to_flagged = restrict_to_flagged
        self.state = SessionState(mode=mode)
        self._check_passing_score()

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def mode(self) -> SessionMode:
        return self.state.mode

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def outcomes(self) -> list[Outcome]:
        return list(self.state.outcomes)

    @property
    def total_questions(self) -> int:
        return len(self.state.questions)

    @property
    def correct_count(self) -> int:
        return sum(1 for o in self.state.outcomes if o.was_correct)

    @property
    def flagged_only_active(self) -> bool:
        """Flagged-subset choice for the next sample: explicit override, else the live setting."""
        if self.restrict_to_flagged is not None:
            return self.restrict_to_flagged
        return bool(self._flagged_only())

    @property
    def answer_revealed(self) -> bool:
        return self.state.answer_revealed

    @property
    def current_question(self) -> Question:
        self._require(SessionPhase.ACTIVE, "current_question")
        return self.state.questions[self.state.current_index]

    @property
    def display_answers(self) -> list[str]:
        """Answers for the current question with dynamic values substituted."""
        return self.resolver.resolve(self.current_question, self._dynamic_answers())

    @property
    def results(self) -> SessionResults:
        self._require(SessionPhase.RESULTS, "results")

        by_id = {q.id: q for q in self.state.questions}
        correct = self.correct_count
        total = len(self.state.outcomes)
        return SessionResults(
            mode=self.mode,
            total=total,
            correct_count=correct,
            incorrect_count=total - correct,
            score_percentage=round_percentage(correct, total),
            passing_score=self.passing_score,
            missed=tuple(by_id[o.question_id] for o in self.state.outcomes if not o.was_correct),
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def configure(
        self,
        question_count: int | None = None,
        restrict_to_flagged: bool | None = None,
    ) -> None:
        """Change run parameters. Only allowed before the run starts."""
        self._require(SessionPhase.SETUP, "configure")
        if question_count is not None:
            self.question_count = question_count
            self._check_passing_score()
        if restrict_to_flagged is not None:
            self.restrict_to_flagged = restrict_to_flagged

    def start(self) -> Question:
        """
        Sample questions and enter ACTIVE.

        Returns:
            The first question

        Raises:
            SessionConfigurationError: if sampling produced no questions
            SessionStateError: if not in SETUP
        """
        self._require(SessionPhase.SETUP, "start")
        return self._begin()

    def restart(self) -> Question:
        """Run again with a freshly sampled question list. Only from RESULTS."""
        self._require(SessionPhase.RESULTS, "restart")
        return self._begin()

    def reveal_answer(self) -> list[str]:
        """Show the answer for the current question. No phase change."""
        answers = self.display_answers
        self.state.answer_revealed = True
        return answers

    def submit(self, was_correct: bool) -> SessionPhase:
        """
        Record the learner's self-graded answer for the current question.

        Returns:
            The phase after submission (ACTIVE, or RESULTS after the last question)
        """
        question = self.current_question
        was_correct = bool(was_correct)

        self.state.outcomes.append(Outcome(question_id=question.id, was_correct=was_correct))
        self.progress.record_answer(question.id, was_correct)

        if self.state.current_index >= len(self.state.questions) - 1:
            self.state.phase = SessionPhase.RESULTS
            logger.info(
                f"{self.mode.value.title()} session finished: "
                f"{self.correct_count}/{len(self.state.outcomes)} correct"
            )
        else:
            self.state.current_index += 1
            self.state.answer_revealed = False

        return self.state.phase

    # =========================================================================
    # Internals
    # =========================================================================

    def _begin(self) -> Question:
        flagged = self.flagged_only_active
        questions = self.selector.sample(self.pool, self.question_count, flagged)
        if not questions:
            raise SessionConfigurationError(
                f"No questions available (requested {self.question_count}, "
                f"flagged_only={flagged})"
            )

        self.state = SessionState(
            mode=self.state.mode,
            phase=SessionPhase.ACTIVE,
            questions=questions,
        )
        logger.debug(f"{self.mode.value.title()} session started with {len(questions)} question(s)")
        return questions[0]

    def _check_passing_score(self) -> None:
        if self.passing_score is None:
            return
        if not 1 <= self.passing_score <= self.question_count:
            raise SessionConfigurationError(
                f"Passing score {self.passing_score} must be between 1 and "
                f"the question count {self.question_count}"
            )

    def _require(self, phase: SessionPhase, operation: str) -> None:
        if self.state.phase is not phase:
            raise SessionStateError(
                f"{operation} requires phase '{phase.value}', "
                f"session is '{self.state.phase.value}'"
            )
