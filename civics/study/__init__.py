"""
Study sessions.

Provides:
- SessionEngine: practice/exam state machine
- StudyContext: owned composition root for settings, progress and catalog
"""

from civics.study.context import StudyContext
from civics.study.session_engine import (
    Outcome,
    SessionConfigurationError,
    SessionEngine,
    SessionError,
    SessionMode,
    SessionPhase,
    SessionResults,
    SessionState,
    SessionStateError,
)

__all__ = [
    "Outcome",
    "SessionConfigurationError",
    "SessionEngine",
    "SessionError",
    "SessionMode",
    "SessionPhase",
    "SessionResults",
    "SessionState",
    "SessionStateError",
    "StudyContext",
]
