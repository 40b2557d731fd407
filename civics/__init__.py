"""
Civics coach: progress tracking and practice sessions for the civics test.

The presentation layer builds one StudyContext and calls into it; see
civics.study.context.
"""

__version__ = "1.0.0"
