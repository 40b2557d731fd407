"""
Quiz module for question selection.

This module provides:
- SelectionService: randomized, duplicate-free question sampling
"""

from .selection import SelectionService

__all__ = [
    "SelectionService",
]
