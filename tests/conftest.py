"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from civics.core.catalog import QuestionCatalog  # noqa: E402
from civics.core.models import Category, DynamicField, Question  # noqa: E402
from civics.delivery.progress_store import ProgressStore  # noqa: E402
from civics.delivery.storage import InMemoryStorage  # noqa: E402
from civics.quiz.selection import SelectionService  # noqa: E402

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
FLAGGED_IDS = frozenset(range(5, 101, 5))  # 20 asterisk questions


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


def make_question(question_id: int, **overrides) -> Question:
    """Build a catalog question with sensible defaults."""
    categories = list(Category)
    data = {
        "id": question_id,
        "prompt": f"Civics question {question_id}?",
        "answers": (f"answer {question_id}a", f"answer {question_id}b"),
        "category": categories[question_id % len(categories)],
        "subcategory": "Principles of American Democracy",
        "is_asterisk": question_id in FLAGGED_IDS,
    }
    data.update(overrides)
    return Question(**data)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def questions():
    """100 questions with dense ids; every fifth one is flagged."""
    return [make_question(i) for i in range(1, 101)]


@pytest.fixture
def catalog(questions):
    return QuestionCatalog(questions)


@pytest.fixture
def dynamic_question():
    """Provide a question answered by the current president."""
    return make_question(
        28,
        prompt="What is the name of the President of the United States now?",
        answers=("Visit uscis.gov/citizenship/testupdates for the name",),
        category=Category.AMERICAN_GOVERNMENT,
        is_dynamic_answer=True,
        dynamic_field=DynamicField.PRESIDENT,
    )


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def progress(storage):
    return ProgressStore(storage, clock=lambda: FIXED_NOW)


@pytest.fixture
def selector():
    """Seeded sampler for reproducible runs."""
    return SelectionService(rng=random.Random(1234))


class FailingStorage(InMemoryStorage):
    """Storage whose writes always fail."""

    def write(self, key: str, blob: str) -> None:
        raise OSError("disk full")


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def question_factory():
    return make_question


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def flagged_ids():
    return FLAGGED_IDS
