"""
Unit tests for StudyContext wiring.
"""

import pytest

from config import Settings
from civics.core.catalog import QuestionCatalog
from civics.core.mastery import MasteryLevel
from civics.delivery.storage import InMemoryStorage
from civics.study.context import StudyContext
from civics.study.session_engine import SessionMode, SessionPhase


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path, _env_file=None)


@pytest.fixture
def context(catalog, storage, settings, selector):
    return StudyContext(catalog, storage, settings=settings, selector=selector)


def test_practice_session_uses_default_count(context):
    engine = context.practice_session()

    assert engine.mode is SessionMode.PRACTICE
    assert engine.question_count == 10
    assert engine.passing_score is None


def test_exam_session_uses_configured_preset(context):
    engine = context.exam_session()

    assert engine.mode is SessionMode.EXAM
    assert engine.question_count == 10
    assert engine.passing_score == 6


def test_sessions_follow_flagged_toggle(context, flagged_ids):
    context.settings_store.update_settings(flagged_only=True)
    engine = context.practice_session(20)
    engine.start()

    ids = set()
    while engine.phase is SessionPhase.ACTIVE:
        ids.add(engine.current_question.id)
        engine.submit(True)

    assert ids == set(flagged_ids)


def test_stats_reflect_session_outcomes(context):
    engine = context.exam_session()
    engine.start()
    while engine.phase is SessionPhase.ACTIVE:
        engine.submit(True)

    stats = context.stats()

    assert stats.seen == 10
    assert stats.not_seen == 90
    assert stats.seen_percentage == 10
    assert stats.learning == 10


def test_question_status_and_browse(context):
    context.progress.record_answer(3, True)
    context.progress.record_answer(3, True)

    assert context.question_status(3) is MasteryLevel.MASTERED
    assert context.question_status(4) is MasteryLevel.NOT_SEEN

    rows = context.browse(query="question 3?")
    assert rows == [(context.catalog.get(3).question, MasteryLevel.MASTERED)]


def test_display_answers_follow_settings(catalog, storage, settings, dynamic_question):
    context = StudyContext(catalog, storage, settings=settings)
    context.settings_store.update_dynamic_answers({"president": "Jane Doe"})

    assert context.display_answers(dynamic_question) == ["Jane Doe"]


def test_lookup_unknown_id(context):
    assert not context.lookup(500).found


def test_stores_use_configured_keys(catalog, settings):
    storage = InMemoryStorage()
    context = StudyContext(catalog, storage, settings=settings)
    context.progress.record_answer(1, True)
    context.settings_store.update_settings(flagged_only=True)

    assert set(storage.blobs) == {settings.progress_key, settings.settings_key}


def test_from_settings_loads_catalog_file(tmp_path, catalog):
    path = tmp_path / "questions.json"
    path.write_text(
        "[" + ",".join(q.model_dump_json() for q in catalog) + "]", encoding="utf-8"
    )
    settings = Settings(data_dir=tmp_path / "data", catalog_path=path, _env_file=None)

    context = StudyContext.from_settings(settings)
    context.progress.record_answer(1, False)

    assert len(context.catalog) == 100
    assert (tmp_path / "data" / f"{settings.progress_key}.json").exists()


def test_from_settings_requires_catalog(tmp_path):
    with pytest.raises(ValueError):
        StudyContext.from_settings(Settings(data_dir=tmp_path, _env_file=None))


def test_stats_by_category_partition_catalog(context):
    context.progress.record_answer(1, True)

    by_category = context.stats_by_category()

    assert sum(s.total for s in by_category.values()) == len(context.catalog)
    assert sum(s.seen for s in by_category.values()) == 1


def test_from_settings_with_unusable_data_dir(tmp_path, catalog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    settings = Settings(data_dir=blocker / "sub", _env_file=None)

    context = StudyContext.from_settings(settings, catalog=catalog)
    record = context.progress.record_answer(1, True)

    assert len(context.progress) == 1
    assert record.correct_count == 1
    assert context.settings_store.flagged_only is False


def test_restart_follows_flagged_toggle_change(context, flagged_ids):
    engine = context.practice_session(20)
    engine.start()
    while engine.phase is SessionPhase.ACTIVE:
        engine.submit(True)

    context.settings_store.update_settings(flagged_only=True)
    engine.restart()

    ids = set()
    while engine.phase is SessionPhase.ACTIVE:
        ids.add(engine.current_question.id)
        engine.submit(True)

    assert ids == set(flagged_ids)


def test_stats_count_sparse_catalog_ids(storage, settings, question_factory):
    sparse = QuestionCatalog([question_factory(i) for i in (10, 200, 300)])
    context = StudyContext(sparse, storage, settings=settings)
    context.progress.record_answer(200, True)
    context.progress.record_answer(300, False)

    stats = context.stats()

    assert stats.total == 3
    assert stats.seen == 2
    assert stats.not_seen == 1
    assert stats.learning + stats.mastered + stats.needs_work + stats.not_seen == 3
