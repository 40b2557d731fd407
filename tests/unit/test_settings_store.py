"""
Unit tests for SettingsStore.
"""

import json

import pytest

from civics.core.models import DynamicAnswerSet, DynamicField
from civics.delivery.settings_store import SettingsStore
from civics.delivery.storage import InMemoryStorage

KEY = SettingsStore.DEFAULT_KEY


def test_defaults_when_nothing_stored(storage):
    store = SettingsStore(storage)

    assert store.flagged_only is False
    assert store.dynamic_answers == DynamicAnswerSet()


def test_toggle_flagged_mode_persists(storage):
    SettingsStore(storage).update_settings(flagged_only=True)
    assert SettingsStore(storage).flagged_only is True


def test_update_dynamic_answers_merges(storage):
    store = SettingsStore(storage)

    answers = store.update_dynamic_answers({"governor": "Jane Doe", DynamicField.SENATOR: "A, B"})

    assert answers.governor == "Jane Doe"
    assert answers.senator == "A, B"
    assert answers.president == DynamicAnswerSet().president
    assert SettingsStore(storage).dynamic_answers.governor == "Jane Doe"


def test_unknown_dynamic_field_rejected(storage):
    store = SettingsStore(storage)
    with pytest.raises(ValueError):
        store.update_dynamic_answers({"mayor": "Someone"})
    assert store.dynamic_answers == DynamicAnswerSet()


def test_reset_dynamic_answers(storage):
    store = SettingsStore(storage)
    store.update_dynamic_answers({"president": ""})

    assert store.reset_dynamic_answers() == DynamicAnswerSet()


def test_partial_blob_merged_over_defaults():
    blob = json.dumps({"dynamic_answers": {"governor": "Jane Doe"}})
    store = SettingsStore(InMemoryStorage({KEY: blob}))

    assert store.flagged_only is False
    assert store.dynamic_answers.governor == "Jane Doe"
    assert store.dynamic_answers.president == DynamicAnswerSet().president


@pytest.mark.parametrize("blob", ["nope", '{"flagged_only": "maybe"}', "42"])
def test_corrupt_blob_falls_back_to_defaults(blob):
    store = SettingsStore(InMemoryStorage({KEY: blob}))
    assert store.flagged_only is False
    assert store.dynamic_answers == DynamicAnswerSet()


def test_write_failure_keeps_memory_state(failing_storage):
    store = SettingsStore(failing_storage)
    store.update_settings(flagged_only=True)
    assert store.flagged_only is True


def test_field_labels_cover_every_field():
    assert all(field.label for field in DynamicField)


def test_web_app_settings_blob_loads():
    blob = json.dumps(
        {"is6520Mode": True, "dynamicAnswers": {"vicePresident": "Jane Doe", "stateCapital": "Austin"}}
    )
    store = SettingsStore(InMemoryStorage({KEY: blob}))

    assert store.flagged_only is True
    assert store.dynamic_answers.vice_president == "Jane Doe"
    assert store.dynamic_answers.get("stateCapital") == "Austin"
