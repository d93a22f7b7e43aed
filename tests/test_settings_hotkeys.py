"""
Tests for settings/hotkeys.py - the persisted hotkey registry.
"""

import json

import pytest
from pydantic import ValidationError

from settings_migrator.config.constants import HOTKEYS_KEY
from settings_migrator.settings.hotkeys import (
    HotkeyAction,
    HotkeySettingsManager,
    KeyCombination,
)
from settings_migrator.storage.store import SqliteKeyedStore


@pytest.fixture
def store(tmp_path):
    with SqliteKeyedStore(tmp_path / "settings.db") as s:
        yield s


def test_every_action_has_a_hotkey(store):
    manager = HotkeySettingsManager(store)

    assert [hotkey.action for hotkey in manager.hotkeys] == list(HotkeyAction)
    assert all(hotkey.key_combination is None for hotkey in manager.hotkeys)


def test_constructing_manager_does_not_touch_store(store):
    store.set_blob(HOTKEYS_KEY, b"not json")

    HotkeySettingsManager(store)  # no exception until first access


def test_assigning_key_combination_persists(store):
    manager = HotkeySettingsManager(store)

    manager.hotkey(HotkeyAction.TOGGLE_HIDDEN_SECTION).key_combination = KeyCombination(
        key=7, modifiers=3
    )

    registry = json.loads(store.get_blob(HOTKEYS_KEY))
    assert registry["toggleHiddenSection"] == {"key": 7, "modifiers": 3}
    assert registry["searchMenuBarItems"] is None


def test_registry_reloads_from_store(store):
    HotkeySettingsManager(store).hotkey(
        HotkeyAction.TOGGLE_ALWAYS_HIDDEN_SECTION
    ).key_combination = KeyCombination(key=1, modifiers=256)

    reloaded = HotkeySettingsManager(store)

    assert reloaded.hotkey(HotkeyAction.TOGGLE_ALWAYS_HIDDEN_SECTION).key_combination == (
        KeyCombination(key=1, modifiers=256)
    )


def test_clearing_key_combination_persists_null(store):
    manager = HotkeySettingsManager(store)
    hotkey = manager.hotkey(HotkeyAction.ENABLE_ICE_BAR)
    hotkey.key_combination = KeyCombination(key=2, modifiers=0)

    hotkey.key_combination = None

    assert json.loads(store.get_blob(HOTKEYS_KEY))["enableIceBar"] is None


def test_malformed_registry_raises_on_access(store):
    store.set_blob(HOTKEYS_KEY, b'{"toggleHiddenSection": {"key": "seven"}}')

    with pytest.raises(ValidationError):
        HotkeySettingsManager(store).hotkeys


def test_hotkey_repr_names_action(store):
    hotkey = HotkeySettingsManager(store).hotkey(HotkeyAction.SHOW_SECTION_DIVIDERS)
    assert "showSectionDividers" in repr(hotkey)
