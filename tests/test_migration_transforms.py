"""
Tests for migration/transforms.py - legacy data-shape transformations.

Tests cover:
- Decoding the legacy sections array (absent, valid, malformed)
- Hotkey extraction from section records
- Control item restructuring and scoped entry moves
- Scoped identifier renaming
- Appearance configuration V1 -> V2 upgrade
"""

import json

import pytest
from pydantic import ValidationError

from settings_migrator.config.constants import SECTIONS_KEY
from settings_migrator.exceptions import InvalidSectionsError
from settings_migrator.migration.transforms import (
    find_section,
    hotkey_assignments,
    load_section_array,
    migrate_scoped,
    restructure_control_items,
    upgrade_appearance_configuration,
)
from settings_migrator.settings.appearance import (
    AppearanceConfigurationV2,
    ShapeKind,
    TintKind,
)
from settings_migrator.settings.hotkeys import KeyCombination
from settings_migrator.settings.menu_bar import ControlItemIdentifier, SectionName
from settings_migrator.storage.store import SqliteKeyedStore


@pytest.fixture
def store(tmp_path):
    with SqliteKeyedStore(tmp_path / "settings.db") as s:
        yield s


def _store_sections(store, sections):
    store.set_blob(SECTIONS_KEY, json.dumps(sections).encode("utf-8"))


# ============================================================================
# load_section_array
# ============================================================================


def test_load_section_array_absent_returns_none(store):
    assert load_section_array(store) is None


def test_load_section_array_returns_records(store):
    _store_sections(store, [{"name": "Hidden"}, {"name": "Visible"}])
    assert load_section_array(store) == [{"name": "Hidden"}, {"name": "Visible"}]


def test_load_section_array_empty_array(store):
    _store_sections(store, [])
    assert load_section_array(store) == []


@pytest.mark.parametrize(
    "value",
    [{"name": "Hidden"}, [1, 2], ["Hidden"], "sections", 3],
)
def test_load_section_array_rejects_non_array_of_objects(store, value):
    _store_sections(store, value)
    with pytest.raises(InvalidSectionsError):
        load_section_array(store)


def test_load_section_array_rejects_invalid_json(store):
    store.set_blob(SECTIONS_KEY, b"{not json")
    with pytest.raises(json.JSONDecodeError):
        load_section_array(store)


def test_find_section_matches_legacy_name():
    sections = [{"name": "Visible"}, {"name": "Always Hidden", "x": 1}]
    assert find_section(sections, SectionName.ALWAYS_HIDDEN) == {
        "name": "Always Hidden",
        "x": 1,
    }
    assert find_section(sections, SectionName.HIDDEN) is None


# ============================================================================
# hotkey_assignments
# ============================================================================


def test_hotkey_assignments_hidden_section():
    sections = [{"name": "Hidden", "hotkey": {"key": 7, "modifiers": 3}}]
    assert hotkey_assignments(sections) == {
        SectionName.HIDDEN: KeyCombination(key=7, modifiers=3)
    }


def test_hotkey_assignments_both_sections():
    sections = [
        {"name": "Visible", "hotkey": {"key": 1, "modifiers": 1}},
        {"name": "Hidden", "hotkey": {"key": 7, "modifiers": 3}},
        {"name": "Always Hidden", "hotkey": {"key": 9, "modifiers": 256}},
    ]
    assert hotkey_assignments(sections) == {
        SectionName.HIDDEN: KeyCombination(key=7, modifiers=3),
        SectionName.ALWAYS_HIDDEN: KeyCombination(key=9, modifiers=256),
    }


@pytest.mark.parametrize(
    "hotkey",
    [
        None,
        "cmd-h",
        {"key": 7},
        {"modifiers": 3},
        {"key": "7", "modifiers": 3},
        {"key": 7, "modifiers": True},
        {"key": 7.5, "modifiers": 3},
    ],
)
def test_hotkey_assignments_skips_malformed_hotkeys(hotkey):
    sections = [{"name": "Hidden", "hotkey": hotkey}]
    assert hotkey_assignments(sections) == {}


# ============================================================================
# restructure_control_items
# ============================================================================


def test_restructure_control_items_replaces_autosave_name(store):
    sections = [{"name": "Hidden", "controlItem": {"autosaveName": "HItem", "other": "x"}}]

    rebuilt = restructure_control_items(store, sections)

    assert rebuilt == [
        {
            "name": "Hidden",
            "controlItem": {
                "other": "x",
                "identifier": ControlItemIdentifier.HIDDEN.value,
            },
        }
    ]
    assert "autosaveName" not in rebuilt[0]["controlItem"]


def test_restructure_control_items_moves_scoped_entries(store):
    store.set_scoped("preferredPosition", "HItem", 120.0)
    store.set_scoped("visible", "HItem", True)
    sections = [{"name": "Hidden", "controlItem": {"autosaveName": "HItem", "other": "x"}}]

    restructure_control_items(store, sections)

    identifier = ControlItemIdentifier.HIDDEN.value
    assert store.get_scoped("preferredPosition", "HItem") is None
    assert store.get_scoped("visible", "HItem") is None
    assert store.get_scoped("preferredPosition", identifier) == 120.0
    assert store.get_scoped("visible", identifier) is True


def test_restructure_control_items_does_not_mutate_input(store):
    control_item = {"autosaveName": "HItem"}
    sections = [{"name": "Hidden", "controlItem": control_item}]

    restructure_control_items(store, sections)

    assert control_item == {"autosaveName": "HItem"}


def test_restructure_control_items_visits_every_section_in_order(store):
    sections = [
        {"name": "Always Hidden", "controlItem": {"autosaveName": "Item-2"}},
        {"name": "Visible", "controlItem": {"autosaveName": "Item-0"}},
        {"name": "Hidden", "controlItem": {"autosaveName": "Item-1"}},
    ]

    rebuilt = restructure_control_items(store, sections)

    assert [record["name"] for record in rebuilt] == ["Visible", "Hidden", "Always Hidden"]
    assert [record["controlItem"]["identifier"] for record in rebuilt] == [
        ControlItemIdentifier.ICE_ICON.value,
        ControlItemIdentifier.HIDDEN.value,
        ControlItemIdentifier.ALWAYS_HIDDEN.value,
    ]


def test_restructure_control_items_drops_malformed_sections(store):
    sections = [
        {"name": "Visible"},
        {"name": "Hidden", "controlItem": "not a mapping"},
        {"name": "Always Hidden", "controlItem": {"autosaveName": 5}},
        {"name": "Unknown", "controlItem": {"autosaveName": "X"}},
    ]

    assert restructure_control_items(store, sections) == []


def test_restructure_control_items_keeps_other_section_fields(store):
    sections = [
        {
            "name": "Hidden",
            "hotkey": {"key": 7, "modifiers": 3},
            "controlItem": {"autosaveName": "HItem"},
        }
    ]

    rebuilt = restructure_control_items(store, sections)

    assert rebuilt[0]["hotkey"] == {"key": 7, "modifiers": 3}


# ============================================================================
# migrate_scoped
# ============================================================================


def test_migrate_scoped_moves_value(store):
    store.set_scoped("preferredPosition", "old", 10)

    assert migrate_scoped(store, "preferredPosition", "old", "new") is True

    assert store.get_scoped("preferredPosition", "new") == 10
    assert store.get_scoped("preferredPosition", "old") is None


def test_migrate_scoped_missing_source_is_noop(store):
    store.set_scoped("preferredPosition", "new", 99)

    assert migrate_scoped(store, "preferredPosition", "old", "new") is False

    assert store.get_scoped("preferredPosition", "new") == 99


def test_migrate_scoped_preserves_false_values(store):
    store.set_scoped("visible", "old", False)

    assert migrate_scoped(store, "visible", "old", "new") is True

    assert store.get_scoped("visible", "new") is False


def test_migrate_scoped_same_scope_keeps_value(store):
    store.set_scoped("visible", "HItem", True)

    assert migrate_scoped(store, "visible", "HItem", "HItem") is False

    assert store.get_scoped("visible", "HItem") is True


def test_migrate_scoped_only_touches_its_key(store):
    store.set_scoped("preferredPosition", "old", 1)
    store.set_scoped("visible", "old", True)

    migrate_scoped(store, "preferredPosition", "old", "new")

    assert store.get_scoped("visible", "old") is True
    assert store.get_scoped("visible", "new") is None


# ============================================================================
# upgrade_appearance_configuration
# ============================================================================


def test_upgrade_copies_shadow_and_border_into_every_slot():
    data = json.dumps({"hasShadow": True, "hasBorder": False}).encode()

    upgraded = upgrade_appearance_configuration(data)

    for slot in (
        upgraded.light_mode_configuration,
        upgraded.dark_mode_configuration,
        upgraded.static_configuration,
    ):
        assert slot.has_shadow is True
        assert slot.has_border is False


def test_upgrade_copies_every_overlay_and_shape_field():
    v1 = {
        "hasShadow": False,
        "hasBorder": True,
        "borderColor": {"red": 1.0, "green": 0.0, "blue": 0.0, "alpha": 1.0},
        "borderWidth": 2.5,
        "tintKind": 2,
        "tintColor": {"red": 0.0, "green": 0.5, "blue": 1.0, "alpha": 0.7},
        "tintGradient": {
            "stops": [
                {"color": {"red": 1.0, "green": 1.0, "blue": 0.0, "alpha": 1.0}, "location": 0.0},
                {"color": {"red": 0.0, "green": 0.0, "blue": 1.0, "alpha": 1.0}, "location": 1.0},
            ]
        },
        "shapeKind": 2,
        "fullShapeInfo": {"leadingEndCap": 0, "trailingEndCap": 1},
        "splitShapeInfo": {
            "leading": {"leadingEndCap": 0, "trailingEndCap": 0},
            "trailing": {"leadingEndCap": 1, "trailingEndCap": 0},
        },
        "isInset": False,
    }

    upgraded = upgrade_appearance_configuration(json.dumps(v1).encode())

    assert upgraded.light_mode_configuration == upgraded.dark_mode_configuration
    assert upgraded.dark_mode_configuration == upgraded.static_configuration
    slot = upgraded.static_configuration
    assert slot.has_border is True
    assert slot.border_color.red == 1.0
    assert slot.border_width == 2.5
    assert slot.tint_kind is TintKind.GRADIENT
    assert slot.tint_color.alpha == 0.7
    assert len(slot.tint_gradient.stops) == 2
    assert upgraded.shape_kind is ShapeKind.SPLIT
    assert upgraded.full_shape_info.model_dump(by_alias=True) == v1["fullShapeInfo"]
    assert upgraded.split_shape_info.model_dump(by_alias=True) == v1["splitShapeInfo"]
    assert upgraded.is_inset is False


def test_upgrade_slots_are_independent_copies():
    upgraded = upgrade_appearance_configuration(b'{"hasShadow": true}')

    upgraded.dark_mode_configuration.has_shadow = False

    assert upgraded.light_mode_configuration.has_shadow is True
    assert upgraded.static_configuration.has_shadow is True


def test_upgrade_keeps_v2_only_defaults():
    upgraded = upgrade_appearance_configuration(b"{}")
    assert upgraded.is_dynamic == AppearanceConfigurationV2.default_configuration().is_dynamic


@pytest.mark.parametrize(
    "data",
    [b"not json", b"[]", b'{"hasShadow": [1]}', b'{"shapeKind": 7}'],
)
def test_upgrade_rejects_undecodable_v1(data):
    with pytest.raises(ValidationError):
        upgrade_appearance_configuration(data)
