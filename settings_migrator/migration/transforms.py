"""
Data-shape transformations used by the migration steps.

The legacy ``Sections`` blob is handled as a loosely-typed JSON tree: its
shape changed between early releases, so records are validated where they
are used. A record that fails a structural check is skipped; a blob that is
not an array of objects at all is an error.

Transforms:
    load_section_array: Decode the legacy sections blob (None when absent)
    find_section: Look up a legacy section record by name
    hotkey_assignments: Key combinations bound in legacy section records
    restructure_control_items: Rewrite control item records to identifiers
    migrate_scoped: Move a scoped store entry to a new scope
    upgrade_appearance_configuration: Build a V2 appearance record from V1
"""

import json
import logging
from typing import Any

from ..config.constants import SECTIONS_KEY
from ..exceptions import InvalidSectionsError
from ..settings.appearance import AppearanceConfigurationV1, AppearanceConfigurationV2
from ..settings.hotkeys import KeyCombination
from ..settings.menu_bar import SectionName, StatusItemKey
from ..storage.store import KeyedStore

logger = logging.getLogger(__name__)

SectionRecord = dict[str, Any]

# Sections whose legacy hotkeys map onto toggle actions
HOTKEY_SECTIONS = (SectionName.HIDDEN, SectionName.ALWAYS_HIDDEN)


def load_section_array(store: KeyedStore) -> list[SectionRecord] | None:
    """
    Decode the legacy sections array.

    Returns:
        list[dict] | None: Section records, or None if no blob is stored

    Raises:
        json.JSONDecodeError: If the blob is not valid JSON
        InvalidSectionsError: If the JSON is not an array of objects
    """
    data = store.get_blob(SECTIONS_KEY)
    if data is None:
        return None

    value = json.loads(data)
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise InvalidSectionsError(value)
    return value


def find_section(sections: list[SectionRecord], name: SectionName) -> SectionRecord | None:
    """Return the first record whose ``name`` is the section's legacy name."""
    for record in sections:
        if record.get("name") == name.deprecated_value:
            return record
    return None


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid key code
    return isinstance(value, int) and not isinstance(value, bool)


def hotkey_assignments(
    sections: list[SectionRecord],
) -> dict[SectionName, KeyCombination]:
    """
    Collect key combinations bound to the hidden and always-hidden sections.

    Sections without a well-formed ``hotkey`` mapping are skipped; a user may
    never have bound one.
    """
    assignments: dict[SectionName, KeyCombination] = {}
    for name in HOTKEY_SECTIONS:
        record = find_section(sections, name)
        if record is None:
            continue
        hotkey = record.get("hotkey")
        if not isinstance(hotkey, dict):
            continue
        key = hotkey.get("key")
        modifiers = hotkey.get("modifiers")
        if not (_is_int(key) and _is_int(modifiers)):
            continue
        assignments[name] = KeyCombination(key=key, modifiers=modifiers)
    return assignments


def restructure_control_items(
    store: KeyedStore, sections: list[SectionRecord]
) -> list[SectionRecord]:
    """
    Replace each section's control item autosave name with its identifier.

    For every known section: drop ``autosaveName`` from the nested
    ``controlItem`` mapping, add ``identifier``, and move the section's
    preferred position and visibility entries from the autosave-name scope
    to the identifier scope. Sections that are missing or fail a structural
    check are left out of the returned array.

    Returns:
        list[dict]: Rebuilt section records, in section order
    """
    rebuilt: list[SectionRecord] = []
    for name in SectionName:
        record = find_section(sections, name)
        if record is None:
            continue
        control_item = record.get("controlItem")
        if not isinstance(control_item, dict):
            continue

        control_item = dict(control_item)
        autosave_name = control_item.pop("autosaveName", None)
        if not isinstance(autosave_name, str):
            logger.debug(f"Dropping section {name.value!r}: no autosave name")
            continue

        identifier = name.control_item
        control_item["identifier"] = identifier.value

        migrate_scoped(store, StatusItemKey.PREFERRED_POSITION, autosave_name, identifier.value)
        migrate_scoped(store, StatusItemKey.VISIBLE, autosave_name, identifier.value)

        rebuilt.append({**record, "controlItem": control_item})
    return rebuilt


def migrate_scoped(store: KeyedStore, key: str, from_scope: str, to_scope: str) -> bool:
    """
    Move the value stored under (key, from_scope) to (key, to_scope).

    No-op when nothing is stored under ``from_scope`` or the scopes are equal.

    Returns:
        bool: True if a value was moved
    """
    if from_scope == to_scope:
        return False
    value = store.get_scoped(key, from_scope)
    if value is None:
        return False
    store.set_scoped(key, to_scope, value)
    store.set_scoped(key, from_scope, None)
    logger.debug(f"Moved {key} from {from_scope!r} to {to_scope!r}")
    return True


def upgrade_appearance_configuration(data: bytes) -> AppearanceConfigurationV2:
    """
    Build a V2 appearance record from an encoded V1 record.

    Starts from the default V2 configuration, copies the V1 overlay fields
    into all three overlay slots so the menu bar looks the same in every
    mode, and carries the shape and inset fields over unchanged.

    Raises:
        pydantic.ValidationError: If ``data`` does not decode as V1
    """
    old = AppearanceConfigurationV1.model_validate_json(data)
    partial = old.partial_configuration()
    return AppearanceConfigurationV2.default_configuration().model_copy(
        update={
            "light_mode_configuration": partial,
            "dark_mode_configuration": partial.model_copy(deep=True),
            "static_configuration": partial.model_copy(deep=True),
            "shape_kind": old.shape_kind,
            "full_shape_info": old.full_shape_info,
            "split_shape_info": old.split_shape_info,
            "is_inset": old.is_inset,
        }
    )
