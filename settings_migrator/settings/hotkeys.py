"""
Hotkey registry persisted in the keyed store.

All hotkeys are stored together as one JSON object under the ``Hotkeys`` key,
mapping each action to its key combination (or null when unbound):

    {"toggleHiddenSection": {"key": 7, "modifiers": 3}, "searchMenuBarItems": null}

Assigning ``Hotkey.key_combination`` writes the whole registry back
immediately.
"""

import logging
from enum import StrEnum

from pydantic import BaseModel, TypeAdapter

from ..config.constants import HOTKEYS_KEY
from ..storage.store import KeyedStore

logger = logging.getLogger(__name__)


class HotkeyAction(StrEnum):
    """Actions a hotkey can trigger."""

    TOGGLE_HIDDEN_SECTION = "toggleHiddenSection"
    TOGGLE_ALWAYS_HIDDEN_SECTION = "toggleAlwaysHiddenSection"
    SEARCH_MENU_BAR_ITEMS = "searchMenuBarItems"
    ENABLE_ICE_BAR = "enableIceBar"
    SHOW_SECTION_DIVIDERS = "showSectionDividers"
    TOGGLE_APPLICATION_MENUS = "toggleApplicationMenus"


class KeyCombination(BaseModel):
    """
    A key code plus modifier flags.

    Attributes:
        key: Virtual key code
        modifiers: Modifier flag bitmask
    """

    key: int
    modifiers: int


_registry_adapter = TypeAdapter(dict[HotkeyAction, KeyCombination | None])


class Hotkey:
    """A single action's binding, bound to the manager that persists it."""

    def __init__(
        self,
        manager: "HotkeySettingsManager",
        action: HotkeyAction,
        key_combination: KeyCombination | None = None,
    ):
        self._manager = manager
        self.action = action
        self._key_combination = key_combination

    @property
    def key_combination(self) -> KeyCombination | None:
        return self._key_combination

    @key_combination.setter
    def key_combination(self, value: KeyCombination | None) -> None:
        self._key_combination = value
        self._manager.save()

    def __repr__(self) -> str:
        return f"Hotkey(action={self.action.value!r}, key_combination={self._key_combination!r})"


class HotkeySettingsManager:
    """
    Loads and saves the hotkey registry.

    The registry is read lazily on first access so constructing the manager
    never touches the store.

    Raises:
        pydantic.ValidationError: If the stored registry blob is malformed
    """

    def __init__(self, store: KeyedStore):
        self._store = store
        self._hotkeys: dict[HotkeyAction, Hotkey] | None = None

    def _load(self) -> dict[HotkeyAction, Hotkey]:
        if self._hotkeys is None:
            raw = self._store.get_blob(HOTKEYS_KEY)
            stored = _registry_adapter.validate_json(raw) if raw else {}
            self._hotkeys = {
                action: Hotkey(self, action, stored.get(action))
                for action in HotkeyAction
            }
        return self._hotkeys

    @property
    def hotkeys(self) -> list[Hotkey]:
        return list(self._load().values())

    def hotkey(self, action: HotkeyAction) -> Hotkey | None:
        """Return the hotkey registered for ``action``, if any."""
        return self._load().get(action)

    def save(self) -> None:
        """Persist every hotkey back to the store."""
        registry = {
            action: hotkey.key_combination for action, hotkey in self._load().items()
        }
        self._store.set_blob(HOTKEYS_KEY, _registry_adapter.dump_json(registry))
        logger.debug(f"Saved {len(registry)} hotkeys")
