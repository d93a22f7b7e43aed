"""Application settings objects that migration steps read and write."""

from .appearance import (
    AppearanceConfigurationV1,
    AppearanceConfigurationV2,
    PartialAppearanceConfiguration,
)
from .hotkeys import Hotkey, HotkeyAction, HotkeySettingsManager, KeyCombination
from .menu_bar import ControlItemIdentifier, SectionName, StatusItemKey

__all__ = [
    "AppearanceConfigurationV1",
    "AppearanceConfigurationV2",
    "ControlItemIdentifier",
    "Hotkey",
    "HotkeyAction",
    "HotkeySettingsManager",
    "KeyCombination",
    "PartialAppearanceConfiguration",
    "SectionName",
    "StatusItemKey",
]
