"""
Menu bar vocabulary shared by the migration steps.

Sections and control items were renamed across releases; each enum member
carries both its current raw value and the deprecated string older releases
persisted.
"""

from enum import StrEnum


class SectionName(StrEnum):
    """Menu bar sections, in display order."""

    VISIBLE = "visible"
    HIDDEN = "hidden"
    ALWAYS_HIDDEN = "alwaysHidden"

    @property
    def deprecated_value(self) -> str:
        """Name stored in the legacy ``Sections`` array."""
        return _DEPRECATED_SECTION_NAMES[self]

    @property
    def control_item(self) -> "ControlItemIdentifier":
        """Control item that owns this section."""
        return _SECTION_CONTROL_ITEMS[self]


class ControlItemIdentifier(StrEnum):
    """Identifiers of the status items the app places in the menu bar."""

    ICE_ICON = "Ice.ControlItem.IceIcon"
    HIDDEN = "Ice.ControlItem.Hidden"
    ALWAYS_HIDDEN = "Ice.ControlItem.AlwaysHidden"

    @property
    def deprecated_value(self) -> str:
        """Identifier string used before the 0.10.0 release."""
        return _DEPRECATED_IDENTIFIERS[self]


class StatusItemKey(StrEnum):
    """Semantic keys of per-status-item scoped store entries."""

    PREFERRED_POSITION = "preferredPosition"
    VISIBLE = "visible"


_DEPRECATED_SECTION_NAMES = {
    SectionName.VISIBLE: "Visible",
    SectionName.HIDDEN: "Hidden",
    SectionName.ALWAYS_HIDDEN: "Always Hidden",
}

_SECTION_CONTROL_ITEMS = {
    SectionName.VISIBLE: ControlItemIdentifier.ICE_ICON,
    SectionName.HIDDEN: ControlItemIdentifier.HIDDEN,
    SectionName.ALWAYS_HIDDEN: ControlItemIdentifier.ALWAYS_HIDDEN,
}

_DEPRECATED_IDENTIFIERS = {
    ControlItemIdentifier.ICE_ICON: "IceIcon",
    ControlItemIdentifier.HIDDEN: "HItem",
    ControlItemIdentifier.ALWAYS_HIDDEN: "AHItem",
}
