"""
Migration steps, one method per historical release change.

Steps for fail-fast-able groups (0.8.0, 0.10.0) raise on failure. Steps for
outcome-reporting migrations (0.10.1, 0.11.10) return a MigrationResult and
never raise. Every step is safe to re-run: when the target shape already
exists it is a no-op or a harmless overwrite.
"""

import json
import logging

from ..config.constants import (
    APPEARANCE_CONFIGURATION_KEY,
    APPEARANCE_CONFIGURATION_V2_KEY,
    POSITIONS_RESET_NOTICE_BODY,
    POSITIONS_RESET_NOTICE_TITLE,
    SECTIONS_KEY,
)
from ..exceptions import (
    AppearanceMigrationError,
    ControlItemMigrationError,
    HotkeyMigrationError,
    MissingConfigurationError,
)
from ..settings.hotkeys import HotkeyAction, HotkeySettingsManager
from ..settings.menu_bar import ControlItemIdentifier, SectionName, StatusItemKey
from ..storage.store import KeyedStore
from . import transforms
from .results import Failure, MigrationResult, Notice, Success, SuccessWithNotice

logger = logging.getLogger(__name__)

_SECTION_HOTKEY_ACTIONS = {
    SectionName.HIDDEN: HotkeyAction.TOGGLE_HIDDEN_SECTION,
    SectionName.ALWAYS_HIDDEN: HotkeyAction.TOGGLE_ALWAYS_HIDDEN_SECTION,
}


class MigrationSteps:
    """
    The individual migration steps, bound to a store.

    Args:
        store: Persisted settings store
        hotkeys: Hotkey registry the 0.8.0 hotkey migration writes into;
            defaults to a manager over ``store``
    """

    def __init__(self, store: KeyedStore, hotkeys: HotkeySettingsManager | None = None):
        self.store = store
        self.hotkeys = hotkeys if hotkeys is not None else HotkeySettingsManager(store)

    # ------------------------------------------------------------------
    # 0.8.0
    # ------------------------------------------------------------------

    def migrate_hotkeys_0_8_0(self) -> None:
        """
        Move hotkeys stored inside legacy section records into the hotkey
        registry.

        Raises:
            HotkeyMigrationError: If the legacy sections blob is malformed or
                the hotkey registry cannot be read or saved
        """
        try:
            sections = transforms.load_section_array(self.store)
        except Exception as e:
            raise HotkeyMigrationError(e) from e
        if sections is None:
            return

        try:
            for name, key_combination in transforms.hotkey_assignments(sections).items():
                hotkey = self.hotkeys.hotkey(_SECTION_HOTKEY_ACTIONS[name])
                if hotkey is not None:
                    hotkey.key_combination = key_combination
                    logger.debug(f"Assigned {key_combination} to {hotkey.action.value}")
        except Exception as e:
            raise HotkeyMigrationError(e) from e

    def migrate_control_items_0_8_0(self) -> None:
        """
        Rewrite legacy control item records to use identifiers instead of
        autosave names, carrying their scoped entries along.

        Raises:
            ControlItemMigrationError: If the legacy sections blob is
                malformed, a scoped entry cannot be moved, or the rebuilt array
                cannot be stored
        """
        try:
            sections = transforms.load_section_array(self.store)
        except Exception as e:
            raise ControlItemMigrationError(e) from e
        if sections is None:
            return

        try:
            rebuilt = transforms.restructure_control_items(self.store, sections)
            self.store.set_blob(SECTIONS_KEY, json.dumps(rebuilt).encode("utf-8"))
        except Exception as e:
            raise ControlItemMigrationError(e) from e

    def migrate_sections_0_8_0(self) -> None:
        """Stop storing menu bar sections in the settings store."""
        self.store.set_blob(SECTIONS_KEY, None)

    # ------------------------------------------------------------------
    # 0.10.0
    # ------------------------------------------------------------------

    def migrate_control_items_0_10_0(self) -> None:
        """Move preferred positions from deprecated to current identifiers."""
        for identifier in ControlItemIdentifier:
            transforms.migrate_scoped(
                self.store,
                StatusItemKey.PREFERRED_POSITION,
                identifier.deprecated_value,
                identifier.value,
            )

    # ------------------------------------------------------------------
    # 0.10.1
    # ------------------------------------------------------------------

    def migrate_control_items_0_10_1(self) -> MigrationResult:
        """
        Clear stored visibility and repair positions corrupted by 0.10.0.

        A hidden control item with no preferred position can only come from
        the 0.10.0 corruption. When any is found, every preferred position is
        cleared and the user is told why their layout changed.
        """
        try:
            needs_reset = False
            for identifier in ControlItemIdentifier:
                visible = self.store.get_scoped(StatusItemKey.VISIBLE, identifier.value)
                position = self.store.get_scoped(
                    StatusItemKey.PREFERRED_POSITION, identifier.value
                )
                if visible is False and position is None:
                    needs_reset = True
                self.store.set_scoped(StatusItemKey.VISIBLE, identifier.value, None)

            if needs_reset:
                for identifier in ControlItemIdentifier:
                    self.store.set_scoped(
                        StatusItemKey.PREFERRED_POSITION, identifier.value, None
                    )
                logger.warning("Reset control item positions after detecting corruption")
                return SuccessWithNotice(
                    Notice(
                        title=POSITIONS_RESET_NOTICE_TITLE,
                        body=POSITIONS_RESET_NOTICE_BODY,
                    )
                )
        except Exception as e:
            return Failure(e)

        return Success()

    # ------------------------------------------------------------------
    # 0.11.10
    # ------------------------------------------------------------------

    def migrate_appearance_configuration_0_11_10(self) -> MigrationResult:
        """
        Upgrade the single appearance record to per-appearance overlays.

        The V1 blob is left in place.
        """
        try:
            old_data = self.store.get_blob(APPEARANCE_CONFIGURATION_KEY)
        except Exception as e:
            return Failure(AppearanceMigrationError(e))
        if old_data is None:
            return Failure(MissingConfigurationError())

        try:
            new_configuration = transforms.upgrade_appearance_configuration(old_data)
            new_data = new_configuration.model_dump_json(by_alias=True).encode("utf-8")
            self.store.set_blob(APPEARANCE_CONFIGURATION_V2_KEY, new_data)
        except Exception as e:
            return Failure(AppearanceMigrationError(e))

        return Success()
