"""
Persisted key names and fixed strings for the settings migrator.

Keys are shared with the host application, so changing any value here
orphans data already written under the old name.
"""

# Legacy JSON array of menu bar section records
SECTIONS_KEY = "Sections"

# Hotkey registry blob written by HotkeySettingsManager
HOTKEYS_KEY = "Hotkeys"

# Appearance configuration blobs (V1 is left in place after the upgrade)
APPEARANCE_CONFIGURATION_KEY = "MenuBarAppearanceConfiguration"
APPEARANCE_CONFIGURATION_V2_KEY = "MenuBarAppearanceConfigurationV2"

# One completion flag per migration group/step, in release order
HAS_MIGRATED_0_8_0 = "hasMigrated:0.8.0"
HAS_MIGRATED_0_10_0 = "hasMigrated:0.10.0"
HAS_MIGRATED_0_10_1 = "hasMigrated:0.10.1"
HAS_MIGRATED_0_11_10 = "hasMigrated:0.11.10"

MIGRATION_FLAGS = (
    HAS_MIGRATED_0_8_0,
    HAS_MIGRATED_0_10_0,
    HAS_MIGRATED_0_10_1,
    HAS_MIGRATED_0_11_10,
)

# Shown once after recovering from corrupted control item positions
POSITIONS_RESET_NOTICE_TITLE = (
    "Due to a bug in the 0.10.0 release, the data for the menu bar items "
    "was corrupted and their positions had to be reset."
)
POSITIONS_RESET_NOTICE_BODY = "Our sincerest apologies for the inconvenience."
