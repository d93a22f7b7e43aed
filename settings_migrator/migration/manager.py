"""
Top-level migration orchestrator.

Runs every settings migration in release order, once per application launch:

    1. 0.8.0   group:   hotkeys, control items, clear legacy sections
    2. 0.10.0  group:   control item identifier rename
    3. 0.10.1  outcome: visibility cleanup and corrupted-position recovery
    4. 0.11.10 outcome: appearance configuration upgrade

Completed migrations are skipped through their flags, so calling run_all()
on every launch is safe. Nothing here raises to the caller: group failures
are logged and retried next launch, outcome failures are logged, and
notices are handed to ``present_notice``.

Example:
    >>> from settings_migrator.migration import migrate_all
    >>> from settings_migrator.storage.store import SqliteKeyedStore
    >>> with SqliteKeyedStore("settings.db") as store:
    ...     report = migrate_all(store)
    >>> report.completed
    ['0.8.0', '0.10.0', '0.10.1']
"""

import logging
from collections.abc import Callable
from functools import partial

from ..config.constants import (
    HAS_MIGRATED_0_8_0,
    HAS_MIGRATED_0_10_0,
    HAS_MIGRATED_0_10_1,
    HAS_MIGRATED_0_11_10,
)
from ..settings.hotkeys import HotkeySettingsManager
from ..storage.store import KeyedStore
from .results import Failure, MigrationReport, Notice, Success, SuccessWithNotice
from .runner import MigrationGroup, OutcomeMigration, perform_all, run_group, run_outcome_step
from .steps import MigrationSteps

logger = logging.getLogger(__name__)

NoticePresenter = Callable[[Notice], None]


class MigrationManager:
    """
    Owns the ordered migration table and drives both runners.

    Args:
        store: Persisted settings store
        hotkeys: Hotkey registry for the 0.8.0 hotkey migration
        present_notice: Called with each notice as it is produced
    """

    def __init__(
        self,
        store: KeyedStore,
        hotkeys: HotkeySettingsManager | None = None,
        present_notice: NoticePresenter | None = None,
    ):
        self.store = store
        self.steps = MigrationSteps(store, hotkeys)
        self.present_notice = present_notice

    @property
    def groups(self) -> tuple[MigrationGroup, ...]:
        """Fail-fast-able groups, in release order."""
        return (
            MigrationGroup(
                version="0.8.0",
                flag=HAS_MIGRATED_0_8_0,
                steps=(
                    self.steps.migrate_hotkeys_0_8_0,
                    self.steps.migrate_control_items_0_8_0,
                    self.steps.migrate_sections_0_8_0,
                ),
            ),
            MigrationGroup(
                version="0.10.0",
                flag=HAS_MIGRATED_0_10_0,
                steps=(self.steps.migrate_control_items_0_10_0,),
            ),
        )

    @property
    def outcome_migrations(self) -> tuple[OutcomeMigration, ...]:
        """Outcome-reporting migrations, in release order, after all groups."""
        return (
            OutcomeMigration(
                version="0.10.1",
                flag=HAS_MIGRATED_0_10_1,
                step=self.steps.migrate_control_items_0_10_1,
            ),
            OutcomeMigration(
                version="0.11.10",
                flag=HAS_MIGRATED_0_11_10,
                step=self.steps.migrate_appearance_configuration_0_11_10,
            ),
        )

    def run_all(self) -> MigrationReport:
        """Run every migration in order and report what happened."""
        report = MigrationReport()
        record = report.completed.append

        try:
            perform_all(
                [partial(run_group, self.store, group, record) for group in self.groups]
            )
        except Exception as e:
            self._log_error(e)
            report.errors.append(e)

        for migration in self.outcome_migrations:
            result = run_outcome_step(self.store, migration, record)
            match result:
                case Success():
                    pass
                case SuccessWithNotice(notice=notice):
                    report.notices.append(notice)
                    self._present(notice)
                case Failure(error=error):
                    self._log_error(error)
                    report.errors.append(error)

        return report

    def _present(self, notice: Notice) -> None:
        if self.present_notice is None:
            return
        try:
            self.present_notice(notice)
        except Exception as e:
            logger.error(f"Failed to present migration notice: {e}", exc_info=True)

    @staticmethod
    def _log_error(error: Exception) -> None:
        logger.error(f"Migration failed with error: {error}")


def migrate_all(
    store: KeyedStore,
    hotkeys: HotkeySettingsManager | None = None,
    present_notice: NoticePresenter | None = None,
) -> MigrationReport:
    """Run every pending migration against ``store``."""
    return MigrationManager(store, hotkeys, present_notice).run_all()
