"""
Runners that execute migration steps and record their completion flags.

Two contracts exist, matching how the steps report failure:

- Group runner (``run_group``): steps raise on failure. Every step in the
  group runs regardless of earlier failures; failures are collected in order
  and raised together as one CombinedMigrationError. The group's flag is set
  only when no step failed.

- Outcome runner (``run_outcome_step``): the step returns Success,
  SuccessWithNotice or Failure. The flag is set on either success variant.
  The runner never raises; an unexpected exception becomes a Failure.

Both runners short-circuit when the flag is already set, so a completed
migration never executes again.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..exceptions import CombinedMigrationError
from ..storage.store import KeyedStore
from ..utils.logging import log_with_context
from .results import Failure, MigrationResult, Success, SuccessWithNotice

logger = logging.getLogger(__name__)

Step = Callable[[], None]
OutcomeStep = Callable[[], MigrationResult]


@dataclass(frozen=True)
class MigrationGroup:
    """Steps for one release whose failures are aggregated."""

    version: str
    flag: str
    steps: tuple[Step, ...]


@dataclass(frozen=True)
class OutcomeMigration:
    """Single outcome-reporting step for one release."""

    version: str
    flag: str
    step: OutcomeStep


def perform_all(steps: Sequence[Step]) -> None:
    """
    Run every step, then raise one combined error if any failed.

    Args:
        steps: Zero-argument callables, run in order

    Raises:
        CombinedMigrationError: If one or more steps raised; ``errors``
            holds them in the order the steps ran
    """
    errors: list[Exception] = []
    for step in steps:
        try:
            step()
        except Exception as e:
            logger.debug(f"Migration step {_step_name(step)} failed: {e}")
            errors.append(e)

    if errors:
        raise CombinedMigrationError(errors)


def run_group(
    store: KeyedStore,
    group: MigrationGroup,
    on_complete: Callable[[str], None] | None = None,
) -> None:
    """
    Run a migration group unless its flag is already set.

    Args:
        store: Store holding the completion flag
        group: Group to run
        on_complete: Called with the group version once its flag is set

    Raises:
        CombinedMigrationError: If any step failed (flag left unset)
    """
    if store.get_bool(group.flag):
        logger.debug(f"Skipping {group.version} migration: {group.flag} already set")
        return

    perform_all(group.steps)

    store.set_bool(group.flag, True)
    _log_completed(group.version, group.flag)
    if on_complete is not None:
        on_complete(group.version)


def run_outcome_step(
    store: KeyedStore,
    migration: OutcomeMigration,
    on_complete: Callable[[str], None] | None = None,
) -> MigrationResult:
    """
    Run an outcome-reporting migration unless its flag is already set.

    ``on_complete`` is called with the version once the flag is set.

    If the flag cannot be set after a SuccessWithNotice, the error is logged
    and the notice is still returned.

    Returns:
        MigrationResult: Success when skipped; otherwise the step's outcome
    """
    try:
        if store.get_bool(migration.flag):
            logger.debug(
                f"Skipping {migration.version} migration: {migration.flag} already set"
            )
            return Success()
        result = migration.step()
    except Exception as e:
        result = Failure(e)

    match result:
        case Success() | SuccessWithNotice():
            try:
                store.set_bool(migration.flag, True)
            except Exception as e:
                if isinstance(result, SuccessWithNotice):
                    logger.error(
                        f"Failed to set {migration.flag} after {migration.version} "
                        f"migration: {e}"
                    )
                    return result
                return Failure(e)
            _log_completed(migration.version, migration.flag)
            if on_complete is not None:
                on_complete(migration.version)
        case Failure():
            pass

    return result


def _log_completed(version: str, flag: str) -> None:
    log_with_context(
        logger,
        logging.INFO,
        f"Successfully migrated to {version} settings",
        context={"version": version, "flag": flag},
    )


def _step_name(step: Callable) -> str:
    return getattr(step, "__name__", repr(step))
