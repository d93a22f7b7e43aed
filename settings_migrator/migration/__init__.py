"""
Versioned, idempotent settings migrations.

Public API:
    migrate_all: Run every pending migration against a store
    MigrationManager: Orchestrator owning the ordered migration table
    MigrationReport: Versions completed, notices and errors of one run
    Success / SuccessWithNotice / Failure: Outcome-reporting step results
"""

from .manager import MigrationManager, migrate_all
from .results import (
    Failure,
    MigrationReport,
    MigrationResult,
    Notice,
    Success,
    SuccessWithNotice,
)
from .runner import (
    MigrationGroup,
    OutcomeMigration,
    perform_all,
    run_group,
    run_outcome_step,
)

__all__ = [
    "Failure",
    "MigrationGroup",
    "MigrationManager",
    "MigrationReport",
    "MigrationResult",
    "Notice",
    "OutcomeMigration",
    "Success",
    "SuccessWithNotice",
    "migrate_all",
    "perform_all",
    "run_group",
    "run_outcome_step",
]
