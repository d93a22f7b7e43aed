"""
Outcome types for migration steps that report instead of raising.

A step returns exactly one of:

- Success: nothing further to do
- SuccessWithNotice: completed, and the user must be shown ``notice``
- Failure: did not complete; ``error`` is logged and the step retries next launch

Callers match on the type:

    match result:
        case Success():
            pass
        case SuccessWithNotice(notice=notice):
            present(notice)
        case Failure(error=error):
            logger.error(f"Migration failed with error: {error}")
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Notice:
    """User-facing message produced by a migration."""

    title: str
    body: str


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class SuccessWithNotice:
    notice: Notice


@dataclass(frozen=True)
class Failure:
    error: Exception


MigrationResult = Success | SuccessWithNotice | Failure


@dataclass
class MigrationReport:
    """
    Summary of one orchestrator run.

    Attributes:
        completed: Versions whose completion flag was set during this run
        notices: Notices produced this run, in order
        errors: Errors logged this run, in order
    """

    completed: list[str] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
