"""
Rich console utilities for dual-mode CLI output.

Provides terminal output for humans and structured JSON for automation.
All output functions adapt to the global output_mode setting.

This module provides:
- OutputMode: Class to manage output format (text/json/quiet)
- Output functions: success(), error(), warning(), info()
- Display functions: print_notice(), print_flag_table()

Human Mode (--format text):
    - Rich panels and tables
    - ANSI colors and Unicode symbols

Agent Mode (--format json):
    - Structured JSON output to stdout
    - No ANSI codes

Examples:
    >>> from settings_migrator.utils.console import output_mode, print_notice
    >>> output_mode.format = "text"
    >>> print_notice(Notice(title="Positions reset", body="Sorry!"))
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from settings_migrator.migration.results import Notice


class OutputMode:
    """
    Output mode configuration for dual-mode CLI.

    Attributes:
        format: Output format - "text" (human) or "json" (agent)
        quiet: If True, suppress non-essential output
        _json_buffer: Internal buffer for JSON output in agent mode
    """

    def __init__(self, format_type: str = "text", quiet: bool = False):
        """
        Initialize output mode.

        Raises:
            ValueError: If format_type is not "text" or "json"
        """
        if format_type not in ["text", "json"]:
            raise ValueError(f"Invalid format: {format_type}. Must be 'text' or 'json'")

        self.format = format_type
        self.quiet = quiet
        self._json_buffer: dict[str, Any] = {}

    def is_human(self) -> bool:
        return self.format == "text"

    def is_agent(self) -> bool:
        return self.format == "json"

    def add_json(self, key: str, value: Any) -> None:
        """Add key-value pair to the JSON buffer (agent mode)."""
        self._json_buffer[key] = value

    def append_json(self, key: str, value: Any) -> None:
        """Append ``value`` to the list stored under ``key`` in the JSON buffer."""
        self._json_buffer.setdefault(key, []).append(value)

    def flush_json(self) -> None:
        """
        Output buffered JSON to stdout and clear buffer.

        Only outputs in agent mode. In human mode, this is a no-op.
        """
        if self.is_agent() and self._json_buffer:
            json.dump(self._json_buffer, sys.stdout, indent=2)
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._json_buffer.clear()


# Global output mode instance (set by CLI flags)
output_mode = OutputMode()

# Global Rich console instances for human mode
console = Console()  # stdout
console_err = Console(stderr=True)  # stderr


def success(message: str) -> None:
    """
    Print a success message.

    Human mode: Green checkmark with message
    Agent mode: Buffer to JSON
    """
    if output_mode.is_human():
        console.print(f"[green]✓[/green] {message}")
    elif output_mode.is_agent():
        output_mode.add_json("status", "success")
        output_mode.add_json("message", message)


def error(message: str) -> None:
    """
    Print an error message.

    Human mode: Red X with message to stderr
    Agent mode: Buffer to JSON
    """
    if output_mode.is_human():
        console_err.print(f"[red]✗[/red] {message}", style="red")
    elif output_mode.is_agent():
        output_mode.add_json("status", "error")
        output_mode.add_json("error", message)


def warning(message: str) -> None:
    """
    Print a warning message.

    Human mode: Yellow warning symbol with message
    Agent mode: Buffered into the "warnings" list
    """
    if output_mode.is_human():
        console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")
    elif output_mode.is_agent():
        output_mode.append_json("warnings", message)


def info(message: str) -> None:
    """Print an info message (human mode only, silent when quiet)."""
    if output_mode.is_human() and not output_mode.quiet:
        console.print(f"[blue]ℹ[/blue] {message}")


def print_notice(notice: Notice) -> None:
    """
    Present a migration notice to the user.

    Human mode: Rich panel with the title as heading and the body below
    Agent mode: Buffered into the "notices" list
    """
    if output_mode.is_agent():
        output_mode.append_json("notices", {"title": notice.title, "body": notice.body})
        return

    panel = Panel(
        f"[bold]{notice.title}[/bold]\n\n{notice.body}",
        title="[bold yellow]⚠ Settings Migration[/bold yellow]",
        border_style="yellow",
        box=box.ROUNDED,
    )
    console.print(panel)


def print_flag_table(flags: dict[str, bool]) -> None:
    """
    Print each migration flag and whether it is set.

    Human mode: Rich table
    Agent mode: Buffered as a {"flags": {...}} object
    Quiet mode: Tab-separated "flag\\tstate" lines
    """
    if output_mode.is_agent():
        output_mode.add_json("flags", flags)
        return

    if output_mode.quiet:
        for flag, done in flags.items():
            print(f"{flag}\t{'set' if done else 'unset'}")
        return

    table = Table(title="Migration Flags", box=box.ROUNDED)
    table.add_column("Flag", style="cyan", no_wrap=True)
    table.add_column("Migrated", justify="center")

    for flag, done in flags.items():
        table.add_row(flag, "[green]✓[/green]" if done else "[red]✗[/red]")

    console.print(table)
