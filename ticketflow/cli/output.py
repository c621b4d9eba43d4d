"""Command output: result rendering, structured errors and status lines.

Results go to stdout. Errors and status lines go to stderr. In JSON mode
status lines are suppressed so stdout/stderr stay machine-readable.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from datetime import timedelta
from enum import StrEnum
from typing import Any, Protocol

import click
from rich.console import Console
from rich.markup import escape

from ticketflow.cli.errors import CLIError
from ticketflow.ui.console import err_console

OUTPUT_FORMAT_ENV_VAR = "TICKETFLOW_OUTPUT_FORMAT"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


def parse_output_format(value: str | None) -> OutputFormat:
    """Return JSON for "json" (any case), TEXT for anything else."""
    if value and value.lower() == OutputFormat.JSON:
        return OutputFormat.JSON
    return OutputFormat.TEXT


class StatusWriter(Protocol):
    """Progress/status messages shown while a command runs."""

    def print(self, message: str) -> None: ...


class TextStatusWriter:
    """Writes status messages to the (stderr) console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or err_console

    def print(self, message: str) -> None:
        self.console.print(f"[muted]{escape(message)}[/muted]")


class NullStatusWriter:
    """Drops status messages (JSON mode)."""

    def print(self, message: str) -> None:
        pass


def new_status_writer(fmt: OutputFormat, console: Console | None = None) -> StatusWriter:
    if fmt is OutputFormat.JSON:
        return NullStatusWriter()
    return TextStatusWriter(console)


class OutputWriter:
    """Render command results and errors in the selected format."""

    def __init__(self, fmt: OutputFormat = OutputFormat.TEXT, *, pretty: bool = True) -> None:
        self.format = fmt
        self.pretty = pretty

    def print_result(self, data: Any) -> None:
        if self.format is OutputFormat.JSON:
            click.echo(self._dumps(data))
            return
        if isinstance(data, Mapping):
            for key, value in data.items():
                click.echo(f"{key}: {value}")
            return
        click.echo(str(data))

    def error(self, exc: BaseException) -> None:
        """Write *exc* to stderr. Structured errors keep their details and suggestions."""
        if not isinstance(exc, CLIError):
            click.echo(f"Error: {exc}", err=True)
            return

        if self.format is OutputFormat.JSON:
            click.echo(self._dumps({"error": exc.payload.to_dict()}), err=True)
            return

        click.echo(f"Error: {exc.message}", err=True)
        if exc.details:
            click.echo(f"Details: {exc.details}", err=True)
        if exc.suggestions:
            click.echo("\nSuggestions:", err=True)
            for suggestion in exc.suggestions:
                click.echo(f"  - {suggestion}", err=True)

    def _dumps(self, data: Any) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, default=str)
        return json.dumps(data, default=str)


def handle_error(exc: BaseException, fmt: OutputFormat | None = None) -> None:
    """Render *exc* before a writer exists, honouring TICKETFLOW_OUTPUT_FORMAT."""
    if fmt is None:
        fmt = parse_output_format(os.environ.get(OUTPUT_FORMAT_ENV_VAR))
    OutputWriter(fmt).error(exc)


def format_duration(delta: timedelta) -> str:
    """Human-readable duration such as ``1d 2h 3m``."""
    if delta < timedelta(0):
        return "0s"

    total_minutes = int(delta.total_seconds() // 60)
    days, rem = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(rem, 60)

    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes or not parts:
        parts.append(f"{minutes}m")
    return " ".join(parts)
