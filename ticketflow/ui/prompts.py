"""Prompt primitives for ticketflow commands.

Every function accepts optional *signals* (for the interaction policy),
*console* (for output) and *input_stream* (for deterministic test input) so
that tests never need to monkeypatch stdin or the environment.

In non-interactive mode the flagged default is returned immediately and the
input stream is never read.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape

from ticketflow.ui.console import err_console
from ticketflow.ui.policy import InteractionSignals, Mode, classify

if TYPE_CHECKING:
    from ticketflow.cli.output import StatusWriter

logger = logging.getLogger(__name__)

YES = "yes"
NO = "no"


class PromptError(Exception):
    """Base class for prompts that could not produce a decision."""


class NoDefaultOptionError(PromptError):
    """Non-interactive resolution found no option flagged as default."""

    def __init__(self, keys: Sequence[str] = ()) -> None:
        super().__init__("non-interactive mode detected and no default option available")
        self.keys = list(keys)


class PromptInputError(PromptError):
    """The blocking read from the input stream could not complete."""

    def __init__(self, reason: str = "input stream closed") -> None:
        super().__init__(f"failed to read input: {reason}")
        self.reason = reason


@dataclass(frozen=True)
class PromptOption:
    """One candidate answer to a single-choice prompt."""

    key: str
    description: str = ""
    is_default: bool = False
    aliases: tuple[str, ...] = ()

    def matches(self, answer: str) -> bool:
        answer = answer.lower()
        if answer == self.key.lower():
            return True
        return any(answer == alias.lower() for alias in self.aliases)


def default_option(options: Sequence[PromptOption]) -> PromptOption | None:
    """Return the first option flagged as default, or None."""
    defaults = [opt for opt in options if opt.is_default]
    if not defaults:
        return None
    if len(defaults) > 1:
        logger.debug(
            "multiple default options flagged (%s); using %r",
            ", ".join(opt.key for opt in defaults),
            defaults[0].key,
        )
    return defaults[0]


def confirmation_options(default_yes: bool) -> list[PromptOption]:
    """Build the yes/no option pair with exactly one default."""
    return [
        PromptOption(YES, "Yes", is_default=default_yes, aliases=("y",)),
        PromptOption(NO, "No", is_default=not default_yes, aliases=("n",)),
    ]


def prompt(
    message: str,
    options: Sequence[PromptOption],
    *,
    signals: InteractionSignals | None = None,
    status: StatusWriter | None = None,
    console: Console | None = None,
    input_stream: TextIO | None = None,
) -> str:
    """Resolve a single-choice prompt and return the selected option key.

    Raises ``NoDefaultOptionError`` in non-interactive mode when no option is
    flagged as default, and ``PromptInputError`` when the interactive read fails.
    """
    return _resolve(
        message,
        options,
        inline=False,
        signals=signals,
        status=status,
        console=console,
        input_stream=input_stream,
    )


def confirm(
    message: str,
    *,
    default_yes: bool = False,
    signals: InteractionSignals | None = None,
    status: StatusWriter | None = None,
    console: Console | None = None,
    input_stream: TextIO | None = None,
) -> bool:
    """Yes/no confirmation. Never raises; falls back to *default_yes*."""
    try:
        key = _resolve(
            message,
            confirmation_options(default_yes),
            inline=True,
            signals=signals,
            status=status,
            console=console,
            input_stream=input_stream,
        )
    except PromptInputError as exc:
        logger.debug("confirmation input failed (%s); using default", exc.reason)
        return default_yes
    return key == YES


def _resolve(
    message: str,
    options: Sequence[PromptOption],
    *,
    inline: bool,
    signals: InteractionSignals | None,
    status: StatusWriter | None,
    console: Console | None,
    input_stream: TextIO | None,
) -> str:
    if classify(signals) is Mode.NON_INTERACTIVE:
        chosen = default_option(options)
        if chosen is None:
            raise NoDefaultOptionError([opt.key for opt in options])
        logger.info("non-interactive mode, using default option %r", chosen.key)
        if status is not None:
            status.print(f"Non-interactive mode detected. Using default option: {chosen.key}")
        return chosen.key

    if not options:
        raise PromptError("no options to choose from")

    con = console or err_console
    stream = input_stream or sys.stdin
    if inline:
        return _ask_inline(message, options, con, stream)
    return _ask_menu(message, options, con, stream)


def _ask_menu(
    message: str,
    options: Sequence[PromptOption],
    con: Console,
    stream: TextIO,
) -> str:
    """Display the option list and read until a valid key is entered."""
    con.print(escape(message))
    con.print()
    for opt in options:
        line = f"  [option.key]\\[{escape(opt.key)}][/option.key] {escape(opt.description)}"
        if opt.is_default:
            line += " [option.default](default)[/option.default]"
        con.print(line)
    con.print()

    while True:
        con.print("Your choice: ", end="")
        chosen = _match(_read_answer(stream), options)
        if chosen is not None:
            return chosen.key
        valid = ", ".join(opt.key for opt in options)
        con.print(f"[warning]Invalid choice. Valid options: {escape(valid)}[/warning]")


def _ask_inline(
    message: str,
    options: Sequence[PromptOption],
    con: Console,
    stream: TextIO,
) -> str:
    """Single-line prompt for the yes/no pair, e.g. ``Continue? (Y/n):``."""
    hint = "/".join(
        opt.aliases[0].upper() if opt.is_default else opt.aliases[0]
        for opt in options
    )
    while True:
        con.print(f"{escape(message)} ({hint}): ", end="")
        chosen = _match(_read_answer(stream), options)
        if chosen is not None:
            return chosen.key
        con.print("[warning]Please answer y or n[/warning]")


def _read_answer(stream: TextIO) -> str:
    try:
        line = stream.readline()
    except (OSError, ValueError) as exc:
        raise PromptInputError(str(exc)) from exc
    if not line:
        raise PromptInputError()
    return line.strip()


def _match(answer: str, options: Sequence[PromptOption]) -> PromptOption | None:
    if not answer:
        return default_option(options)
    for opt in options:
        if opt.matches(answer):
            return opt
    return None
