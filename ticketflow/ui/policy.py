"""Interaction policy: whether the process may block waiting for a human.

Rules (checked in order, first match wins):
1. A known CI env var is truthy → non-interactive.
2. TICKETFLOW_NON_INTERACTIVE is exactly "true" → non-interactive.
3. stdin is a TTY → interactive, otherwise non-interactive.

CI wins over the terminal probe because some runners attach a pseudo-terminal
to stdin with nobody behind it.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TextIO

logger = logging.getLogger(__name__)

NON_INTERACTIVE_ENV_VAR = "TICKETFLOW_NON_INTERACTIVE"

CI_ENV_VARS = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "CIRCLECI",
    "JENKINS_URL",
    "BUILDKITE",
    "TF_BUILD",
    "TRAVIS",
)

_FALSE_LITERALS = frozenset({"0", "false", "no", "off"})


class Mode(StrEnum):
    """Interaction mode of the current invocation."""

    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non_interactive"


@dataclass(frozen=True)
class InteractionSignals:
    """Ambient inputs to the classifier, captured as plain values."""

    ci: bool = False
    override: str | None = None
    stdin_is_tty: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        stdin: TextIO | None = None,
    ) -> InteractionSignals:
        """Read the signals from the process environment and stdin."""
        env = os.environ if environ is None else environ
        return cls(
            ci=any(_is_truthy(env.get(var)) for var in CI_ENV_VARS),
            override=env.get(NON_INTERACTIVE_ENV_VAR),
            stdin_is_tty=_stream_is_tty(sys.stdin if stdin is None else stdin),
        )

    def with_override(self, value: str | None) -> InteractionSignals:
        return replace(self, override=value)


def classify(signals: InteractionSignals | None = None) -> Mode:
    """Return the interaction mode for *signals* (read from the process when omitted)."""
    if signals is None:
        signals = InteractionSignals.from_env()

    if signals.ci:
        logger.debug("non-interactive: CI environment detected")
        return Mode.NON_INTERACTIVE

    if signals.override == "true":
        logger.debug("non-interactive: %s=true", NON_INTERACTIVE_ENV_VAR)
        return Mode.NON_INTERACTIVE

    if not signals.stdin_is_tty:
        logger.debug("non-interactive: stdin is not a terminal")
        return Mode.NON_INTERACTIVE

    return Mode.INTERACTIVE


def is_interactive(signals: InteractionSignals | None = None) -> bool:
    """Return True if prompts may block for a human answer."""
    return classify(signals) is Mode.INTERACTIVE


def _is_truthy(value: str | None) -> bool:
    value = (value or "").strip().lower()
    return bool(value) and value not in _FALSE_LITERALS


def _stream_is_tty(stream: TextIO | None) -> bool:
    """Check whether *stream* is a real TTY. Closed or missing streams are not."""
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (ValueError, OSError):
        return False
