"""Logging setup for the ticketflow CLI.

The package logger stays silent (NullHandler) until ``configure_logging`` is
called with at least one option set.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import UTC, datetime

LOGGER_NAME = "ticketflow"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_TEXT_FORMAT = "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


class LoggingConfigError(ValueError):
    """Logging options could not be applied."""


@dataclass
class LoggingOptions:
    """Logging settings from flags or the config file. Empty means unset."""

    level: str = ""
    format: str = ""
    output: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.level or self.format or self.output)

    def merged_over(self, base: LoggingOptions) -> LoggingOptions:
        """Return options where values set here win over *base*."""
        return LoggingOptions(
            level=self.level or base.level,
            format=self.format or base.format,
            output=self.output or base.output,
        )


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def parse_level(value: str) -> int:
    """Map a level name to a logging level; unknown names mean INFO."""
    return _LEVELS.get(value.strip().lower(), logging.INFO)


def configure_logging(options: LoggingOptions) -> logging.Logger | None:
    """Install a handler on the ticketflow logger according to *options*.

    Returns None (and changes nothing) when no option is set.
    """
    if options.is_empty:
        return None

    level = options.level or "info"
    fmt = options.format or "text"
    output = options.output or "stderr"

    if output == "stderr":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    elif output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        try:
            handler = logging.FileHandler(output, mode="a", encoding="utf-8")
        except OSError as exc:
            raise LoggingConfigError(f"failed to configure logging: {exc}") from exc

    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        if getattr(old, "_ticketflow_handler", False):
            logger.removeHandler(old)
            old.close()
    handler._ticketflow_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(parse_level(level))
    return logger
