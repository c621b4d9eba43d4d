"""Project configuration loaded from ``.ticketflow.yaml``.

Only the ``output`` and ``logging`` sections are read here; other sections
belong to other subsystems and are ignored.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ticketflow.utils.log import LoggingOptions

DEFAULT_CONFIG_FILE = ".ticketflow.yaml"


class ConfigError(ValueError):
    """The config file exists but cannot be used."""


class OutputConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default_format: str = "text"
    json_pretty: bool = True


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: str = ""
    format: str = ""
    output: str = ""

    def to_options(self) -> LoggingOptions:
        return LoggingOptions(level=self.level, format=self.format, output=self.output)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("output", "logging", mode="before")
    @classmethod
    def _empty_section(cls, value: object) -> object:
        # `output:` with nothing under it loads as None
        return {} if value is None else value


def load_config(path: Path) -> AppConfig:
    """Load *path*; a missing file yields the defaults."""
    if not path.exists():
        return AppConfig()

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
