"""Structured CLI errors: stable code, message, details and suggested remedies."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from ticketflow.ui.policy import NON_INTERACTIVE_ENV_VAR
from ticketflow.ui.prompts import NoDefaultOptionError, PromptError, PromptInputError


class ErrorCode(StrEnum):
    """Stable error-code vocabulary shown to users and scripts."""

    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_CONTEXT = "INVALID_CONTEXT"
    NO_DEFAULT_OPTION = "NO_DEFAULT_OPTION"
    PROMPT_INPUT_FAILED = "PROMPT_INPUT_FAILED"


class ErrorPayload(BaseModel):
    """Wire shape of a structured error."""

    code: ErrorCode
    message: str
    details: str | None = None
    suggestions: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict without empty details or suggestions."""
        return self.model_dump(mode="json", exclude_defaults=True)


class CLIError(Exception):
    """An error meant to be shown to the user as-is."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.payload = ErrorPayload(
            code=code,
            message=message,
            details=details,
            suggestions=suggestions or [],
        )

    @property
    def code(self) -> ErrorCode:
        return self.payload.code

    @property
    def message(self) -> str:
        return self.payload.message

    @property
    def details(self) -> str | None:
        return self.payload.details

    @property
    def suggestions(self) -> list[str]:
        return self.payload.suggestions


def from_prompt_error(exc: PromptError) -> CLIError:
    """Translate a prompt failure into a structured CLI error."""
    if isinstance(exc, NoDefaultOptionError):
        details = f"options: {', '.join(exc.keys)}" if exc.keys else "no options were offered"
        return CLIError(
            ErrorCode.NO_DEFAULT_OPTION,
            "Cannot choose an option without a terminal",
            details=details,
            suggestions=[
                "Run the command from an interactive terminal",
                "Pass the choice explicitly on the command line",
                "Mark one of the options as the default",
            ],
        )
    if isinstance(exc, PromptInputError):
        return CLIError(
            ErrorCode.PROMPT_INPUT_FAILED,
            "Failed to read your answer",
            details=exc.reason,
            suggestions=[
                f"Set {NON_INTERACTIVE_ENV_VAR}=true to use default answers",
                "Check that stdin is not closed or redirected",
            ],
        )
    return CLIError(ErrorCode.INVALID_CONTEXT, str(exc))
