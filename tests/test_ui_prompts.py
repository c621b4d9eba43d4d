"""Tests for ticketflow.ui.prompts — single choice and yes/no resolution."""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from ticketflow.ui.policy import InteractionSignals
from ticketflow.ui.prompts import (
    NoDefaultOptionError,
    PromptError,
    PromptInputError,
    PromptOption,
    confirm,
    confirmation_options,
    default_option,
    prompt,
)

INTERACTIVE = InteractionSignals(stdin_is_tty=True)
NON_INTERACTIVE = InteractionSignals(ci=True, stdin_is_tty=True)


def _console() -> Console:
    return Console(file=StringIO(), force_terminal=False, width=120)


class _RecordingStatus:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def print(self, message: str) -> None:
        self.messages.append(message)


class _ExplodingStream(StringIO):
    """Fails the test if anything tries to read it."""

    def readline(self, size: int = -1) -> str:  # noqa: ARG002
        raise AssertionError("input stream must not be read in non-interactive mode")


class _BrokenStream(StringIO):
    def readline(self, size: int = -1) -> str:  # noqa: ARG002
        raise OSError("device not configured")


ABC = [
    PromptOption("a", "Option A"),
    PromptOption("b", "Option B", is_default=True),
    PromptOption("c", "Option C"),
]


class TestNonInteractivePrompt:
    """Default resolution without reading input."""

    def test_returns_flagged_default(self) -> None:
        key = prompt(
            "Pick one",
            ABC,
            signals=NON_INTERACTIVE,
            input_stream=_ExplodingStream(),
            console=_console(),
        )
        assert key == "b"

    def test_no_default_raises(self) -> None:
        options = [PromptOption("a"), PromptOption("b")]
        with pytest.raises(NoDefaultOptionError) as excinfo:
            prompt("Pick one", options, signals=NON_INTERACTIVE, input_stream=_ExplodingStream())
        assert excinfo.value.keys == ["a", "b"]
        assert "no default option available" in str(excinfo.value)

    def test_empty_options_raise(self) -> None:
        with pytest.raises(NoDefaultOptionError):
            prompt("Pick one", [], signals=NON_INTERACTIVE, input_stream=_ExplodingStream())

    def test_first_default_wins(self) -> None:
        options = [
            PromptOption("a"),
            PromptOption("b", is_default=True),
            PromptOption("c", is_default=True),
        ]
        assert prompt("Pick one", options, signals=NON_INTERACTIVE) == "b"

    def test_override_signal_is_non_interactive(self) -> None:
        signals = InteractionSignals(override="true", stdin_is_tty=True)
        assert prompt("Pick one", ABC, signals=signals, input_stream=_ExplodingStream()) == "b"

    def test_reports_status(self) -> None:
        status = _RecordingStatus()
        prompt("Pick one", ABC, signals=NON_INTERACTIVE, status=status)
        assert status.messages == ["Non-interactive mode detected. Using default option: b"]


class TestInteractivePrompt:
    """Blocking read with re-prompt on invalid input."""

    def test_returns_typed_key(self) -> None:
        key = prompt(
            "Pick one", ABC, signals=INTERACTIVE, input_stream=StringIO("c\n"), console=_console()
        )
        assert key == "c"

    def test_matching_is_case_insensitive(self) -> None:
        options = [PromptOption("Keep"), PromptOption("Drop")]
        key = prompt(
            "Pick one",
            options,
            signals=INTERACTIVE,
            input_stream=StringIO("  DROP \n"),
            console=_console(),
        )
        assert key == "Drop"

    def test_empty_answer_selects_default(self) -> None:
        key = prompt(
            "Pick one", ABC, signals=INTERACTIVE, input_stream=StringIO("\n"), console=_console()
        )
        assert key == "b"

    def test_rejects_invalid_then_accepts_valid(self) -> None:
        con = _console()
        key = prompt(
            "Pick one", ABC, signals=INTERACTIVE, input_stream=StringIO("z\na\n"), console=con
        )
        assert key == "a"
        assert "Valid options: a, b, c" in con.file.getvalue()

    def test_empty_answer_without_default_reprompts(self) -> None:
        options = [PromptOption("a"), PromptOption("b")]
        key = prompt(
            "Pick one",
            options,
            signals=INTERACTIVE,
            input_stream=StringIO("\nb\n"),
            console=_console(),
        )
        assert key == "b"

    def test_renders_options(self) -> None:
        con = _console()
        prompt("Pick one", ABC, signals=INTERACTIVE, input_stream=StringIO("a\n"), console=con)
        out = con.file.getvalue()
        assert "Pick one" in out
        assert "[a] Option A" in out
        assert "[b] Option B (default)" in out
        assert "Your choice:" in out

    def test_empty_options_raise_without_reading(self) -> None:
        with pytest.raises(PromptError, match="no options to choose from"):
            prompt(
                "Pick one",
                [],
                signals=INTERACTIVE,
                input_stream=_ExplodingStream(),
                console=_console(),
            )

    def test_eof_raises_input_error(self) -> None:
        with pytest.raises(PromptInputError):
            prompt("Pick one", ABC, signals=INTERACTIVE, input_stream=StringIO(""), console=_console())

    def test_eof_after_invalid_raises(self) -> None:
        with pytest.raises(PromptInputError):
            prompt(
                "Pick one", ABC, signals=INTERACTIVE, input_stream=StringIO("z\n"), console=_console()
            )

    def test_read_failure_is_chained(self) -> None:
        with pytest.raises(PromptInputError) as excinfo:
            prompt(
                "Pick one", ABC, signals=INTERACTIVE, input_stream=_BrokenStream(), console=_console()
            )
        assert isinstance(excinfo.value.__cause__, OSError)
        assert "device not configured" in excinfo.value.reason


class TestConfirm:
    """Yes/no wrapper never raises."""

    def test_non_interactive_default_yes(self) -> None:
        assert confirm(
            "Continue?", default_yes=True, signals=NON_INTERACTIVE, input_stream=_ExplodingStream()
        ) is True

    def test_non_interactive_default_no(self) -> None:
        assert confirm(
            "Delete everything?",
            default_yes=False,
            signals=NON_INTERACTIVE,
            input_stream=_ExplodingStream(),
        ) is False

    def test_non_interactive_status(self) -> None:
        status = _RecordingStatus()
        confirm("Continue?", default_yes=True, signals=NON_INTERACTIVE, status=status)
        assert status.messages == ["Non-interactive mode detected. Using default option: yes"]

    @pytest.mark.parametrize(
        ("answer", "expected"),
        [("y\n", True), ("YES\n", True), ("n\n", False), ("no\n", False)],
    )
    def test_interactive_answers(self, answer: str, expected: bool) -> None:
        result = confirm(
            "Continue?", signals=INTERACTIVE, input_stream=StringIO(answer), console=_console()
        )
        assert result is expected

    def test_empty_answer_uses_default(self) -> None:
        assert confirm(
            "Continue?",
            default_yes=True,
            signals=INTERACTIVE,
            input_stream=StringIO("\n"),
            console=_console(),
        ) is True

    def test_invalid_then_valid(self) -> None:
        con = _console()
        result = confirm(
            "Continue?", signals=INTERACTIVE, input_stream=StringIO("maybe\ny\n"), console=con
        )
        assert result is True
        assert "Please answer y or n" in con.file.getvalue()

    @pytest.mark.parametrize("default_yes", [True, False])
    def test_eof_falls_back_to_default(self, default_yes: bool) -> None:
        result = confirm(
            "Continue?",
            default_yes=default_yes,
            signals=INTERACTIVE,
            input_stream=StringIO(""),
            console=_console(),
        )
        assert result is default_yes

    def test_hint_marks_default(self) -> None:
        con = _console()
        confirm(
            "Continue?",
            default_yes=True,
            signals=INTERACTIVE,
            input_stream=StringIO("\n"),
            console=con,
        )
        assert "Continue? (Y/n):" in con.file.getvalue()


class TestOptionHelpers:
    def test_default_option_none(self) -> None:
        assert default_option([PromptOption("a")]) is None

    @pytest.mark.parametrize("default_yes", [True, False])
    def test_confirmation_options_single_default(self, default_yes: bool) -> None:
        options = confirmation_options(default_yes)
        assert [opt.key for opt in options] == ["yes", "no"]
        chosen = default_option(options)
        assert chosen is not None
        assert chosen.key == ("yes" if default_yes else "no")

    def test_alias_matching(self) -> None:
        opt = PromptOption("yes", aliases=("y",))
        assert opt.matches("Y")
        assert opt.matches("yes")
        assert not opt.matches("n")
