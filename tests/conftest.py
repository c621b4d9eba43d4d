"""Shared test fixtures for the ticketflow test suite."""

from __future__ import annotations

import pytest

from ticketflow.ui.policy import CI_ENV_VARS, NON_INTERACTIVE_ENV_VAR


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable the interaction policy reads."""
    for var in (*CI_ENV_VARS, NON_INTERACTIVE_ENV_VAR, "TICKETFLOW_OUTPUT_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
