"""ticketflow interactive prompt layer.

All prompt output goes to stderr. stdout is reserved for command results.
"""

from __future__ import annotations

from ticketflow.ui.console import err_console
from ticketflow.ui.policy import Mode, classify, is_interactive

__all__ = ["Mode", "classify", "err_console", "is_interactive"]
