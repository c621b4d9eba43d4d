"""Shared Rich Console and style definitions for ticketflow prompts.

Prompts and status lines go to stderr via ``err_console``.
"""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

TICKETFLOW_THEME = Theme(
    {
        "info": "cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "heading": "bold cyan",
        "muted": "dim",
        "option.key": "bold",
        "option.default": "green",
    }
)

err_console = Console(stderr=True, theme=TICKETFLOW_THEME)
