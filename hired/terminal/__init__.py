"""Terminal probing, escape sequences, colour theme and output session."""

from __future__ import annotations

from hired.terminal.probe import probe_terminal
from hired.terminal.session import Terminal, terminal_session
from hired.terminal.theme import Theme, get_theme

__all__ = [
    "Terminal",
    "Theme",
    "get_theme",
    "probe_terminal",
    "terminal_session",
]
