"""Verbosity management for the hired CLI.

Maps -v, -vv, -vvv to logging levels. With no flag only warnings reach
stderr, since the announcement itself owns the terminal.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class VerbosityLevel(IntEnum):
    """Verbosity levels for the CLI."""

    NORMAL = 1  # Default: warnings and errors
    VERBOSE = 2  # -v: All above + info
    DEBUG = 3  # -vv: All above + debug messages
    TRACE = 4  # -vvv: All above + stack traces on warnings


class VerbosityManager:
    """Manages verbosity levels and maps them to logging levels."""

    COUNT_TO_LEVEL: dict[int, VerbosityLevel] = {
        0: VerbosityLevel.NORMAL,
        1: VerbosityLevel.VERBOSE,
        2: VerbosityLevel.DEBUG,
        3: VerbosityLevel.TRACE,
    }

    LEVEL_TO_LOGGING: dict[VerbosityLevel, int] = {
        VerbosityLevel.NORMAL: logging.WARNING,
        VerbosityLevel.VERBOSE: logging.INFO,
        VerbosityLevel.DEBUG: logging.DEBUG,
        VerbosityLevel.TRACE: logging.DEBUG,
    }

    def __init__(self, verbosity_count: int = 0):
        """Initialize verbosity manager.

        Args:
            verbosity_count: Number of -v flags (clamped to 0-3)

        """
        self.verbosity_count = max(0, min(3, verbosity_count))
        self.level = self.COUNT_TO_LEVEL[self.verbosity_count]
        self.logging_level = self.LEVEL_TO_LOGGING[self.level]

    @classmethod
    def from_count(cls, count: int) -> VerbosityManager:
        """Create VerbosityManager from count."""
        return cls(count)

    def should_show_stack_trace(self) -> bool:
        """Check if stack traces should be shown."""
        return self.level == VerbosityLevel.TRACE
