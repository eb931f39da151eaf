"""Shared utilities and infrastructure.

This module contains common utilities used throughout the application.
"""

from __future__ import annotations

from hired.utils.exceptions import (
    ConfigurationError,
    ExternalToolError,
    HiredError,
    TerminalError,
)
from hired.utils.logging_config import get_logger, setup_logging
from hired.utils.time import Clock

__all__ = [
    "Clock",
    "ConfigurationError",
    "ExternalToolError",
    "HiredError",
    "TerminalError",
    "get_logger",
    "setup_logging",
]
