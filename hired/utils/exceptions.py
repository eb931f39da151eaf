"""Exception hierarchy for hired.

Only configuration problems that cannot be substituted are fatal. Tool and
terminal errors are raised close to their source and downgraded to warnings
by the callers that own a fallback.
"""

from __future__ import annotations

from typing import Any


class HiredError(Exception):
    """Base exception for all hired errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize hired error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ConfigurationError(HiredError):
    """Configuration validation errors."""


class TerminalError(HiredError):
    """Terminal probing or restore errors."""


class ExternalToolError(HiredError):
    """An optional external program failed or produced no output."""

    def __init__(
        self,
        tool: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize external tool error."""
        super().__init__(message, details)
        self.tool = tool
