"""Optional external tools and their built-in fallbacks."""

from __future__ import annotations

from hired.tools.providers import (
    Capabilities,
    builtin_capabilities,
    probe_capabilities,
)

__all__ = [
    "Capabilities",
    "builtin_capabilities",
    "probe_capabilities",
]
