"""Terminal capability probe.

Queries width and colour depth once through Rich's own detection
(``TERM``, ``COLORTERM``), interactivity through ``isatty``, and freezes the
answer into a :class:`~hired.models.TerminalProfile`.
"""

from __future__ import annotations

import os
import sys
from typing import IO

from rich.console import Console

from hired.models import ColorTier, TerminalProfile
from hired.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_COLUMNS = 80

_COLOR_SYSTEMS: dict[str | None, ColorTier] = {
    "truecolor": ColorTier.TRUECOLOR,
    "256": ColorTier.EIGHT_BIT,
    "standard": ColorTier.BASIC,
    "windows": ColorTier.BASIC,
    None: ColorTier.NONE,
}


def _columns_from_env() -> int | None:
    raw = os.environ.get("COLUMNS", "")
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def probe_terminal(stream: IO[str] | None = None) -> TerminalProfile:
    """Probe the terminal behind ``stream`` (stdout by default).

    ``NO_COLOR`` disables colour entirely. Non-interactive output uses the
    detected colour system only when ``FORCE_COLOR`` is set and is otherwise
    treated as a 16-colour stream. Width falls back to ``$COLUMNS`` and then
    to 80 columns.
    """
    stream = stream if stream is not None else sys.stdout
    console = Console(file=stream)
    try:
        interactive = stream.isatty()
    except (AttributeError, ValueError):
        interactive = False

    if os.environ.get("NO_COLOR"):
        tier = ColorTier.NONE
    elif interactive or os.environ.get("FORCE_COLOR"):
        tier = _COLOR_SYSTEMS.get(console.color_system, ColorTier.BASIC)
    else:
        tier = ColorTier.BASIC

    columns = console.width if interactive else (_columns_from_env() or DEFAULT_COLUMNS)
    profile = TerminalProfile(
        columns=max(1, columns),
        color_tier=tier,
        interactive=interactive,
    )
    logger.debug(
        "Terminal: %d columns, colour tier %s, interactive=%s",
        profile.columns,
        profile.color_tier.value,
        profile.interactive,
    )
    return profile
