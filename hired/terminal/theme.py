"""Colour theme for the announcement (calm blues and purples).

Colours are defined once as xterm-256 indices and rendered for the probed
colour tier: 24-bit escapes on truecolor terminals, 256-colour escapes,
a cyan-only basic palette, or nothing at all when colour is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from rich.color import Color

from hired.models import ColorTier
from hired.terminal import ansi

# Gradient steps, left to right
GRADIENT_256: tuple[int, ...] = (69, 68, 67, 104, 141, 140, 139, 138, 99, 69)

ROLE_256: dict[str, int] = {
    "sub": 247,  # soft gray
    "accent": 81,  # cyan-ish
    "ok": 120,  # mint
    "cmd": 45,  # calm blue
}

# SGR foreground codes for 16-colour terminals
ROLE_BASIC: dict[str, int] = {
    "primary": 36,
    "sub": 37,
    "accent": 36,
    "ok": 32,
    "cmd": 34,
}

PULSE_SHADES: tuple[int, ...] = (141, 99, 69)
SHIMMER_SHADES: tuple[int, ...] = (141, 99)
COLLAPSE_SHADE = 99


@dataclass(frozen=True)
class Theme:
    """Escape strings for every colour role at one colour tier."""

    tier: ColorTier

    @property
    def enabled(self) -> bool:
        return self.tier is not ColorTier.NONE

    @property
    def reset(self) -> str:
        return ansi.RESET if self.enabled else ""

    @property
    def bold(self) -> str:
        return ansi.BOLD if self.enabled else ""

    @property
    def dim(self) -> str:
        return ansi.DIM if self.enabled else ""

    def primary(self, index: int) -> str:
        """Foreground escape for xterm-256 colour ``index`` at this tier."""
        if self.tier is ColorTier.TRUECOLOR:
            triplet = Color.from_ansi(index).get_truecolor()
            return f"{ansi.CSI}38;2;{triplet.red};{triplet.green};{triplet.blue}m"
        if self.tier is ColorTier.EIGHT_BIT:
            return f"{ansi.CSI}38;5;{index}m"
        if self.tier is ColorTier.BASIC:
            return f"{ansi.CSI}{ROLE_BASIC['primary']}m"
        return ""

    def _role(self, role: str) -> str:
        if self.tier is ColorTier.BASIC:
            return f"{ansi.CSI}{ROLE_BASIC[role]}m"
        return self.primary(ROLE_256[role])

    @property
    def sub(self) -> str:
        return self._role("sub")

    @property
    def accent(self) -> str:
        return self._role("accent")

    @property
    def ok(self) -> str:
        return self._role("ok")

    @property
    def cmd(self) -> str:
        return self._role("cmd")

    @cached_property
    def gradient(self) -> tuple[str, ...]:
        return tuple(self.primary(index) for index in GRADIENT_256)

    def gradient_at(self, position: int, width: int) -> str:
        """Gradient colour for cell ``position`` of a run ``width`` cells wide."""
        steps = len(self.gradient)
        idx = (position * steps) // max(width, 1)
        return self.gradient[min(max(idx, 0), steps - 1)]

    def cycle(self, i: int) -> str:
        """Gradient colour ``i`` wrapping around the palette."""
        return self.gradient[i % len(self.gradient)]

    def colorize(self, text: str) -> str:
        """Spread the gradient across each line of plain ``text``."""
        if not self.enabled:
            return text
        lines = []
        for line in text.split("\n"):
            width = len(line)
            painted = "".join(
                ch if ch == " " else f"{self.gradient_at(j, width)}{ch}"
                for j, ch in enumerate(line)
            )
            lines.append(painted + self.reset if line.strip() else line)
        return "\n".join(lines)


def get_theme(tier: ColorTier) -> Theme:
    """Return the theme for a colour tier."""
    return Theme(tier)
