"""ANSI escape sequences and an escape-aware tokenizer.

``split_units`` is the single place where text is cut into what the typing
renderer treats as one step: a visible character, a control character, or
a whole escape sequence.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, NamedTuple

from rich.cells import cell_len

ESC = "\x1b"
BEL = "\x07"
CSI = ESC + "["
OSC = ESC + "]"
ST = ESC + "\\"

RESET = CSI + "0m"
BOLD = CSI + "1m"
DIM = CSI + "2m"
CLEAR_LINE = "\r" + CSI + "K"
CLEAR_SCREEN = CSI + "H" + CSI + "2J"
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"

# CSI final bytes are 0x40..0x7E
_FINAL_LOW = "@"
_FINAL_HIGH = "~"


class UnitKind(str, Enum):
    """What a unit of text is, as far as typing is concerned."""

    VISIBLE = "visible"
    CONTROL = "control"
    ESCAPE = "escape"


class Unit(NamedTuple):
    """A run of text that is written in one burst."""

    kind: UnitKind
    text: str


def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A"


def cursor_down(n: int = 1) -> str:
    return f"{CSI}{n}B"


def window_title(title: str) -> str:
    """Set both the tab (OSC 1) and the window (OSC 2) title."""
    return f"{OSC}1;{title}{BEL}{OSC}2;{title}{BEL}"


def _is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 0x20 or code == 0x7F


def _csi_end(text: str, start: int) -> int:
    """Index one past the CSI final byte, or -1 when the sequence is truncated."""
    for j in range(start, len(text)):
        if _FINAL_LOW <= text[j] <= _FINAL_HIGH:
            return j + 1
    return -1


def _osc_end(text: str, start: int) -> int:
    """Index one past the OSC terminator (BEL or ST), or -1 when truncated."""
    j = start
    n = len(text)
    while j < n:
        if text[j] == BEL:
            return j + 1
        if text[j] == ESC and j + 1 < n and text[j + 1] == "\\":
            return j + 2
        j += 1
    return -1


def split_units(text: str) -> Iterator[Unit]:
    """Split ``text`` into visible characters, control characters and escapes.

    A CSI sequence runs from ``ESC [`` to the first byte in ``@``..``~``.
    An OSC sequence runs from ``ESC ]`` to BEL or ``ESC \\``. Any other
    ``ESC x`` pair is a two-character escape. A sequence that is still open
    at the end of the string is yielded as one final unit and the scan stops.
    """
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == ESC:
            if i + 1 >= n:
                yield Unit(UnitKind.ESCAPE, ch)
                return
            intro = text[i + 1]
            if intro == "[":
                end = _csi_end(text, i + 2)
            elif intro == "]":
                end = _osc_end(text, i + 2)
            else:
                end = i + 2
            if end < 0:
                yield Unit(UnitKind.ESCAPE, text[i:])
                return
            yield Unit(UnitKind.ESCAPE, text[i:end])
            i = end
        elif _is_control(ch):
            yield Unit(UnitKind.CONTROL, ch)
            i += 1
        else:
            yield Unit(UnitKind.VISIBLE, ch)
            i += 1


def has_escapes(text: str) -> bool:
    return ESC in text


def is_sgr(sequence: str) -> bool:
    """True for a complete colour/style (SGR) sequence such as ``ESC[1;36m``."""
    return sequence.startswith(CSI) and sequence.endswith("m")


def strip_ansi(text: str) -> str:
    """Remove every escape sequence, keeping visible and control characters."""
    if ESC not in text:
        return text
    return "".join(unit.text for unit in split_units(text) if unit.kind is not UnitKind.ESCAPE)


def visible_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies once escapes are removed."""
    return cell_len(strip_ansi(text))
