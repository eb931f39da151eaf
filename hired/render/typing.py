"""Typed-output renderer.

Streams text as if it were typed live. Escape sequences are written in one
burst without delay since they only style the text; each visible character
is followed by one typing interval. With the faux cursor enabled a glyph
trails the last typed character and is erased before the line moves on.
"""

from __future__ import annotations

from hired.models import DisplayConfig, resolve_rate
from hired.terminal.ansi import UnitKind, has_escapes, is_sgr, split_units, visible_width
from hired.terminal.session import Terminal
from hired.tools.providers import PvPacer
from hired.utils.exceptions import ExternalToolError
from hired.utils.logging_config import get_logger
from hired.utils.time import Clock

logger = get_logger(__name__)


def typing_interval(rate: object) -> float:
    """Seconds per character for ``rate`` chars/sec (30 cps when invalid)."""
    return 1.0 / resolve_rate(rate)


class TypedRenderer:
    """Types text onto a :class:`Terminal` at a fixed rate."""

    def __init__(
        self,
        terminal: Terminal,
        rate: float,
        use_cursor: bool = False,
        cursor_glyph: str = "▌",
        clock: Clock | None = None,
        pacer: PvPacer | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            terminal: Output terminal
            rate: Characters per second; invalid values fall back to 30
            use_cursor: Draw a faux cursor after each typed character
            cursor_glyph: Glyph used as the faux cursor
            clock: Clock used for the per-character delay
            pacer: Optional external pacer for plain, cursorless text

        """
        self.terminal = terminal
        self.rate = resolve_rate(rate)
        self.interval = 1.0 / self.rate
        self.use_cursor = use_cursor
        self.cursor_glyph = cursor_glyph or "▌"
        self.clock = clock or Clock()
        self.pacer = pacer

        # cells the glyph advances the cursor; escapes inside it take none
        width = visible_width(self.cursor_glyph)
        self._back = "\b" * width
        self._erase = " " * width + self._back

    @classmethod
    def from_config(
        cls,
        terminal: Terminal,
        config: DisplayConfig,
        clock: Clock | None = None,
        pacer: PvPacer | None = None,
    ) -> TypedRenderer:
        return cls(
            terminal,
            rate=config.speed,
            use_cursor=config.use_cursor,
            cursor_glyph=config.cursor_glyph,
            clock=clock,
            pacer=pacer,
        )

    def _delegate_fd(self, text: str) -> int | None:
        """File descriptor to hand to the pacer, or None to type in-process."""
        if self.pacer is None or self.use_cursor or has_escapes(text):
            return None
        return self.terminal.fileno()

    def type_out(self, text: str) -> None:
        """Type ``text``; never raises on malformed escape sequences."""
        if not text:
            return

        fd = self._delegate_fd(text)
        if self.pacer is not None and fd is not None:
            try:
                self.pacer.pace(text, self.rate, self.terminal.stream, fd)
                return
            except ExternalToolError as e:
                logger.warning("%s; typing without pv", e)

        write = self.terminal.write
        cursor_pending = False
        for unit in split_units(text):
            if unit.kind is UnitKind.VISIBLE:
                if self.use_cursor:
                    write(unit.text + self.cursor_glyph)
                    self.clock.sleep(self.interval)
                    write(self._back)
                    cursor_pending = True
                else:
                    write(unit.text)
                    self.clock.sleep(self.interval)
                continue

            # colour changes leave the glyph for the next character to overwrite
            if cursor_pending and not is_sgr(unit.text):
                write(self._erase)
                cursor_pending = False
            write(unit.text)

        if cursor_pending:
            write(self._erase)

    def type_line(self, text: str) -> None:
        """Type ``text`` and end the line."""
        self.type_out(text)
        self.terminal.write("\n")
