"""Progress bar, spinner and single-line effects.

All of these redraw one line in place (carriage return + clear to end of
line) in fixed-iteration loops. The bar tick follows the typing speed,
clamped so that extreme speeds neither freeze nor hide the animation.
"""

from __future__ import annotations

import threading

from hired.models import DisplayConfig, resolve_rate
from hired.terminal import ansi
from hired.terminal.session import Terminal
from hired.terminal.theme import COLLAPSE_SHADE, PULSE_SHADES, SHIMMER_SHADES
from hired.utils.logging_config import get_logger
from hired.utils.time import Clock

logger = get_logger(__name__)

MIN_TICK = 0.010
MAX_TICK = 0.060
TICK_BUDGET = 0.9  # tick = TICK_BUDGET / rate before clamping
MIN_BAR_WIDTH = 10
BAR_MARGIN = 10

BAR_FILLED = "━"
BAR_EMPTY = "·"
RULE_CHAR = "─"
SPINNER_FRAMES = "⠋⠙⠸⠴⠦⠇"
SPINNER_INTERVAL = 0.08
FADE_FRAME = 0.08
PULSE_FRAME = 0.06
COLLAPSE_FRAME = 0.03
SHIMMER_FRAME = 0.06


def filled_width(i: int, steps: int, width: int) -> int:
    """Filled cells at iteration ``i`` of ``steps`` (0 at the start, ``width`` at the end)."""
    steps = max(1, steps)
    i = min(max(i, 0), steps)
    return (width * i) // steps


def percent(i: int, steps: int) -> int:
    """Displayed percentage at iteration ``i``; exactly 100 at ``i == steps``."""
    steps = max(1, steps)
    i = min(max(i, 0), steps)
    return (100 * i) // steps


def bar_tick(rate: object) -> float:
    """Seconds per bar iteration for a typing ``rate``."""
    tick = TICK_BUDGET / resolve_rate(rate)
    return min(max(tick, MIN_TICK), MAX_TICK)


def bar_width(columns: int) -> int:
    return max(MIN_BAR_WIDTH, columns - BAR_MARGIN)


class Animator:
    """Draws the animated pieces of the scene onto a terminal."""

    def __init__(
        self,
        terminal: Terminal,
        rate: float,
        quiet_border: bool = False,
        clock: Clock | None = None,
    ) -> None:
        self.terminal = terminal
        self.theme = terminal.theme
        self.tick = bar_tick(rate)
        self.quiet_border = quiet_border
        self.clock = clock or Clock()

    @classmethod
    def from_config(
        cls,
        terminal: Terminal,
        config: DisplayConfig,
        clock: Clock | None = None,
    ) -> Animator:
        return cls(terminal, config.speed, config.quiet_border, clock)

    def _frame(self, text: str, delay: float) -> None:
        self.terminal.write(ansi.CLEAR_LINE + text)
        self.clock.sleep(delay)

    def bar_frame(self, i: int, steps: int, width: int) -> str:
        """One frame of the gradient bar, without the leading line clear."""
        theme = self.theme
        filled = filled_width(i, steps, width)
        segment = "".join(f"{theme.gradient_at(j, width)}{BAR_FILLED}" for j in range(filled))
        remain = BAR_EMPTY * (width - filled)
        return f"[{segment}{theme.sub}{remain}]{theme.reset} {percent(i, steps):3d}%"

    def gradient_bar(self, steps: int = 30) -> None:
        """Fill a full-width gradient bar in ``steps`` redraws, then end the line."""
        steps = max(1, steps)
        width = bar_width(self.terminal.columns)
        for i in range(steps + 1):
            self._frame(self.bar_frame(i, steps, width), self.tick)
        self.terminal.write("\n")

    def progress_with_caption(self, caption: str, steps: int = 30) -> None:
        """Caption, bar, then collapse the bar into a check-mark pill and clear it."""
        theme = self.theme
        self.terminal.line(f"{theme.sub}{caption}{theme.reset}")
        self.gradient_bar(steps)

        self.terminal.write(ansi.cursor_up(1))
        width = bar_width(self.terminal.columns)
        step = max(width // 8, 1)
        collapse = theme.primary(COLLAPSE_SHADE)
        for remaining in range(width, -1, -step):
            self._frame(f"[{collapse}{BAR_FILLED * remaining}{theme.reset}]", COLLAPSE_FRAME)

        shades = [theme.primary(shade) for shade in SHIMMER_SHADES] + [theme.ok]
        for shade in shades:
            self._frame(
                f"{shade}[{theme.bold}✓{theme.reset}] {theme.sub}All set{theme.reset}",
                SHIMMER_FRAME,
            )

        self.clock.sleep(0.20)
        self._frame(f"{theme.dim}[{theme.bold}✓{theme.reset}] All set{theme.reset}", 0.15)
        self.terminal.write(ansi.CLEAR_LINE + ansi.cursor_down(1))

    def spinner(self, task_seconds: float) -> None:
        """Spin while a background placeholder task runs for ``task_seconds``."""
        done = threading.Event()

        def placeholder_task() -> None:
            try:
                self.clock.sleep(task_seconds)
            finally:
                done.set()

        worker = threading.Thread(target=placeholder_task, name="hired-loading", daemon=True)
        worker.start()
        i = 0
        while not done.is_set():
            frame = SPINNER_FRAMES[i % len(SPINNER_FRAMES)]
            self.terminal.write(f"\r{self.theme.cycle(i)}[{frame}]{self.theme.reset} ")
            i += 1
            done.wait(SPINNER_INTERVAL)
        worker.join()
        self.terminal.write(ansi.CLEAR_LINE)
        logger.debug("Spinner stopped after %d frames", i)

    def fade_in_line(self, text: str) -> None:
        """Dim, normal, then bold; only the last frame stays."""
        theme = self.theme
        self._frame(f"{theme.dim}{text}", FADE_FRAME)
        self._frame(f"{theme.reset}{text}", FADE_FRAME)
        self.terminal.write(f"{ansi.CLEAR_LINE}{theme.bold}{text}{theme.reset}\n")

    def pulse_line(self, text: str) -> None:
        """Pulse ``text`` through three gradient shades, ending on the last."""
        theme = self.theme
        *frames, last = PULSE_SHADES
        for shade in frames:
            self._frame(f"{theme.primary(shade)}{text}{theme.reset}", PULSE_FRAME)
        self.terminal.write(f"{ansi.CLEAR_LINE}{theme.primary(last)}{text}{theme.reset}\n")

    def soft_rule(self) -> None:
        """Full-width gradient rule followed by a blank line."""
        if self.quiet_border:
            return
        line = "".join(f"{self.theme.cycle(i)}{RULE_CHAR}" for i in range(self.terminal.columns))
        self.terminal.write(f"{line}\n{self.theme.reset}\n")

    def center(self, text: str) -> None:
        """Write ``text`` centred on its own line; escapes do not count towards width."""
        pad = max(0, (self.terminal.columns - ansi.visible_width(text)) // 2)
        self.terminal.line(" " * pad + text)
