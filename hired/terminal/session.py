"""Terminal output and guaranteed restore of terminal state.

:class:`Terminal` is the single writer for the animation. The
:func:`terminal_session` scope hides the cursor on entry and, on every exit
path (normal return, exception, Ctrl-C, SIGTERM/SIGHUP), resets colour
attributes, shows the cursor again and ends the line.
"""

from __future__ import annotations

import contextlib
import signal
import threading
from typing import IO, Any, Callable, Iterator

from hired.models import TerminalProfile
from hired.terminal import ansi
from hired.terminal.theme import Theme, get_theme
from hired.utils.exceptions import TerminalError
from hired.utils.logging_config import get_logger

logger = get_logger(__name__)

_EXIT_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig
)


class Terminal:
    """Writes to the output stream and knows what the terminal can do."""

    def __init__(
        self,
        stream: IO[str],
        profile: TerminalProfile,
        theme: Theme | None = None,
    ) -> None:
        self.stream = stream
        self.profile = profile
        self.theme = theme or get_theme(profile.color_tier)

    @property
    def columns(self) -> int:
        return self.profile.columns

    def write(self, text: str) -> None:
        if not text:
            return
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as e:
            msg = "Output stream is no longer writable"
            raise TerminalError(msg, {"error": str(e)}) from e

    def line(self, text: str = "") -> None:
        self.write(text + "\n")

    def fileno(self) -> int | None:
        """File descriptor behind the stream, if there is a real one."""
        try:
            return self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def clear_screen(self) -> None:
        if self.profile.interactive:
            self.write(ansi.CLEAR_SCREEN)

    def set_title(self, title: str) -> None:
        if self.profile.interactive:
            self.write(ansi.window_title(title))

    def hide_cursor(self) -> None:
        if self.profile.can_hide_cursor:
            self.write(ansi.HIDE_CURSOR)

    def restore(self) -> None:
        """Reset attributes, show the cursor and finish the current line."""
        restore = self.theme.reset
        if self.profile.can_hide_cursor:
            restore += ansi.SHOW_CURSOR
        try:
            self.write(restore + "\n")
        except TerminalError as e:
            logger.debug("Could not restore terminal state: %s", e)


def _raise_exit(signum: int, _frame: Any) -> None:
    raise SystemExit(128 + signum)


def _install_exit_handlers() -> dict[int, Callable[..., Any] | int | None]:
    """Turn termination signals into SystemExit so ``finally`` blocks run."""
    if threading.current_thread() is not threading.main_thread():
        return {}
    previous: dict[int, Callable[..., Any] | int | None] = {}
    for sig in _EXIT_SIGNALS:
        try:
            previous[sig] = signal.signal(sig, _raise_exit)
        except (OSError, ValueError) as e:
            logger.debug("Cannot handle signal %s: %s", sig, e)
    return previous


def _restore_handlers(previous: dict[int, Callable[..., Any] | int | None]) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler if handler is not None else signal.SIG_DFL)


@contextlib.contextmanager
def terminal_session(terminal: Terminal) -> Iterator[Terminal]:
    """Hide the cursor for the duration of the scope; always restore it."""
    previous = _install_exit_handlers()
    try:
        terminal.hide_cursor()
        yield terminal
    finally:
        _restore_handlers(previous)
        terminal.restore()
