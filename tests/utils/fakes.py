"""Deterministic stand-ins for the clock and the output stream."""

from __future__ import annotations

import io
import threading

from hired.utils.time import Clock


class FakeClock(Clock):
    """Records requested sleeps instead of blocking."""

    def __init__(self) -> None:
        self.sleeps: list[float] = []
        self._lock = threading.Lock()

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self.sleeps.append(seconds)

    @property
    def total(self) -> float:
        return sum(s for s in self.sleeps if s > 0)


class RecordingStream(io.StringIO):
    """StringIO that also keeps every individual write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[str] = []
        self.flushes = 0

    def write(self, s: str) -> int:
        self.writes.append(s)
        return super().write(s)

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


class BrokenStream(io.StringIO):
    """A stream whose reader has gone away."""

    def write(self, s: str) -> int:
        raise BrokenPipeError(32, "Broken pipe")
