"""Time/clock abstraction to aid testability and deterministic sleeps."""

from __future__ import annotations

import time as _time


class Clock:
    """Clock abstraction to aid testability."""

    def sleep(self, seconds: float) -> None:
        """Block for the specified number of seconds."""
        if seconds > 0:
            _time.sleep(seconds)
