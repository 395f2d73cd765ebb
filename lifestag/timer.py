"""Millisecond timer."""

from __future__ import annotations

import sys
import time
from typing import Callable, TextIO


class Timer:
    """Measures elapsed milliseconds and signals when a delay has passed."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock if clock is not None else time.monotonic_ns
        self.delay = -1
        self._start = self._clock()

    def init(self, value_ms: int) -> None:
        """Set the delay and start counting from now."""
        self.delay = value_ms
        self._start = self._clock()

    def destroy(self) -> None:
        self.delay = -1

    def update_timer(self, value_ms: int) -> None:
        """Change the delay and start counting again from now."""
        self.delay = value_ms
        self._start = self._clock()

    def time_diff(self) -> int:
        """Milliseconds since the timer was last started."""
        return int((self._clock() - self._start) / 1_000_000)

    def time_over(self) -> bool:
        """True once the delay has passed; the timer then restarts."""
        if self.time_diff() > self.delay:
            self._start = self._clock()
            return True
        return False

    def report(self, stream: TextIO | None = None) -> None:
        out = stream if stream is not None else sys.stdout
        out.write(f"Timer:  {self.time_diff()}")