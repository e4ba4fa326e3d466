"""Millisecond stopwatch driven by an injectable clock."""

from __future__ import annotations

import time
from typing import Callable, Optional


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class ElapsedTimer:
    """Counts milliseconds since it was started or last reset.

    ``clock`` returns the current time in milliseconds; it defaults to the
    system's monotonic clock.
    """

    def __init__(self, value: int = 0, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _monotonic_ms
        self._start = self._clock() - value

    def elapsed(self) -> int:
        """Milliseconds counted so far."""
        return self._clock() - self._start

    def reset(self, value: int = 0) -> None:
        """Restart counting so that ``elapsed()`` currently equals ``value``."""
        self._start = self._clock() - value

    def __int__(self) -> int:
        return self.elapsed()

    def __iadd__(self, value: int) -> "ElapsedTimer":
        self._start -= value
        return self

    def __isub__(self, value: int) -> "ElapsedTimer":
        self._start += value
        return self