"""Frame timing: per-frame delta, frame-rate capping and FPS logging."""

from __future__ import annotations

import sys
import time
from typing import Callable, TextIO


class FrameTimer:
    """Tracks frame timing with an injectable clock and sleep function."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], None] = time.sleep,
        out: TextIO | None = None,
    ) -> None:
        self._clock = clock
        self._sleeper = sleeper
        self._out = out
        self._last: float | None = None
        self._frame_start: float | None = None
        self._log_start: float | None = None
        self._frames = 0

    def delta(self) -> float:
        """Seconds since the previous call; 0.0 on the first call or if time went back."""
        now = self._clock()
        if self._last is None:
            self._last = now
            return 0.0
        elapsed = now - self._last
        self._last = now
        return max(elapsed, 0.0)

    def sleep(self, target_hz: float) -> float:
        """Sleep out the rest of the frame to hold target_hz; return seconds slept."""
        if target_hz <= 0.0:
            return 0.0
        target = 1.0 / target_hz
        now = self._clock()
        if self._frame_start is None:
            self._frame_start = now
            return 0.0
        elapsed = now - self._frame_start
        slept = 0.0
        if elapsed < target:
            sleep_us = int((target - elapsed) * 1_000_000.0)
            if sleep_us > 0:
                slept = sleep_us / 1_000_000.0
                self._sleeper(slept)
            now = self._clock()
        self._frame_start = now
        return slept

    def log_fps(self) -> str | None:
        """Count a frame; once a second has passed, print and return an FPS line."""
        now = self._clock()
        if self._log_start is None:
            self._log_start = now
        self._frames += 1
        elapsed = now - self._log_start
        if elapsed < 1.0:
            return None
        fps = self._frames / elapsed
        message = f"[timer] {fps:.2f} FPS (avg {elapsed / self._frames * 1000.0:.2f} ms)"
        print(message, file=self._out if self._out is not None else sys.stdout)
        self._log_start = now
        self._frames = 0
        return message