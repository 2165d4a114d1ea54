"""Frame timing: delta time, total time and optional frame-rate capping."""

from __future__ import annotations

import time as _time
from collections.abc import Callable

FPS = 60
FRAMETIME_MS = 1000 // FPS
MAX_DT = FRAMETIME_MS / 1000.0 * 4


def _make_clock() -> Callable[[], int]:
    start = _time.monotonic()
    return lambda: int((_time.monotonic() - start) * 1000)


def _sleep_ms(ms: int) -> None:
    _time.sleep(ms / 1000.0)


class TimeSystem:
    """Measures the time between frames, in seconds, clamped to MAX_DT."""

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        sleep: Callable[[int], None] | None = None,
        cap_frame_rate: bool = False,
    ) -> None:
        self._clock = clock if clock is not None else _make_clock()
        self._sleep = sleep if sleep is not None else _sleep_ms
        self.cap_frame_rate = cap_frame_rate
        self._last_frame_ms = 0
        self.dt = 0.0
        self.time = 0.0

    def update(self) -> None:
        """Start a new frame, waiting first if the frame rate is capped."""
        elapsed = self._clock() - self._last_frame_ms
        if self.cap_frame_rate and elapsed < FRAMETIME_MS:
            self._sleep(FRAMETIME_MS - elapsed)
        now = self._clock()
        self.dt = min((now - self._last_frame_ms) / 1000.0, MAX_DT)
        self._last_frame_ms = now
        self.time += self.dt