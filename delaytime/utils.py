import logging
import math
import time
from collections import deque

from .config import DEFAULT_TAP_RESET_MS, DEFAULT_TAP_WINDOW

logger = logging.getLogger(__name__)


class TapTempo:
    """Collects tap times and computes BPM as 60 / average interval.

    Timestamps are monotonic clock readings in seconds. A new session starts
    when the time between taps exceeds reset_ms. Only the last `window`
    intervals of a session are averaged so the estimate follows tempo changes.
    """

    def __init__(self, reset_ms: int = DEFAULT_TAP_RESET_MS, window: int = DEFAULT_TAP_WINDOW):
        if reset_ms <= 0:
            raise ValueError(f"reset_ms must be positive, got {reset_ms}")
        if window < 1:
            raise ValueError(f"window must be at least 1, got {window}")
        self.reset_ms = reset_ms
        self.window = window
        self._last = None  # seconds
        self._count = 0
        self._intervals = deque(maxlen=window)

    def tap(self, now: float | None = None) -> float | None:
        if now is None:
            now = time.monotonic()

        # slack keeps float noise on a gap equal to the timeout inside the session
        if self._last is None or (now - self._last) > self.reset_ms / 1000 + 1e-9:
            if self._last is not None:
                logger.debug("Tap session timed out after %.0f ms", (now - self._last) * 1000)
            self._start_session(now)
            return None

        interval = now - self._last
        self._last = max(self._last, now)
        self._count += 1
        # zero, negative or overflowing intervals never enter the window
        if interval > 0 and math.isfinite(60.0 / interval):
            self._intervals.append(interval)
        else:
            logger.debug("Ignoring degenerate tap interval %.6f s", interval)
        return self.tempo()

    def tempo(self) -> float | None:
        if not self._intervals:
            return None
        avg = sum(self._intervals) / len(self._intervals)
        return 60.0 / avg

    def reset(self):
        self._last = None
        self._count = 0
        self._intervals.clear()

    def tap_count(self) -> int:
        return self._count

    def _start_session(self, now: float):
        self._intervals.clear()
        self._last = now
        self._count = 1
        logger.debug("Tap session started")
