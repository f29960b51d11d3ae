"""
Minimum-interval gate for outbound OpenAlex requests.

OpenAlex asks polite clients to stay under a fixed request rate. The gate
remembers when the last request left; a caller arriving too early sleeps off
the remainder while holding the gate, so concurrent threads leave one at a
time and never closer together than ``interval`` seconds.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RateGate:
    """Fixed-interval gate shared by every request a catalog client sends."""

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_dispatch: Optional[float] = None

    @classmethod
    def from_milliseconds(cls, interval_ms: int, **kwargs) -> "RateGate":
        return cls(interval_ms / 1000.0, **kwargs)

    def wait(self) -> float:
        """Block until this caller may dispatch; returns its dispatch time."""
        with self._lock:
            now = self._clock()
            if self._last_dispatch is not None:
                delay = self._last_dispatch + self.interval - now
                if delay > 0:
                    logger.debug("Throttling outbound request for %.1f ms", delay * 1000)
                    self._sleep(delay)
                    now = max(self._clock(), self._last_dispatch + self.interval)
            self._last_dispatch = now
            return now
