"""Running latency/size statistics with periodic log reports."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


class GorStat:
    """Tracks latest, mean, max and count of reported values."""

    def __init__(self, stat_name: str, rate_ms: int, enabled: bool = True) -> None:
        self.stat_name = stat_name
        self.rate_ms = rate_ms
        self.enabled = enabled
        self.latest = 0
        self.mean = 0
        self.max = 0
        self.count = 0
        self._lock = threading.Lock()

    def write(self, latest: int) -> None:
        """Record a value; ignored when statistics are disabled."""
        if not self.enabled:
            return
        with self._lock:
            if latest > self.max:
                self.max = latest
            if latest != 0:
                self.mean = _trunc_div(self.mean * self.count + latest, self.count + 1)
            self.latest = latest
            self.count += 1

    def reset(self) -> None:
        """Clear all collected values."""
        with self._lock:
            self.latest = 0
            self.max = 0
            self.mean = 0
            self.count = 0

    def start_reporting(self) -> threading.Event:
        """Log the statistics every ``rate_ms`` in a background thread.

        Returns an event that stops reporting once set. When statistics are
        disabled nothing runs and the returned event is already set.
        """
        stop = threading.Event()
        if not self.enabled:
            stop.set()
            return stop
        thread = threading.Thread(
            target=self._report, args=(stop,), name=f"stats-{self.stat_name}", daemon=True
        )
        thread.start()
        return stop

    def _report(self, stop: threading.Event) -> None:
        logger.info("%s:latest,mean,max,count,count/second,gcount", self.stat_name)
        while not stop.is_set():
            logger.info("%s", self)
            self.reset()
            stop.wait(self.rate_ms / 1000)

    def __str__(self) -> str:
        with self._lock:
            # Reporting windows shorter than a second count as one second.
            seconds = max(self.rate_ms // 1000, 1)
            values = (
                self.latest,
                self.mean,
                self.max,
                self.count,
                _trunc_div(self.count, seconds),
                threading.active_count(),
            )
        return f"{self.stat_name}:" + ",".join(str(v) for v in values)