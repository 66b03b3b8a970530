"""Rate limiting wrapper for input and output plugins."""

from __future__ import annotations

import random
import re
import time
from typing import Any, Callable

_SECOND_NS = 1_000_000_000
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _atoi(text: str) -> int:
    return int(text) if _INTEGER.fullmatch(text) else 0


def parse_limit_options(options: str) -> tuple[int, bool]:
    """Return ``(limit, is_percent)`` from ``"10"`` or ``"10%"``."""
    n = options.find("%")
    if n > 0:
        return _atoi(options[:n]), True
    return _atoi(options), False


class Limiter:
    """Drop messages above an absolute per-second rate or outside a percentage.

    A wrapped plugin that paces itself (one with a ``speed_factor`` attribute)
    is slowed down or sped up by a percentage limit instead of losing messages.
    """

    def __init__(
        self,
        plugin: Any,
        options: str,
        *,
        clock: Callable[[], int] = time.monotonic_ns,
        rng: random.Random | None = None,
    ) -> None:
        self.plugin = plugin
        self.limit, self.is_percent = parse_limit_options(options)
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._current_rps = 0
        self._current_time = clock()
        self._self_paced = self.is_percent and hasattr(plugin, "speed_factor")
        if self._self_paced:
            plugin.speed_factor = self.limit / 100

    def is_limited(self) -> bool:
        """Decide whether the next message must be dropped."""
        if self._self_paced:
            return False

        if self.is_percent:
            return self.limit <= self._rng.randrange(100)

        now = self._clock()
        if now - self._current_time > _SECOND_NS:
            self._current_time = now
            self._current_rps = 0

        if self._current_rps >= self.limit:
            return True

        self._current_rps += 1
        return False

    def plugin_write(self, msg: Any) -> int:
        """Pass ``msg`` to the wrapped writer unless it is limited."""
        if self.is_limited():
            return 0
        writer = getattr(self.plugin, "plugin_write", None)
        if writer is None:
            raise BrokenPipeError(f"{self.plugin} does not accept writes")
        return writer(msg)

    def plugin_read(self) -> Any:
        """Read from the wrapped reader; ``None`` when the message is limited."""
        reader = getattr(self.plugin, "plugin_read", None)
        if reader is None:
            raise BrokenPipeError(f"{self.plugin} cannot be read from")
        msg = reader()
        if self.is_limited():
            return None
        return msg

    def close(self) -> None:
        """Close the wrapped plugin if it can be closed."""
        closer = getattr(self.plugin, "close", None)
        if closer is not None:
            closer()

    def __str__(self) -> str:
        flag = "true" if self.is_percent else "false"
        return f"Limiting {self.plugin} to: {self.limit} (isPercent: {flag})"