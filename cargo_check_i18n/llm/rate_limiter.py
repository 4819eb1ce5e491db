"""Rate limiting for translation API dispatches.

Responsibilities:
- Enforce one global minimum interval between outgoing requests.
- Serialize concurrent callers behind the same clock so the total request
  rate never exceeds the configured requests-per-second value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from time import monotonic, sleep
from typing import Callable


@dataclass(slots=True)
class RateLimiter:
    """Thread-safe minimum-interval gate shared by every stream worker."""

    min_interval_seconds: float = 0.125
    clock: Callable[[], float] = monotonic
    sleeper: Callable[[float], None] = sleep
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _last_dispatch_at: float | None = None

    @classmethod
    def from_rate(
        cls,
        requests_per_second: float,
        *,
        clock: Callable[[], float] = monotonic,
        sleeper: Callable[[float], None] = sleep,
    ) -> RateLimiter:
        """Build a limiter whose interval is `1 / max(requests_per_second, 1)`."""

        return cls(
            min_interval_seconds=1.0 / max(requests_per_second, 1.0),
            clock=clock,
            sleeper=sleeper,
        )

    def wait(self) -> float:
        """Block until the next dispatch is allowed and return its timestamp.

        The lock is held while sleeping, so waiting callers queue in turn.
        """

        with self._lock:
            now = self.clock()
            if self._last_dispatch_at is not None:
                wait_seconds = self._last_dispatch_at + self.min_interval_seconds - now
                if wait_seconds > 0.0:
                    self.sleeper(wait_seconds)
                    now = self.clock()
            self._last_dispatch_at = now
            return now
