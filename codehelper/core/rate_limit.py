"""Fixed-window request counter keyed by caller id."""
import asyncio
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RateLimitResult:
    success: bool
    limit: int
    remaining: int
    reset: int  # epoch ms when the current window closes

    def retry_after_seconds(self, now_ms: int) -> int:
        """Whole seconds until the window closes (at least 1)."""
        return max(1, -(-(self.reset - now_ms) // 1000))


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """In-process fixed-window limiter.

    Constructed once per application and shared by requests; the window
    table is guarded by an asyncio lock so concurrent hits from one caller
    are counted exactly.
    """

    PRUNE_EVERY = 1000

    def __init__(self, limit: int, window_ms: int, clock: Callable[[], int] = _now_ms):
        if limit < 1 or window_ms < 1:
            raise ValueError("limit and window_ms must be positive")
        self.limit = limit
        self.window_ms = window_ms
        self._clock = clock
        self._windows: dict[str, tuple[int, int]] = {}  # key -> (window_start, count)
        self._lock = asyncio.Lock()
        self._hits = 0

    def now(self) -> int:
        return self._clock()

    async def hit(self, key: str) -> RateLimitResult:
        """Count one request for key. Never raises on an exhausted budget."""
        async with self._lock:
            now = self._clock()
            self._hits += 1
            if self._hits % self.PRUNE_EVERY == 0:
                self._prune(now)

            start, count = self._windows.get(key, (now, 0))
            if now >= start + self.window_ms:
                start, count = now, 0
            reset = start + self.window_ms

            if count >= self.limit:
                self._windows[key] = (start, count)
                return RateLimitResult(success=False, limit=self.limit, remaining=0, reset=reset)

            count += 1
            self._windows[key] = (start, count)
            return RateLimitResult(
                success=True,
                limit=self.limit,
                remaining=self.limit - count,
                reset=reset,
            )

    def _prune(self, now: int) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now >= start + self.window_ms]
        for k in expired:
            del self._windows[k]
