import threading
import time
from collections import deque


class SlidingWindowRateLimiter:
    """
    In-process sliding-window limiter keyed by client and path.
    State lives in this process only; run one instance per worker.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: dict[str, deque[float]] = {}
        self._longest_window = 0
        self._last_sweep = clock()

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """Record a hit for ``key``. Returns (allowed, retry_after_seconds)."""
        now = self._clock()
        with self._lock:
            self._longest_window = max(self._longest_window, window_seconds)
            if now - self._last_sweep >= self._longest_window:
                self._sweep(now)
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] >= window_seconds:
                hits.popleft()
            if len(hits) >= limit:
                retry_after = max(1, int(window_seconds - (now - hits[0])))
                return False, retry_after
            hits.append(now)
            return True, 0

    def _sweep(self, now: float) -> None:
        # Caller holds the lock. Keys idle for a full window carry no live hits.
        stale = [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= self._longest_window]
        for k in stale:
            del self._hits[k]
        self._last_sweep = now

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()


rate_limiter = SlidingWindowRateLimiter()
