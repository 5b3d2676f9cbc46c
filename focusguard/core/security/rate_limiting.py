"""
Rate Limiting Module

Thread-safe in-memory sliding window rate limiter.
For production with multiple workers, replace with Redis-based implementation.
"""

import time
from collections import defaultdict
from threading import Lock
from typing import Callable, Dict, List, Optional

from focusguard.core.security.constants import DEFAULT_RATE_LIMIT, DEFAULT_RATE_WINDOW
from focusguard.core.security.models import RateLimitDecision


class RateLimiter:
    """
    Sliding window request counter keyed by caller identifier.

    Each identifier keeps the timestamps of its admitted requests. A request
    at time T counts only the history inside (T - window, T]. The check and
    the record of an admitted request happen under one lock, so concurrent
    callers cannot both slip past the ceiling.
    """

    def __init__(
        self,
        limit: int = DEFAULT_RATE_LIMIT,
        window: float = DEFAULT_RATE_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window <= 0:
            raise ValueError("window must be positive")
        self._limit = limit
        self._window = float(window)
        self._clock = clock
        self._history: Dict[str, List[float]] = defaultdict(list)
        self._lock = Lock()
        self._cleanup_counter = 0
        self._cleanup_threshold = 1000  # Cleanup every N checks

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window(self) -> float:
        return self._window

    def _cleanup_expired(self, now: float) -> None:
        """Drop identifiers whose whole history has left the window."""
        window_start = now - self._window
        expired_keys = [
            key for key, stamps in self._history.items()
            if all(ts <= window_start for ts in stamps)
        ]
        for key in expired_keys:
            del self._history[key]

    def _live(self, identifier: str, now: float) -> List[float]:
        # History may be out of order after clock anomalies; filter, never pop.
        window_start = now - self._window
        stamps = [ts for ts in self._history[identifier] if ts > window_start]
        self._history[identifier] = stamps
        return [ts for ts in stamps if ts <= now]

    def check(self, identifier: str, now: Optional[float] = None) -> RateLimitDecision:
        """
        Check the limit for ``identifier`` and record the request if allowed.

        Returns:
            RateLimitDecision with the remaining budget and seconds until
            the oldest live request expires.
        """
        if now is None:
            now = self._clock()

        with self._lock:
            # Periodic cleanup
            self._cleanup_counter += 1
            if self._cleanup_counter >= self._cleanup_threshold:
                self._cleanup_expired(now)
                self._cleanup_counter = 0

            live = self._live(identifier, now)

            if len(live) >= self._limit:
                reset_after = min(live) + self._window - now
                return RateLimitDecision(False, 0, max(reset_after, 0.0))

            self._history[identifier].append(now)
            live.append(now)
            reset_after = min(live) + self._window - now
            return RateLimitDecision(True, self._limit - len(live), max(reset_after, 0.0))

    def is_limited(self, identifier: str, now: Optional[float] = None) -> bool:
        """Return True if the request is over the limit. Allowed requests are recorded."""
        return not self.check(identifier, now).allowed

    def record(self, identifier: str, now: Optional[float] = None) -> None:
        """Record a request without checking the limit."""
        if now is None:
            now = self._clock()
        with self._lock:
            self._history[identifier].append(now)

    def count(self, identifier: str, now: Optional[float] = None) -> int:
        """Number of live requests for ``identifier``."""
        if now is None:
            now = self._clock()
        with self._lock:
            if identifier not in self._history:
                return 0
            return len(self._live(identifier, now))

    def reset(self, identifier: Optional[str] = None) -> None:
        """Forget the history of one identifier, or of all of them."""
        with self._lock:
            if identifier is None:
                self._history.clear()
            else:
                self._history.pop(identifier, None)
