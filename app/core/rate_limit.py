# Rate limiting logic
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from fastapi import Request

from app.core.config import settings
from app.core.exceptions import TooManyRequestsError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedWindow:
    """A named window allowing `limit` requests every `window_seconds`."""

    name: str
    limit: int
    window_seconds: float


@dataclass(frozen=True)
class RateLimitExceeded:
    window: FixedWindow
    retry_after: float


class FixedWindowRateLimiter:
    """
    Per-client fixed-window counters.

    A client's window opens on its first hit and its count resets once
    `window_seconds` have passed. A request is rejected if any window is
    already at its limit; otherwise every window is incremented.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = 60.0):
        self._clock = clock
        self._sweep_interval = sweep_interval
        # {(client_id, window_name): (window_started_at, count, window_seconds)}
        self._counters: Dict[Tuple[str, str], Tuple[float, int, float]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._counters)

    def hit(self, client_id: str, windows: Iterable[FixedWindow]) -> Optional[RateLimitExceeded]:
        """Count one request for `client_id`. Returns the exceeded window, or None if allowed."""
        windows = list(windows)
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            current: List[Tuple[FixedWindow, float, int]] = []

            for window in windows:
                started_at, count, _ = self._counters.get((client_id, window.name), (now, 0, 0))
                if now - started_at >= window.window_seconds:
                    started_at, count = now, 0

                if count >= window.limit:
                    return RateLimitExceeded(
                        window=window,
                        retry_after=max(0.0, started_at + window.window_seconds - now),
                    )
                current.append((window, started_at, count))

            for window, started_at, count in current:
                self._counters[(client_id, window.name)] = (started_at, count + 1, window.window_seconds)
        return None

    def _sweep(self, now: float) -> None:
        # Caller holds the lock. Expired windows would be reset on next hit anyway
        expired = [
            key
            for key, (started_at, _, window_seconds) in self._counters.items()
            if now - started_at >= window_seconds
        ]
        for key in expired:
            del self._counters[key]
        self._last_sweep = now
        if expired:
            LOGGER.debug("Dropped %d expired rate-limit counters", len(expired))

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()


limiter = FixedWindowRateLimiter()


def _get_client_id(request: Request) -> str:
    """Get client identifier (IP address)."""
    if request.client:
        return request.client.host
    return "unknown"


def configured_windows() -> List[FixedWindow]:
    return [
        FixedWindow(
            name="short",
            limit=settings.RATE_LIMIT_SHORT_REQUESTS,
            window_seconds=settings.RATE_LIMIT_SHORT_WINDOW_SECONDS,
        ),
        FixedWindow(
            name="long",
            limit=settings.RATE_LIMIT_LONG_REQUESTS,
            window_seconds=settings.RATE_LIMIT_LONG_WINDOW_SECONDS,
        ),
    ]


def check_rate_limit(request: Request):
    """Check if the request exceeds a rate limit window. Raises TooManyRequestsError if so."""
    client_id = _get_client_id(request)

    exceeded = limiter.hit(client_id, configured_windows())
    if exceeded is None:
        return

    window = exceeded.window
    LOGGER.warning("Rate limit '%s' exceeded for client %s", window.name, client_id)
    raise TooManyRequestsError(
        f"Rate limit exceeded: {window.limit} requests per {window.window_seconds:g} seconds",
        headers={"Retry-After": str(max(1, math.ceil(exceeded.retry_after)))},
    )
