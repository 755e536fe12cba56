"""Fixed-window request throttling keyed by client IP."""
from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Tuple

from fastapi import Request

from coinboard.core.config import get_settings
from coinboard.core.errors import TooManyRequestsError


class RateLimiter:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._windows: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def hit(self, key: str, limit: int, window_seconds: int) -> bool:
        """Count one hit for ``key``; False once the window's budget is spent."""
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            count, window_end = self._windows.get(key, (0, now + window_seconds))
            count += 1
            self._windows[key] = (count, window_end)
            return count <= limit

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, (_, window_end) in self._windows.items() if now >= window_end]
        for key in expired:
            del self._windows[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


_limiter = RateLimiter()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def login_rate_limit(request: Request) -> None:
    """FastAPI dependency throttling login attempts per client IP."""
    settings = get_settings()
    if settings.login_rate_limit <= 0:
        return
    key = f"session:login:{client_ip(request)}"
    if not _limiter.hit(key, settings.login_rate_limit, settings.login_rate_window_seconds):
        raise TooManyRequestsError(
            "Too many login attempts. Try again shortly.",
            retry_after=settings.login_rate_window_seconds,
        )


def reset_rate_limits() -> None:
    _limiter.reset()
