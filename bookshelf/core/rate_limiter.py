"""Per-client fixed-window rate limiting for sensitive endpoints."""
from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import HTTPException, Request


class _RateLimiter:
    """Counts hits per key inside a window; expired windows are dropped on the next check."""

    def __init__(self) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        expired = [key for key, (_count, reset) in self._hits.items() if now > reset]
        for key in expired:
            del self._hits[key]

    def check(self, key: str, limit: int, window_seconds: int) -> None:
        if limit <= 0:
            return
        now = time.time()
        with self._lock:
            self._prune(now)
            count, reset = self._hits.get(key, (0, now + window_seconds))
            count += 1
            self._hits[key] = (count, reset)
        if count > limit:
            raise HTTPException(429, "Too many requests. Try again shortly.")

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_limiter = _RateLimiter()


def client_ip(request: Request, *, trust_forwarded: bool = False) -> str:
    """Peer address; X-Forwarded-For is honoured only behind a trusted proxy."""
    if trust_forwarded:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded and forwarded.split(",")[0].strip():
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_ip(
    request: Request,
    scope: str,
    *,
    limit: int,
    window_seconds: int,
    trust_forwarded: bool = False,
) -> None:
    key = f"{scope}:{client_ip(request, trust_forwarded=trust_forwarded)}"
    _limiter.check(key, limit, window_seconds)


def tracked_clients() -> int:
    return _limiter.tracked_keys()


def reset_rate_limits() -> None:
    _limiter.reset()
