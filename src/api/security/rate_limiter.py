"""
Fixed-window rate limiter.

One ``RateLimiter`` lives on ``app.state`` for the lifetime of the
application. Counters are process-local and disappear on restart.
"""

import math
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional

from starlette.requests import Request


@dataclass(frozen=True)
class RateLimitPolicy:
    name: str
    window_seconds: float
    max_requests: int
    skip_successful_requests: bool = False
    skip_failed_requests: bool = False

    def skips(self, status_code: int) -> bool:
        """True when a response with this status should not use up a slot."""
        if 200 <= status_code < 300:
            return self.skip_successful_requests
        if status_code >= 400:
            return self.skip_failed_requests
        return False


AUTH_POLICY = RateLimitPolicy("auth", window_seconds=15 * 60, max_requests=5)
API_POLICY = RateLimitPolicy("api", window_seconds=15 * 60, max_requests=100)
PROFILE_POLICY = RateLimitPolicy("profile", window_seconds=60 * 60, max_requests=10)
PASSWORD_RESET_POLICY = RateLimitPolicy("password_reset", window_seconds=60 * 60, max_requests=3)


@dataclass
class RateLimitEntry:
    count: int
    reset_time: float
    window_seconds: float


@dataclass(frozen=True)
class RateLimitResult:
    success: bool
    limit: int
    remaining: int
    reset_time: float
    retry_after: Optional[int] = None

    def headers(self) -> Dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(math.ceil(self.reset_time)),
        }
        if not self.success and self.retry_after is not None:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class RateLimiter:
    """
    Per-key request counters over fixed windows.

    A check counts the request before deciding (pre-increment), so the
    (N+1)-th request inside a window is the first one rejected. Policies that
    skip successful or failed responses hand the slot back through
    ``record_outcome`` once the handler's status is known.

    All map access happens under one lock; check-and-increment is atomic
    per key. Every check also sweeps expired entries, which is linear in the
    number of live keys.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.clock = clock
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = Lock()

    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        slot = _slot(key, policy)
        with self._lock:
            now = self.clock()
            self._sweep(now)

            entry = self._entries.get(slot)
            if entry is None or now >= entry.reset_time:
                entry = RateLimitEntry(
                    count=0,
                    reset_time=now + policy.window_seconds,
                    window_seconds=policy.window_seconds,
                )
                self._entries[slot] = entry

            entry.count += 1
            success = entry.count <= policy.max_requests
            remaining = max(0, policy.max_requests - entry.count)
            retry_after = None
            if not success:
                retry_after = max(0, math.ceil(entry.reset_time - now))

            return RateLimitResult(
                success=success,
                limit=policy.max_requests,
                remaining=remaining,
                reset_time=entry.reset_time,
                retry_after=retry_after,
            )

    def record_outcome(self, key: str, policy: RateLimitPolicy, status_code: int) -> None:
        if not policy.skips(status_code):
            return
        with self._lock:
            entry = self._entries.get(_slot(key, policy))
            if entry is not None and entry.count > 0 and self.clock() < entry.reset_time:
                entry.count -= 1

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if now >= entry.reset_time]
        for key in expired:
            del self._entries[key]


def _slot(key: str, policy: RateLimitPolicy) -> str:
    # Policies sharing a path (GET vs PATCH /user/profile) keep separate windows
    return f"{policy.name}|{key}"


def client_key(request: Request, user_id: Optional[str] = None) -> str:
    """
    Rate-limit key: ``{identity}:{path}``.

    Identity is the authenticated user id, else the first address of
    X-Forwarded-For, else the peer address, else "unknown".
    """
    identity = user_id or client_ip(request) or "unknown"
    return f"{identity}:{request.url.path}"


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
    if forwarded:
        return forwarded
    if request.client is not None and request.client.host:
        return request.client.host
    return None
