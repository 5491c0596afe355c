"""Counter stores for fixed-window rate limiting.

A store counts hits per key within a window. The in-memory store is per
process; the Redis store shares counters between processes and hosts.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol

import redis.asyncio as redis_asyncio

from photoprint.config import Settings
from photoprint.utils.datetime_utils import Clock, utc_now


class RateLimitStore(Protocol):
    """Counter store used by RateLimitMiddleware."""

    async def hit(self, key: str, window: timedelta) -> int:
        """Count a hit for key and return the number of hits in the current window."""
        ...

    async def reset(self, key: str | None = None) -> None:
        """Forget counters for key (or all keys)."""
        ...


@dataclass
class _Window:
    count: int
    started_at_s: float


class InMemoryRateLimitStore:
    """Process-local store. Counters are lost on restart.

    Windows are kept in start order (a restarted window is moved to the end),
    so expired windows are always at the front and are evicted on every hit.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock
        self._windows: dict[str, _Window] = {}

    async def hit(self, key: str, window: timedelta) -> int:
        now = self.clock().timestamp()
        window_s = window.total_seconds()
        self._evict_expired(now, window_s)

        current = self._windows.get(key)
        if current is None or now - current.started_at_s > window_s:
            self._windows.pop(key, None)
            current = _Window(count=0, started_at_s=now)
            self._windows[key] = current

        current.count += 1
        return current.count

    def _evict_expired(self, now: float, window_s: float) -> None:
        while self._windows:
            key, oldest = next(iter(self._windows.items()))
            if now - oldest.started_at_s <= window_s:
                break
            del self._windows[key]

    def __len__(self) -> int:
        return len(self._windows)

    async def reset(self, key: str | None = None) -> None:
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)


class RedisRateLimitStore:
    """Redis-backed store using INCR with a TTL set on the first hit."""

    KEY_PREFIX = "RateLimit:"

    def __init__(self, client: redis_asyncio.Redis) -> None:
        self.client = client

    async def hit(self, key: str, window: timedelta) -> int:
        full_key = f"{self.KEY_PREFIX}{key}"
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.incr(full_key)
            pipe.expire(full_key, int(window.total_seconds()), nx=True)
            count, _ = await pipe.execute()
        return int(count)

    async def reset(self, key: str | None = None) -> None:
        if key is not None:
            await self.client.delete(f"{self.KEY_PREFIX}{key}")
            return
        async for full_key in self.client.scan_iter(match=f"{self.KEY_PREFIX}*"):
            await self.client.delete(full_key)


def build_rate_limit_store(settings: Settings) -> RateLimitStore:
    """Create the store selected by settings.rate_limit_backend."""
    if settings.rate_limit_backend == "redis":
        return RedisRateLimitStore(redis_asyncio.from_url(settings.redis_url))
    if settings.rate_limit_backend == "memory":
        return InMemoryRateLimitStore()
    raise ValueError(f"Unknown rate limit backend: {settings.rate_limit_backend!r}")
