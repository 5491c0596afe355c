"""Rate limiting package."""

from photoprint.services.rate_limit.store import (
    InMemoryRateLimitStore,
    RateLimitStore,
    RedisRateLimitStore,
    build_rate_limit_store,
)

__all__ = [
    "InMemoryRateLimitStore",
    "RateLimitStore",
    "RedisRateLimitStore",
    "build_rate_limit_store",
]
