"""ASGI middleware."""

from photoprint.middleware.rate_limit import DEFAULT_RULES, RateLimitMiddleware, RateLimitRule

__all__ = [
    "DEFAULT_RULES",
    "RateLimitMiddleware",
    "RateLimitRule",
]
