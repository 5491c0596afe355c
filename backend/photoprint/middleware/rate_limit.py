"""Rate limiting for state-changing API requests.

Only POST/PUT/DELETE requests under /api are counted. Photo uploads are
exempt so that customers can upload hundreds of photos in one session.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from photoprint.services.rate_limit import RateLimitStore

logger = structlog.get_logger(__name__)

LIMITED_METHODS = frozenset({"POST", "PUT", "DELETE"})
FALLBACK_CLIENT_ADDRESS = "127.0.0.1"


@dataclass(frozen=True)
class RateLimitRule:
    """Limit for paths starting with prefix. limit=None exempts them."""

    prefix: str
    limit: int | None


# First matching prefix wins
DEFAULT_RULES: tuple[RateLimitRule, ...] = (
    RateLimitRule("/api/v1/upload", None),
    RateLimitRule("/api/v1/orders", 10),  # Order spam
    RateLimitRule("/api/v1/auth", 5),  # Brute force
)


def client_address(request: Request) -> str:
    """First X-Forwarded-For address, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return FALLBACK_CLIENT_ADDRESS


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        store: RateLimitStore,
        window: timedelta,
        default_limit: int,
        rules: Sequence[RateLimitRule] = DEFAULT_RULES,
    ) -> None:
        super().__init__(app)
        self.store = store
        self.window = window
        self.default_limit = default_limit
        self.rules = tuple(rules)

    def limit_for(self, path: str) -> int | None:
        for rule in self.rules:
            if path.startswith(rule.prefix):
                return rule.limit
        return self.default_limit

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not path.startswith("/api") or request.method not in LIMITED_METHODS:
            return await call_next(request)

        limit = self.limit_for(path)
        if limit is None:
            return await call_next(request)

        address = client_address(request)
        count = await self.store.hit(address, self.window)
        if count > limit:
            logger.warning("Rate limit exceeded", client=address, path=path, count=count, limit=limit)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests. Please try again later."},
            )

        return await call_next(request)
