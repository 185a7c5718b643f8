"""
Rate limiting configuration and setup.

Uses slowapi to enforce a per-client limit on every library route.
Routes opt in with the ``rate_limited`` decorator, which requires a
``request: Request`` parameter on the endpoint. Disabled with
RATE_LIMIT_ENABLED=false.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from bookshelf.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)


def default_rate_limit() -> str:
    """Read the limit per request so RATE_LIMIT_DEFAULT overrides apply."""
    return settings.rate_limit_default


rate_limited = limiter.limit(default_rate_limit)


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> PlainTextResponse:
    """Handle rate limit exceeded errors with a plain-text 429.

    Synchronous: SlowAPIMiddleware calls the registered handler directly.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.
    """
    return PlainTextResponse("Too Many Requests", status_code=429)
