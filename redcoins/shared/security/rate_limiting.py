"""
Rate limiting configuration and setup.

Uses slowapi to enforce a per-client default limit on every endpoint.
Each application instance gets its own Limiter and in-memory counters.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse


def build_limiter(default_limit: str) -> Limiter:
    """Create a Limiter keyed on the client address.

    Args:
        default_limit: slowapi limit string, e.g. "60/minute".
    """
    return Limiter(key_func=get_remote_address, default_limits=[default_limit])


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with a clean JSON response.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response in the API's error container shape.
    """
    return JSONResponse(
        status_code=429,
        content={"erros": ["limite_excedido"], "detail": str(exc.detail)},
    )
