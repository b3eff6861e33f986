"""
Rate Limiting Service

Rate limiting using slowapi, keyed by client IP.

Rate Limit Tiers:
=================
- Default (reads): settings.rate_limit_default (100/minute)
- Writes (create/update/delete): settings.rate_limit_write (30/minute)
- Auth (register/login): settings.rate_limit_auth (10/minute)

Counters live in settings.rate_limit_storage_uri ("memory://" by default,
any limits-compatible URI works for multi-instance deployments). Setting
RATE_LIMIT_ENABLED=false turns every limit into a no-op, which the test
suite relies on.
"""

import logging

from fastapi import Request, status
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from bookreview.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Honours X-Forwarded-For / X-Real-IP from a reverse proxy and falls back
    to the direct connection address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # First entry is the original client
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """Create the limiter from settings."""
    new_limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}"
    )
    return new_limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Turn RateLimitExceeded into the standard error envelope.

    Adds a Retry-After header so well-behaved clients can back off.
    """
    limit_detail = str(exc.detail)

    logger.warning(f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}")

    response = JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "status": "error",
            "message": f"Too many requests. Please slow down. (limit: {limit_detail})",
        },
    )
    response.headers["Retry-After"] = "60"
    return response
