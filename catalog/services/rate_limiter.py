"""
Rate Limiting Service

Implements rate limiting using slowapi to protect the catalog pages from
abuse and ensure fair usage across clients.

Key Features:
=============
1. IP-based rate limiting (proxy-header aware)
2. Separate limits for page views and form submissions
3. Redis storage for distributed deployments
4. Error page response with Retry-After header

Rate Limit Tiers:
=================
- Page views (GET): rate_limit_default, 100 requests/minute by default
- Form submissions (POST): rate_limit_write, 30 requests/minute by default
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import Response

from catalog.config import get_settings
from catalog.templating import render_error

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Handles common proxy headers to get the real client IP.
    Falls back to direct connection IP if no proxy headers.
    """
    # X-Forwarded-For can contain multiple IPs; first is the client
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # nginx
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """
    Create and configure the rate limiter.

    Uses Redis as storage backend when limiting is enabled, so limits are
    shared across app instances. In-memory storage otherwise.
    """
    storage_uri = settings.redis_url if settings.rate_limit_enabled else None

    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}, write: {settings.rate_limit_write}"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Render the error page for rate limited clients.

    Returns:
        429 Too Many Requests with Retry-After and X-RateLimit-Limit headers
    """
    limit_detail = str(exc.detail)

    logger.warning(
        f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}"
    )

    return render_error(
        request,
        429,
        "Too many requests. Please slow down.",
        headers={"Retry-After": "60", "X-RateLimit-Limit": limit_detail},
    )
