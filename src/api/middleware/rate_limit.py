# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting using slowapi.

A default per-client limit applies to every route through
SlowAPIMiddleware; login and public enquiry submission carry stricter
limits taken from settings.

Example:
    @router.post("/enquiry")
    @limiter.limit(enquiry_limit)
    async def submit_enquiry(request: Request, ...):
        ...
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.core.config import get_settings

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """Get a unique identifier for the client.

    Uses the token subject if a valid admin token was presented, otherwise
    the client IP address.
    """
    payload = getattr(request.state, "token_payload", None)
    if payload is not None:
        return f"admin:{payload.sub}"
    return f"ip:{get_remote_address(request)}"


def login_limit() -> str:
    return get_settings().rate_limit.login


def enquiry_limit() -> str:
    return get_settings().rate_limit.enquiry


settings = get_settings()
limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.rate_limit.requests_per_minute}/minute"],
    storage_uri=settings.rate_limit.storage_uri,
    enabled=settings.rate_limit.enabled,
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    """Answer 429 Too Many Requests with retry information."""
    logger.warning(
        "Rate limit exceeded: %s for %s",
        exc.detail,
        get_client_identifier(request),
    )

    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later."},
        headers={"Retry-After": "60"},
    )
