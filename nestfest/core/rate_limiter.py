# -*- coding: utf-8 -*-
"""Client keys and coarse per-route rate limits."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request


def get_client_key(request: Request) -> str:
    """Identify the calling client for rate limiting.

    Uses the first address in X-Forwarded-For when behind a proxy, then
    X-Real-IP, then the connection address.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request) or "unknown"


limiter = Limiter(key_func=get_client_key)


class RateLimits:
    """Per-route limits applied with ``@limiter.limit``."""

    # Admin read endpoints hit the spreadsheet on every call
    ADMIN_READ = "30/minute"

    DEFAULT = "100/minute"
