# -*- coding: utf-8 -*-
"""Request/Response logging middleware."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from nestfest.core.logging import bind_context, clear_context, get_logger
from nestfest.core.rate_limiter import get_client_key

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with a short correlation id.

    The id, method, path and client key are bound to the structlog context
    for the duration of the request and echoed in ``X-Request-ID``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client=get_client_key(request),
        )
        request.state.request_id = request_id

        start_time = time.perf_counter()
        logger.info("Request started", user_agent=request.headers.get("user-agent"))

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                status_code=response.status_code,
                latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
                exc_info=True,
            )
            raise

        finally:
            clear_context()
