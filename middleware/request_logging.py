"""
Request logging middleware.

Provides:
- A request ID per request, bound into structlog contextvars so every log
  line emitted while handling the request carries it
- Request completion logging with status and timing
- The request ID echoed back in the ``X-Request-ID`` response header
"""

from __future__ import annotations

import time
import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response

from shared.logging import get_logger

log = get_logger("relay.request")


def generate_request_id() -> str:
    """Generate a unique request ID for correlation."""
    return f"req_{uuid.uuid4().hex[:12]}"


def log_request_end(request: Request, status_code: int, duration_ms: int) -> None:
    """Log the end of a request, at a level matching its status class."""
    if status_code >= 500:
        log_fn = log.error
    elif status_code >= 400:
        log_fn = log.warning
    else:
        log_fn = log.info

    log_fn(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def setup_logging_middleware(app: FastAPI) -> None:
    """Register the request logging middleware on *app*."""

    @app.middleware("http")
    async def request_logging(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or generate_request_id()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception:
            # The generic 500 body is rendered further out by the Exception handler
            duration_ms = int((time.perf_counter() - start) * 1000)
            log_request_end(request, 500, duration_ms)
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        log_request_end(request, response.status_code, duration_ms)
        response.headers["X-Request-ID"] = request_id
        return response
