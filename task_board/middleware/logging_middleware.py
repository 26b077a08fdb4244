"""Access logging middleware and log redaction helpers."""

import re
import time
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.responses import Response

from task_board.logging_config import get_logger, log_with_context

access_logger = get_logger("task_board.access")

# Sensitive parameters to redact from logged URLs
SENSITIVE_PARAMS = [
    "token",
    "password",
    "secret",
    "key",
    "session",
    "authorization",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"{param}=([^&\s\"]+)"
        redacted = re.sub(pattern, f"{param}=***REDACTED***", redacted)
    return redacted


def log_access(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record one completed request as "METHOD /path - status".

    Never raises: a failing log handler must not affect the response.
    """
    try:
        log_with_context(
            access_logger,
            "info",
            f"{method} {path} - {status_code}",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
            event_type="http_access",
        )
    except Exception:
        # Access logging is observational only
        pass


async def access_log_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log method, path and final status of every request."""
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        log_access(request.method, request.url.path, 500, (time.perf_counter() - start) * 1000)
        raise

    log_access(request.method, request.url.path, response.status_code, (time.perf_counter() - start) * 1000)
    return response
