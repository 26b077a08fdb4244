"""Exception handlers for the application.

Every user-visible failure is rendered as an HTML error page through the
normal template pipeline: a full page for standard navigation, a fragment
for htmx requests. Internal details are logged, never rendered.
"""

from http import HTTPStatus
from html import escape

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from task_board.dependencies import build_page_context
from task_board.exceptions import TaskBoardException
from task_board.logging_config import get_logger, log_with_context
from task_board.middleware.logging_middleware import redact_sensitive_data
from task_board.views.negotiation import HX_RESWAP_HEADER, HX_RETARGET_HEADER

logger = get_logger(__name__)

ERROR_PAGE_TEMPLATE = "errors/error"
ERROR_FRAGMENT_TEMPLATE = "errors/_error"
GENERIC_ERROR_MESSAGE = "Something went wrong on our side. Please try again."
RATE_LIMIT_MESSAGE = "Too many changes in a short time. Please wait a minute and try again."

# htmx swaps error fragments into the live region instead of the request target
ERROR_FRAGMENT_TARGET = "#status"
ERROR_FRAGMENT_SWAP = "innerHTML"

# Last resort when the error templates themselves cannot be rendered
FALLBACK_ERROR_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{status_code} {title}</title></head>
<body><main><h1>{title}</h1><p>{message}</p><p><a href="/tasks">Back to tasks</a></p></main></body>
</html>
"""


def _status_title(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def render_error_page(
    request: Request,
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> Response:
    """Render the error page (or fragment) with the given status.

    Falls back to a static HTML body if the templating pipeline itself fails.
    """
    title = _status_title(status_code)
    context = {"status_code": status_code, "title": title, "message": message}

    try:
        page = build_page_context(request)
        if page.is_htmx:
            headers = {
                **(headers or {}),
                HX_RETARGET_HEADER: ERROR_FRAGMENT_TARGET,
                HX_RESWAP_HEADER: ERROR_FRAGMENT_SWAP,
            }
        return page.negotiate(
            ERROR_PAGE_TEMPLATE,
            ERROR_FRAGMENT_TEMPLATE,
            context,
            status_code=status_code,
            headers=headers,
        )
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Error page could not be rendered",
            error=str(e),
            error_type=type(e).__name__,
            status_code=status_code,
            event_type="error_page_failed",
        )
        return HTMLResponse(
            FALLBACK_ERROR_HTML.format(status_code=status_code, title=escape(title), message=escape(message)),
            status_code=status_code,
            headers=headers,
        )


async def task_board_exception_handler(request: Request, exc: TaskBoardException) -> Response:
    """Handle Task Board exceptions with their HTTP status codes.

    Client errors (4xx) show the exception message; server errors show a
    generic message.
    """
    log_with_context(
        logger,
        "warning" if exc.status_code < 500 else "error",
        "Task Board error",
        error_code=exc.code.value,
        error_message=exc.message,
        details=exc.details,
        status_code=exc.status_code,
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="task_board_error",
    )

    message = exc.message if exc.status_code < 500 else GENERIC_ERROR_MESSAGE
    return render_error_page(request, exc.status_code, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render framework HTTP errors (unknown routes, wrong methods) as HTML."""
    log_with_context(
        logger,
        "info",
        "HTTP error",
        status_code=exc.status_code,
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_error",
    )

    if exc.status_code >= 500:
        message = GENERIC_ERROR_MESSAGE
    elif isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = _status_title(exc.status_code)
    return render_error_page(request, exc.status_code, message, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """Render form validation failures as a 422 error page."""
    log_with_context(
        logger,
        "info",
        "Request validation failed",
        errors=[".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()],
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="validation_error",
    )
    return render_error_page(request, 422, "The submitted form was incomplete. Please fill in every field.")


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle general exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="unhandled_error",
    )
    # Also log the traceback separately for debugging
    logger.error("Exception traceback:", exc_info=exc)

    # Don't expose internal error details to clients
    return render_error_page(request, 500, GENERIC_ERROR_MESSAGE)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render a 429 error page, keeping slowapi's Retry-After and X-RateLimit headers."""
    log_with_context(
        logger,
        "warning",
        "Rate limit exceeded",
        limit=exc.detail,
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="rate_limit_exceeded",
    )

    response = render_error_page(request, 429, RATE_LIMIT_MESSAGE)
    limiter = getattr(request.app.state, "limiter", None)
    current_limit = getattr(request.state, "view_rate_limit", None)
    if limiter is not None and current_limit is not None:
        response = limiter._inject_headers(response, current_limit)
    return response


def register_error_handlers(app) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(TaskBoardException, task_board_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
