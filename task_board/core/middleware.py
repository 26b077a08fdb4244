"""Middleware configuration."""

from fastapi import FastAPI
from slowapi import Limiter

from task_board.config import Settings
from task_board.core.rate_limit import limiter
from task_board.logging_config import get_logger, log_with_context
from task_board.middleware.logging_middleware import access_log_middleware

logger = get_logger(__name__)


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    # Read by slowapi's header injection; enforcement follows settings.rate_limit_enabled
    app.state.limiter = limiter
    log_with_context(
        logger,
        "info",
        "Configuring rate limiter",
        enabled=settings.rate_limit_enabled,
        event_type="security_config",
    )

    # Access log: METHOD /path - status
    app.middleware("http")(access_log_middleware)

    return limiter
