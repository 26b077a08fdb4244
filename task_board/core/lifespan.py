"""Application lifespan management."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from task_board import __version__
from task_board.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so the server sees them; cleanup
    always runs.
    """
    app.state.startup_time = time.time()

    log_with_context(
        logger,
        "info",
        "Starting Task Board application",
        version=__version__,
        environment=app.state.settings.environment,
        template_cache=app.state.renderer.cache_enabled,
        event_type="app_startup",
    )

    task_store = app.state.task_store
    await task_store.initialize()

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Task Board application",
            event_type="app_shutdown",
        )
        await task_store.cleanup()
