"""FastAPI dependencies for dependency injection.

Shared services are built once by create_app() and stored on app.state;
handlers reach them only through these functions.
"""

from fastapi import Depends, Request

from task_board.config import Settings
from task_board.protocols import TaskStoreProtocol
from task_board.services.session_service import SessionIdentityProvider
from task_board.views.page_context import PageContext
from task_board.views.template_renderer import TemplateRenderer


async def get_app_settings(request: Request) -> Settings:
    """
    Get the Settings the app was created with.

    Raises:
        RuntimeError: If settings were not stored on app state.
    """
    settings: Settings | None = getattr(request.app.state, "settings", None)

    if settings is None:
        raise RuntimeError("Settings not initialized. This should never happen.")

    return settings


async def get_renderer(request: Request) -> TemplateRenderer:
    """
    Get the shared template renderer from app state.

    Raises:
        RuntimeError: If the renderer is not initialized.
    """
    renderer: TemplateRenderer | None = getattr(request.app.state, "renderer", None)

    if renderer is None:
        raise RuntimeError("Template renderer not initialized.")

    return renderer


async def get_session_provider(request: Request) -> SessionIdentityProvider | None:
    """
    Get the session identity provider from app state.

    Returns:
        The shared provider, or None when sessions are disabled.

    Raises:
        RuntimeError: If create_app() never configured sessions.
    """
    if not hasattr(request.app.state, "session_provider"):
        raise RuntimeError("Session provider not configured.")

    return request.app.state.session_provider


async def get_task_store(request: Request) -> TaskStoreProtocol:
    """
    Get the task store from app state.

    Raises:
        RuntimeError: If the task store is not initialized.
    """
    store: TaskStoreProtocol | None = getattr(request.app.state, "task_store", None)

    if store is None:
        raise RuntimeError("Task store not initialized.")

    return store


async def get_page_context(
    request: Request,
    renderer: TemplateRenderer = Depends(get_renderer),
    session_provider: SessionIdentityProvider | None = Depends(get_session_provider),
) -> PageContext:
    """Resolve session identity and htmx mode for the current request."""
    return PageContext.from_request(request, renderer, session_provider)


def build_page_context(request: Request) -> PageContext:
    """Build a PageContext outside the dependency system (exception handlers)."""
    return PageContext.from_request(
        request,
        request.app.state.renderer,
        getattr(request.app.state, "session_provider", None),
    )
