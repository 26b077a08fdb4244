"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from task_board import __version__
from task_board.config import Settings, get_settings
from task_board.core.lifespan import lifespan
from task_board.core.middleware import setup_middleware
from task_board.exceptions import ConfigurationException
from task_board.logging_config import get_logger, log_with_context
from task_board.middleware.error_handlers import register_error_handlers
from task_board.protocols import TaskStoreProtocol
from task_board.routers import health_router, task_router
from task_board.services.session_service import SessionIdentityProvider
from task_board.services.task_store import InMemoryTaskStore
from task_board.views.template_renderer import TemplateRenderer

logger = get_logger(__name__)


def build_session_provider(settings: Settings) -> SessionIdentityProvider | None:
    """Create the session provider, or None when sessions are disabled."""
    if not settings.sessions_enabled:
        log_with_context(
            logger,
            "warning",
            "Anonymous sessions disabled; templates will see the anonymous placeholder",
            event_type="session_config",
        )
        return None
    return SessionIdentityProvider(
        secret_key=settings.session_secret,
        cookie_name=settings.session_cookie_name,
        secure=settings.session_cookie_secure,
    )


def template_globals(settings: Settings) -> dict[str, str]:
    """Values every template can read, used by the shared layout."""
    return {"htmx_src": settings.htmx_script_url}


def build_renderer(settings: Settings) -> TemplateRenderer:
    return TemplateRenderer(
        settings.templates_dir,
        cache_enabled=settings.template_cache_enabled,
        strict_undefined=settings.template_strict_undefined,
        strict_templates=settings.strict_template_names,
        template_globals=template_globals(settings),
    )


def create_app(
    settings: Settings | None = None,
    task_store: TaskStoreProtocol | None = None,
    renderer: TemplateRenderer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Shared services are built once here and stored on app.state; handlers
    reach them through the functions in task_board.dependencies.

    Args:
        settings: Settings to use (defaults to the process singleton)
        task_store: Task store collaborator (defaults to an in-memory store)
        renderer: Template renderer (defaults to one built from settings)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    if not settings.static_dir.is_dir():
        raise ConfigurationException(
            "Static directory does not exist",
            details={"static_dir": str(settings.static_dir)},
        )

    app = FastAPI(
        title="Task Board",
        description="Server-rendered task manager with htmx progressive enhancement.",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.renderer = renderer or build_renderer(settings)
    app.state.session_provider = build_session_provider(settings)
    app.state.task_store = task_store or InMemoryTaskStore()

    setup_middleware(app, settings)
    register_error_handlers(app)

    # Static files (CSS, JS)
    app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

    app.include_router(health_router.router, tags=["health"])
    app.include_router(task_router.router, tags=["tasks"])

    return app
