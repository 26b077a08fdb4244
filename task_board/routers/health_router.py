"""Health endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from task_board import __version__
from task_board.dependencies import get_renderer, get_task_store
from task_board.models import DetailedHealthResponse, HealthResponse
from task_board.protocols import TaskStoreProtocol
from task_board.views.template_renderer import TemplateRenderer

router = APIRouter()

LAYOUT_TEMPLATE = "_layout/base"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns simple status for container healthchecks and basic monitoring.
    For dependency status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness probe - is the process serving requests at all?"""
    return HealthResponse(status="alive", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(
    renderer: TemplateRenderer = Depends(get_renderer),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Readiness probe - can the application serve pages?

    Checks:
    - The shared layout template can be loaded
    - The task store answers a list query

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: A dependency check failed
    """
    checks: dict[str, str] = {}

    checks["templates"] = "ok" if renderer.has_template(LAYOUT_TEMPLATE) else "missing_layout"

    try:
        await task_store.list_tasks()
        checks["task_store"] = "ok"
    except Exception as e:
        checks["task_store"] = f"error: {str(e)[:50]}"

    all_healthy = all(result == "ok" for result in checks.values())

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
