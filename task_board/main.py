"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv
from fastapi.responses import RedirectResponse, Response

from task_board.config import HOST, get_settings
from task_board.core.app_factory import create_app
from task_board.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()

# Configure structured logging (JSON to file + console)
setup_logging(settings.log_level, settings.log_dir)

# Create application
app = create_app(settings)


@app.get("/", include_in_schema=False)
async def root():
    """The task list is the home page."""
    return RedirectResponse(url="/tasks")


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty favicon to prevent 404 errors."""
    return Response(content=b"", media_type="image/x-icon")


def run() -> None:
    """Console entry point: serve on 0.0.0.0:$PORT (default 8080)."""
    import uvicorn

    uvicorn.run(
        "task_board.main:app",
        host=HOST,
        port=settings.port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
