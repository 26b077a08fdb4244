"""Unit tests for main.py entry point."""

from unittest.mock import patch

from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded

from task_board.config import DEFAULT_PORT, HOST
from task_board.exceptions import TaskBoardException
from task_board.main import app, run


class TestAppWiring:
    """Tests for the module-level application."""

    def test_exception_handlers_registered(self):
        assert TaskBoardException in app.exception_handlers
        assert RateLimitExceeded in app.exception_handlers

    def test_app_state_has_services(self):
        assert app.state.renderer is not None
        assert app.state.task_store is not None
        assert app.state.limiter is not None


class TestRootEndpoints:
    """Tests for root-level endpoints."""

    def test_root_redirects_to_tasks(self):
        with TestClient(app) as client:
            response = client.get("/", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/tasks"

    def test_favicon(self):
        with TestClient(app) as client:
            response = client.get("/favicon.ico")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/x-icon"

    def test_static_css_served(self):
        with TestClient(app) as client:
            response = client.get("/static/css/app.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]


def test_run_binds_all_interfaces():
    with patch("uvicorn.run") as mock_run:
        run()

    args, kwargs = mock_run.call_args
    assert args == ("task_board.main:app",)
    assert kwargs["host"] == HOST == "0.0.0.0"
    assert kwargs["port"] == app.state.settings.port
    assert DEFAULT_PORT == 8080
