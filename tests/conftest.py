"""Pytest configuration and shared fixtures."""

from collections.abc import Mapping
from typing import Any

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from task_board.config import Settings
from task_board.core.app_factory import create_app, template_globals
from task_board.core.rate_limit import limiter
from task_board.services.session_service import SessionIdentityProvider
from task_board.services.task_store import InMemoryTaskStore
from task_board.views.template_renderer import TemplateRenderer

TEST_SESSION_SECRET = "test-session-secret-0123456789"
HTMX_HEADERS = {"HX-Request": "true"}


class RecordingRenderer(TemplateRenderer):
    """TemplateRenderer that remembers every (template, context) it rendered."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, template_name: str, context: Mapping[str, Any] | None = None) -> str:
        self.calls.append((template_name, dict(context or {})))
        return super().render(template_name, context)

    @property
    def last_template(self) -> str:
        return self.calls[-1][0]

    @property
    def last_context(self) -> dict[str, Any]:
        return self.calls[-1][1]


def make_request(headers: Mapping[str, str] | None = None, method: str = "GET", path: str = "/tasks") -> Request:
    """Build a bare Starlette request for unit tests."""
    raw_headers = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in (headers or {}).items()]
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": raw_headers,
        "scheme": "http",
        "server": ("testserver", 80),
        "client": ("testclient", 50000),
    }
    return Request(scope)


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Rate limit counters are process-wide; start every test from zero."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        environment="development",
        log_dir=tmp_path / "logs",
        session_secret=TEST_SESSION_SECRET,
    )


@pytest.fixture
def recording_renderer(settings) -> RecordingRenderer:
    return RecordingRenderer(settings.templates_dir, cache_enabled=False, template_globals=template_globals(settings))


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def app(settings, task_store, recording_renderer):
    """Application wired with the in-memory store and a recording renderer."""
    return create_app(settings, task_store=task_store, renderer=recording_renderer)


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def session_provider() -> SessionIdentityProvider:
    return SessionIdentityProvider(secret_key=TEST_SESSION_SECRET)


@pytest.fixture
def template_dir(tmp_path):
    """Scratch template namespace for renderer tests."""
    root = tmp_path / "templates"
    (root / "_layout").mkdir(parents=True)
    (root / "pages").mkdir()
    (root / "_layout" / "base.html").write_text(
        "<!DOCTYPE html><html><body>{% block content %}{% endblock %}</body></html>", encoding="utf-8"
    )
    (root / "pages" / "hello.html").write_text(
        '{% extends "_layout/base.html" %}{% block content %}<p>Hello {{ name }}!</p>{% endblock %}',
        encoding="utf-8",
    )
    (root / "pages" / "_hello.html").write_text("<p>Hello {{ name }}!</p>", encoding="utf-8")
    return root


@pytest.fixture
def request_factory():
    """Factory for bare Starlette requests: request_factory(headers=..., method=..., path=...)."""
    return make_request
