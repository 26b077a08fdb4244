"""Per-request rendering context.

A PageContext is built once per request by a FastAPI dependency and handed
to the route handler. It carries the resolved session identity and the htmx
negotiation decision explicitly, and turns (template name, context) pairs
into responses:

    page.negotiate("tasks/index", "tasks/_list", {"tasks": tasks})  # reads
    page.respond("tasks/_item", {"task": task})                     # htmx writes
    page.redirect("/tasks")                                         # plain writes (PRG)
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.responses import Response

from task_board.exceptions import TemplateRenderException
from task_board.models.session import SessionIdentity
from task_board.services.session_service import SessionIdentityProvider
from task_board.views.context import enrich_context
from task_board.views.negotiation import HX_REQUEST_HEADER, HX_TRIGGER_HEADER, is_htmx_request
from task_board.views.template_renderer import TemplateRenderer

ResponseT = TypeVar("ResponseT", bound=Response)


@dataclass(frozen=True)
class PageContext:
    """Everything a handler needs to render a response for one request."""

    renderer: TemplateRenderer
    session: SessionIdentity | None
    is_htmx: bool
    is_new_session: bool = False
    session_provider: SessionIdentityProvider | None = None

    @classmethod
    def from_request(
        cls,
        request: Request,
        renderer: TemplateRenderer,
        session_provider: SessionIdentityProvider | None,
    ) -> "PageContext":
        """Resolve session identity and negotiation mode for a request.

        With no session provider (sessions disabled) the identity is None and
        templates see the anonymous placeholder.
        """
        is_htmx = is_htmx_request(request.headers)
        if session_provider is None:
            return cls(renderer=renderer, session=None, is_htmx=is_htmx)

        resolution = session_provider.get_or_create(request.cookies)
        return cls(
            renderer=renderer,
            session=resolution.identity,
            is_htmx=is_htmx,
            is_new_session=resolution.is_new,
            session_provider=session_provider,
        )

    @property
    def session_id(self) -> str | None:
        return self.session.id if self.session is not None else None

    def context_for(self, context: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Enrich a handler context with sessionId and isHtmx."""
        return enrich_context(context, self.session, self.is_htmx)

    def render(self, template_name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render a template with the enriched context and return the HTML."""
        return self.renderer.render(template_name, self.context_for(context))

    def respond(
        self,
        template_name: str,
        context: Mapping[str, Any] | None = None,
        status_code: int = 200,
        trigger: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HTMLResponse:
        """Render any template (page or fragment) into a finalized response.

        Args:
            template_name: Lookup key relative to templates/
            context: Handler-supplied template variables
            status_code: HTTP status
            trigger: Client-side event name sent as HX-Trigger (htmx only)
            headers: Extra response headers
        """
        response = HTMLResponse(
            self.render(template_name, context),
            status_code=status_code,
            headers=dict(headers or {}),
        )
        if trigger and self.is_htmx:
            response.headers[HX_TRIGGER_HEADER] = trigger
        return self.finalize(response)

    def page(
        self,
        template_name: str,
        context: Mapping[str, Any] | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> HTMLResponse:
        """Render a full page (layout + content).

        Raises:
            TemplateRenderException: The name refers to a partial
        """
        if self.renderer.is_partial(template_name):
            raise TemplateRenderException(f"Partial {template_name} cannot be served as a full page", template_name)
        return self.respond(template_name, context, status_code=status_code, headers=headers)

    def negotiate(
        self,
        full: str,
        fragment: str,
        context: Mapping[str, Any] | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> HTMLResponse:
        """Fragment for htmx requests, full page for standard navigation."""
        if self.is_htmx:
            return self.respond(fragment, context, status_code=status_code, headers=headers)
        return self.page(full, context, status_code=status_code, headers=headers)

    def redirect(self, url: str, status_code: int = 303) -> RedirectResponse:
        """Redirect to a read URL (POST-Redirect-GET)."""
        return self.finalize(RedirectResponse(url=url, status_code=status_code))

    def finalize(self, response: ResponseT) -> ResponseT:
        """Mark the response as negotiated and issue a new session cookie if needed."""
        response.headers.add_vary_header(HX_REQUEST_HEADER)
        if self.is_new_session and self.session is not None and self.session_provider is not None:
            self.session_provider.issue_cookie(response, self.session)
        return response
