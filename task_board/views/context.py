"""Template context enrichment."""

from collections.abc import Mapping
from typing import Any

from task_board.models.session import SessionIdentity

SESSION_ID_KEY = "sessionId"
IS_HTMX_KEY = "isHtmx"
RESERVED_CONTEXT_KEYS = frozenset({SESSION_ID_KEY, IS_HTMX_KEY})
ANONYMOUS_SESSION_ID = "anonymous"


def enrich_context(
    context: Mapping[str, Any] | None,
    session: SessionIdentity | None,
    is_htmx: bool,
) -> dict[str, Any]:
    """Return a copy of context with sessionId and isHtmx set.

    The reserved keys always win over caller-supplied values. The input
    mapping is never mutated.

    Args:
        context: Handler-supplied template variables
        session: Resolved session identity, or None when no session exists
        is_htmx: Negotiation decision for the current request

    Returns:
        New dict ready for rendering
    """
    enriched = dict(context or {})
    enriched[SESSION_ID_KEY] = session.id if session is not None else ANONYMOUS_SESSION_ID
    enriched[IS_HTMX_KEY] = is_htmx
    return enriched
