"""Unit tests for template context enrichment."""

from task_board.models.session import SessionIdentity
from task_board.views.context import ANONYMOUS_SESSION_ID, RESERVED_CONTEXT_KEYS, enrich_context

IDENTITY = SessionIdentity(id="abcdefghijklmnopqrstuvwxyz012345")


def test_adds_session_and_mode():
    enriched = enrich_context({"tasks": []}, IDENTITY, True)

    assert enriched == {"tasks": [], "sessionId": IDENTITY.id, "isHtmx": True}


def test_anonymous_without_session():
    """Test the anonymous placeholder is used when no session exists."""
    enriched = enrich_context({}, None, False)

    assert enriched["sessionId"] == ANONYMOUS_SESSION_ID == "anonymous"
    assert enriched["isHtmx"] is False


def test_reserved_keys_overwritten():
    """Test caller values under reserved keys never survive."""
    enriched = enrich_context({"sessionId": "spoofed", "isHtmx": "yes", "title": "x"}, IDENTITY, False)

    assert enriched["sessionId"] == IDENTITY.id
    assert enriched["isHtmx"] is False
    assert enriched["title"] == "x"
    assert RESERVED_CONTEXT_KEYS == {"sessionId", "isHtmx"}


def test_input_not_mutated():
    context = {"sessionId": "mine"}

    enrich_context(context, IDENTITY, True)

    assert context == {"sessionId": "mine"}


def test_idempotent():
    """Test enriching twice gives the same result."""
    once = enrich_context({"a": 1}, IDENTITY, True)

    assert enrich_context(once, IDENTITY, True) == once


def test_none_context():
    assert enrich_context(None, None, False) == {"sessionId": "anonymous", "isHtmx": False}
