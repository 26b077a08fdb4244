"""Anonymous session identity models."""

from pydantic import BaseModel, ConfigDict, Field

# URL-safe base64 alphabet, as produced by secrets.token_urlsafe
SESSION_TOKEN_PATTERN = r"^[A-Za-z0-9_-]{16,128}$"


class SessionIdentity(BaseModel):
    """Opaque, non-identifying token correlating requests from one browser session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=SESSION_TOKEN_PATTERN)


class SessionResolution(BaseModel):
    """Result of resolving the session cookie for a request.

    is_new is True when the identity was minted for this request and the
    response must carry a fresh cookie.
    """

    model_config = ConfigDict(frozen=True)

    identity: SessionIdentity
    is_new: bool
