"""Anonymous session identity backed by a signed, client-held cookie.

Privacy notes:
- Session ids are random and anonymous (no PII, nothing derived from the request)
- Nothing is stored server-side; the cookie is the only copy
- Cookie is HttpOnly, SameSite=Strict, and has no Max-Age/Expires, so it
  disappears when the browser session ends
"""

import secrets
from collections.abc import Mapping

from itsdangerous import BadSignature, Signer
from pydantic import ValidationError
from starlette.responses import Response

from task_board.config import SESSION_COOKIE_NAME
from task_board.logging_config import get_logger, log_with_context
from task_board.models.session import SessionIdentity, SessionResolution

logger = get_logger(__name__)

SIGNER_SALT = "task-board.session"
TOKEN_BYTES = 24


class SessionIdentityProvider:
    """Issues and reads anonymous session identities.

    Stateless per call and safe to share between concurrent requests.
    """

    def __init__(
        self,
        secret_key: str,
        cookie_name: str = SESSION_COOKIE_NAME,
        secure: bool = False,
    ):
        self._signer = Signer(secret_key, salt=SIGNER_SALT)
        self.cookie_name = cookie_name
        self.secure = secure

    def mint(self) -> SessionIdentity:
        """Create a brand new identity."""
        return SessionIdentity(id=secrets.token_urlsafe(TOKEN_BYTES))

    def encode(self, identity: SessionIdentity) -> str:
        """Sign an identity for transport in the cookie value."""
        return self._signer.sign(identity.id).decode("ascii")

    def decode(self, cookie_value: str) -> SessionIdentity | None:
        """Verify and decode a cookie value.

        Returns None when the signature does not match or the token is not
        structurally valid. Never raises for bad input.
        """
        try:
            token = self._signer.unsign(cookie_value).decode("ascii")
        except (BadSignature, UnicodeError) as e:
            log_with_context(
                logger,
                "warning",
                "Session cookie failed signature check",
                error_type=type(e).__name__,
                event_type="session_cookie_rejected",
            )
            return None

        try:
            return SessionIdentity(id=token)
        except ValidationError:
            log_with_context(
                logger,
                "warning",
                "Session cookie carried a malformed token",
                event_type="session_cookie_rejected",
            )
            return None

    def get_or_create(self, cookies: Mapping[str, str]) -> SessionResolution:
        """Reuse the identity from the request cookies or mint a new one.

        Args:
            cookies: Request cookies (name -> raw value)

        Returns:
            SessionResolution; is_new tells the caller to issue the cookie
        """
        raw = cookies.get(self.cookie_name)
        if raw:
            identity = self.decode(raw)
            if identity is not None:
                return SessionResolution(identity=identity, is_new=False)

        identity = self.mint()
        log_with_context(
            logger,
            "debug",
            "Minted anonymous session",
            replaced_cookie=bool(raw),
            event_type="session_minted",
        )
        return SessionResolution(identity=identity, is_new=True)

    def issue_cookie(self, response: Response, identity: SessionIdentity) -> None:
        """Attach the session cookie to a response.

        No max_age/expires: the cookie lives as long as the browser session.
        """
        response.set_cookie(
            key=self.cookie_name,
            value=self.encode(identity),
            path="/",
            httponly=True,
            samesite="strict",
            secure=self.secure,
        )
