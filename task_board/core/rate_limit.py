"""Rate limiting for mutating routes."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

# Per client IP; reads are not limited
MUTATION_RATE_LIMIT = "60/minute"

# Route decorators bind to this instance at import time. Whether limits apply
# is decided per app by rate_limit_disabled.
limiter = Limiter(key_func=get_remote_address, headers_enabled=True)


def rate_limit_disabled(request: Request) -> bool:
    """Exempt requests to an app whose settings turn rate limiting off."""
    settings = getattr(request.app.state, "settings", None)
    return settings is not None and not settings.rate_limit_enabled
