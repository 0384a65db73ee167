"""HTTP middleware and request-scoped dependencies."""

from .auth import CurrentUser, get_current_user, security
from .rate_limit import limiter
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "CurrentUser",
    "get_current_user",
    "security",
    "limiter",
    "SecurityHeadersMiddleware",
]
