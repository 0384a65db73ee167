"""Rate limiting for FastAPI.

Uses slowapi to throttle the unauthenticated auth endpoints per client IP.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ...config import get_settings


def get_rate_limit_key(request: Request) -> str:
    """Get the rate limit key for a request (the client's IP address)."""
    return f"ip:{get_remote_address(request)}"


def register_limit() -> str:
    return get_settings().rate_limit_register


def login_limit() -> str:
    return get_settings().rate_limit_login


limiter = Limiter(
    key_func=get_rate_limit_key,
    enabled=get_settings().rate_limit_enabled,
)
