"""Bearer-token authentication for routes.

``get_current_user`` turns the Authorization header into a CurrentUser, or
raises AuthError (401) before the route body runs.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...exceptions import AuthError
from ...services.auth_service import AuthService, get_auth_service


# auto_error is off so a missing header goes through the error envelope
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Identity taken from a verified access token."""

    user_id: str
    email: str

    @property
    def id(self) -> str:
        return self.user_id


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    if credentials is None:
        raise AuthError("Not authenticated")

    # Expired and invalid tokens raise TokenError subclasses of AuthError
    claims = auth_service.verify_access_token(credentials.credentials)
    return CurrentUser(user_id=claims["sub"], email=claims.get("email", ""))
