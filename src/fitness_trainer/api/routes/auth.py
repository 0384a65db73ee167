"""Authentication API routes.

Provides endpoints for user registration, login and current user info.
"""

from fastapi import APIRouter, Depends, Request, status

from ..deps import CurrentUser, get_current_user, get_user_service
from ..middleware.rate_limit import limiter, login_limit, register_limit
from ...models.users import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from ...services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(register_limit)
def register(
    request: Request,
    payload: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Register a new user account and return a token for it."""
    return service.register(payload)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(login_limit)
def login(
    request: Request,
    payload: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Authenticate with email and password.

    Unknown emails and wrong passwords get the same 401 response.
    """
    return service.login(payload.email, payload.password)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get the currently authenticated user."""
    return service.get_profile(current_user.id)
