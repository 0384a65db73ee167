"""User profile routes."""

from fastapi import APIRouter, Depends

from ..deps import CurrentUser, get_current_user, get_user_service
from ...models.users import ProfileUpdate, UserResponse
from ...services.user_service import UserService


router = APIRouter()


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return service.get_profile(current_user.id)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    update: ProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update name, height, weight or fitness goal.

    Fields left out of the body are not changed.
    """
    return service.update_profile(current_user.id, update)
