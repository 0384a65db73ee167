"""
Workout API routes.

CRUD over the caller's workouts. Every route requires a bearer token;
reading or changing another user's workout is rejected with 403.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ..deps import CurrentUser, get_current_user, get_workout_service
from ...models.workouts import MessageResponse, Workout, WorkoutInput, WorkoutUpdate
from ...services.workout_service import WorkoutService


router = APIRouter()


@router.get("", response_model=List[Workout])
def list_workouts(
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
) -> List[Workout]:
    """List the caller's workouts, newest first."""
    return service.list_workouts(current_user.id)


@router.post("", response_model=Workout, status_code=status.HTTP_201_CREATED)
def create_workout(
    workout: WorkoutInput,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
) -> Workout:
    """Create a workout owned by the caller."""
    return service.create_workout(current_user.id, workout)


@router.get("/{workout_id}", response_model=Workout)
def get_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
) -> Workout:
    return service.get_workout(current_user.id, workout_id)


@router.put("/{workout_id}", response_model=Workout)
def update_workout(
    workout_id: str,
    update: WorkoutUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
) -> Workout:
    """Replace the fields present in the body; omitted fields keep their values."""
    return service.update_workout(current_user.id, workout_id, update)


@router.delete("/{workout_id}", response_model=MessageResponse)
def delete_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
) -> MessageResponse:
    service.delete_workout(current_user.id, workout_id)
    return MessageResponse(message="Workout removed")
