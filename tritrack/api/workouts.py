from typing import Any

from fastapi import APIRouter, Depends, Response, status

from tritrack.api.dependencies.auth import get_current_user_id
from tritrack.api.dependencies.query import get_query_client
from tritrack.db.query_client import QueryClient
from tritrack.workouts import service
from tritrack.workouts.schemas import (
    CompletedWorkoutCreate,
    CompletePlannedRequest,
    PlannedWorkoutCreate,
    PlannedWorkoutUpdate,
)

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.post("/planned", status_code=status.HTTP_201_CREATED)
def create_planned(
    body: PlannedWorkoutCreate,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return service.add_planned_workout(client, user_id, body)


@router.patch("/planned/{workout_id}")
def edit_planned(
    workout_id: str,
    body: PlannedWorkoutUpdate,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return service.update_planned_workout(client, user_id, workout_id, body)


@router.delete("/planned/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_planned(
    workout_id: str,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> Response:
    service.delete_planned_workout(client, user_id, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/planned/{workout_id}/complete", status_code=status.HTTP_201_CREATED)
def complete_planned(
    workout_id: str,
    body: CompletePlannedRequest,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return service.complete_planned_workout(client, user_id, workout_id, body)


@router.post("/completed", status_code=status.HTTP_201_CREATED)
def log_completed(
    body: CompletedWorkoutCreate,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return service.log_completed_workout(client, user_id, body)


@router.delete("/completed/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_completed(
    workout_id: str,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> Response:
    service.delete_completed_workout(client, user_id, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
