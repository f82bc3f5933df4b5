from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from tritrack.api.dependencies.auth import get_current_user_id
from tritrack.api.dependencies.query import get_query_client
from tritrack.db.query_client import QueryClient
from tritrack.profile import service
from tritrack.profile.schemas import AthleteMetricsUpdate, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])


def _raise_profile_not_found() -> None:
    raise HTTPException(status_code=404, detail="Profile not found")


@router.get("")
def get_profile(
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    profile = service.get_profile(client, user_id)
    if profile is None:
        _raise_profile_not_found()
    return profile


@router.patch("")
def patch_profile(
    body: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return service.update_profile(client, user_id, body)


@router.get("/metrics")
def get_metrics(
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any] | None:
    return service.get_athlete_metrics(client, user_id)


@router.put("/metrics")
def put_metrics(
    body: AthleteMetricsUpdate,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return service.upsert_athlete_metrics(client, user_id, body)
