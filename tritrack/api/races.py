from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from tritrack.api.dependencies.auth import get_current_user_id
from tritrack.api.dependencies.query import get_query_client
from tritrack.api.schemas import RaceCountdownOut, RaceSetupResponse
from tritrack.db.query_client import QueryClient
from tritrack.races.countdown import race_countdown
from tritrack.races.schemas import RaceGoalRequest, RaceSetupRequest
from tritrack.races.service import get_primary_race, setup_race, upsert_race_goals

router = APIRouter(prefix="/races", tags=["races"])


@router.get("/primary", response_model=RaceCountdownOut | None)
def primary_race(
    today: date | None = Query(default=None, description="Caller's local date; defaults to the server date"),
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    """Countdown for the user's primary race, or null when none is set."""
    race = get_primary_race(client, user_id)
    if race is None:
        return None
    return RaceCountdownOut.model_validate(race_countdown(race, today or date.today()))


@router.post("/setup", response_model=RaceSetupResponse, status_code=status.HTTP_201_CREATED)
def race_setup(
    body: RaceSetupRequest,
    today: date | None = Query(default=None, description="Caller's local date; defaults to the server date"),
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    return RaceSetupResponse.model_validate(setup_race(client, user_id, body, today))


@router.put("/{race_id}/goals")
def save_race_goals(
    race_id: str,
    body: RaceGoalRequest,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
) -> dict[str, Any]:
    return upsert_race_goals(client, user_id, race_id, body)
