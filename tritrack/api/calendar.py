from datetime import date

from fastapi import APIRouter, Depends, Query
from loguru import logger

from tritrack.api.dependencies.auth import get_current_user_id
from tritrack.api.dependencies.query import get_query_client
from tritrack.api.schemas import DayViewResponse, MonthViewResponse
from tritrack.calendar.service import build_day_view, build_month_view
from tritrack.db.query_client import QueryClient

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/month", response_model=MonthViewResponse)
def get_month(
    offset: int = Query(default=0, description="Months relative to the current month"),
    today: date | None = Query(default=None, description="Caller's local date; defaults to the server date"),
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    """Month grid with per-day workouts, weekly rollups and monthly totals."""
    logger.info(f"Calendar month requested for user_id={user_id}, offset={offset}")
    return MonthViewResponse.model_validate(build_month_view(client, user_id, offset, today))


@router.get("/day/{day}", response_model=DayViewResponse)
def get_day(
    day: date,
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    return DayViewResponse.model_validate(build_day_view(client, user_id, day))
