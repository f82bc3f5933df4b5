from datetime import date

from fastapi import APIRouter, Depends, Query
from loguru import logger

from tritrack.api.dependencies.auth import get_current_user_id
from tritrack.api.dependencies.query import get_query_client
from tritrack.api.schemas import DashboardResponse, WeekOverviewOut
from tritrack.config.settings import settings
from tritrack.dashboard.service import build_dashboard, build_week_overview
from tritrack.db.query_client import QueryClient

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    week_offset: int = Query(default=0, description="Weeks relative to the current week"),
    today: date | None = Query(default=None, description="Caller's local date; defaults to the server date"),
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    """Race countdown, this week's stats and chart, week overview and recent workouts."""
    logger.info(f"Dashboard requested for user_id={user_id}, week_offset={week_offset}")
    view = build_dashboard(
        client, user_id, week_offset=week_offset, recent_limit=settings.recent_workouts_limit, today=today
    )
    return DashboardResponse.model_validate(view)


@router.get("/week", response_model=WeekOverviewOut)
def get_week(
    offset: int = Query(default=0, description="Weeks relative to the current week"),
    today: date | None = Query(default=None, description="Caller's local date; defaults to the server date"),
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    return WeekOverviewOut.model_validate(build_week_overview(client, user_id, offset, today))
