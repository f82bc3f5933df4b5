"""Dashboard view: race countdown, headline stats, week overview, recent workouts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from loguru import logger

from tritrack.analytics.charts import ChartPoint, PieSegment, discipline_pie_series, pie_segments
from tritrack.calendar.date_ranges import DateRange, month_range, week_label, week_range
from tritrack.db.query_client import QueryClient
from tritrack.races.countdown import RaceCountdown, race_countdown
from tritrack.races.service import get_primary_race
from tritrack.workouts.aggregation import QuickStats, WeeklySummary, quick_stats, weekly_summary
from tritrack.workouts.merge import WorkoutEntry, merge_workouts, sort_by_date
from tritrack.workouts.records import CompletedWorkout
from tritrack.workouts.repository import fetch_completed, fetch_window, rows_or_empty


@dataclass(frozen=True)
class WeekOverview:
    offset: int
    label: str
    window: DateRange
    days: list[date]
    entries: list[WorkoutEntry]
    summary: WeeklySummary | None


@dataclass(frozen=True)
class DashboardView:
    primary_race: RaceCountdown | None
    quick_stats: QuickStats
    week: WeekOverview
    recent_workouts: list[CompletedWorkout]
    weekly_chart: list[ChartPoint]
    weekly_chart_segments: list[PieSegment]


def build_week_overview(client: QueryClient, user_id: str, offset: int = 0, today: date | None = None) -> WeekOverview:
    """Merged planned/completed workouts for one week, in date order."""
    today = today or date.today()
    window = week_range(today, offset)
    planned, completed = fetch_window(client, user_id, window)
    entries = sort_by_date(merge_workouts(planned, completed))
    days = list(window.days())
    return WeekOverview(
        offset=offset,
        label=week_label(offset, today),
        window=window,
        days=days,
        entries=entries,
        summary=weekly_summary(entries, days),
    )


def _count_completed(client: QueryClient, user_id: str, window: DateRange) -> int:
    start, end = window.as_query_bounds()
    result = (
        client.table("completed_workouts")
        .select("id")
        .eq("user_id", user_id)
        .gte("workout_date", start)
        .lte("workout_date", end)
        .execute()
    )
    return len(rows_or_empty(result, "monthly completed count"))


def build_dashboard(
    client: QueryClient,
    user_id: str,
    week_offset: int = 0,
    recent_limit: int = 5,
    today: date | None = None,
) -> DashboardView:
    today = today or date.today()

    race_row = get_primary_race(client, user_id)
    countdown = race_countdown(race_row, today) if race_row else None

    this_week = fetch_completed(client, user_id, week_range(today))
    month_count = _count_completed(client, user_id, month_range(today))
    stats = quick_stats(this_week, month_count)

    chart = discipline_pie_series(this_week)
    recent = fetch_completed(client, user_id, newest_first=True, limit=recent_limit)
    week = build_week_overview(client, user_id, week_offset, today)

    logger.info(
        f"[DASHBOARD] user_id={user_id}: race={'yes' if countdown else 'no'}, "
        f"week_workouts={stats.this_week_workouts}, month_workouts={stats.this_month_workouts}"
    )
    return DashboardView(
        primary_race=countdown,
        quick_stats=stats,
        week=week,
        recent_workouts=recent,
        weekly_chart=chart,
        weekly_chart_segments=pie_segments(chart),
    )
