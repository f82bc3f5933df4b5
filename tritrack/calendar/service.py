"""Calendar views: a month grid with weekly and monthly rollups, and a single day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from loguru import logger

from tritrack.analytics.charts import BarItem, planned_vs_completed_series
from tritrack.calendar.date_ranges import DateRange, month_grid, month_range
from tritrack.db.query_client import QueryClient
from tritrack.workouts.aggregation import (
    MonthlyStats,
    VolumeTotals,
    WeeklySummary,
    group_by_date,
    monthly_stats,
    total_volume,
    weekly_summary,
)
from tritrack.workouts.merge import WorkoutEntry, merge_workouts, sort_by_date
from tritrack.workouts.repository import fetch_window


@dataclass(frozen=True)
class CalendarWeek:
    days: list[date | None]
    summary: WeeklySummary | None


@dataclass(frozen=True)
class MonthView:
    offset: int
    label: str
    window: DateRange
    weeks: list[CalendarWeek]
    entries_by_date: dict[str, list[WorkoutEntry]]
    stats: MonthlyStats
    planned_vs_completed: list[BarItem]


@dataclass(frozen=True)
class DayView:
    day: date
    completed: list[WorkoutEntry]
    planned: list[WorkoutEntry]
    totals: VolumeTotals


def build_month_view(client: QueryClient, user_id: str, offset: int = 0, today: date | None = None) -> MonthView:
    today = today or date.today()
    window = month_range(today, offset)
    planned, completed = fetch_window(client, user_id, window)
    entries = sort_by_date(merge_workouts(planned, completed))

    weeks = [CalendarWeek(days=row, summary=weekly_summary(entries, row)) for row in month_grid(today, offset)]
    stats = monthly_stats(entries)
    logger.debug(
        f"[CALENDAR] Month view {window.start:%Y-%m} for user_id={user_id}: "
        f"{len(entries)} entries, {stats.total.count} completed"
    )
    return MonthView(
        offset=offset,
        label=f"{window.start:%B %Y}",
        window=window,
        weeks=weeks,
        entries_by_date=group_by_date(entries),
        stats=stats,
        planned_vs_completed=planned_vs_completed_series(entries),
    )


def build_day_view(client: QueryClient, user_id: str, day: date) -> DayView:
    window = DateRange(start=day, end=day)
    planned, completed = fetch_window(client, user_id, window)
    entries = merge_workouts(planned, completed)
    done = [entry for entry in entries if entry.completed]
    return DayView(
        day=day,
        completed=done,
        planned=[entry for entry in entries if not entry.completed],
        totals=total_volume(done),
    )
