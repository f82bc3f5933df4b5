"""API response schemas.

Views are computed as dataclasses; these models define what the API
promises to return and are filled straight from those objects.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Shared
# ============================================================================


class WindowOut(_FromAttributes):
    start: date
    end: date


class VolumeTotalsOut(_FromAttributes):
    count: int
    duration_minutes: int
    distance_meters: float
    distance_km: float


class WorkoutEntryOut(_FromAttributes):
    """One merged workout: planned, completed, or a planned workout with its completion."""

    id: str
    workout_date: str = Field(description="ISO 8601 date (YYYY-MM-DD)")
    discipline: str
    completed: bool
    planned_workout_id: str | None = None
    completed_workout_id: str | None = None
    workout_type: str | None = None
    planned_duration_minutes: int | None = None
    planned_distance_meters: float | None = None
    actual_duration_minutes: int | None = None
    actual_distance_meters: float | None = None
    description: str | None = None
    notes: str | None = None
    average_heart_rate: int | None = None
    rpe: int | None = None
    feeling: str | None = None


class CompletedWorkoutOut(_FromAttributes):
    id: str
    workout_date: str
    discipline: str
    actual_duration_minutes: int
    actual_distance_meters: float | None = None
    planned_workout_id: str | None = None
    average_heart_rate: int | None = None
    rpe: int | None = None
    feeling: str | None = None
    workout_notes: str | None = None


class WeeklySummaryOut(_FromAttributes):
    disciplines: dict[str, VolumeTotalsOut]
    total: VolumeTotalsOut


# ============================================================================
# Dashboard
# ============================================================================


class RaceCountdownOut(_FromAttributes):
    race_id: str
    race_name: str
    race_date: str
    race_location: str | None = None
    distance_label: str
    goal_time: str
    days_until: int
    weeks_until: int


class QuickStatsOut(_FromAttributes):
    this_week_workouts: int
    this_week_minutes: int
    this_week_distance_meters: float
    this_month_workouts: int
    discipline_counts: dict[str, int]


class WeekOverviewOut(_FromAttributes):
    offset: int
    label: str
    window: WindowOut
    days: list[date]
    entries: list[WorkoutEntryOut]
    summary: WeeklySummaryOut | None = None


class ChartPointOut(_FromAttributes):
    label: str
    value: float
    color: str


class PieSegmentOut(_FromAttributes):
    label: str
    value: float
    color: str
    percentage: float
    start_angle: float
    end_angle: float


class DashboardResponse(_FromAttributes):
    primary_race: RaceCountdownOut | None = None
    quick_stats: QuickStatsOut
    week: WeekOverviewOut
    recent_workouts: list[CompletedWorkoutOut]
    weekly_chart: list[ChartPointOut]
    weekly_chart_segments: list[PieSegmentOut]


# ============================================================================
# Calendar
# ============================================================================


class BarItemOut(_FromAttributes):
    label: str
    planned: float
    completed: float
    color: str


class CalendarWeekOut(_FromAttributes):
    days: list[date | None]
    summary: WeeklySummaryOut | None = None


class MonthlyStatsOut(_FromAttributes):
    disciplines: dict[str, VolumeTotalsOut]
    total: VolumeTotalsOut


class MonthViewResponse(_FromAttributes):
    offset: int
    label: str
    window: WindowOut
    weeks: list[CalendarWeekOut]
    entries_by_date: dict[str, list[WorkoutEntryOut]]
    stats: MonthlyStatsOut
    planned_vs_completed: list[BarItemOut]


class DayViewResponse(_FromAttributes):
    day: date
    completed: list[WorkoutEntryOut]
    planned: list[WorkoutEntryOut]
    totals: VolumeTotalsOut


# ============================================================================
# Analytics / races
# ============================================================================


class TrainingStatsResponse(_FromAttributes):
    total_workouts: int
    total_distance_km: int
    total_duration_minutes: int
    avg_per_week: float


class RaceSetupResponse(_FromAttributes):
    race: dict
    training_plan: dict
