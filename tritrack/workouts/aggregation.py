"""Volume aggregation over merged workout entries.

All functions are pure and recompute from their inputs on every call.
Only completed entries contribute volume. Discipline grouping covers swim,
bike and run, matched case-insensitively; anything else (brick, strength,
rest, unknown strings) still counts toward ungrouped totals.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from tritrack.calendar.date_ranges import parse_db_date, to_db_date
from tritrack.workouts.merge import WorkoutEntry
from tritrack.workouts.records import TRACKED_DISCIPLINES, CompletedWorkout, normalize_discipline


@dataclass(frozen=True)
class VolumeTotals:
    count: int = 0
    duration_minutes: int = 0
    distance_meters: float = 0.0

    @property
    def distance_km(self) -> float:
        return meters_to_km(self.distance_meters)


@dataclass(frozen=True)
class WeeklySummary:
    disciplines: dict[str, VolumeTotals]
    # Sum of the tracked disciplines only, as shown under the week row
    total: VolumeTotals


@dataclass(frozen=True)
class MonthlyStats:
    disciplines: dict[str, VolumeTotals]
    total: VolumeTotals


@dataclass(frozen=True)
class QuickStats:
    this_week_workouts: int = 0
    this_week_minutes: int = 0
    this_week_distance_meters: float = 0.0
    this_month_workouts: int = 0
    discipline_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class TrainingStats:
    total_workouts: int = 0
    total_distance_km: int = 0
    total_duration_minutes: int = 0
    avg_per_week: float = 0.0


def meters_to_km(meters: float | None) -> float:
    """Meters to kilometers, rounded to one decimal."""
    if not meters:
        return 0.0
    return round(meters / 1000, 1)


def format_duration(minutes: int | None) -> str:
    """Format minutes as ``1h 5m``, ``2h`` or ``45m``."""
    minutes = int(minutes or 0)
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    return f"{mins}m"


def format_distance(meters: float | None) -> str:
    """Format a distance as ``1.5km`` from 1000m upward, plain meters below."""
    if not meters:
        return ""
    if meters >= 1000:
        return f"{meters / 1000:.1f}km"
    return f"{meters:g}m"


def total_volume(entries: Iterable[WorkoutEntry]) -> VolumeTotals:
    """Count, minutes and meters over completed entries."""
    count = 0
    duration = 0
    distance = 0.0
    for entry in entries:
        if not entry.completed:
            continue
        count += 1
        duration += entry.actual_duration_minutes or 0
        distance += entry.actual_distance_meters or 0
    return VolumeTotals(count=count, duration_minutes=duration, distance_meters=distance)


def discipline_totals(entries: Iterable[WorkoutEntry]) -> dict[str, VolumeTotals]:
    """Completed volume grouped by swim, bike and run.

    Every tracked discipline is present in the result, zeroed when absent.
    """
    grouped: dict[str, list[WorkoutEntry]] = {discipline: [] for discipline in TRACKED_DISCIPLINES}
    for entry in entries:
        key = normalize_discipline(entry.discipline)
        if key in grouped:
            grouped[key].append(entry)
    return {discipline: total_volume(rows) for discipline, rows in grouped.items()}


def _sum_totals(totals: Iterable[VolumeTotals]) -> VolumeTotals:
    count = 0
    duration = 0
    distance = 0.0
    for item in totals:
        count += item.count
        duration += item.duration_minutes
        distance += item.distance_meters
    return VolumeTotals(count=count, duration_minutes=duration, distance_meters=distance)


def entries_for_date(entries: Iterable[WorkoutEntry], day: date | str) -> list[WorkoutEntry]:
    day_str = day if isinstance(day, str) else to_db_date(day)
    return [entry for entry in entries if entry.workout_date == day_str]


def group_by_date(entries: Iterable[WorkoutEntry]) -> dict[str, list[WorkoutEntry]]:
    grouped: dict[str, list[WorkoutEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.workout_date, []).append(entry)
    return grouped


def weekly_summary(entries: Iterable[WorkoutEntry], week_dates: Iterable[date | None]) -> WeeklySummary | None:
    """Per-discipline volume for the dates of one calendar row.

    Returns None when no entry (completed or not) falls on those dates.
    """
    wanted = {to_db_date(day) for day in week_dates if day is not None}
    week_entries = [entry for entry in entries if entry.workout_date in wanted]
    if not week_entries:
        return None
    disciplines = discipline_totals(week_entries)
    return WeeklySummary(disciplines=disciplines, total=_sum_totals(disciplines.values()))


def monthly_stats(entries: Sequence[WorkoutEntry]) -> MonthlyStats:
    return MonthlyStats(disciplines=discipline_totals(entries), total=total_volume(entries))


def quick_stats(week_completed: Sequence[CompletedWorkout], month_completed_count: int) -> QuickStats:
    """Dashboard headline numbers from this week's completed workouts."""
    counts = {discipline: 0 for discipline in TRACKED_DISCIPLINES}
    for workout in week_completed:
        key = normalize_discipline(workout.discipline)
        if key in counts:
            counts[key] += 1
    return QuickStats(
        this_week_workouts=len(week_completed),
        this_week_minutes=sum(w.actual_duration_minutes for w in week_completed),
        this_week_distance_meters=sum(w.actual_distance_meters or 0 for w in week_completed),
        this_month_workouts=month_completed_count,
        discipline_counts=counts,
    )


def training_stats(completed: Sequence[CompletedWorkout]) -> TrainingStats:
    """Lifetime totals and average workouts per week.

    Weeks span the first to the last logged date, rounded up, never below one.
    """
    if not completed:
        return TrainingStats()

    total_duration = sum(w.actual_duration_minutes for w in completed)
    total_distance = sum(w.actual_distance_meters or 0 for w in completed)

    dates = [parse_db_date(w.workout_date) for w in completed]
    span_days = (max(dates) - min(dates)).days
    weeks = math.ceil(span_days / 7) or 1

    return TrainingStats(
        total_workouts=len(completed),
        total_distance_km=round(total_distance / 1000),
        total_duration_minutes=total_duration,
        avg_per_week=round(len(completed) / weeks, 1),
    )
