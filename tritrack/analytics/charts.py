"""Chart input shaping.

Turns aggregate counts and durations into label/value/color series. Drawing
(SVG arcs, bar heights in pixels) belongs to the client; only the numbers
it needs are derived here.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from tritrack.workouts.merge import WorkoutEntry
from tritrack.workouts.records import TRACKED_DISCIPLINES, CompletedWorkout, normalize_discipline

DISCIPLINE_COLORS: dict[str, str] = {
    "swim": "#06b6d4",
    "bike": "#10b981",
    "run": "#f97316",
}

# Pie segments start at twelve o'clock
PIE_START_ANGLE = -90.0


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float
    color: str


@dataclass(frozen=True)
class PieSegment:
    label: str
    value: float
    color: str
    percentage: float
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class BarItem:
    label: str
    planned: float
    completed: float
    color: str


def discipline_pie_series(completed: Iterable[CompletedWorkout]) -> list[ChartPoint]:
    """Workout counts per tracked discipline, zero-count disciplines omitted."""
    counts = {discipline: 0 for discipline in TRACKED_DISCIPLINES}
    for workout in completed:
        key = normalize_discipline(workout.discipline)
        if key in counts:
            counts[key] += 1
    return [
        ChartPoint(label=discipline.capitalize(), value=count, color=DISCIPLINE_COLORS[discipline])
        for discipline, count in counts.items()
        if count > 0
    ]


def pie_segments(points: Sequence[ChartPoint]) -> list[PieSegment]:
    """Percentage and angular extent for each point.

    An all-zero series has nothing to draw and yields an empty list;
    otherwise the output has one segment per input point.
    """
    total = sum(max(point.value, 0) for point in points)
    if total <= 0:
        return []

    segments = []
    current = PIE_START_ANGLE
    for point in points:
        value = max(point.value, 0)
        sweep = value / total * 360
        segments.append(
            PieSegment(
                label=point.label,
                value=value,
                color=point.color,
                percentage=value / total * 100,
                start_angle=current,
                end_angle=current + sweep,
            )
        )
        current += sweep
    return segments


def planned_vs_completed_series(entries: Iterable[WorkoutEntry]) -> list[BarItem]:
    """Planned vs completed minutes per tracked discipline."""
    planned = {discipline: 0.0 for discipline in TRACKED_DISCIPLINES}
    completed = {discipline: 0.0 for discipline in TRACKED_DISCIPLINES}
    for entry in entries:
        key = normalize_discipline(entry.discipline)
        if key not in planned:
            continue
        planned[key] += entry.planned_duration_minutes or 0
        if entry.completed:
            completed[key] += entry.actual_duration_minutes or 0
    return [
        BarItem(
            label=discipline.capitalize(),
            planned=planned[discipline],
            completed=completed[discipline],
            color=DISCIPLINE_COLORS[discipline],
        )
        for discipline in TRACKED_DISCIPLINES
    ]


def bar_scale(series: Iterable[BarItem]) -> float:
    """Largest planned or completed value, floored at 1 so bars never divide by zero."""
    return max([1.0, *(max(item.planned, item.completed) for item in series)])
