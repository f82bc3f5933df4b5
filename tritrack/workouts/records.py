"""Workout records built from backend rows.

Rows arrive as plain dicts from the query client; these dataclasses pin down
the fields the merge and aggregation steps rely on. Discipline is kept as
the raw string the backend holds, since grouping matches it
case-insensitively and unknown values must still count toward totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Discipline(str, Enum):
    SWIM = "swim"
    BIKE = "bike"
    RUN = "run"
    BRICK = "brick"
    STRENGTH = "strength"
    REST = "rest"


class Feeling(str, Enum):
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


# Disciplines that get their own line in grouped statistics
TRACKED_DISCIPLINES: tuple[str, ...] = (Discipline.SWIM.value, Discipline.BIKE.value, Discipline.RUN.value)


def normalize_discipline(discipline: str | None) -> str:
    """Grouping key for a stored discipline string."""
    return (discipline or "").strip().lower()


@dataclass(frozen=True)
class PlannedWorkout:
    id: str
    user_id: str
    workout_date: str
    discipline: str
    workout_type: str | None = None
    planned_duration_minutes: int | None = None
    planned_distance_meters: float | None = None
    intensity_zone: str | None = None
    description: str | None = None
    notes: str | None = None
    plan_id: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> PlannedWorkout:
        return cls(
            id=str(row["id"]),
            user_id=str(row.get("user_id", "")),
            workout_date=str(row["workout_date"]),
            discipline=str(row.get("discipline") or ""),
            workout_type=row.get("workout_type"),
            planned_duration_minutes=row.get("planned_duration_minutes"),
            planned_distance_meters=row.get("planned_distance_meters"),
            intensity_zone=row.get("intensity_zone"),
            description=row.get("description"),
            notes=row.get("notes"),
            plan_id=row.get("plan_id"),
        )


@dataclass(frozen=True)
class CompletedWorkout:
    id: str
    user_id: str
    workout_date: str
    discipline: str
    actual_duration_minutes: int
    actual_distance_meters: float | None = None
    planned_workout_id: str | None = None
    average_heart_rate: int | None = None
    average_pace_per_km: float | None = None
    average_power_watts: int | None = None
    elevation_gain_meters: float | None = None
    rpe: int | None = None
    feeling: str | None = None
    workout_notes: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> CompletedWorkout:
        planned_ref = row.get("planned_workout_id")
        return cls(
            id=str(row["id"]),
            user_id=str(row.get("user_id", "")),
            workout_date=str(row["workout_date"]),
            discipline=str(row.get("discipline") or ""),
            actual_duration_minutes=int(row.get("actual_duration_minutes") or 0),
            actual_distance_meters=row.get("actual_distance_meters"),
            planned_workout_id=str(planned_ref) if planned_ref else None,
            average_heart_rate=row.get("average_heart_rate"),
            average_pace_per_km=row.get("average_pace_per_km"),
            average_power_watts=row.get("average_power_watts"),
            elevation_gain_meters=row.get("elevation_gain_meters"),
            rpe=row.get("rpe"),
            feeling=row.get("feeling"),
            workout_notes=row.get("workout_notes"),
        )
