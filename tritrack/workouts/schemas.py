"""Workout request schemas (Pydantic).

Distances are entered in kilometers and stored in meters.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from tritrack.workouts.records import Discipline, Feeling


class PlannedWorkoutCreate(BaseModel):
    """Body for scheduling a planned workout."""

    workout_date: date
    discipline: Discipline
    workout_type: str | None = Field(default="endurance", description="Session type: endurance, tempo, intervals, ...")
    planned_duration_minutes: int | None = Field(default=None, ge=0)
    planned_distance_km: float | None = Field(default=None, ge=0)
    intensity_zone: str | None = None
    description: str | None = None
    notes: str | None = None
    plan_id: str | None = None


class PlannedWorkoutUpdate(BaseModel):
    """Partial update of a planned workout; unset fields are left alone."""

    workout_date: date | None = None
    discipline: Discipline | None = None
    workout_type: str | None = None
    planned_duration_minutes: int | None = Field(default=None, ge=0)
    planned_distance_km: float | None = Field(default=None, ge=0)
    intensity_zone: str | None = None
    description: str | None = None
    notes: str | None = None


class CompletionDetails(BaseModel):
    """What was actually done, shared by ad-hoc logs and plan completions."""

    actual_duration_minutes: int = Field(ge=0)
    actual_distance_km: float | None = Field(default=None, ge=0)
    average_heart_rate: int | None = Field(default=None, gt=0, le=250)
    average_pace_per_km: float | None = Field(default=None, gt=0)
    average_power_watts: int | None = Field(default=None, ge=0)
    elevation_gain_meters: float | None = Field(default=None, ge=0)
    rpe: int | None = Field(default=None, ge=1, le=10, description="Perceived effort, 1-10")
    feeling: Feeling | None = None
    workout_notes: str | None = None
    weather_conditions: str | None = None
    equipment_used: str | None = None


class CompletedWorkoutCreate(CompletionDetails):
    """Body for logging an unplanned workout."""

    workout_date: date
    discipline: Discipline


class CompletePlannedRequest(CompletionDetails):
    """Body for marking a planned workout done. Date and discipline come from the plan."""

    rpe: int | None = Field(default=5, ge=1, le=10, description="Perceived effort, 1-10")
