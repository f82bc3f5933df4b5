"""Race request schemas (Pydantic)."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

DistanceType = Literal["sprint", "olympic", "70.3", "ironman", "custom"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]


class RaceSetupRequest(BaseModel):
    """Final submission of the race setup wizard."""

    race_name: str = Field(min_length=1)
    race_date: date
    race_location: str | None = None
    distance_type: DistanceType = "70.3"
    goal_time_hours: float | None = Field(default=None, gt=0, description="Goal finish time in hours")
    experience_level: ExperienceLevel = "intermediate"


class RaceGoalRequest(BaseModel):
    swim_goal_minutes: int | None = Field(default=None, ge=0)
    t1_goal_minutes: int | None = Field(default=None, ge=0)
    bike_goal_minutes: int | None = Field(default=None, ge=0)
    t2_goal_minutes: int | None = Field(default=None, ge=0)
    run_goal_minutes: int | None = Field(default=None, ge=0)
    nutrition_strategy: str | None = None
    pacing_strategy: str | None = None
