"""Profile and athlete metrics request schemas (Pydantic)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """Partial profile update. ``email`` is required only when the profile does not exist yet."""

    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    weight_kg: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0, lt=130)
    gender: str | None = None
    experience_level: Literal["beginner", "intermediate", "advanced"] | None = None
    units_preference: Literal["metric", "imperial"] | None = None


class AthleteMetricsUpdate(BaseModel):
    ftp_watts: int | None = Field(default=None, gt=0)
    swim_css_pace_per_100m: float | None = Field(default=None, gt=0, description="Seconds per 100m")
    run_threshold_pace_per_km: float | None = Field(default=None, gt=0, description="Seconds per km")
    max_heart_rate: int | None = Field(default=None, gt=0, le=250)
    resting_heart_rate: int | None = Field(default=None, gt=0, le=250)
