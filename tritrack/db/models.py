"""SQLAlchemy models for the seven backend tables.

The table and column names are the backend's external contract: the hosted
data service and every client share them, so fields are never renamed here.
Calendar dates are stored as plain ``YYYY-MM-DD`` strings.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class Profile(Base):
    """User profile, keyed by the authenticated user's ID."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[str | None] = mapped_column(String, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str | None] = mapped_column(String, nullable=True)
    experience_level: Mapped[str] = mapped_column(String, nullable=False, default="beginner")
    units_preference: Mapped[str] = mapped_column(String, nullable=False, default="metric")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class UserRace(Base):
    """A race the user is training for.

    At most one race per user is flagged ``is_primary``; it drives the
    dashboard countdown.
    """

    __tablename__ = "user_races"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    race_name: Mapped[str] = mapped_column(String, nullable=False)
    race_date: Mapped[str] = mapped_column(String(10), nullable=False)
    race_location: Mapped[str | None] = mapped_column(String, nullable=True)
    distance_type: Mapped[str] = mapped_column(String, nullable=False)
    goal_finish_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    registration_status: Mapped[str | None] = mapped_column(String, nullable=True)
    course_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class AthleteMetrics(Base):
    """Threshold and heart-rate reference values for an athlete."""

    __tablename__ = "athlete_metrics"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    ftp_watts: Mapped[int | None] = mapped_column(Integer, nullable=True)
    swim_css_pace_per_100m: Mapped[float | None] = mapped_column(Float, nullable=True)
    run_threshold_pace_per_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    resting_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class TrainingPlan(Base):
    __tablename__ = "training_plans"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    race_id: Mapped[str | None] = mapped_column(String, ForeignKey("user_races.id", ondelete="SET NULL"), nullable=True)
    plan_name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[str] = mapped_column(String(10), nullable=False)
    end_date: Mapped[str] = mapped_column(String(10), nullable=False)
    weeks_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    weekly_hours_available: Mapped[float | None] = mapped_column(Float, nullable=True)
    plan_type: Mapped[str] = mapped_column(String, nullable=False, default="intermediate")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class PlannedWorkoutRow(Base):
    """A scheduled session with optional duration/distance targets."""

    __tablename__ = "planned_workouts"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    plan_id: Mapped[str | None] = mapped_column(String, ForeignKey("training_plans.id", ondelete="SET NULL"), nullable=True)
    workout_date: Mapped[str] = mapped_column(String(10), nullable=False)
    discipline: Mapped[str] = mapped_column(String, nullable=False)
    workout_type: Mapped[str | None] = mapped_column(String, nullable=True)
    planned_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    planned_distance_meters: Mapped[float | None] = mapped_column(Float, nullable=True)
    intensity_zone: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_planned_workouts_user_date", "user_id", "workout_date"),
    )


class CompletedWorkoutRow(Base):
    """A logged session.

    ``planned_workout_id`` is a nullable back-reference to the planned
    session it fulfils; ad-hoc logs leave it empty.
    """

    __tablename__ = "completed_workouts"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    planned_workout_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("planned_workouts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    workout_date: Mapped[str] = mapped_column(String(10), nullable=False)
    discipline: Mapped[str] = mapped_column(String, nullable=False)
    actual_duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    actual_distance_meters: Mapped[float | None] = mapped_column(Float, nullable=True)
    average_pace_per_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    average_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    average_power_watts: Mapped[int | None] = mapped_column(Integer, nullable=True)
    elevation_gain_meters: Mapped[float | None] = mapped_column(Float, nullable=True)
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    workout_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    weather_conditions: Mapped[str | None] = mapped_column(String, nullable=True)
    equipment_used: Mapped[str | None] = mapped_column(String, nullable=True)
    feeling: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_completed_workouts_user_date", "user_id", "workout_date"),
    )


class RaceGoal(Base):
    """Per-leg goal splits for a race."""

    __tablename__ = "race_goals"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    race_id: Mapped[str] = mapped_column(String, ForeignKey("user_races.id", ondelete="CASCADE"), nullable=False, index=True)
    swim_goal_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    t1_goal_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bike_goal_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    t2_goal_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    run_goal_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    nutrition_strategy: Mapped[str | None] = mapped_column(Text, nullable=True)
    pacing_strategy: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


TABLES: dict[str, type[Base]] = {
    "profiles": Profile,
    "user_races": UserRace,
    "athlete_metrics": AthleteMetrics,
    "training_plans": TrainingPlan,
    "planned_workouts": PlannedWorkoutRow,
    "completed_workouts": CompletedWorkoutRow,
    "race_goals": RaceGoal,
}
