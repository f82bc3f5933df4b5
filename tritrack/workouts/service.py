"""Workout write operations.

Each operation is one user-initiated, fire-and-confirm request. A backend
error surfaces as WriteError carrying the backend's message; an edit or
delete that matches none of the user's rows raises NotFoundError.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from tritrack.calendar.date_ranges import to_db_date
from tritrack.core.errors import NotFoundError, WriteError
from tritrack.db.query_client import QueryClient
from tritrack.workouts.schemas import (
    CompletedWorkoutCreate,
    CompletePlannedRequest,
    CompletionDetails,
    PlannedWorkoutCreate,
    PlannedWorkoutUpdate,
)


def km_to_meters(km: float | None) -> float | None:
    if km is None:
        return None
    return km * 1000


def _completion_values(details: CompletionDetails) -> dict[str, Any]:
    return {
        "actual_duration_minutes": details.actual_duration_minutes,
        "actual_distance_meters": km_to_meters(details.actual_distance_km),
        "average_heart_rate": details.average_heart_rate,
        "average_pace_per_km": details.average_pace_per_km,
        "average_power_watts": details.average_power_watts,
        "elevation_gain_meters": details.elevation_gain_meters,
        "rpe": details.rpe,
        "feeling": details.feeling.value if details.feeling else None,
        "workout_notes": details.workout_notes,
        "weather_conditions": details.weather_conditions,
        "equipment_used": details.equipment_used,
    }


def _single(rows: list[dict[str, Any]], what: str, row_id: str) -> dict[str, Any]:
    if not rows:
        raise NotFoundError(f"{what} {row_id} not found")
    return rows[0]


def add_planned_workout(client: QueryClient, user_id: str, body: PlannedWorkoutCreate) -> dict[str, Any]:
    values = {
        "user_id": user_id,
        "plan_id": body.plan_id,
        "workout_date": to_db_date(body.workout_date),
        "discipline": body.discipline.value,
        "workout_type": body.workout_type,
        "planned_duration_minutes": body.planned_duration_minutes,
        "planned_distance_meters": km_to_meters(body.planned_distance_km),
        "intensity_zone": body.intensity_zone,
        "description": body.description,
        "notes": body.notes,
    }
    row = client.table("planned_workouts").insert(values).execute().raise_for_error()[0]
    logger.info(f"[WORKOUTS] Planned {row['discipline']} on {row['workout_date']} for user_id={user_id} (id={row['id']})")
    return row


def update_planned_workout(
    client: QueryClient,
    user_id: str,
    workout_id: str,
    body: PlannedWorkoutUpdate,
) -> dict[str, Any]:
    changes = body.model_dump(exclude_unset=True)
    values: dict[str, Any] = {}
    for field_name, value in changes.items():
        if field_name == "planned_distance_km":
            values["planned_distance_meters"] = km_to_meters(value)
        elif field_name == "workout_date":
            if value is None:
                raise WriteError("workout_date cannot be cleared")
            values["workout_date"] = to_db_date(value)
        elif field_name == "discipline":
            if value is None:
                raise WriteError("discipline cannot be cleared")
            values["discipline"] = value.value
        else:
            values[field_name] = value

    if not values:
        return get_planned_workout(client, user_id, workout_id)

    rows = (
        client.table("planned_workouts")
        .update(values)
        .eq("id", workout_id)
        .eq("user_id", user_id)
        .execute()
        .raise_for_error()
    )
    row = _single(rows, "Planned workout", workout_id)
    logger.info(f"[WORKOUTS] Updated planned workout {workout_id} fields={sorted(values)}")
    return row


def get_planned_workout(client: QueryClient, user_id: str, workout_id: str) -> dict[str, Any]:
    result = client.table("planned_workouts").select().eq("id", workout_id).eq("user_id", user_id).execute()
    return _single(result.raise_for_error(), "Planned workout", workout_id)


def delete_planned_workout(client: QueryClient, user_id: str, workout_id: str) -> None:
    rows = (
        client.table("planned_workouts")
        .delete()
        .eq("id", workout_id)
        .eq("user_id", user_id)
        .execute()
        .raise_for_error()
    )
    _single(rows, "Planned workout", workout_id)
    logger.info(f"[WORKOUTS] Deleted planned workout {workout_id} for user_id={user_id}")


def log_completed_workout(client: QueryClient, user_id: str, body: CompletedWorkoutCreate) -> dict[str, Any]:
    """Log an ad-hoc workout with no planned counterpart."""
    values = {
        "user_id": user_id,
        "planned_workout_id": None,
        "workout_date": to_db_date(body.workout_date),
        "discipline": body.discipline.value,
        **_completion_values(body),
    }
    row = client.table("completed_workouts").insert(values).execute().raise_for_error()[0]
    logger.info(f"[WORKOUTS] Logged {row['discipline']} on {row['workout_date']} for user_id={user_id} (id={row['id']})")
    return row


def complete_planned_workout(
    client: QueryClient,
    user_id: str,
    planned_id: str,
    body: CompletePlannedRequest,
) -> dict[str, Any]:
    """Record a completed workout that fulfils a planned one.

    Date and discipline are copied from the planned workout. Completing the
    same plan twice is not rejected; the merge shows the first completion.
    """
    planned = get_planned_workout(client, user_id, planned_id)
    values = {
        "user_id": user_id,
        "planned_workout_id": planned["id"],
        "workout_date": planned["workout_date"],
        "discipline": planned["discipline"],
        **_completion_values(body),
    }
    row = client.table("completed_workouts").insert(values).execute().raise_for_error()[0]
    logger.info(f"[WORKOUTS] Completed planned workout {planned_id} (completed id={row['id']})")
    return row


def delete_completed_workout(client: QueryClient, user_id: str, workout_id: str) -> None:
    rows = (
        client.table("completed_workouts")
        .delete()
        .eq("id", workout_id)
        .eq("user_id", user_id)
        .execute()
        .raise_for_error()
    )
    _single(rows, "Completed workout", workout_id)
    logger.info(f"[WORKOUTS] Deleted completed workout {workout_id} for user_id={user_id}")
