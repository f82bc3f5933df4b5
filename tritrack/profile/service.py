"""Profile and athlete metrics reads and writes."""

from __future__ import annotations

from typing import Any

from loguru import logger

from tritrack.core.errors import NotFoundError, WriteError
from tritrack.db.query_client import QueryClient
from tritrack.profile.schemas import AthleteMetricsUpdate, ProfileUpdate
from tritrack.workouts.repository import rows_or_empty

# NOT NULL columns with a server default; an explicit null may not overwrite them
REQUIRED_PROFILE_FIELDS = ("experience_level", "units_preference")


def get_profile(client: QueryClient, user_id: str) -> dict[str, Any] | None:
    rows = rows_or_empty(client.table("profiles").select().eq("id", user_id).execute(), "profile")
    return rows[0] if rows else None


def update_profile(client: QueryClient, user_id: str, body: ProfileUpdate) -> dict[str, Any]:
    """Apply a partial update, creating the profile on first save."""
    values = body.model_dump(exclude_unset=True)
    for field in REQUIRED_PROFILE_FIELDS:
        if field in values and values[field] is None:
            raise WriteError(f"{field} cannot be cleared")
    existing = client.table("profiles").select("id").eq("id", user_id).execute().raise_for_error()

    if not existing:
        if not values.get("email"):
            raise NotFoundError(f"Profile {user_id} not found; an email is required to create it")
        row = client.table("profiles").insert({"id": user_id, **values}).execute().raise_for_error()[0]
        logger.info(f"[PROFILE] Created profile for user_id={user_id}")
        return row

    if "email" in values and not values["email"]:
        raise WriteError("email cannot be cleared")
    if not values:
        return get_profile(client, user_id) or {}

    row = client.table("profiles").update(values).eq("id", user_id).execute().raise_for_error()[0]
    logger.info(f"[PROFILE] Updated profile for user_id={user_id} fields={sorted(values)}")
    return row


def get_athlete_metrics(client: QueryClient, user_id: str) -> dict[str, Any] | None:
    rows = rows_or_empty(client.table("athlete_metrics").select().eq("user_id", user_id).execute(), "athlete metrics")
    return rows[0] if rows else None


def upsert_athlete_metrics(client: QueryClient, user_id: str, body: AthleteMetricsUpdate) -> dict[str, Any]:
    values = body.model_dump()
    existing = client.table("athlete_metrics").select("id").eq("user_id", user_id).execute().raise_for_error()
    if existing:
        row = client.table("athlete_metrics").update(values).eq("user_id", user_id).execute().raise_for_error()[0]
    else:
        row = client.table("athlete_metrics").insert({"user_id": user_id, **values}).execute().raise_for_error()[0]
    logger.info(f"[PROFILE] Saved athlete metrics for user_id={user_id}")
    return row
