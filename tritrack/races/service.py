"""Race setup, primary race lookup and race goals."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from loguru import logger

from tritrack.calendar.date_ranges import to_db_date
from tritrack.core.errors import NotFoundError, WriteError
from tritrack.db.query_client import QueryClient
from tritrack.races.schemas import RaceGoalRequest, RaceSetupRequest
from tritrack.workouts.repository import rows_or_empty


@dataclass(frozen=True)
class RaceSetupResult:
    race: dict[str, Any]
    training_plan: dict[str, Any]


def get_primary_race(client: QueryClient, user_id: str) -> dict[str, Any] | None:
    """The user's countdown race, or None when unset or the read fails."""
    result = client.table("user_races").select().eq("user_id", user_id).eq("is_primary", True).execute()
    rows = rows_or_empty(result, "primary race")
    return rows[0] if rows else None


def _demote_other_primaries(client: QueryClient, user_id: str, keep_race_id: str) -> None:
    (
        client.table("user_races")
        .update({"is_primary": False})
        .eq("user_id", user_id)
        .eq("is_primary", True)
        .neq("id", keep_race_id)
        .execute()
        .raise_for_error()
    )


def _ensure_athlete_metrics(client: QueryClient, user_id: str) -> None:
    existing = client.table("athlete_metrics").select("id").eq("user_id", user_id).execute().raise_for_error()
    if existing:
        return
    client.table("athlete_metrics").insert({"user_id": user_id}).execute().raise_for_error()


def setup_race(client: QueryClient, user_id: str, body: RaceSetupRequest, today: date | None = None) -> RaceSetupResult:
    """Create the primary race plus the rows that hang off it.

    Steps, each its own backend request:
    1. insert the race (primary)
    2. demote the user's other primary races
    3. record the experience level on the profile
    4. make sure an athlete_metrics row exists
    5. insert a training plan running from today to one week before race day
    """
    today = today or date.today()
    days_to_race = (body.race_date - today).days
    if days_to_race <= 0:
        raise WriteError(f"Race date {body.race_date} must be after {today}")

    goal_minutes = round(body.goal_time_hours * 60) if body.goal_time_hours else None
    race = (
        client.table("user_races")
        .insert(
            {
                "user_id": user_id,
                "race_name": body.race_name,
                "race_date": to_db_date(body.race_date),
                "race_location": body.race_location,
                "distance_type": body.distance_type,
                "goal_finish_time_minutes": goal_minutes,
                "is_primary": True,
            }
        )
        .execute()
        .raise_for_error()[0]
    )
    _demote_other_primaries(client, user_id, race["id"])

    client.table("profiles").update({"experience_level": body.experience_level}).eq("id", user_id).execute().raise_for_error()
    _ensure_athlete_metrics(client, user_id)

    plan = (
        client.table("training_plans")
        .insert(
            {
                "user_id": user_id,
                "race_id": race["id"],
                "plan_name": f"{body.race_name} Training Plan",
                "start_date": to_db_date(today),
                "end_date": to_db_date(body.race_date - timedelta(days=7)),
                "weeks_duration": math.ceil(days_to_race / 7),
                "plan_type": body.experience_level,
            }
        )
        .execute()
        .raise_for_error()[0]
    )

    logger.info(
        f"[RACES] Set up race {race['id']} '{body.race_name}' on {race['race_date']} for user_id={user_id}, "
        f"plan {plan['id']} ({plan['weeks_duration']} weeks)"
    )
    return RaceSetupResult(race=race, training_plan=plan)


def upsert_race_goals(client: QueryClient, user_id: str, race_id: str, body: RaceGoalRequest) -> dict[str, Any]:
    owned = client.table("user_races").select("id").eq("id", race_id).eq("user_id", user_id).execute().raise_for_error()
    if not owned:
        raise NotFoundError(f"Race {race_id} not found")

    values = body.model_dump()
    existing = client.table("race_goals").select("id").eq("race_id", race_id).execute().raise_for_error()
    if existing:
        row = client.table("race_goals").update(values).eq("race_id", race_id).execute().raise_for_error()[0]
    else:
        row = client.table("race_goals").insert({"race_id": race_id, **values}).execute().raise_for_error()[0]
    logger.info(f"[RACES] Saved goals for race {race_id}")
    return row
