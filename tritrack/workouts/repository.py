"""Read helpers for workout tables.

Reads follow the views' fallback policy: a backend error is logged and
treated as "no rows", so a failed fetch renders as an empty view instead of
an error. Every query is scoped to one user.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from tritrack.calendar.date_ranges import DateRange
from tritrack.db.query_client import QueryClient, QueryResult, TableQuery
from tritrack.workouts.records import CompletedWorkout, PlannedWorkout


def rows_or_empty(result: QueryResult, what: str) -> list[dict[str, Any]]:
    """Return result rows, or an empty list (with a warning) if the read failed."""
    if result.error:
        logger.warning(f"[READ] Failed to load {what}, falling back to empty: {result.error.message}")
        return []
    return result.data


def _in_window(query: TableQuery, window: DateRange | None) -> TableQuery:
    if window is None:
        return query
    start, end = window.as_query_bounds()
    return query.gte("workout_date", start).lte("workout_date", end)


def fetch_planned(client: QueryClient, user_id: str, window: DateRange | None = None) -> list[PlannedWorkout]:
    query = _in_window(client.table("planned_workouts").select().eq("user_id", user_id), window)
    rows = rows_or_empty(query.order("workout_date").execute(), "planned workouts")
    return [PlannedWorkout.from_row(row) for row in rows]


def fetch_completed(
    client: QueryClient,
    user_id: str,
    window: DateRange | None = None,
    newest_first: bool = False,
    limit: int | None = None,
) -> list[CompletedWorkout]:
    query = _in_window(client.table("completed_workouts").select().eq("user_id", user_id), window)
    query = query.order("workout_date", ascending=not newest_first)
    if limit is not None:
        query = query.limit(limit)
    rows = rows_or_empty(query.execute(), "completed workouts")
    return [CompletedWorkout.from_row(row) for row in rows]


def fetch_window(
    client: QueryClient,
    user_id: str,
    window: DateRange,
) -> tuple[list[PlannedWorkout], list[CompletedWorkout]]:
    """Load both workout kinds for a window; the merge runs only after both return."""
    planned = fetch_planned(client, user_id, window)
    completed = fetch_completed(client, user_id, window)
    logger.debug(
        f"[READ] user_id={user_id} window={window.start}..{window.end}: "
        f"{len(planned)} planned, {len(completed)} completed"
    )
    return planned, completed
