"""Planned/completed workout merge.

Joins a user's planned and completed workouts for one date window into a
single list of view entries:

- one entry per planned workout, annotated with the completed workout that
  references it (if any)
- one entry per completed workout left over, i.e. ad-hoc logs and rows whose
  planned reference points outside the planned set

The join is at-most-one per planned workout. When several completed rows
reference the same planned workout, the first one wins and the rest are
dropped from the view (logged, not rejected).

Pure function: no I/O, no ordering guarantee beyond insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from tritrack.workouts.records import CompletedWorkout, PlannedWorkout


@dataclass(frozen=True)
class WorkoutEntry:
    """One logical workout in a view: planned, completed, or both."""

    id: str
    workout_date: str
    discipline: str
    completed: bool
    planned_workout_id: str | None = None
    completed_workout_id: str | None = None
    workout_type: str | None = None
    planned_duration_minutes: int | None = None
    planned_distance_meters: float | None = None
    actual_duration_minutes: int | None = None
    actual_distance_meters: float | None = None
    description: str | None = None
    notes: str | None = None
    average_heart_rate: int | None = None
    rpe: int | None = None
    feeling: str | None = None

    @property
    def is_planned(self) -> bool:
        return self.planned_workout_id is not None


def _entry_from_planned(planned: PlannedWorkout, match: CompletedWorkout | None) -> WorkoutEntry:
    return WorkoutEntry(
        id=planned.id,
        workout_date=planned.workout_date,
        discipline=planned.discipline,
        completed=match is not None,
        planned_workout_id=planned.id,
        completed_workout_id=match.id if match else None,
        workout_type=planned.workout_type,
        planned_duration_minutes=planned.planned_duration_minutes,
        planned_distance_meters=planned.planned_distance_meters,
        actual_duration_minutes=match.actual_duration_minutes if match else None,
        actual_distance_meters=match.actual_distance_meters if match else None,
        description=planned.description,
        notes=planned.notes,
        average_heart_rate=match.average_heart_rate if match else None,
        rpe=match.rpe if match else None,
        feeling=match.feeling if match else None,
    )


def _entry_from_completed(completed: CompletedWorkout) -> WorkoutEntry:
    return WorkoutEntry(
        id=completed.id,
        workout_date=completed.workout_date,
        discipline=completed.discipline,
        completed=True,
        completed_workout_id=completed.id,
        actual_duration_minutes=completed.actual_duration_minutes,
        actual_distance_meters=completed.actual_distance_meters,
        notes=completed.workout_notes,
        average_heart_rate=completed.average_heart_rate,
        rpe=completed.rpe,
        feeling=completed.feeling,
    )


def merge_workouts(
    planned: Iterable[PlannedWorkout] | None,
    completed: Iterable[CompletedWorkout] | None,
) -> list[WorkoutEntry]:
    """Merge planned and completed workouts into view entries.

    Args:
        planned: Planned workouts for one user and date window
        completed: Completed workouts for the same user and window

    Returns:
        Entries in insertion order: planned first, then leftover completed
    """
    by_planned_id: dict[str, CompletedWorkout] = {}
    leftovers: list[CompletedWorkout] = []

    for row in completed or ():
        if row.planned_workout_id is None:
            leftovers.append(row)
        elif row.planned_workout_id in by_planned_id:
            logger.warning(
                f"[MERGE] Completed workout {row.id} duplicates planned reference {row.planned_workout_id} "
                f"(already matched by {by_planned_id[row.planned_workout_id].id}); ignoring"
            )
        else:
            by_planned_id[row.planned_workout_id] = row

    entries: list[WorkoutEntry] = []
    for row in planned or ():
        match = by_planned_id.pop(row.id, None)
        entries.append(_entry_from_planned(row, match))

    # Whatever is still keyed here references a planned workout outside this set
    entries.extend(_entry_from_completed(row) for row in by_planned_id.values())
    entries.extend(_entry_from_completed(row) for row in leftovers)
    return entries


def sort_by_date(entries: Iterable[WorkoutEntry]) -> list[WorkoutEntry]:
    """Stable ascending sort on the workout date string."""
    return sorted(entries, key=lambda entry: entry.workout_date)
