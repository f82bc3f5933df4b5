"""Race-day countdown arithmetic on calendar dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from tritrack.calendar.date_ranges import parse_db_date

DISTANCE_LABELS: dict[str, str] = {
    "sprint": "Sprint Distance",
    "olympic": "Olympic Distance",
    "70.3": "Half Ironman 70.3",
    "ironman": "Full Ironman",
    "custom": "Custom Distance",
}


@dataclass(frozen=True)
class RaceCountdown:
    race_id: str
    race_name: str
    race_date: str
    race_location: str | None
    distance_label: str
    goal_time: str
    days_until: int
    weeks_until: int


def days_until(race_date: date | str, today: date) -> int:
    """Whole calendar days from today to race day; zero on race day, negative after."""
    return (parse_db_date(race_date) - today).days


def weeks_until(race_date: date | str, today: date) -> int:
    return days_until(race_date, today) // 7


def distance_label(distance_type: str) -> str:
    return DISTANCE_LABELS.get(distance_type, distance_type)


def format_goal_time(minutes: int | None) -> str:
    if not minutes:
        return "Not set"
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def race_countdown(race: dict[str, Any], today: date) -> RaceCountdown:
    """Build the countdown card for a user_races row."""
    days = days_until(race["race_date"], today)
    return RaceCountdown(
        race_id=str(race["id"]),
        race_name=race["race_name"],
        race_date=str(race["race_date"]),
        race_location=race.get("race_location"),
        distance_label=distance_label(race.get("distance_type") or ""),
        goal_time=format_goal_time(race.get("goal_finish_time_minutes")),
        days_until=days,
        weeks_until=weeks_until(race["race_date"], today),
    )
