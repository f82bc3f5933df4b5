"""Canonical calendar-date helpers for week and month windows.

Weeks run Sunday-Saturday: the weekday index used throughout is 0 for
Sunday through 6 for Saturday. All dates are plain ``date`` values and cross
the backend boundary as ``YYYY-MM-DD`` strings; no timestamp is ever
converted to a date, so there is no timezone to shift a day near midnight.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date window."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"DateRange end {self.end} is before start {self.start}")

    def __contains__(self, day: object) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        return isinstance(day, date) and self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def as_query_bounds(self) -> tuple[str, str]:
        """Return (start, end) as canonical date strings for gte/lte filters."""
        return to_db_date(self.start), to_db_date(self.end)


def to_db_date(day: date) -> str:
    """Serialize a date to the backend's ``YYYY-MM-DD`` form."""
    return day.isoformat()


def parse_db_date(value: str | date) -> date:
    """Parse a backend date string.

    Only the leading ``YYYY-MM-DD`` is read, so a full ISO timestamp maps to
    its written calendar day rather than being shifted into another zone.
    """
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def weekday_index(day: date) -> int:
    """Sunday-based weekday index (Sunday = 0 ... Saturday = 6)."""
    return day.isoweekday() % 7


def week_start(day: date) -> date:
    """Return the Sunday at or before day."""
    return day - timedelta(days=weekday_index(day))


def week_range(ref: date, offset: int = 0) -> DateRange:
    """Week containing ref, shifted by offset whole weeks."""
    start = week_start(ref) + timedelta(weeks=offset)
    return DateRange(start=start, end=start + timedelta(days=6))


def week_days(ref: date, offset: int = 0) -> list[date]:
    return list(week_range(ref, offset).days())


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    total = year * 12 + (month - 1) + offset
    shifted_year, shifted_month = divmod(total, 12)
    return shifted_year, shifted_month + 1


def month_range(ref: date, offset: int = 0) -> DateRange:
    """First through last day of the month offset months from ref's month.

    The day of ref never matters, so a 31st reference cannot overflow into
    the following month.
    """
    year, month = _shift_month(ref.year, ref.month, offset)
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(start=date(year, month, 1), end=date(year, month, last_day))


def month_grid(ref: date, offset: int = 0) -> list[list[date | None]]:
    """Month laid out in Sunday-first rows of seven cells.

    Cells before day 1 are None. The final row is not padded and may be
    shorter than seven.
    """
    window = month_range(ref, offset)
    cells: list[date | None] = [None] * weekday_index(window.start)
    cells.extend(window.days())
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def _short_label(day: date) -> str:
    return f"{day:%b} {day.day}"


def week_label(offset: int, ref: date) -> str:
    if offset == 0:
        return "This Week"
    if offset == 1:
        return "Next Week"
    if offset == -1:
        return "Last Week"
    window = week_range(ref, offset)
    return f"{_short_label(window.start)} - {_short_label(window.end)}"
