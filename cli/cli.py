"""Developer CLI for TriTrack.

Runs the API server, prepares the database and prints the same week,
month and lifetime views the API serves, straight from the database.
"""

import os
from datetime import datetime

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from sqlalchemy import text

from tritrack.analytics.service import build_training_stats
from tritrack.calendar.service import build_month_view
from tritrack.config.settings import settings
from tritrack.core.logger import setup_logger
from tritrack.dashboard.service import build_week_overview
from tritrack.db.query_client import QueryClient
from tritrack.db.session import get_session, init_db
from tritrack.workouts.aggregation import VolumeTotals, format_distance, format_duration

console = Console()

app = typer.Typer(
    name="tritrack",
    help="TriTrack CLI - triathlon training tracker",
    add_completion=False,
)

DEFAULT_HOST = os.getenv("SERVER_HOST", "127.0.0.1")


def _default_user_id() -> str:
    return settings.dev_user_id or "dev-user"


def _volume_cell(totals: VolumeTotals) -> str:
    parts = [f"{totals.count}x", format_duration(totals.duration_minutes)]
    if totals.distance_meters:
        parts.append(format_distance(totals.distance_meters))
    return " • ".join(parts)


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


@app.command()
def serve(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("tritrack.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db_command() -> None:
    """Create missing tables and check the database answers."""
    try:
        init_db()
        with get_session() as db:
            db.execute(text("SELECT 1"))
    except Exception as e:
        console.print(Panel(Text("Database initialization failed", style="bold red"), subtitle=str(e), border_style="red"))
        raise typer.Exit(1) from e
    console.print(Panel(Text("Database ready", style="bold green"), subtitle=settings.database_url, border_style="green"))


@app.command()
def week(
    user_id: str | None = typer.Option(None, "--user-id", help="User ID (defaults to DEV_USER_ID)"),
    offset: int = typer.Option(0, "--offset", "-o", help="Weeks relative to this week"),
    today: datetime | None = typer.Option(None, "--today", formats=["%Y-%m-%d"], help="Reference date (defaults to today)"),
) -> None:
    """Print the merged planned/completed workouts for a week."""
    user_id = user_id or _default_user_id()
    with get_session() as db:
        overview = build_week_overview(QueryClient(db), user_id, offset, today.date() if today else None)

    table = Table(title=f"{overview.label} ({overview.window.start} - {overview.window.end})")
    table.add_column("Date")
    table.add_column("Discipline")
    table.add_column("Planned")
    table.add_column("Actual")
    table.add_column("Done", justify="center")
    for entry in overview.entries:
        planned = format_duration(entry.planned_duration_minutes) if entry.planned_duration_minutes else "-"
        actual = format_duration(entry.actual_duration_minutes) if entry.completed else "-"
        table.add_row(entry.workout_date, entry.discipline, planned, actual, "✓" if entry.completed else "")
    console.print(table)

    if overview.summary:
        total = overview.summary.total
        console.print(f"Week Total: {format_duration(total.duration_minutes)} • {total.distance_km}km")


@app.command()
def month(
    user_id: str | None = typer.Option(None, "--user-id", help="User ID (defaults to DEV_USER_ID)"),
    offset: int = typer.Option(0, "--offset", "-o", help="Months relative to this month"),
    today: datetime | None = typer.Option(None, "--today", formats=["%Y-%m-%d"], help="Reference date (defaults to today)"),
) -> None:
    """Print weekly and monthly volume by discipline."""
    user_id = user_id or _default_user_id()
    with get_session() as db:
        view = build_month_view(QueryClient(db), user_id, offset, today.date() if today else None)

    table = Table(title=view.label)
    table.add_column("Week of")
    for discipline in ("swim", "bike", "run"):
        table.add_column(discipline.capitalize())
    for calendar_week in view.weeks:
        if calendar_week.summary is None:
            continue
        first_day = next(day for day in calendar_week.days if day is not None)
        table.add_row(
            first_day.isoformat(),
            *(_volume_cell(calendar_week.summary.disciplines[d]) for d in ("swim", "bike", "run")),
        )
    console.print(table)

    total = view.stats.total
    console.print(
        f"Month: {total.count} workouts • {format_duration(total.duration_minutes)} • {total.distance_km}km"
    )


@app.command()
def stats(user_id: str | None = typer.Option(None, "--user-id", help="User ID (defaults to DEV_USER_ID)")) -> None:
    """Print lifetime training statistics."""
    user_id = user_id or _default_user_id()
    with get_session() as db:
        result = build_training_stats(QueryClient(db), user_id)

    details = "\n".join(
        [
            f"  Workouts: {result.total_workouts}",
            f"  Distance: {result.total_distance_km} km",
            f"  Duration: {format_duration(result.total_duration_minutes)}",
            f"  Per week: {result.avg_per_week}",
        ]
    )
    console.print(Panel(Text(details), title=f"Training stats for {user_id}", border_style="cyan"))


if __name__ == "__main__":
    app()
