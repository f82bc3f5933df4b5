"""Root conftest for all tests.

Every test gets its own in-memory SQLite database with the full schema and
foreign-key enforcement switched on, so ON DELETE rules behave as they do in
production.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tritrack.db.models import Base
from tritrack.db.query_client import QueryClient
from tritrack.db.session import build_engine, get_db

USER_ID = "user-1"


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection in one test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def query_client(db_session):
    return QueryClient(db_session)


@pytest.fixture
def add_planned(query_client):
    """Insert a planned_workouts row and return it."""

    def _add(workout_date: str, discipline: str = "swim", user_id: str = USER_ID, **values):
        row = {"user_id": user_id, "workout_date": workout_date, "discipline": discipline, **values}
        return query_client.table("planned_workouts").insert(row).execute().raise_for_error()[0]

    return _add


@pytest.fixture
def add_completed(query_client):
    """Insert a completed_workouts row and return it."""

    def _add(
        workout_date: str,
        discipline: str = "run",
        duration: int = 30,
        user_id: str = USER_ID,
        **values,
    ):
        row = {
            "user_id": user_id,
            "workout_date": workout_date,
            "discipline": discipline,
            "actual_duration_minutes": duration,
            **values,
        }
        return query_client.table("completed_workouts").insert(row).execute().raise_for_error()[0]

    return _add


@pytest.fixture
def api_client(db_session):
    """TestClient bound to the test database, authenticated as USER_ID.

    The client is not entered as a context manager, so the app's startup
    hook (which would touch the configured database) never runs.
    """
    from tritrack.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    client = TestClient(app, headers={"X-User-Id": USER_ID})
    try:
        yield client
    finally:
        app.dependency_overrides.clear()
