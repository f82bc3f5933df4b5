"""Tests for profile and athlete metrics operations."""

import pytest

from tritrack.core.errors import NotFoundError, WriteError
from tritrack.profile.schemas import AthleteMetricsUpdate, ProfileUpdate
from tritrack.profile.service import (
    get_athlete_metrics,
    get_profile,
    update_profile,
    upsert_athlete_metrics,
)

USER_ID = "user-1"


class TestProfile:
    def test_first_save_creates_profile(self, query_client):
        row = update_profile(query_client, USER_ID, ProfileUpdate(email="a@example.com", full_name="Alex"))

        assert row["id"] == USER_ID
        assert row["experience_level"] == "beginner"
        assert row["units_preference"] == "metric"
        assert get_profile(query_client, USER_ID)["full_name"] == "Alex"

    def test_creating_requires_email(self, query_client):
        with pytest.raises(NotFoundError):
            update_profile(query_client, USER_ID, ProfileUpdate(full_name="Alex"))

    def test_partial_update(self, query_client):
        update_profile(query_client, USER_ID, ProfileUpdate(email="a@example.com", full_name="Alex"))
        row = update_profile(query_client, USER_ID, ProfileUpdate(weight_kg=68.5))

        assert row["weight_kg"] == 68.5
        assert row["full_name"] == "Alex"

    def test_email_cannot_be_cleared(self, query_client):
        update_profile(query_client, USER_ID, ProfileUpdate(email="a@example.com"))
        with pytest.raises(WriteError):
            update_profile(query_client, USER_ID, ProfileUpdate(email=None))

    @pytest.mark.parametrize("field", ["experience_level", "units_preference"])
    def test_defaulted_fields_cannot_be_cleared(self, query_client, field):
        update_profile(query_client, USER_ID, ProfileUpdate(email="a@example.com"))
        with pytest.raises(WriteError, match=field):
            update_profile(query_client, USER_ID, ProfileUpdate(**{field: None}))

        assert get_profile(query_client, USER_ID)[field] is not None

    def test_first_save_rejects_null_units(self, query_client):
        with pytest.raises(WriteError):
            update_profile(query_client, USER_ID, ProfileUpdate(email="a@example.com", units_preference=None))
        assert get_profile(query_client, USER_ID) is None

    def test_missing_profile(self, query_client):
        assert get_profile(query_client, USER_ID) is None


class TestAthleteMetrics:
    def test_upsert(self, query_client):
        assert get_athlete_metrics(query_client, USER_ID) is None

        first = upsert_athlete_metrics(query_client, USER_ID, AthleteMetricsUpdate(ftp_watts=250))
        second = upsert_athlete_metrics(query_client, USER_ID, AthleteMetricsUpdate(ftp_watts=265, max_heart_rate=188))

        assert first["id"] == second["id"]
        assert get_athlete_metrics(query_client, USER_ID)["ftp_watts"] == 265
        assert get_athlete_metrics(query_client, USER_ID)["max_heart_rate"] == 188
