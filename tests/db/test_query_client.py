"""Tests for the query client.

Backend failures must come back as a result carrying an error, never as a
raised exception.
"""

import pytest

from tritrack.core.errors import WriteError
from tritrack.db.query_client import QueryError, QueryResult

USER_ID = "user-1"


class TestSelect:
    def test_eq_and_date_range_filters(self, query_client, add_planned):
        add_planned("2024-06-01")
        add_planned("2024-06-03")
        add_planned("2024-06-08")
        add_planned("2024-06-09")
        add_planned("2024-06-04", user_id="someone-else")

        result = (
            query_client.table("planned_workouts")
            .select()
            .eq("user_id", USER_ID)
            .gte("workout_date", "2024-06-02")
            .lte("workout_date", "2024-06-08")
            .order("workout_date")
            .execute()
        )

        assert result.ok
        assert [row["workout_date"] for row in result.data] == ["2024-06-03", "2024-06-08"]

    def test_descending_order_and_limit(self, query_client, add_completed):
        for day in ("2024-06-01", "2024-06-02", "2024-06-03"):
            add_completed(day)

        result = (
            query_client.table("completed_workouts")
            .select("id", "workout_date")
            .eq("user_id", USER_ID)
            .order("workout_date", ascending=False)
            .limit(2)
            .execute()
        )

        assert [row["workout_date"] for row in result.data] == ["2024-06-03", "2024-06-02"]
        assert set(result.data[0]) == {"id", "workout_date"}

    def test_eq_none_matches_null(self, query_client, add_planned, add_completed):
        planned = add_planned("2024-06-03")
        add_completed("2024-06-03", planned_workout_id=planned["id"])
        adhoc = add_completed("2024-06-04")

        result = query_client.table("completed_workouts").select().eq("planned_workout_id", None).execute()
        assert [row["id"] for row in result.data] == [adhoc["id"]]

    def test_unknown_column_is_an_error_result(self, query_client):
        result = query_client.table("completed_workouts").select().eq("avg_heart_rate", 150).execute()

        assert not result.ok
        assert result.data == []
        assert result.error.code == "undefined_column"
        assert "avg_heart_rate" in result.error.message

    def test_maybe_single(self, query_client, add_planned):
        row = add_planned("2024-06-03")
        found = query_client.table("planned_workouts").select().eq("id", row["id"]).execute()
        missing = query_client.table("planned_workouts").select().eq("id", "nope").execute()

        assert found.maybe_single()["id"] == row["id"]
        assert missing.maybe_single() is None

    def test_unknown_table_is_a_programming_error(self, query_client):
        with pytest.raises(ValueError):
            query_client.table("workouts")


class TestInsert:
    def test_defaults_are_returned(self, query_client):
        result = (
            query_client.table("planned_workouts")
            .insert({"user_id": USER_ID, "workout_date": "2024-06-03", "discipline": "bike"})
            .execute()
        )

        row = result.raise_for_error()[0]
        assert row["id"]
        assert row["created_at"]
        assert row["discipline"] == "bike"

    def test_insert_many(self, query_client):
        rows = [
            {"user_id": USER_ID, "workout_date": "2024-06-03", "discipline": "bike"},
            {"user_id": USER_ID, "workout_date": "2024-06-04", "discipline": "run"},
        ]
        result = query_client.table("planned_workouts").insert(rows).execute()
        assert len(result.data) == 2

    def test_not_null_violation_is_an_error_result(self, query_client):
        result = (
            query_client.table("completed_workouts")
            .insert({"user_id": USER_ID, "workout_date": "2024-06-03", "discipline": "run"})
            .execute()
        )

        assert not result.ok
        assert result.error.message

    def test_session_usable_after_failure(self, query_client, add_planned):
        query_client.table("completed_workouts").insert({"user_id": USER_ID}).execute()
        row = add_planned("2024-06-03")
        assert row["id"]

    def test_foreign_key_violation_is_an_error_result(self, query_client):
        result = (
            query_client.table("completed_workouts")
            .insert(
                {
                    "user_id": USER_ID,
                    "workout_date": "2024-06-03",
                    "discipline": "run",
                    "actual_duration_minutes": 30,
                    "planned_workout_id": "missing",
                }
            )
            .execute()
        )
        assert not result.ok

    def test_raise_for_error(self):
        with pytest.raises(WriteError, match="boom"):
            QueryResult(error=QueryError(message="boom")).raise_for_error()


class TestUpdateDelete:
    def test_update_matches_filters(self, query_client, add_planned):
        first = add_planned("2024-06-03", planned_duration_minutes=30)
        second = add_planned("2024-06-04", planned_duration_minutes=30)

        result = (
            query_client.table("planned_workouts")
            .update({"planned_duration_minutes": 60})
            .eq("id", first["id"])
            .execute()
        )

        assert [row["planned_duration_minutes"] for row in result.data] == [60]
        untouched = query_client.table("planned_workouts").select().eq("id", second["id"]).execute()
        assert untouched.data[0]["planned_duration_minutes"] == 30

    def test_update_without_filter_is_rejected(self, query_client, add_planned):
        add_planned("2024-06-03", planned_duration_minutes=30)

        result = query_client.table("planned_workouts").update({"planned_duration_minutes": 0}).execute()

        assert result.error.code == "missing_filter"
        rows = query_client.table("planned_workouts").select().execute().data
        assert rows[0]["planned_duration_minutes"] == 30

    def test_update_without_values_is_rejected(self, query_client):
        result = query_client.table("planned_workouts").update({}).eq("id", "x").execute()
        assert result.error.code == "empty_values"

    def test_delete_without_filter_is_rejected(self, query_client, add_planned):
        add_planned("2024-06-03")
        result = query_client.table("planned_workouts").delete().execute()

        assert result.error.code == "missing_filter"
        assert len(query_client.table("planned_workouts").select().execute().data) == 1

    def test_delete_returns_removed_rows(self, query_client, add_planned):
        row = add_planned("2024-06-03")
        result = query_client.table("planned_workouts").delete().eq("id", row["id"]).execute()

        assert [r["id"] for r in result.data] == [row["id"]]
        assert query_client.table("planned_workouts").select().execute().data == []

    def test_deleting_planned_clears_completion_reference(self, query_client, add_planned, add_completed):
        planned = add_planned("2024-06-03")
        completed = add_completed("2024-06-03", planned_workout_id=planned["id"])

        query_client.table("planned_workouts").delete().eq("id", planned["id"]).execute().raise_for_error()

        row = query_client.table("completed_workouts").select().eq("id", completed["id"]).execute().data[0]
        assert row["planned_workout_id"] is None

    def test_neq_excludes_matching_rows(self, query_client, add_planned):
        keep = add_planned("2024-06-03", planned_duration_minutes=30)
        other = add_planned("2024-06-04", planned_duration_minutes=30)

        result = (
            query_client.table("planned_workouts")
            .update({"planned_duration_minutes": 0})
            .eq("user_id", USER_ID)
            .neq("id", keep["id"])
            .execute()
        )

        assert [row["id"] for row in result.data] == [other["id"]]
        kept = query_client.table("planned_workouts").select().eq("id", keep["id"]).execute().data[0]
        assert kept["planned_duration_minutes"] == 30
