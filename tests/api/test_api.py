"""HTTP tests for the TriTrack API.

Uses FastAPI's TestClient with the database dependency pointed at the
per-test in-memory database.
"""

from datetime import date, timedelta

from tritrack.config.settings import settings

USER_ID = "user-1"


def _iso(day: date) -> str:
    return day.isoformat()


class TestIdentity:
    def test_health(self, api_client):
        assert api_client.get("/health").json() == {"status": "ok"}

    def test_missing_identity_is_rejected(self, api_client, monkeypatch):
        monkeypatch.setattr(settings, "dev_user_id", "")
        response = api_client.get("/dashboard", headers={"X-User-Id": ""})
        assert response.status_code == 401

    def test_dev_user_fallback(self, api_client, monkeypatch, add_completed):
        monkeypatch.setattr(settings, "dev_user_id", "dev-user")
        add_completed(_iso(date.today()), user_id="dev-user")

        response = api_client.get("/analytics/stats", headers={"X-User-Id": ""})

        assert response.status_code == 200
        assert response.json()["total_workouts"] == 1


class TestWorkoutEndpoints:
    def test_plan_complete_and_view(self, api_client):
        today = date.today()
        created = api_client.post(
            "/workouts/planned",
            json={"workout_date": _iso(today), "discipline": "run", "planned_duration_minutes": 45},
        )
        assert created.status_code == 201
        planned_id = created.json()["id"]

        completed = api_client.post(
            f"/workouts/planned/{planned_id}/complete",
            json={"actual_duration_minutes": 50, "actual_distance_km": 10, "feeling": "great"},
        )
        assert completed.status_code == 201
        assert completed.json()["planned_workout_id"] == planned_id

        week = api_client.get("/dashboard/week").json()
        assert week["label"] == "This Week"
        assert len(week["entries"]) == 1
        entry = week["entries"][0]
        assert entry["completed"] is True
        assert entry["actual_distance_meters"] == 10000
        assert week["summary"]["disciplines"]["run"]["distance_km"] == 10.0

        day = api_client.get(f"/calendar/day/{_iso(today)}").json()
        assert day["day"] == _iso(today)
        assert len(day["completed"]) == 1
        assert day["totals"]["duration_minutes"] == 50

    def test_invalid_discipline(self, api_client):
        response = api_client.post("/workouts/planned", json={"workout_date": "2024-06-03", "discipline": "yoga"})
        assert response.status_code == 422

    def test_edit_unknown_workout(self, api_client):
        response = api_client.patch("/workouts/planned/missing", json={"planned_duration_minutes": 30})
        assert response.status_code == 404

    def test_clearing_date_surfaces_message(self, api_client):
        planned_id = api_client.post(
            "/workouts/planned", json={"workout_date": "2024-06-03", "discipline": "swim"}
        ).json()["id"]

        response = api_client.patch(f"/workouts/planned/{planned_id}", json={"workout_date": None})

        assert response.status_code == 400
        assert "workout_date" in response.json()["detail"]

    def test_log_and_delete_completed(self, api_client):
        created = api_client.post(
            "/workouts/completed",
            json={"workout_date": "2024-06-04", "discipline": "bike", "actual_duration_minutes": 120},
        )
        assert created.status_code == 201

        workout_id = created.json()["id"]
        assert api_client.delete(f"/workouts/completed/{workout_id}").status_code == 204
        assert api_client.delete(f"/workouts/completed/{workout_id}").status_code == 404

    def test_other_user_cannot_delete(self, api_client):
        planned_id = api_client.post(
            "/workouts/planned", json={"workout_date": "2024-06-03", "discipline": "swim"}
        ).json()["id"]

        response = api_client.delete(f"/workouts/planned/{planned_id}", headers={"X-User-Id": "user-2"})

        assert response.status_code == 404
        assert api_client.delete(f"/workouts/planned/{planned_id}").status_code == 204


class TestDashboardEndpoint:
    def test_empty_dashboard(self, api_client):
        response = api_client.get("/dashboard")

        assert response.status_code == 200
        body = response.json()
        assert body["primary_race"] is None
        assert body["quick_stats"]["this_week_workouts"] == 0
        assert body["week"]["entries"] == []
        assert body["weekly_chart"] == []
        assert body["recent_workouts"] == []

    def test_dashboard_with_data(self, api_client, add_completed):
        today = _iso(date.today())
        add_completed(today, "swim", 30)
        add_completed(today, "run", 45)

        body = api_client.get("/dashboard").json()

        assert body["quick_stats"]["this_week_workouts"] == 2
        assert body["quick_stats"]["this_month_workouts"] == 2
        assert len(body["weekly_chart_segments"]) == 2
        assert len(body["recent_workouts"]) == 2


class TestCalendarEndpoint:
    def test_month(self, api_client, add_completed):
        add_completed(_iso(date.today()), "swim", 30)

        body = api_client.get("/calendar/month").json()

        assert body["window"]["start"].endswith("-01")
        assert body["stats"]["total"]["count"] == 1
        assert [item["label"] for item in body["planned_vs_completed"]] == ["Swim", "Bike", "Run"]
        assert any(week["summary"] for week in body["weeks"])

    def test_bad_day(self, api_client):
        assert api_client.get("/calendar/day/not-a-date").status_code == 422


class TestRaceEndpoints:
    def test_setup_and_countdown(self, api_client):
        race_day = date.today() + timedelta(days=70)
        response = api_client.post(
            "/races/setup",
            json={"race_name": "Challenge Roth", "race_date": _iso(race_day), "distance_type": "ironman"},
        )
        assert response.status_code == 201
        race_id = response.json()["race"]["id"]
        assert response.json()["training_plan"]["weeks_duration"] == 10

        primary = api_client.get("/races/primary").json()
        assert primary["race_id"] == race_id
        assert primary["days_until"] == 70
        assert primary["weeks_until"] == 10
        assert primary["distance_label"] == "Full Ironman"

        goals = api_client.put(f"/races/{race_id}/goals", json={"bike_goal_minutes": 330})
        assert goals.status_code == 200
        assert goals.json()["bike_goal_minutes"] == 330

    def test_past_race_date(self, api_client):
        response = api_client.post(
            "/races/setup",
            json={"race_name": "Old Race", "race_date": _iso(date.today() - timedelta(days=1))},
        )
        assert response.status_code == 400
        assert "must be after" in response.json()["detail"]

    def test_no_primary_race(self, api_client):
        response = api_client.get("/races/primary")
        assert response.status_code == 200
        assert response.json() is None

    def test_goals_for_unknown_race(self, api_client):
        assert api_client.put("/races/missing/goals", json={}).status_code == 404


class TestProfileEndpoints:
    def test_profile_lifecycle(self, api_client):
        assert api_client.get("/profile").status_code == 404

        created = api_client.patch("/profile", json={"email": "a@example.com", "units_preference": "imperial"})
        assert created.status_code == 200
        assert created.json()["units_preference"] == "imperial"

        assert api_client.get("/profile").json()["email"] == "a@example.com"

    def test_clearing_units_is_rejected(self, api_client):
        api_client.patch("/profile", json={"email": "a@example.com"})

        response = api_client.patch("/profile", json={"units_preference": None})

        assert response.status_code == 400
        assert "units_preference" in response.json()["detail"]

    def test_metrics(self, api_client):
        assert api_client.get("/profile/metrics").json() is None

        saved = api_client.put("/profile/metrics", json={"ftp_watts": 250})
        assert saved.status_code == 200
        assert api_client.get("/profile/metrics").json()["ftp_watts"] == 250


class TestCallerDate:
    """Views anchor on the caller's local date when one is sent."""

    def test_week_uses_caller_date(self, api_client, add_completed):
        add_completed("2024-06-03", "swim", 30)

        week = api_client.get("/dashboard/week", params={"today": "2024-06-05"}).json()

        assert week["window"] == {"start": "2024-06-02", "end": "2024-06-08"}
        assert [e["workout_date"] for e in week["entries"]] == ["2024-06-03"]

    def test_dashboard_uses_caller_date(self, api_client, add_completed):
        add_completed("2024-06-03", "swim", 30)
        add_completed("2024-05-30", "run", 30)

        body = api_client.get("/dashboard", params={"today": "2024-06-05"}).json()

        assert body["quick_stats"]["this_week_workouts"] == 1
        assert body["quick_stats"]["this_month_workouts"] == 1
        assert body["week"]["window"]["start"] == "2024-06-02"

    def test_month_uses_caller_date(self, api_client, add_completed):
        add_completed("2024-06-03", "swim", 30)

        body = api_client.get("/calendar/month", params={"today": "2024-06-30"}).json()

        assert body["label"] == "June 2024"
        assert body["stats"]["total"]["count"] == 1

    def test_countdown_uses_caller_date(self, api_client, query_client):
        query_client.table("user_races").insert(
            {
                "user_id": USER_ID,
                "race_name": "Ironman Frankfurt",
                "race_date": "2024-06-30",
                "distance_type": "ironman",
                "is_primary": True,
            }
        ).execute().raise_for_error()

        primary = api_client.get("/races/primary", params={"today": "2024-06-05"}).json()

        assert primary["days_until"] == 25
        assert primary["weeks_until"] == 3

    def test_race_setup_uses_caller_date(self, api_client):
        response = api_client.post(
            "/races/setup",
            params={"today": "2024-01-01"},
            json={"race_name": "Nice 70.3", "race_date": "2024-06-01"},
        )

        assert response.status_code == 201
        assert response.json()["training_plan"]["start_date"] == "2024-01-01"
        assert response.json()["training_plan"]["weeks_duration"] == 22
