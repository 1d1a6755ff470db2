from fastapi.testclient import TestClient

from conftest import identity, register_user


def link(client: TestClient, coach_external_id: str, athlete_id: str):
    return client.post(
        "/coach/athletes", json={"athlete_id": athlete_id}, headers=identity(coach_external_id)
    )


def record_performance(client: TestClient, external_id: str, athlete_id: str, score: float) -> dict:
    response = client.post(
        "/performance-records",
        json={
            "user_id": athlete_id,
            "sport": "Football",
            "metrics": {"speed": score, "strength": score, "stamina": score, "technique": score},
        },
        headers=identity(external_id),
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_linking_athletes_is_idempotent(client: TestClient):
    register_user(client, "coach-1", "Coach", role="coach")
    athlete = register_user(client, "ext-1", "Maya")

    first = link(client, "coach-1", athlete["id"])
    assert first.status_code == 201, first.text
    assert first.json()["athlete"]["id"] == athlete["id"]
    second = link(client, "coach-1", athlete["id"])
    assert second.status_code == 200, second.text
    assert second.json()["id"] == first.json()["id"]

    roster = client.get("/coach/athletes", headers=identity("coach-1")).json()
    assert [a["id"] for a in roster] == [athlete["id"]]


def test_only_athletes_join_rosters(client: TestClient):
    register_user(client, "coach-1", "Coach", role="coach")
    other_coach = register_user(client, "coach-2", "Other coach", role="coach")
    assert link(client, "coach-1", other_coach["id"]).status_code == 422
    assert link(client, "coach-1", "missing").status_code == 404


def test_coach_views_require_coach_role(client: TestClient):
    register_user(client, "ext-1", "Maya")
    for path in ("/coach/athletes", "/coach/metrics", "/coach/analytics"):
        response = client.get(path, headers=identity("ext-1"))
        assert response.status_code == 403, response.text


def test_metrics_for_empty_roster(client: TestClient):
    register_user(client, "coach-1", "Coach", role="coach")
    response = client.get("/coach/metrics", headers=identity("coach-1"))
    assert response.status_code == 200, response.text
    assert response.json() == {
        "athlete_count": 0,
        "avg_performance": None,
        "avg_improvement": None,
        "active_injury_alerts": 0,
        "completed_tasks_today": 0,
    }


def test_metrics_follow_roster_activity(client: TestClient):
    register_user(client, "coach-1", "Coach", role="coach")
    maya = register_user(client, "ext-1", "Maya")
    leo = register_user(client, "ext-2", "Leo")
    link(client, "coach-1", maya["id"])
    link(client, "coach-1", leo["id"])

    record_performance(client, "coach-1", maya["id"], 4.0)
    record_performance(client, "coach-1", maya["id"], 6.0)

    task = client.get("/tasks/daily", headers=identity("ext-1")).json()[0]
    client.patch(f"/tasks/{task['id']}/complete", headers=identity("ext-1"))

    alert = client.post(
        "/injury-alerts",
        json={
            "athlete_id": leo["id"],
            "risk_level": "high",
            "body_part": "hamstring",
            "description": "Tightness after sprint work",
        },
        headers=identity("coach-1"),
    )
    assert alert.status_code == 201, alert.text

    metrics = client.get("/coach/metrics", headers=identity("coach-1")).json()
    assert metrics["athlete_count"] == 2
    assert metrics["avg_performance"] == 5.5
    assert metrics["avg_improvement"] == 50.0
    assert metrics["active_injury_alerts"] == 1
    assert metrics["completed_tasks_today"] == 1


def test_analytics_reports_last_four_weeks(client: TestClient):
    register_user(client, "coach-1", "Coach", role="coach")
    maya = register_user(client, "ext-1", "Maya")
    link(client, "coach-1", maya["id"])
    record_performance(client, "coach-1", maya["id"], 4.0)
    record_performance(client, "coach-1", maya["id"], 6.0)

    response = client.get("/coach/analytics", headers=identity("coach-1"))
    assert response.status_code == 200, response.text
    progress = response.json()["team_progress"]

    assert [p["week"] for p in progress] == ["Week 1", "Week 2", "Week 3", "Week 4"]
    assert [p["records"] for p in progress] == [0, 0, 0, 2]
    assert progress[0]["average"] is None
    assert progress[3]["average"] == 5.0
    assert progress[3]["top_performer"] == 6.0


def test_performance_record_updates_current_metrics(client: TestClient):
    maya = register_user(client, "ext-1", "Maya")
    record = record_performance(client, "ext-1", maya["id"], 7.0)
    assert record["recorded_by"] == maya["id"]

    me = client.get("/users/me", headers=identity("ext-1")).json()
    assert me["metrics"]["speed"] == 7.0

    history = client.get(f"/performance-records/{maya['id']}", headers=identity("ext-1")).json()
    assert [r["id"] for r in history] == [record["id"]]


def test_performance_history_requires_roster_link(client: TestClient):
    register_user(client, "coach-1", "Coach", role="coach")
    maya = register_user(client, "ext-1", "Maya")
    response = client.get(f"/performance-records/{maya['id']}", headers=identity("coach-1"))
    assert response.status_code == 403, response.text

    out_of_range = client.post(
        "/performance-records",
        json={"user_id": maya["id"], "sport": "Football", "metrics": {"speed": 11}},
        headers=identity("ext-1"),
    )
    assert out_of_range.status_code == 422, out_of_range.text
