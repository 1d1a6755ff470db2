from fastapi.testclient import TestClient

from conftest import identity, register_user
from talenthub.models.user import User
from talenthub.services.leaderboard import get_leaderboard, get_user_rank


def give_points(db, user_id: str, points: int) -> None:
    user = db.get(User, user_id)
    user.points = points
    db.commit()


def test_rank_on_empty_leaderboard_is_none(db):
    assert get_leaderboard(db) == []
    assert get_user_rank(db, "nobody") is None


def test_leaderboard_orders_by_points_then_registration(client: TestClient, db):
    first = register_user(client, "ext-1", "Maya", sport="Football")
    second = register_user(client, "ext-2", "Leo", sport="Football")
    third = register_user(client, "ext-3", "Ana", sport="Athletics")
    give_points(db, first["id"], 40)
    give_points(db, second["id"], 40)
    give_points(db, third["id"], 90)

    response = client.get("/leaderboard/global", headers=identity("ext-2"))
    assert response.status_code == 200, response.text
    body = response.json()

    assert [a["id"] for a in body["athletes"]] == [third["id"], first["id"], second["id"]]
    assert body["current_user_rank"]["rank"] == 3
    assert body["current_user_rank"]["user"]["id"] == second["id"]
    assert body["scope"] == "global"
    assert body["sport"] == "all"
    assert body["timeframe"] == "monthly"


def test_sport_filter(client: TestClient, db):
    register_user(client, "ext-1", "Maya", sport="Football")
    ana = register_user(client, "ext-2", "Ana", sport="Athletics")

    body = client.get("/leaderboard/national", params={"sport": "Athletics"}).json()
    assert [a["id"] for a in body["athletes"]] == [ana["id"]]
    assert body["current_user_rank"] is None

    rank = get_user_rank(db, ana["id"], sport="Athletics")
    assert rank is not None and rank.rank == 1


def test_unknown_sport_is_empty(client: TestClient):
    register_user(client, "ext-1", "Maya", sport="Football")
    response = client.get(
        "/leaderboard/regional", params={"sport": "Curling"}, headers=identity("ext-1")
    )
    assert response.status_code == 200, response.text
    assert response.json()["athletes"] == []
    assert response.json()["current_user_rank"] is None


def test_coaches_are_not_ranked(client: TestClient):
    register_user(client, "ext-1", "Maya")
    register_user(client, "coach-1", "Coach", role="coach")
    body = client.get("/leaderboard/global", headers=identity("coach-1")).json()
    assert len(body["athletes"]) == 1
    assert body["current_user_rank"] is None


def test_leaderboard_is_limited(client: TestClient, db):
    for i in range(4):
        register_user(client, f"ext-{i}", f"Athlete {i}")
    assert len(get_leaderboard(db, limit=2)) == 2
    assert len(get_leaderboard(db)) == 4


def test_invalid_scope_and_timeframe_are_rejected(client: TestClient):
    assert client.get("/leaderboard/galactic").status_code == 422
    assert client.get("/leaderboard/global", params={"timeframe": "yearly"}).status_code == 422
    assert client.get("/leaderboard/state", params={"timeframe": "all-time"}).status_code == 200
