"""Player endpoints wired onto in-memory repositories."""

import pytest
from fastapi.testclient import TestClient

from ranked_tracker.features.players.dependencies import (
    get_player_registration_service,
    get_player_service,
)
from ranked_tracker.features.players.models import ResolvedIdentity
from ranked_tracker.features.players.orm_models import LPTrackerEventORM
from ranked_tracker.features.players.service import PlayerService
from ranked_tracker.main import app
from tests.fakes import NOW, make_player, solo_entry


@pytest.fixture
def client(player_repository, history_repository, lp_event_repository, gateway):
    def read_service():
        return PlayerService(player_repository, history_repository, lp_event_repository)

    def registration_service():
        return PlayerService(
            player_repository, history_repository, lp_event_repository, gateway
        )

    app.dependency_overrides[get_player_service] = read_service
    app.dependency_overrides[get_player_registration_service] = registration_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_add_player(client, gateway):
    gateway.register(
        ResolvedIdentity(puuid="puuid-9", game_name="Faker", tag_line="KR1", profile_icon_id=6),
        solo_entry("GOLD", "I", 12),
    )

    response = client.post("/api/players", json={"summoner_name": "Faker#KR1", "role": "mid"})

    assert response.status_code == 201
    body = response.json()
    assert body["summoner_name"] == "Faker#KR1"
    assert body["display_rank"] == "Gold I"
    assert body["role"] == "mid"


@pytest.mark.parametrize(
    "summoner_name, status_code",
    [("NoTagLine", 400), ("Ghost#EUW", 404)],
)
def test_add_player_errors(client, summoner_name, status_code):
    response = client.post("/api/players", json={"summoner_name": summoner_name})

    assert response.status_code == status_code


def test_add_player_already_tracked(client, gateway, player_repository):
    player = make_player()
    player_repository.players[player.id] = player
    gateway.register(ResolvedIdentity(puuid=player.puuid, game_name="Faker", tag_line="KR1"))

    response = client.post("/api/players", json={"summoner_name": "Faker#KR1"})

    assert response.status_code == 409


def test_add_player_rejects_short_name(client):
    response = client.post("/api/players", json={"summoner_name": "ab"})

    assert response.status_code == 422


def test_leaderboard(client, player_repository):
    player_repository.players = {
        1: make_player(1, "Low#EUW", "p1", tier="IRON", rank="IV", league_points=0),
        2: make_player(2, "High#EUW", "p2", tier="EMERALD", rank="II", league_points=70),
    }

    response = client.get("/api/players")

    assert response.status_code == 200
    assert [p["summoner_name"] for p in response.json()] == ["High#EUW", "Low#EUW"]


def test_get_unknown_player(client):
    assert client.get("/api/players/42").status_code == 404


def test_patch_metadata(client, player_repository):
    player_repository.players[1] = make_player()

    response = client.patch("/api/players/1", json={"player_name": "Lee", "is_main": True})

    assert response.status_code == 200
    assert response.json()["player_name"] == "Lee"
    assert response.json()["is_main"] is True


def test_delete_player(client, player_repository):
    player_repository.players[1] = make_player()

    assert client.delete("/api/players/1").status_code == 204
    assert client.delete("/api/players/1").status_code == 404


def test_lp_events(client, player_repository, lp_event_repository):
    player_repository.players[1] = make_player()
    lp_event_repository.events.append(
        LPTrackerEventORM(
            id=1,
            player_id=1,
            summoner_name="Faker#KR1",
            previous_tier="GOLD",
            previous_rank="II",
            previous_lp=90,
            tier="GOLD",
            rank="I",
            current_lp=0,
            difference=10,
            timestamp=NOW,
        )
    )

    per_player = client.get("/api/players/1/lp-events")
    feed = client.get("/api/lp-events", params={"limit": 5})

    assert per_player.status_code == 200
    assert per_player.json()[0]["difference"] == 10
    assert feed.json()[0]["rank"] == "I"
    assert client.get("/api/players/2/lp-events").status_code == 404
