from unittest.mock import AsyncMock

import pytest

from ranked_tracker.core.exceptions import ExternalServiceError, PlayerNotFoundError
from ranked_tracker.core.riot_api.errors import NotFoundError, RateLimitError
from ranked_tracker.features.matches.gateway import RiotMatchGateway
from ranked_tracker.features.matches.schemas import GameSummary
from ranked_tracker.features.matches.service import MatchService


def game(match_id: str) -> GameSummary:
    return GameSummary(
        game_id=match_id,
        game_creation=0,
        game_duration=1800,
        champion_id=103,
        champion_name="Ahri",
        win=True,
        kills=1,
        deaths=1,
        assists=1,
        cs=150,
        items=[0] * 7,
    )


@pytest.fixture
def mock_gateway():
    return AsyncMock(spec=RiotMatchGateway)


@pytest.fixture
def service(mock_gateway):
    return MatchService(mock_gateway)


async def test_keeps_first_solo_games_up_to_limit(service, mock_gateway):
    mock_gateway.fetch_recent_ranked_match_ids.return_value = ["M1", "M2", "M3", "M4"]
    mock_gateway.fetch_game_summary.side_effect = [game("M1"), None, game("M3"), game("M4")]

    games = await service.get_recent_games("puuid-1", limit=2)

    assert [g.game_id for g in games] == ["M1", "M3"]
    assert mock_gateway.fetch_game_summary.call_count == 3


async def test_unknown_puuid(service, mock_gateway):
    mock_gateway.fetch_recent_ranked_match_ids.side_effect = NotFoundError(
        "Resource not found", status_code=404
    )

    with pytest.raises(PlayerNotFoundError):
        await service.get_recent_games("ghost")


async def test_upstream_failure(service, mock_gateway):
    mock_gateway.fetch_recent_ranked_match_ids.return_value = ["M1"]
    mock_gateway.fetch_game_summary.side_effect = RateLimitError(
        "Rate limit exceeded", status_code=429
    )

    with pytest.raises(ExternalServiceError):
        await service.get_recent_games("puuid-1")


async def test_gateway_requests_ranked_solo_ids():
    riot_client = AsyncMock()
    riot_client.get_match_ids_by_puuid.return_value = [f"M{n}" for n in range(20)]

    match_ids = await RiotMatchGateway(riot_client).fetch_recent_ranked_match_ids("puuid-1")

    assert len(match_ids) == 10
    kwargs = riot_client.get_match_ids_by_puuid.call_args.kwargs
    assert (kwargs["count"], int(kwargs["queue"]), kwargs["match_type"]) == (20, 420, "ranked")
