"""
Tests for Riot API client status mapping.
"""

import httpx
import pytest

from ranked_tracker.core.riot_api.client import RiotAPIClient
from ranked_tracker.core.riot_api.constants import Platform, QueueId, Region
from ranked_tracker.core.riot_api.errors import (
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RiotAPIError,
    ServiceUnavailableError,
    parse_retry_after,
)


def client_for(handler) -> RiotAPIClient:
    return RiotAPIClient(
        api_key="test_api_key",
        region=Region.EUROPE,
        platform=Platform.EUW1,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def requests_seen():
    return []


@pytest.mark.parametrize(
    "status, error_class",
    [
        (400, BadRequestError),
        (401, AuthenticationError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (429, RateLimitError),
        (503, ServiceUnavailableError),
        (500, RiotAPIError),
    ],
)
async def test_status_mapping(status, error_class):
    async with client_for(lambda request: httpx.Response(status, json={})) as client:
        with pytest.raises(error_class) as exc_info:
            await client.get_summoner_by_puuid("puuid-1")

    assert exc_info.value.status_code == status


async def test_rate_limit_carries_retry_after():
    def handler(request):
        return httpx.Response(
            429, headers={"Retry-After": "5", "X-App-Rate-Limit": "100:120"}
        )

    async with client_for(handler) as client:
        with pytest.raises(RateLimitError) as exc_info:
            await client.get_league_entries_by_puuid("puuid-1")

    assert exc_info.value.retry_after == 5.0
    assert exc_info.value.app_rate_limit == "100:120"


async def test_transport_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(RiotAPIError) as exc_info:
            await client.get_account_by_puuid("puuid-1")

    assert exc_info.value.status_code is None


async def test_account_by_riot_id_parses_payload(requests_seen):
    def handler(request):
        requests_seen.append(request)
        return httpx.Response(
            200, json={"puuid": "puuid-1", "gameName": "Faker", "tagLine": "KR1"}
        )

    async with client_for(handler) as client:
        account = await client.get_account_by_riot_id("Faker", "KR1")

    assert (account.puuid, account.game_name, account.tag_line) == ("puuid-1", "Faker", "KR1")
    [request] = requests_seen
    assert request.url.host == "europe.api.riotgames.com"
    assert request.headers["X-Riot-Token"] == "test_api_key"


async def test_league_entries_and_match_filters(requests_seen):
    def handler(request):
        requests_seen.append(request)
        if "/league/" in request.url.path:
            return httpx.Response(
                200,
                json=[
                    {
                        "queueType": "RANKED_SOLO_5x5",
                        "tier": "GOLD",
                        "rank": "II",
                        "leaguePoints": 42,
                        "wins": 10,
                        "losses": 8,
                    }
                ],
            )
        return httpx.Response(200, json=["EUW1_1", "EUW1_2"])

    async with client_for(handler) as client:
        [entry] = await client.get_league_entries_by_puuid("puuid-1")
        match_ids = await client.get_match_ids_by_puuid(
            "puuid-1", count=20, queue=QueueId.RANKED_SOLO_5X5, match_type="ranked"
        )

    assert (entry.tier, entry.rank, entry.league_points) == ("GOLD", "II", 42)
    assert requests_seen[0].url.host == "euw1.api.riotgames.com"
    assert match_ids == ["EUW1_1", "EUW1_2"]
    params = requests_seen[1].url.params
    assert (params["queue"], params["type"], params["count"]) == ("420", "ranked", "20")


@pytest.mark.parametrize(
    "value, expected",
    [("5", 5.0), ("0", 0.0), ("1.5", 1.5), (None, None), ("soon", None), ("-3", None)],
)
def test_parse_retry_after(value, expected):
    assert parse_retry_after(value) == expected
