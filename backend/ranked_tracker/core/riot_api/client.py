"""Riot API HTTP client with error mapping and authentication.

Every request is a single attempt. Retry and backoff policy belongs to the
caller (see ``features.jobs.retry``), which keeps the client usable both by the
update service and by the synchronous HTTP endpoints.
"""

import asyncio
from typing import Optional, Dict, Any, List, Union

import httpx
import structlog

from ..config import get_global_settings
from .errors import (
    RiotAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    BadRequestError,
    parse_retry_after,
)
from .models import (
    AccountDTO,
    SummonerDTO,
    LeagueEntryDTO,
    CurrentGameInfoDTO,
    MatchDTO,
)
from .endpoints import RiotAPIEndpoints
from .constants import Region, Platform, QueueId, RIOT_TOKEN_HEADER

logger = structlog.get_logger(__name__)


class RiotAPIClient:
    """Riot API client returning typed DTOs and raising typed errors."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        region: Optional[Region] = None,
        platform: Optional[Platform] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            api_key: Riot API key (uses config if None)
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
            timeout: Per-request timeout in seconds (uses config if None)
            transport: Optional httpx transport (tests use ``httpx.MockTransport``)
        """
        settings = get_global_settings()
        self.api_key = api_key or settings.riot_api_key
        self.region = region or Region(settings.riot_region)
        self.platform = platform or Platform(settings.riot_platform)
        self.timeout = timeout or settings.riot_request_timeout_seconds
        self._transport = transport

        self.endpoints = RiotAPIEndpoints(self.region, self.platform)

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        RIOT_TOKEN_HEADER: self.api_key,
                        "Accept": "application/json",
                        "User-Agent": "RankedTracker/1.0",
                    }

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout),
                        transport=self._transport,
                    )

                    logger.info(
                        "Riot API client session started",
                        region=self.region.value,
                        platform=self.platform.value,
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise specific RiotAPIError subclass for non-200 responses."""
        status = response.status_code
        if status == 200:
            return

        if status == 400:
            raise BadRequestError("Invalid request parameters", status_code=status)
        if status == 401:
            raise AuthenticationError("Invalid API key", status_code=status)
        if status == 403:
            raise ForbiddenError("Access forbidden", status_code=status)
        if status == 404:
            raise NotFoundError("Resource not found", status_code=status)
        if status == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                status_code=status,
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
                app_rate_limit=response.headers.get("X-App-Rate-Limit"),
                method_rate_limit=response.headers.get("X-Method-Rate-Limit"),
            )
        if status == 503:
            raise ServiceUnavailableError("Service unavailable", status_code=status)
        raise RiotAPIError(f"Unexpected status {status}", status_code=status)

    async def _make_request(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make a single GET request.

        Args:
            url: Request URL
            params: Query parameters

        Returns:
            Response data as dictionary or list

        Raises:
            RiotAPIError: For API errors and transport failures
        """
        await self.start_session()

        if self.session is None:
            raise RiotAPIError("Session not initialized")

        try:
            response = await self.session.get(url, params=params)
        except httpx.RequestError as e:
            logger.debug("Riot API transport error", url=url, error=str(e))
            raise RiotAPIError(f"Request failed: {e}") from e

        logger.debug("Riot API response", url=url, status=response.status_code)
        self._raise_for_status(response)
        return response.json()

    # Account endpoints
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[Region] = None
    ) -> AccountDTO:
        """Get account by Riot ID (gameName#tagLine)."""
        url = self.endpoints.account_by_riot_id(game_name, tag_line, region)
        response = await self._make_request(url)
        return AccountDTO(**response)

    async def get_account_by_puuid(
        self, puuid: str, region: Optional[Region] = None
    ) -> AccountDTO:
        """Get account by PUUID (current Riot ID for a known player)."""
        url = self.endpoints.account_by_puuid(puuid, region)
        response = await self._make_request(url)
        return AccountDTO(**response)

    # Summoner endpoints
    async def get_summoner_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> SummonerDTO:
        """Get summoner by PUUID."""
        url = self.endpoints.summoner_by_puuid(puuid, platform)
        response = await self._make_request(url)
        return SummonerDTO(**response)

    # League endpoints
    async def get_league_entries_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> List[LeagueEntryDTO]:
        """Get league entries by PUUID."""
        url = self.endpoints.league_entries_by_puuid(puuid, platform)
        response = await self._make_request(url)

        # API returns a list of league entries
        if not isinstance(response, list):
            raise RiotAPIError(
                f"Expected list response for league entries, got {type(response).__name__}"
            )

        return [LeagueEntryDTO(**entry) for entry in response]

    # Spectator endpoints
    async def get_active_game(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> CurrentGameInfoDTO:
        """Get the game a player is currently in (raises NotFoundError if none)."""
        url = self.endpoints.active_game_by_puuid(puuid, platform)
        response = await self._make_request(url)
        return CurrentGameInfoDTO(**response)

    # Match endpoints
    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        start: int = 0,
        count: int = 20,
        queue: Optional[Union[int, QueueId]] = None,
        match_type: Optional[str] = None,
        region: Optional[Region] = None,
    ) -> List[str]:
        """Get recent match ids by PUUID."""
        params: Dict[str, Any] = {"start": start, "count": count}
        if queue is not None:
            params["queue"] = int(queue)
        if match_type:
            params["type"] = match_type

        url = self.endpoints.match_ids_by_puuid(puuid, region)
        response = await self._make_request(url, params=params)

        if not isinstance(response, list):
            raise RiotAPIError(
                f"Expected list response for match ids, got {type(response).__name__}"
            )
        return [str(match_id) for match_id in response]

    async def get_match(
        self, match_id: str, region: Optional[Region] = None
    ) -> MatchDTO:
        """Get match details by match ID."""
        url = self.endpoints.match_by_id(match_id, region)
        response = await self._make_request(url)
        return MatchDTO(**response)
