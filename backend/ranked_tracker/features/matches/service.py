"""Recent games of a player, read straight from the Riot API."""

import structlog

from ranked_tracker.core.exceptions import ExternalServiceError, PlayerNotFoundError
from ranked_tracker.core.riot_api.errors import NotFoundError, RiotAPIError

from .gateway import RiotMatchGateway
from .schemas import GameSummary

logger = structlog.get_logger(__name__)


class MatchService:
    """Service for the player game history display."""

    def __init__(self, gateway: RiotMatchGateway):
        """Initialize match service.

        :param gateway: Riot match gateway
        """
        self.gateway = gateway

    async def get_recent_games(self, puuid: str, limit: int = 5) -> list[GameSummary]:
        """
        Latest ranked solo games of a player.

        Walks the ten most recent ranked match ids and keeps the first
        ``limit`` solo queue games.

        :param puuid: Player's unique identifier
        :param limit: Maximum number of games returned
        :returns: Game summaries, newest first
        :raises PlayerNotFoundError: If Riot does not know the PUUID
        :raises ExternalServiceError: If the Riot API fails
        """
        try:
            match_ids = await self.gateway.fetch_recent_ranked_match_ids(puuid)

            games: list[GameSummary] = []
            for match_id in match_ids:
                if len(games) >= limit:
                    break
                game = await self.gateway.fetch_game_summary(match_id, puuid)
                if game is not None:
                    games.append(game)
        except NotFoundError:
            raise PlayerNotFoundError(
                message=f"No match history for {puuid}",
                operation="get_recent_games",
                context={"puuid": puuid},
            )
        except (RiotAPIError, ValueError) as e:
            logger.error(
                "Failed to fetch recent games",
                puuid=puuid,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalServiceError(
                message="Riot API request failed",
                operation="get_recent_games",
                context={"puuid": puuid},
            ) from e

        logger.debug("Recent games fetched", puuid=puuid, count=len(games))
        return games
