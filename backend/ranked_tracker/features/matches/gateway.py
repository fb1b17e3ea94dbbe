"""Anti-Corruption Layer (Gateway) for Riot Match API.

Translates match-v5 payloads into the game cards shown on player pages.
"""

from typing import TYPE_CHECKING, Optional

import structlog

from ranked_tracker.core.riot_api.constants import QueueId

from .schemas import GameSummary
from .transformers import match_to_game_summary

if TYPE_CHECKING:
    from ranked_tracker.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)

RECENT_MATCH_IDS_REQUESTED = 20
RECENT_MATCH_IDS_KEPT = 10


class RiotMatchGateway:
    """Gateway to Riot Match API - Anti-Corruption Layer."""

    def __init__(self, riot_client: "RiotAPIClient"):
        """Initialize gateway with Riot API client.

        :param riot_client: Riot API client instance
        """
        self.riot_client = riot_client

    async def fetch_recent_ranked_match_ids(self, puuid: str) -> list[str]:
        """Ids of the most recent ranked solo matches, newest first.

        :param puuid: Player's unique identifier
        :returns: At most ten match ids
        """
        match_ids = await self.riot_client.get_match_ids_by_puuid(
            puuid,
            start=0,
            count=RECENT_MATCH_IDS_REQUESTED,
            queue=QueueId.RANKED_SOLO_5X5,
            match_type="ranked",
        )
        return match_ids[:RECENT_MATCH_IDS_KEPT]

    async def fetch_game_summary(self, match_id: str, puuid: str) -> Optional[GameSummary]:
        """Game card of one match, None when it is not a ranked solo game."""
        match = await self.riot_client.get_match(match_id)
        return match_to_game_summary(match, puuid)
