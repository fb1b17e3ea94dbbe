"""
Riot API Gateway - Anti-Corruption Layer for Players Feature.

This gateway translates Riot API semantics and data structures to our domain language,
isolating the players feature and the update service from external API details.

Transforms:
- Account + summoner lookups → ResolvedIdentity
- League entries → RankSnapshot of the solo queue
- Spectator 404 → "not in game"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import structlog

from ranked_tracker.core.enums import QueueType
from ranked_tracker.core.riot_api.errors import NotFoundError
from ranked_tracker.core.riot_api.models import LeagueEntryDTO

from .models import ResolvedIdentity
from .ranks import RankSnapshot

if TYPE_CHECKING:
    from ranked_tracker.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)


def no_rank_entry() -> LeagueEntryDTO:
    """Synthetic solo queue entry standing for "no ranked data"."""
    return LeagueEntryDTO(queue_type=QueueType.RANKED_SOLO_5x5.value)


def select_solo_queue(entries: Iterable[LeagueEntryDTO]) -> RankSnapshot:
    """Pick the solo queue entry; absence means unranked.

    :param entries: League entries as returned by league-v4
    :returns: Solo queue snapshot (empty snapshot when unranked)
    """
    for entry in entries:
        if entry.queue_type == QueueType.RANKED_SOLO_5x5.value:
            return RankSnapshot(
                tier=entry.tier or None,
                rank=entry.rank or None,
                league_points=entry.league_points or 0,
                wins=entry.wins or 0,
                losses=entry.losses or 0,
            )
    return RankSnapshot()


class RiotAPIGateway:
    """
    Anti-Corruption Layer for Riot API integration.

    Hides external API structure and transforms data to our domain model.
    Every method is a single upstream attempt; retrying is the caller's job.
    """

    def __init__(self, riot_api_client: "RiotAPIClient"):
        """
        Initialize gateway with Riot API client.

        :param riot_api_client: Low-level Riot API client
        """
        self._client = riot_api_client

    async def resolve_by_riot_id(self, game_name: str, tag_line: str) -> ResolvedIdentity:
        """
        Resolve a Riot ID to the player's current identity.

        Args:
            game_name: Player's game name (Riot ID part 1)
            tag_line: Player's tag line (Riot ID part 2)

        Returns:
            ResolvedIdentity with PUUID, current Riot ID and profile icon

        Raises:
            NotFoundError: If no account carries this Riot ID
            RiotAPIError: If any other API call fails
        """
        logger.debug("Resolving identity by Riot ID", game_name=game_name, tag_line=tag_line)

        account = await self._client.get_account_by_riot_id(game_name, tag_line)
        summoner = await self._client.get_summoner_by_puuid(account.puuid)

        return ResolvedIdentity(
            puuid=account.puuid,
            game_name=account.game_name,
            tag_line=account.tag_line,
            profile_icon_id=summoner.profile_icon_id,
        )

    async def resolve_by_puuid(self, puuid: str) -> ResolvedIdentity:
        """
        Resolve a known PUUID to the player's current identity.

        Used as the fallback when the stored Riot ID no longer resolves,
        typically after a name change.

        Args:
            puuid: Player's unique identifier

        Returns:
            ResolvedIdentity with the current Riot ID

        Raises:
            RiotAPIError: If any API call fails
        """
        logger.debug("Resolving identity by PUUID", puuid=puuid)

        summoner = await self._client.get_summoner_by_puuid(puuid)
        account = await self._client.get_account_by_puuid(puuid)

        return ResolvedIdentity(
            puuid=summoner.puuid,
            game_name=account.game_name,
            tag_line=account.tag_line,
            profile_icon_id=summoner.profile_icon_id,
        )

    async def fetch_ranked_entries(self, puuid: str) -> list[LeagueEntryDTO]:
        """League entries of a player; an empty answer becomes one "no rank" entry."""
        entries = await self._client.get_league_entries_by_puuid(puuid)
        if not entries:
            logger.debug("No ranked data found for player", puuid=puuid)
            return [no_rank_entry()]
        return entries

    async def fetch_solo_queue(self, puuid: str) -> RankSnapshot:
        """Solo queue snapshot of a player."""
        return select_solo_queue(await self.fetch_ranked_entries(puuid))

    async def fetch_in_game(self, puuid: str) -> bool:
        """
        Whether the player is currently in an active game.

        Spectator answers 404 when there is no active game, so that status is
        mapped to False instead of surfacing as an error.
        """
        try:
            await self._client.get_active_game(puuid)
        except NotFoundError:
            return False
        return True
