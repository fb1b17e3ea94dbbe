"""Player service: owner-facing operations on tracked accounts.

Registration is the only operation touching the Riot API: it resolves the
Riot ID, reads the current solo queue standing and in-game status once (no
retry, no batching) and stores the new player. Everything else is a thin
layer over the repositories.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError

from ranked_tracker.core.exceptions import (
    ExternalServiceError,
    PlayerAlreadyTrackedError,
    PlayerNotFoundError,
    ValidationError,
)
from ranked_tracker.core.riot_api.errors import NotFoundError, RiotAPIError

from .gateway import RiotAPIGateway
from .models import split_summoner_name, validate_identity
from .orm_models import PlayerORM
from .ranks import rank_sort_key
from .repository import (
    LPEventRepositoryInterface,
    PlayerHistoryRepositoryInterface,
    PlayerRepositoryInterface,
)
from .schemas import (
    LPEventResponse,
    PlayerCreate,
    PlayerHistoryResponse,
    PlayerResponse,
    PlayerUpdate,
)
from .transformers import (
    history_orm_to_response,
    lp_event_orm_to_response,
    player_orm_to_response,
)

logger = structlog.get_logger(__name__)


class PlayerService:
    """Service for tracked player operations."""

    def __init__(
        self,
        repository: PlayerRepositoryInterface,
        history_repository: PlayerHistoryRepositoryInterface,
        lp_event_repository: LPEventRepositoryInterface,
        gateway: Optional[RiotAPIGateway] = None,
    ):
        """
        Initialize player service.

        :param repository: Player repository
        :param history_repository: History repository
        :param lp_event_repository: LP event repository
        :param gateway: Riot API gateway, only needed to register players
        """
        self.repository = repository
        self.history_repository = history_repository
        self.lp_event_repository = lp_event_repository
        self.gateway = gateway

    async def list_leaderboard(self) -> list[PlayerResponse]:
        """All tracked players, best rank first."""
        players = await self.repository.list_all()
        players.sort(key=lambda p: rank_sort_key(p.snapshot()))
        return [player_orm_to_response(p) for p in players]

    async def _get_or_raise(self, player_id: int) -> PlayerORM:
        player = await self.repository.get_by_id(player_id)
        if player is None:
            raise PlayerNotFoundError(
                message=f"Player {player_id} not found",
                operation="get_player",
                context={"player_id": player_id},
            )
        return player

    async def get_player(self, player_id: int) -> PlayerResponse:
        """
        Get a tracked player.

        :param player_id: Internal player id
        :returns: Player response
        :raises PlayerNotFoundError: If player not found
        """
        return player_orm_to_response(await self._get_or_raise(player_id))

    async def add_player(self, player_data: PlayerCreate) -> PlayerResponse:
        """
        Register a new tracked account from its Riot ID.

        :param player_data: Riot ID and owner metadata
        :returns: Created player with its current ranked snapshot
        :raises ValidationError: If the Riot ID is not ``name#tag``
        :raises PlayerNotFoundError: If no account carries the Riot ID
        :raises PlayerAlreadyTrackedError: If the account is already tracked
        :raises ExternalServiceError: If the Riot API fails or answers with partial data
        """
        if self.gateway is None:
            raise ExternalServiceError(
                message="Riot API gateway not configured", operation="add_player"
            )

        names = split_summoner_name(player_data.summoner_name)
        if names is None:
            raise ValidationError(
                message="Invalid format, expected name#tag",
                operation="add_player",
                context={"summoner_name": player_data.summoner_name},
            )
        game_name, tag_line = names

        try:
            identity = await self.gateway.resolve_by_riot_id(game_name, tag_line)
        except NotFoundError:
            raise PlayerNotFoundError(
                message=f"Riot ID {game_name}#{tag_line} not found",
                operation="add_player",
                context={"game_name": game_name, "tag_line": tag_line},
            )
        except RiotAPIError as e:
            logger.error(
                "Riot API failure while resolving new player",
                game_name=game_name,
                tag_line=tag_line,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalServiceError(
                message="Riot API request failed", operation="add_player"
            ) from e

        validation = validate_identity(identity)
        if not validation.ok:
            raise ExternalServiceError(
                message=f"Riot API returned unusable identity: {validation.reason}",
                operation="add_player",
            )

        if await self.repository.get_by_puuid(identity.puuid) is not None:
            raise PlayerAlreadyTrackedError(
                message=f"{identity.riot_id} is already tracked",
                operation="add_player",
                context={"puuid": identity.puuid},
            )

        try:
            snapshot = await self.gateway.fetch_solo_queue(identity.puuid)
            in_game = await self.gateway.fetch_in_game(identity.puuid)
        except RiotAPIError as e:
            logger.error(
                "Riot API failure while reading new player rank",
                puuid=identity.puuid,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalServiceError(
                message="Riot API request failed", operation="add_player"
            ) from e

        player = PlayerORM(
            puuid=identity.puuid,
            summoner_name=identity.riot_id,
            profile_icon_id=identity.profile_icon_id,
            tier=snapshot.tier,
            rank=snapshot.rank,
            league_points=snapshot.league_points,
            wins=snapshot.wins,
            losses=snapshot.losses,
            in_game=in_game,
            player_name=player_data.player_name,
            role=player_data.role,
            is_main=player_data.is_main,
            last_update=datetime.now(timezone.utc),
        )
        try:
            player = await self.repository.create(player)
        except IntegrityError as e:
            # Unique puuid lost to a concurrent registration
            raise PlayerAlreadyTrackedError(
                message=f"{identity.riot_id} is already tracked",
                operation="add_player",
                context={"puuid": identity.puuid},
            ) from e

        logger.info(
            "Player registered",
            player_id=player.id,
            summoner_name=player.summoner_name,
            tier=player.tier,
            rank=player.rank,
        )
        return player_orm_to_response(player)

    async def update_metadata(
        self, player_id: int, changes: PlayerUpdate
    ) -> PlayerResponse:
        """
        Change owner metadata of a player.

        :param player_id: Internal player id
        :param changes: Fields to change (unset fields are left alone)
        :returns: Updated player
        :raises PlayerNotFoundError: If player not found
        """
        player = await self.repository.update_metadata(
            player_id, changes.model_dump(exclude_unset=True)
        )
        if player is None:
            raise PlayerNotFoundError(
                message=f"Player {player_id} not found",
                operation="update_metadata",
                context={"player_id": player_id},
            )
        return player_orm_to_response(player)

    async def delete_player(self, player_id: int) -> None:
        """Stop tracking a player; history and LP events go with it."""
        if not await self.repository.delete(player_id):
            raise PlayerNotFoundError(
                message=f"Player {player_id} not found",
                operation="delete_player",
                context={"player_id": player_id},
            )

    async def get_history(
        self, player_id: int, limit: int = 100
    ) -> list[PlayerHistoryResponse]:
        await self._get_or_raise(player_id)
        entries = await self.history_repository.list_for_player(player_id, limit)
        return [history_orm_to_response(e) for e in entries]

    async def get_lp_events(
        self, player_id: int, limit: int = 100
    ) -> list[LPEventResponse]:
        await self._get_or_raise(player_id)
        events = await self.lp_event_repository.list_for_player(player_id, limit)
        return [lp_event_orm_to_response(e) for e in events]

    async def get_recent_lp_events(self, limit: int = 50) -> list[LPEventResponse]:
        """LP feed across all players, newest first."""
        events = await self.lp_event_repository.list_recent(limit)
        return [lp_event_orm_to_response(e) for e in events]
