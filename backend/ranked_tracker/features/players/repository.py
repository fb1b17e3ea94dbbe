"""Repository pattern implementation for players feature.

Provides collection-like interfaces for players, their history samples and
their LP events. Isolates data access logic from business logic following
Martin Fowler's Repository Pattern; the update service only ever talks to the
interfaces, which keeps it testable with in-memory implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

import structlog
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from .models import SnapshotUpdate
from .orm_models import PlayerORM, PlayerHistoryORM, LPTrackerEventORM

logger = structlog.get_logger(__name__)

METADATA_FIELDS = frozenset({"player_name", "role", "is_main"})


class PlayerRepositoryInterface(ABC):
    """Interface for player repository.

    Defines contract for data access operations.
    Enables mocking and potential swap of implementations (e.g., caching layer).
    """

    @abstractmethod
    async def list_all(self) -> list[PlayerORM]:
        """Get every tracked player.

        :returns: List of players ordered by id, detached from any session
        """
        pass

    @abstractmethod
    async def get_by_id(self, player_id: int) -> Optional[PlayerORM]:
        """Get player by internal id.

        :param player_id: Surrogate key
        :returns: PlayerORM if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_puuid(self, puuid: str) -> Optional[PlayerORM]:
        """Get player by PUUID.

        :param puuid: Player's unique identifier
        :returns: PlayerORM if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, player: PlayerORM) -> PlayerORM:
        """Add new player to repository.

        :param player: Player domain object to add
        :returns: Created player with generated fields populated
        """
        pass

    @abstractmethod
    async def apply_snapshot(self, player_id: int, update: SnapshotUpdate) -> PlayerORM:
        """Write a reconciled identity and ranked snapshot onto a player.

        :param player_id: Player to update
        :param update: Validated snapshot update
        :returns: Updated player
        :raises LookupError: When the player no longer exists
        """
        pass

    @abstractmethod
    async def update_metadata(
        self, player_id: int, changes: dict[str, Any]
    ) -> Optional[PlayerORM]:
        """Change owner metadata (``player_name``, ``role``, ``is_main``).

        :param player_id: Player to update
        :param changes: Field values to set, other keys are ignored
        :returns: Updated player, None if not found
        """
        pass

    @abstractmethod
    async def delete(self, player_id: int) -> bool:
        """Remove player together with its history and LP events.

        :param player_id: Player to delete
        :returns: True if a player was deleted
        """
        pass


class PlayerHistoryRepositoryInterface(ABC):
    """Interface for the append-only history samples."""

    @abstractmethod
    async def get_latest(self, player_id: int) -> Optional[PlayerHistoryORM]:
        """Most recent history entry of a player, None if there is none."""
        pass

    @abstractmethod
    async def add(self, entry: PlayerHistoryORM) -> PlayerHistoryORM:
        """Append a history entry."""
        pass

    @abstractmethod
    async def list_for_player(
        self, player_id: int, limit: int = 100
    ) -> list[PlayerHistoryORM]:
        """History entries of a player, newest first."""
        pass


class LPEventRepositoryInterface(ABC):
    """Interface for the append-only LP tracker events."""

    @abstractmethod
    async def exists_duplicate(
        self,
        player_id: int,
        tier: Optional[str],
        rank: Optional[str],
        current_lp: int,
        since: datetime,
    ) -> bool:
        """Whether an event with the same tier, rank and LP exists since ``since``.

        :param player_id: Player the event belongs to
        :param tier: New tier
        :param rank: New division
        :param current_lp: New league points
        :param since: Start of the deduplication window
        :returns: True if a matching event exists
        """
        pass

    @abstractmethod
    async def add(self, event: LPTrackerEventORM) -> LPTrackerEventORM:
        """Append an LP event."""
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> list[LPTrackerEventORM]:
        """Latest LP events across all players, newest first."""
        pass

    @abstractmethod
    async def list_for_player(
        self, player_id: int, limit: int = 100
    ) -> list[LPTrackerEventORM]:
        """LP events of a player, newest first."""
        pass


def _nullable_equals(column, value):
    """``column = value`` that also matches NULL against None."""
    if value is None:
        return column.is_(None)
    return column == value


class _SQLAlchemyRepository:
    """Shared session handling: commit, or roll back and re-raise."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        :param db: SQLAlchemy async session
        """
        self.db = db

    async def _commit(self, operation: str, **context: Any) -> None:
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "repository_commit_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                **context,
            )
            raise


class SQLAlchemyPlayerRepository(_SQLAlchemyRepository, PlayerRepositoryInterface):
    """SQLAlchemy implementation of player repository."""

    async def list_all(self) -> list[PlayerORM]:
        """Get every tracked player.

        Rows are expunged: they are read-only copies of the state at read time
        and are not expired by later commits or rollbacks on this session.
        """
        stmt = select(PlayerORM).order_by(PlayerORM.id)
        result = await self.db.execute(stmt)
        players = list(result.scalars().all())
        for player in players:
            self.db.expunge(player)

        logger.debug("players_listed", count=len(players))
        return players

    async def get_by_id(self, player_id: int) -> Optional[PlayerORM]:
        """Get player by internal id."""
        return await self.db.get(PlayerORM, player_id)

    async def get_by_puuid(self, puuid: str) -> Optional[PlayerORM]:
        """Get player by PUUID."""
        stmt = select(PlayerORM).where(PlayerORM.puuid == puuid)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, player: PlayerORM) -> PlayerORM:
        """Create new player record."""
        self.db.add(player)
        await self._commit("create_player", puuid=player.puuid)
        await self.db.refresh(player)

        logger.info(
            "player_created",
            player_id=player.id,
            puuid=player.puuid,
            summoner_name=player.summoner_name,
        )

        return player

    async def apply_snapshot(self, player_id: int, update: SnapshotUpdate) -> PlayerORM:
        """Write a reconciled snapshot onto the player row."""
        player = await self.get_by_id(player_id)
        if player is None:
            raise LookupError(f"Player {player_id} no longer exists")

        player.puuid = update.puuid
        player.summoner_name = update.summoner_name
        player.profile_icon_id = update.profile_icon_id
        player.tier = update.snapshot.tier
        player.rank = update.snapshot.rank
        player.league_points = update.snapshot.league_points
        player.wins = update.snapshot.wins
        player.losses = update.snapshot.losses
        player.in_game = bool(update.in_game)
        player.last_update = update.last_update

        await self._commit("apply_snapshot", player_id=player_id)
        await self.db.refresh(player)

        logger.debug("player_snapshot_applied", player_id=player_id)
        return player

    async def update_metadata(
        self, player_id: int, changes: dict[str, Any]
    ) -> Optional[PlayerORM]:
        """Change owner metadata only."""
        player = await self.get_by_id(player_id)
        if player is None:
            return None

        for name, value in changes.items():
            if name in METADATA_FIELDS:
                setattr(player, name, value)

        await self._commit("update_metadata", player_id=player_id)
        await self.db.refresh(player)

        logger.info("player_metadata_updated", player_id=player_id, fields=sorted(changes))
        return player

    async def delete(self, player_id: int) -> bool:
        """Hard delete; history and LP events cascade in the database."""
        player = await self.get_by_id(player_id)
        if player is None:
            return False

        await self.db.delete(player)
        await self._commit("delete_player", player_id=player_id)

        logger.info("player_deleted", player_id=player_id, puuid=player.puuid)
        return True


class SQLAlchemyPlayerHistoryRepository(
    _SQLAlchemyRepository, PlayerHistoryRepositoryInterface
):
    """SQLAlchemy implementation of history repository."""

    async def get_latest(self, player_id: int) -> Optional[PlayerHistoryORM]:
        stmt = (
            select(PlayerHistoryORM)
            .where(PlayerHistoryORM.player_id == player_id)
            .order_by(PlayerHistoryORM.timestamp.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, entry: PlayerHistoryORM) -> PlayerHistoryORM:
        self.db.add(entry)
        await self._commit("add_history", player_id=entry.player_id)
        await self.db.refresh(entry)

        logger.debug("player_history_added", player_id=entry.player_id)
        return entry

    async def list_for_player(
        self, player_id: int, limit: int = 100
    ) -> list[PlayerHistoryORM]:
        stmt = (
            select(PlayerHistoryORM)
            .where(PlayerHistoryORM.player_id == player_id)
            .order_by(PlayerHistoryORM.timestamp.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())


class SQLAlchemyLPEventRepository(_SQLAlchemyRepository, LPEventRepositoryInterface):
    """SQLAlchemy implementation of LP event repository."""

    async def exists_duplicate(
        self,
        player_id: int,
        tier: Optional[str],
        rank: Optional[str],
        current_lp: int,
        since: datetime,
    ) -> bool:
        stmt = (
            select(LPTrackerEventORM.id)
            .where(
                and_(
                    LPTrackerEventORM.player_id == player_id,
                    _nullable_equals(LPTrackerEventORM.tier, tier),
                    _nullable_equals(LPTrackerEventORM.rank, rank),
                    LPTrackerEventORM.current_lp == current_lp,
                    LPTrackerEventORM.timestamp >= since,
                )
            )
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def add(self, event: LPTrackerEventORM) -> LPTrackerEventORM:
        self.db.add(event)
        await self._commit("add_lp_event", player_id=event.player_id)
        await self.db.refresh(event)

        logger.debug(
            "lp_event_added",
            player_id=event.player_id,
            difference=event.difference,
        )
        return event

    async def list_recent(self, limit: int = 50) -> list[LPTrackerEventORM]:
        stmt = (
            select(LPTrackerEventORM)
            .order_by(LPTrackerEventORM.timestamp.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_for_player(
        self, player_id: int, limit: int = 100
    ) -> list[LPTrackerEventORM]:
        stmt = (
            select(LPTrackerEventORM)
            .where(LPTrackerEventORM.player_id == player_id)
            .order_by(LPTrackerEventORM.timestamp.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
