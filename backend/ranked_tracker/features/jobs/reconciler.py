"""Per-player reconciliation against the Riot API.

One call to :meth:`PlayerReconciler.reconcile` refreshes a single tracked
player: resolve the current identity (Riot ID first, PUUID as fallback),
fetch solo queue standing and in-game status, then sample history, record an
LP event when the rank moved, and write the new snapshot.

Upstream problems and malformed data end as a :class:`ReconcileFailure`
value and leave the stored player untouched. Store failures are not caught
here; they propagate to the caller.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional, TypeVar, Union

import structlog

from ranked_tracker.features.players.gateway import RiotAPIGateway, select_solo_queue
from ranked_tracker.features.players.models import (
    ResolvedIdentity,
    SnapshotUpdate,
    Validation,
    split_summoner_name,
    validate_identity,
)
from ranked_tracker.features.players.orm_models import (
    LPTrackerEventORM,
    PlayerHistoryORM,
    PlayerORM,
)
from ranked_tracker.features.players.ranks import (
    RankSnapshot,
    calculate_lp_difference,
    has_rank_changed,
)
from ranked_tracker.features.players.repository import (
    LPEventRepositoryInterface,
    PlayerHistoryRepositoryInterface,
    PlayerRepositoryInterface,
)

from .retry import RetryPolicy, Sleep, is_not_found, retry_with_backoff

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReconcileSuccess:
    player_id: int
    resolved_name: str
    success: bool = True


@dataclass(frozen=True)
class ReconcileFailure:
    player_id: Optional[int]
    name: str
    reason: str
    success: bool = False


ReconcileResult = Union[ReconcileSuccess, ReconcileFailure]


def validate_snapshot_update(update: SnapshotUpdate) -> Validation:
    """Every field of the payload must be present; tier and rank may be null."""
    missing = [
        name
        for name, value in (
            ("puuid", update.puuid),
            ("summoner_name", update.summoner_name),
            ("profile_icon_id", update.profile_icon_id),
            ("in_game", update.in_game),
            ("last_update", update.last_update),
            ("snapshot", update.snapshot),
        )
        if value is None
    ]
    if update.snapshot is not None:
        missing.extend(
            f"snapshot.{name}"
            for name in ("league_points", "wins", "losses")
            if getattr(update.snapshot, name) is None
        )
    if missing:
        return Validation.invalid(f"missing fields: {', '.join(missing)}")
    return Validation.valid()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlayerReconciler:
    """Refreshes one player at a time from the Riot API."""

    def __init__(
        self,
        gateway: RiotAPIGateway,
        players: PlayerRepositoryInterface,
        history: PlayerHistoryRepositoryInterface,
        lp_events: LPEventRepositoryInterface,
        retry_policy: Optional[RetryPolicy] = None,
        history_interval: timedelta = timedelta(hours=12),
        lp_event_dedup_window: timedelta = timedelta(hours=1),
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            gateway: Riot API anti-corruption layer
            players: Player store
            history: History store
            lp_events: LP event store
            retry_policy: Wrap every upstream call in retry/backoff; None calls once
            history_interval: Minimum age of the last history sample before a new one
            lp_event_dedup_window: Window in which identical LP events are suppressed
            sleep: Awaitable sleep used by the retry helper
            clock: Source of "now"
        """
        self.gateway = gateway
        self.players = players
        self.history = history
        self.lp_events = lp_events
        self.retry_policy = retry_policy
        self.history_interval = history_interval
        self.lp_event_dedup_window = lp_event_dedup_window
        self._sleep = sleep
        self._clock = clock

    async def _call(self, operation: Callable[[], Awaitable[T]], context: str) -> T:
        if self.retry_policy is None:
            return await operation()
        return await retry_with_backoff(
            operation, context, policy=self.retry_policy, sleep=self._sleep
        )

    def _failure(self, player: PlayerORM, reason: str, **context) -> ReconcileFailure:
        logger.warning(
            "Player update failed",
            player_id=player.id,
            summoner_name=player.summoner_name,
            reason=reason,
            **context,
        )
        return ReconcileFailure(player_id=player.id, name=player.summoner_name, reason=reason)

    async def _resolve_identity(
        self, player: PlayerORM, game_name: str, tag_line: str
    ) -> ResolvedIdentity:
        try:
            return await self._call(
                lambda: self.gateway.resolve_by_riot_id(game_name, tag_line),
                context=f"account {game_name}#{tag_line}",
            )
        except Exception as e:
            if not is_not_found(e):
                raise
            logger.info(
                "Riot ID not found, falling back to PUUID",
                player_id=player.id,
                summoner_name=player.summoner_name,
            )

        return await self._call(
            lambda: self.gateway.resolve_by_puuid(player.puuid),
            context=f"account by puuid {player.puuid}",
        )

    async def reconcile(self, player: PlayerORM) -> ReconcileResult:
        """
        Refresh one player's identity and ranked snapshot.

        Args:
            player: Stored player row

        Returns:
            ReconcileSuccess with the resolved Riot ID, or ReconcileFailure
            with the reason; on failure nothing has been written

        Raises:
            Any store error raised while writing history, LP event or player
        """
        names = split_summoner_name(player.summoner_name)
        if names is None:
            return self._failure(player, "malformed summoner name")
        game_name, tag_line = names

        try:
            identity = await self._resolve_identity(player, game_name, tag_line)
        except Exception as e:
            return self._failure(
                player,
                "identity lookup failed",
                error=str(e),
                error_type=type(e).__name__,
            )

        validation = validate_identity(identity)
        if not validation.ok:
            return self._failure(player, validation.reason or "invalid identity")

        entries, in_game = await asyncio.gather(
            self._call(
                lambda: self.gateway.fetch_ranked_entries(identity.puuid),
                context=f"ranked stats {identity.riot_id}",
            ),
            self._call(
                lambda: self.gateway.fetch_in_game(identity.puuid),
                context=f"active game {identity.riot_id}",
            ),
            return_exceptions=True,
        )
        for outcome in (entries, in_game):
            if isinstance(outcome, BaseException):
                return self._failure(
                    player,
                    "ranked lookup failed",
                    error=str(outcome),
                    error_type=type(outcome).__name__,
                )

        now = self._clock()
        update = SnapshotUpdate(
            puuid=identity.puuid,
            summoner_name=identity.riot_id,
            profile_icon_id=identity.profile_icon_id,
            snapshot=select_solo_queue(entries),
            in_game=in_game,
            last_update=now,
        )
        validation = validate_snapshot_update(update)
        if not validation.ok:
            return self._failure(player, validation.reason or "invalid update")

        previous = player.snapshot()

        # History and LP rows commit before the snapshot. If apply_snapshot fails
        # they stay, and the same LP event recurs only once per dedup window.
        await self._record_history(player.id, update.snapshot, now)
        await self._record_lp_event(player.id, update, previous, now)
        await self.players.apply_snapshot(player.id, update)

        logger.info(
            "Player updated",
            player_id=player.id,
            summoner_name=update.summoner_name,
            tier=update.snapshot.tier,
            rank=update.snapshot.rank,
            league_points=update.snapshot.league_points,
            in_game=update.in_game,
        )
        return ReconcileSuccess(player_id=player.id, resolved_name=update.summoner_name)

    async def _record_history(
        self, player_id: int, snapshot: RankSnapshot, now: datetime
    ) -> bool:
        """Append a history sample when the player has ranked data and the last
        sample is older than the history interval."""
        if not snapshot.has_ranked_data:
            return False

        latest = await self.history.get_latest(player_id)
        if latest is not None and now - _as_utc(latest.timestamp) <= self.history_interval:
            return False

        await self.history.add(
            PlayerHistoryORM(
                player_id=player_id,
                tier=snapshot.tier,
                rank=snapshot.rank,
                league_points=snapshot.league_points,
                wins=snapshot.wins,
                losses=snapshot.losses,
                timestamp=now,
            )
        )
        logger.debug("History sample recorded", player_id=player_id)
        return True

    async def _record_lp_event(
        self,
        player_id: int,
        update: SnapshotUpdate,
        previous: RankSnapshot,
        now: datetime,
    ) -> bool:
        """Append an LP event when the rank moved, unless an identical one is recent.

        Moves from or to unranked record the raw LP change.
        """
        current = update.snapshot
        if not has_rank_changed(previous, current):
            return False

        duplicate = await self.lp_events.exists_duplicate(
            player_id,
            current.tier,
            current.rank,
            current.league_points,
            since=now - self.lp_event_dedup_window,
        )
        if duplicate:
            logger.debug("Duplicate LP event suppressed", player_id=player_id)
            return False

        difference = calculate_lp_difference(previous, current)
        await self.lp_events.add(
            LPTrackerEventORM(
                player_id=player_id,
                summoner_name=update.summoner_name,
                previous_tier=previous.tier,
                previous_rank=previous.rank,
                previous_lp=previous.league_points,
                tier=current.tier,
                rank=current.rank,
                current_lp=current.league_points,
                difference=difference,
                timestamp=now,
            )
        )
        logger.info(
            "LP change recorded",
            player_id=player_id,
            previous_tier=previous.tier,
            previous_rank=previous.rank,
            previous_lp=previous.league_points,
            tier=current.tier,
            rank=current.rank,
            league_points=current.league_points,
            difference=difference,
        )
        return True
