"""In-memory stand-ins for the repositories and the Riot gateway.

The update service only talks to the repository interfaces and to the gateway
methods, so these fakes let the tests drive it without PostgreSQL or network.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from ranked_tracker.core.riot_api.errors import NotFoundError
from ranked_tracker.core.riot_api.models import LeagueEntryDTO
from ranked_tracker.features.players.gateway import no_rank_entry, select_solo_queue
from ranked_tracker.features.players.models import ResolvedIdentity, SnapshotUpdate
from ranked_tracker.features.players.orm_models import (
    LPTrackerEventORM,
    PlayerHistoryORM,
    PlayerORM,
)
from ranked_tracker.features.players.ranks import RankSnapshot
from ranked_tracker.features.players.repository import (
    METADATA_FIELDS,
    LPEventRepositoryInterface,
    PlayerHistoryRepositoryInterface,
    PlayerRepositoryInterface,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_player(
    player_id: int = 1,
    summoner_name: str = "Faker#KR1",
    puuid: str = "puuid-1",
    tier: Optional[str] = "GOLD",
    rank: Optional[str] = "II",
    league_points: int = 50,
    wins: int = 10,
    losses: int = 10,
    **kwargs,
) -> PlayerORM:
    """Tracked player row with every column set."""
    values = dict(
        id=player_id,
        puuid=puuid,
        summoner_name=summoner_name,
        profile_icon_id=1,
        tier=tier,
        rank=rank,
        league_points=league_points,
        wins=wins,
        losses=losses,
        in_game=False,
        player_name=None,
        role=None,
        is_main=False,
        last_update=None,
        created_at=NOW - timedelta(days=30),
    )
    values.update(kwargs)
    return PlayerORM(**values)


def solo_entry(
    tier: Optional[str], rank: Optional[str], league_points: int, wins=11, losses=10
) -> LeagueEntryDTO:
    return LeagueEntryDTO(
        queue_type="RANKED_SOLO_5x5",
        tier=tier,
        rank=rank,
        league_points=league_points,
        wins=wins,
        losses=losses,
    )


def identity_for(player: PlayerORM, profile_icon_id: Optional[int] = 7) -> ResolvedIdentity:
    game_name, tag_line = player.summoner_name.split("#")
    return ResolvedIdentity(
        puuid=player.puuid,
        game_name=game_name,
        tag_line=tag_line,
        profile_icon_id=profile_icon_id,
    )


class FixedClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingSleep:
    """Awaitable sleep that returns immediately and remembers each delay."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class InMemoryPlayerRepository(PlayerRepositoryInterface):
    def __init__(self, players=()):
        self.players: dict[int, PlayerORM] = {p.id: p for p in players}
        self.applied: list[tuple[int, SnapshotUpdate]] = []
        self.fail_apply_for: set[int] = set()

    async def list_all(self) -> list[PlayerORM]:
        return [self.players[key] for key in sorted(self.players)]

    async def get_by_id(self, player_id: int) -> Optional[PlayerORM]:
        return self.players.get(player_id)

    async def get_by_puuid(self, puuid: str) -> Optional[PlayerORM]:
        return next((p for p in self.players.values() if p.puuid == puuid), None)

    async def create(self, player: PlayerORM) -> PlayerORM:
        player.id = max(self.players, default=0) + 1
        if player.created_at is None:
            player.created_at = NOW
        self.players[player.id] = player
        return player

    async def apply_snapshot(self, player_id: int, update: SnapshotUpdate) -> PlayerORM:
        if player_id in self.fail_apply_for:
            raise RuntimeError("database unavailable")
        player = self.players.get(player_id)
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
        self.applied.append((player_id, update))
        return player

    async def update_metadata(self, player_id: int, changes: dict) -> Optional[PlayerORM]:
        player = self.players.get(player_id)
        if player is None:
            return None
        for name, value in changes.items():
            if name in METADATA_FIELDS:
                setattr(player, name, value)
        return player

    async def delete(self, player_id: int) -> bool:
        return self.players.pop(player_id, None) is not None


class InMemoryHistoryRepository(PlayerHistoryRepositoryInterface):
    def __init__(self):
        self.entries: list[PlayerHistoryORM] = []

    async def get_latest(self, player_id: int) -> Optional[PlayerHistoryORM]:
        entries = [e for e in self.entries if e.player_id == player_id]
        return max(entries, key=lambda e: e.timestamp, default=None)

    async def add(self, entry: PlayerHistoryORM) -> PlayerHistoryORM:
        entry.id = len(self.entries) + 1
        self.entries.append(entry)
        return entry

    async def list_for_player(self, player_id: int, limit: int = 100):
        entries = [e for e in self.entries if e.player_id == player_id]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)[:limit]


class InMemoryLPEventRepository(LPEventRepositoryInterface):
    def __init__(self):
        self.events: list[LPTrackerEventORM] = []

    async def exists_duplicate(self, player_id, tier, rank, current_lp, since) -> bool:
        return any(
            e.player_id == player_id
            and e.tier == tier
            and e.rank == rank
            and e.current_lp == current_lp
            and e.timestamp >= since
            for e in self.events
        )

    async def add(self, event: LPTrackerEventORM) -> LPTrackerEventORM:
        event.id = len(self.events) + 1
        self.events.append(event)
        return event

    async def list_recent(self, limit: int = 50):
        return sorted(self.events, key=lambda e: e.timestamp, reverse=True)[:limit]

    async def list_for_player(self, player_id: int, limit: int = 100):
        events = [e for e in self.events if e.player_id == player_id]
        return sorted(events, key=lambda e: e.timestamp, reverse=True)[:limit]


class FakeRiotGateway:
    """Scriptable gateway.

    ``errors[method]`` is a queue of exceptions raised by the next calls to
    ``method`` before it starts answering normally.
    """

    def __init__(self):
        self.by_riot_id: dict[tuple[str, str], ResolvedIdentity] = {}
        self.by_puuid: dict[str, ResolvedIdentity] = {}
        self.entries: dict[str, list[LeagueEntryDTO]] = {}
        self.in_game: set[str] = set()
        self.errors: dict[str, list[Exception]] = {}
        self.calls: list[str] = []

    def register(self, identity: ResolvedIdentity, *entries: LeagueEntryDTO) -> None:
        self.by_riot_id[(identity.game_name, identity.tag_line)] = identity
        self.by_puuid[identity.puuid] = identity
        self.entries[identity.puuid] = list(entries)

    def _call(self, method: str) -> None:
        self.calls.append(method)
        pending = self.errors.get(method)
        if pending:
            raise pending.pop(0)

    async def resolve_by_riot_id(self, game_name: str, tag_line: str) -> ResolvedIdentity:
        self._call("resolve_by_riot_id")
        try:
            return self.by_riot_id[(game_name, tag_line)]
        except KeyError:
            raise NotFoundError("Resource not found", status_code=404)

    async def resolve_by_puuid(self, puuid: str) -> ResolvedIdentity:
        self._call("resolve_by_puuid")
        try:
            return self.by_puuid[puuid]
        except KeyError:
            raise NotFoundError("Resource not found", status_code=404)

    async def fetch_ranked_entries(self, puuid: str) -> list[LeagueEntryDTO]:
        self._call("fetch_ranked_entries")
        return self.entries.get(puuid) or [no_rank_entry()]

    async def fetch_solo_queue(self, puuid: str) -> RankSnapshot:
        return select_solo_queue(await self.fetch_ranked_entries(puuid))

    async def fetch_in_game(self, puuid: str) -> bool:
        self._call("fetch_in_game")
        return puuid in self.in_game
