"""One full update run: every tracked player, in rate-limit-safe batches.

Players are reconciled strictly one after the other, batches strictly one
after the other. The sequencing is the rate limiting: a batch never holds more
players than the upstream window allows, a cooldown separates batches and a
short delay separates players inside a batch.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence, TypeVar

import structlog

from ranked_tracker.features.players.repository import PlayerRepositoryInterface

from .config import UpdateConfig
from .reconciler import PlayerReconciler
from .retry import Sleep

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def compute_batch_size(
    rate_limit_requests: int, requests_per_player: int, window_factor: int
) -> int:
    """Players per batch: ``floor(rate / (requests_per_player * window_factor))``.

    Never less than one, otherwise no player could ever be processed.
    """
    size = rate_limit_requests // (requests_per_player * window_factor)
    return max(size, 1)


def partition_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split ``items`` into consecutive chunks of at most ``batch_size``."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]


@dataclass
class RunSummary:
    """Counts of one update run."""

    run_id: str
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    batches: int = 0
    failed_players: list[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    def as_log_context(self) -> dict:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "batches": self.batches,
            "failed_players": self.failed_players,
        }


class UpdateRunner:
    """Drives the reconciler over every tracked player."""

    def __init__(
        self,
        players: PlayerRepositoryInterface,
        reconciler: PlayerReconciler,
        config: UpdateConfig,
        sleep: Sleep = asyncio.sleep,
    ):
        self.players = players
        self.reconciler = reconciler
        self.config = config
        self._sleep = sleep

    @property
    def batch_size(self) -> int:
        return compute_batch_size(
            self.config.rate_limit_requests,
            self.config.requests_per_player,
            self.config.rate_limit_window_factor,
        )

    async def run(self, run_id: Optional[str] = None) -> RunSummary:
        """
        Reconcile every tracked player once.

        A failing player never stops the run. Failing to read the player list
        does: that error propagates to the caller.

        :param run_id: Correlation id, generated when omitted
        :returns: Summary with success and failure counts
        """
        summary = RunSummary(run_id=run_id or uuid.uuid4().hex)

        players = await self.players.list_all()
        batches = partition_batches(players, self.batch_size)
        summary.total = len(players)
        summary.batches = len(batches)

        logger.info(
            "Update run started",
            run_id=summary.run_id,
            players=summary.total,
            batches=summary.batches,
            batch_size=self.batch_size,
        )

        for batch_index, batch in enumerate(batches):
            logger.debug(
                "Processing batch",
                run_id=summary.run_id,
                batch=batch_index + 1,
                of=len(batches),
                size=len(batch),
            )

            for player_index, player in enumerate(batch):
                if player_index > 0 and self.config.request_delay_seconds > 0:
                    await self._sleep(self.config.request_delay_seconds)
                await self._reconcile_one(player, summary)

            if batch_index < len(batches) - 1 and self.config.batch_cooldown_seconds > 0:
                logger.debug(
                    "Batch cooldown",
                    run_id=summary.run_id,
                    seconds=self.config.batch_cooldown_seconds,
                )
                await self._sleep(self.config.batch_cooldown_seconds)

        summary.finished_at = datetime.now(timezone.utc)
        logger.info("Update run finished", run_id=summary.run_id, **summary.as_log_context())
        return summary

    async def _reconcile_one(self, player, summary: RunSummary) -> None:
        try:
            result = await self.reconciler.reconcile(player)
        except Exception as e:
            logger.error(
                "Failed to persist player update",
                run_id=summary.run_id,
                player_id=player.id,
                summoner_name=player.summoner_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            summary.failed += 1
            summary.failed_players.append(player.summoner_name)
            return

        if result.success:
            summary.succeeded += 1
        else:
            summary.failed += 1
            summary.failed_players.append(result.name)
