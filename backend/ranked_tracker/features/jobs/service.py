"""Wiring of the update service onto the database and the Riot API client."""

import asyncio
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from ranked_tracker.core.database import DatabaseManager, db_manager
from ranked_tracker.core.riot_api.client import RiotAPIClient
from ranked_tracker.features.players.gateway import RiotAPIGateway
from ranked_tracker.features.players.repository import (
    SQLAlchemyLPEventRepository,
    SQLAlchemyPlayerHistoryRepository,
    PlayerRepositoryInterface,
    SQLAlchemyPlayerRepository,
)

from .config import UpdateConfig
from .reconciler import PlayerReconciler, ReconcileFailure, ReconcileResult
from .retry import Sleep
from .runner import RunSummary, UpdateRunner

logger = structlog.get_logger(__name__)


def build_reconciler(
    db: AsyncSession,
    client: RiotAPIClient,
    config: UpdateConfig,
    with_retry: bool = True,
    sleep: Sleep = asyncio.sleep,
) -> PlayerReconciler:
    """Reconciler backed by SQLAlchemy repositories.

    :param db: Session shared by the three repositories
    :param client: Riot API client
    :param config: Update service configuration
    :param with_retry: Wrap upstream calls in the retry helper
    :param sleep: Awaitable sleep for retry backoff
    :returns: Ready to use reconciler
    """
    return PlayerReconciler(
        gateway=RiotAPIGateway(client),
        players=SQLAlchemyPlayerRepository(db),
        history=SQLAlchemyPlayerHistoryRepository(db),
        lp_events=SQLAlchemyLPEventRepository(db),
        retry_policy=config.retry if with_retry else None,
        history_interval=config.history_interval,
        lp_event_dedup_window=config.lp_event_dedup_window,
        sleep=sleep,
    )


async def run_full_update(
    config: UpdateConfig,
    api_key: str,
    run_id: Optional[str] = None,
    database: Optional[DatabaseManager] = None,
) -> RunSummary:
    """One scheduled run: open a session and a client, reconcile every player."""
    database = database or db_manager

    async with database.get_session() as db:
        async with RiotAPIClient(api_key=api_key) as client:
            reconciler = build_reconciler(db, client, config)
            runner = UpdateRunner(SQLAlchemyPlayerRepository(db), reconciler, config)
            return await runner.run(run_id=run_id)


async def update_all_players(
    reconciler: PlayerReconciler,
    players: PlayerRepositoryInterface,
) -> list[ReconcileResult]:
    """Reconcile every player once, sequentially, for the "update all" endpoint.

    No batching and no cooldowns. A player whose write fails is reported as a
    failure and the loop goes on.
    """
    results: list[ReconcileResult] = []
    for player in await players.list_all():
        try:
            results.append(await reconciler.reconcile(player))
        except Exception as e:
            logger.error(
                "Failed to persist player update",
                player_id=player.id,
                summoner_name=player.summoner_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            results.append(
                ReconcileFailure(
                    player_id=player.id,
                    name=player.summoner_name,
                    reason="persistence failed",
                )
            )

    logger.info(
        "Manual update finished",
        total=len(results),
        succeeded=sum(1 for r in results if r.success),
    )
    return results
