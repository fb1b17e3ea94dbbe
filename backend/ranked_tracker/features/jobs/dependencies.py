"""Dependencies for the jobs feature."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ranked_tracker.core import get_db, get_global_settings
from ranked_tracker.core.dependencies import get_riot_client
from ranked_tracker.core.riot_api.client import RiotAPIClient

from .config import UpdateConfig
from .reconciler import PlayerReconciler
from .service import build_reconciler


def get_update_config() -> UpdateConfig:
    """Update service configuration built from application settings."""
    return UpdateConfig.from_settings(get_global_settings())


async def get_manual_reconciler(
    db: Annotated[AsyncSession, Depends(get_db)],
    riot_client: Annotated[RiotAPIClient, Depends(get_riot_client)],
    config: Annotated[UpdateConfig, Depends(get_update_config)],
) -> PlayerReconciler:
    """Reconciler for the "update all" endpoint: single attempts, no backoff."""
    return build_reconciler(db, riot_client, config, with_retry=False)


# Type aliases for cleaner dependency injection
ManualReconcilerDep = Annotated[PlayerReconciler, Depends(get_manual_reconciler)]

__all__ = ["get_update_config", "get_manual_reconciler", "ManualReconcilerDep"]
