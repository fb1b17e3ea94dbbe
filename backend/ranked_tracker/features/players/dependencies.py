"""Dependencies for the players feature.

Injects repositories and gateway into the service following the dependency
inversion principle. Read-only endpoints get a service without gateway so
they work even when no Riot API key is configured.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ranked_tracker.core import get_db
from ranked_tracker.core.dependencies import get_riot_client
from ranked_tracker.core.riot_api.client import RiotAPIClient
from .gateway import RiotAPIGateway
from .service import PlayerService
from .repository import (
    LPEventRepositoryInterface,
    PlayerHistoryRepositoryInterface,
    PlayerRepositoryInterface,
    SQLAlchemyLPEventRepository,
    SQLAlchemyPlayerHistoryRepository,
    SQLAlchemyPlayerRepository,
)


async def get_player_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlayerRepositoryInterface:
    """Get player repository instance.

    :param db: Database session
    :returns: Player repository implementation
    """
    return SQLAlchemyPlayerRepository(db)


async def get_history_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlayerHistoryRepositoryInterface:
    return SQLAlchemyPlayerHistoryRepository(db)


async def get_lp_event_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LPEventRepositoryInterface:
    return SQLAlchemyLPEventRepository(db)


async def get_riot_gateway(
    riot_client: Annotated[RiotAPIClient, Depends(get_riot_client)],
) -> RiotAPIGateway:
    """Get Riot API gateway instance.

    :param riot_client: Riot API client
    :returns: Riot API gateway
    """
    return RiotAPIGateway(riot_client)


async def get_player_service(
    repository: Annotated[PlayerRepositoryInterface, Depends(get_player_repository)],
    history: Annotated[
        PlayerHistoryRepositoryInterface, Depends(get_history_repository)
    ],
    lp_events: Annotated[LPEventRepositoryInterface, Depends(get_lp_event_repository)],
) -> PlayerService:
    """Player service for read and owner-metadata endpoints (no Riot API access)."""
    return PlayerService(repository, history, lp_events)


async def get_player_registration_service(
    repository: Annotated[PlayerRepositoryInterface, Depends(get_player_repository)],
    history: Annotated[
        PlayerHistoryRepositoryInterface, Depends(get_history_repository)
    ],
    lp_events: Annotated[LPEventRepositoryInterface, Depends(get_lp_event_repository)],
    gateway: Annotated[RiotAPIGateway, Depends(get_riot_gateway)],
) -> PlayerService:
    """Player service with Riot API gateway, used to register players."""
    return PlayerService(repository, history, lp_events, gateway)


# Type aliases for cleaner dependency injection
PlayerServiceDep = Annotated[PlayerService, Depends(get_player_service)]
PlayerRegistrationServiceDep = Annotated[
    PlayerService, Depends(get_player_registration_service)
]
PlayerRepositoryDep = Annotated[
    PlayerRepositoryInterface, Depends(get_player_repository)
]
RiotGatewayDep = Annotated[RiotAPIGateway, Depends(get_riot_gateway)]

__all__ = [
    "get_player_service",
    "get_player_registration_service",
    "get_player_repository",
    "get_history_repository",
    "get_lp_event_repository",
    "get_riot_gateway",
    "PlayerServiceDep",
    "PlayerRegistrationServiceDep",
    "PlayerRepositoryDep",
    "RiotGatewayDep",
]
