"""Dependencies for the matches feature."""

from typing import Annotated

from fastapi import Depends

from ranked_tracker.core.dependencies import get_riot_client
from ranked_tracker.core.riot_api.client import RiotAPIClient

from .gateway import RiotMatchGateway
from .service import MatchService


async def get_riot_match_gateway(
    riot_client: Annotated[RiotAPIClient, Depends(get_riot_client)],
) -> RiotMatchGateway:
    """Get Riot match gateway instance.

    :param riot_client: Riot API client
    :returns: Riot match gateway
    """
    return RiotMatchGateway(riot_client)


async def get_match_service(
    gateway: Annotated[RiotMatchGateway, Depends(get_riot_match_gateway)],
) -> MatchService:
    return MatchService(gateway)


# Type aliases for cleaner dependency injection
MatchServiceDep = Annotated[MatchService, Depends(get_match_service)]

__all__ = ["get_riot_match_gateway", "get_match_service", "MatchServiceDep"]
