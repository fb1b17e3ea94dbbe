"""Recent games endpoint."""

from fastapi import APIRouter, Query

from ranked_tracker.core.exceptions import ServiceException
from ranked_tracker.features.players.router import to_http_exception

from .dependencies import MatchServiceDep
from .schemas import GameSummary

router = APIRouter(prefix="/players", tags=["matches"])


@router.get("/{puuid}/games", response_model=list[GameSummary])
async def get_recent_games(
    puuid: str,
    match_service: MatchServiceDep,
    limit: int = Query(5, ge=1, le=10),
):
    """Latest ranked solo games of a player, newest first."""
    try:
        return await match_service.get_recent_games(puuid, limit)
    except ServiceException as e:
        raise to_http_exception(e)
