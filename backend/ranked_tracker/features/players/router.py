"""Player API endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request, status
import structlog

from ranked_tracker.core.exceptions import (
    PlayerAlreadyTrackedError,
    PlayerNotFoundError,
    ServiceException,
    ValidationError,
)
from ranked_tracker.core.rate_limiter import REGISTER_PLAYER_LIMIT, limiter

from .dependencies import PlayerRegistrationServiceDep, PlayerServiceDep
from .schemas import (
    LPEventResponse,
    PlayerCreate,
    PlayerHistoryResponse,
    PlayerResponse,
    PlayerUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/players", tags=["players"])
lp_events_router = APIRouter(prefix="/lp-events", tags=["players"])


def to_http_exception(error: ServiceException) -> HTTPException:
    """Map a service error onto a response; upstream and database causes stay in the logs."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, PlayerNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, PlayerAlreadyTrackedError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)

    logger.error(
        "service_operation_failed",
        operation=error.operation,
        error=str(error),
        error_type=type(error).__name__,
        **error.context,
    )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY, detail="Upstream service error"
    )


@router.get("", response_model=list[PlayerResponse])
async def list_players(player_service: PlayerServiceDep):
    """Leaderboard of every tracked player, best rank first."""
    return await player_service.list_leaderboard()


@router.post("", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_PLAYER_LIMIT)
async def add_player(
    request: Request,
    player_data: PlayerCreate,
    player_service: PlayerRegistrationServiceDep,
):
    """
    Register a tracked account by Riot ID (``name#tag``).

    Resolves the account and reads its solo queue standing once.

    Returns:
        PlayerResponse: The created player (400 malformed Riot ID,
        404 unknown account, 409 already tracked)
    """
    try:
        return await player_service.add_player(player_data)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(
            "add_player_failed",
            summoner_name=player_data.summoner_name,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error adding player",
        )


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(player_id: int, player_service: PlayerServiceDep):
    try:
        return await player_service.get_player(player_id)
    except ServiceException as e:
        raise to_http_exception(e)


@router.patch("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: int, changes: PlayerUpdate, player_service: PlayerServiceDep
):
    """Change owner metadata (``player_name``, ``role``, ``is_main``)."""
    try:
        return await player_service.update_metadata(player_id, changes)
    except ServiceException as e:
        raise to_http_exception(e)


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(player_id: int, player_service: PlayerServiceDep):
    """Stop tracking a player, its history and LP events included."""
    try:
        await player_service.delete_player(player_id)
    except ServiceException as e:
        raise to_http_exception(e)


@router.get("/{player_id}/history", response_model=list[PlayerHistoryResponse])
async def get_player_history(
    player_id: int,
    player_service: PlayerServiceDep,
    limit: int = Query(100, ge=1, le=500),
):
    try:
        return await player_service.get_history(player_id, limit)
    except ServiceException as e:
        raise to_http_exception(e)


@router.get("/{player_id}/lp-events", response_model=list[LPEventResponse])
async def get_player_lp_events(
    player_id: int,
    player_service: PlayerServiceDep,
    limit: int = Query(100, ge=1, le=500),
):
    try:
        return await player_service.get_lp_events(player_id, limit)
    except ServiceException as e:
        raise to_http_exception(e)


@lp_events_router.get("", response_model=list[LPEventResponse])
async def get_recent_lp_events(
    player_service: PlayerServiceDep,
    limit: int = Query(50, ge=1, le=500),
):
    """Latest LP changes across all players."""
    return await player_service.get_recent_lp_events(limit)
