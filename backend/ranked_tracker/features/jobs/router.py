"""Update service endpoints."""

from fastapi import APIRouter, HTTPException, Request, status
import structlog

from ranked_tracker.core.rate_limiter import UPDATE_ALL_LIMIT, limiter
from ranked_tracker.features.players.dependencies import PlayerServiceDep
from ranked_tracker.features.players.schemas import PlayerResponse

from .dependencies import ManualReconcilerDep
from .schemas import RunSummaryResponse, UpdateSchedulerStatusResponse
from .service import update_all_players

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["jobs"])


@router.post("/players/update-all", response_model=list[PlayerResponse])
@limiter.limit(UPDATE_ALL_LIMIT)
async def update_all(
    request: Request,
    reconciler: ManualReconcilerDep,
    player_service: PlayerServiceDep,
):
    """
    Refresh every tracked player right now and return the leaderboard.

    Players are reconciled one after the other with single upstream attempts;
    a player that fails keeps its previous data.
    """
    try:
        await update_all_players(reconciler, reconciler.players)
        return await player_service.list_leaderboard()
    except Exception as e:
        logger.error(
            "update_all_failed",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating players",
        )


@router.get("/jobs/update-status", response_model=UpdateSchedulerStatusResponse)
async def get_update_status(request: Request):
    """State of the periodic update service and counts of its last run."""
    scheduler = getattr(request.app.state, "update_scheduler", None)
    if scheduler is None:
        return UpdateSchedulerStatusResponse(enabled=False, running=False)

    last_run = None
    if scheduler.last_summary is not None:
        last_run = RunSummaryResponse.model_validate(scheduler.last_summary)

    return UpdateSchedulerStatusResponse(
        enabled=True,
        running=scheduler.running,
        interval_seconds=scheduler.config.interval_seconds,
        last_run=last_run,
    )
