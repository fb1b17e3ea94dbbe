"""Main FastAPI application for the Ranked Tracker backend."""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import structlog

from ranked_tracker.core import Settings, db_manager, get_global_settings
from ranked_tracker.core.logging import setup_logging
from ranked_tracker.core.rate_limiter import limiter
from ranked_tracker.features.jobs import (
    UpdateConfig,
    UpdateScheduler,
    jobs_router,
    run_full_update,
)
from ranked_tracker.features.matches import matches_router
from ranked_tracker.features.players.router import (
    lp_events_router,
    router as players_router,
)

settings = get_global_settings()
setup_logging(settings.log_level, json_logs=settings.log_json)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration(settings: Settings) -> bool:
    """Log the Riot API key status; True when a key is set."""
    api_key = settings.riot_api_key
    if not api_key or api_key == "your_riot_api_key_here":
        logger.warning(
            "RIOT_API_KEY not configured, update service and registration are disabled",
            hint="Get your key from https://developer.riotgames.com",
        )
        return False
    if api_key.startswith("RGAPI-"):
        logger.warning("Development API keys expire every 24 hours!")
    return True


def _build_update_scheduler(settings: Settings) -> Optional[UpdateScheduler]:
    if not settings.update_scheduler_enabled:
        logger.info("Update scheduler disabled by configuration")
        return None
    if not _validate_api_key_configuration(settings):
        return None

    config = UpdateConfig.from_settings(settings)

    async def run_update(run_id: str):
        return await run_full_update(config, settings.riot_api_key, run_id=run_id)

    return UpdateScheduler(config, run_update)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Ranked Tracker application")
    scheduler = _build_update_scheduler(settings)
    app.state.update_scheduler = scheduler
    if scheduler is not None:
        scheduler.start()

    yield

    logger.info("Shutting down Ranked Tracker application")
    if scheduler is not None:
        scheduler.shutdown()
    await db_manager.close()


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "players",
        "description": "Tracked accounts, leaderboard, rank history and LP changes.",
    },
    {
        "name": "matches",
        "description": "Recent ranked solo queue games read from the Riot API.",
    },
    {
        "name": "jobs",
        "description": "Periodic ranked update service: manual trigger and status.",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]

app = FastAPI(
    title="Ranked Tracker",
    description="""
    Solo queue tracker for a fixed group of League of Legends accounts.

    ## Features

    * **Leaderboard**: Tracked players sorted by rank
    * **Rank history**: Snapshots at most every 12 hours
    * **LP tracker**: Every observed rank change with its LP difference
    * **Recent games**: Last ranked games of a player

    ## Rate Limiting

    The update service spreads its Riot API calls in batches sized from the
    configured rate limit. Registration and manual updates are rate-limited
    per client.
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure rate limiter for FastAPI app
app.state.limiter = limiter
app.state.update_scheduler = None
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers carry their own resource prefixes
app.include_router(jobs_router, prefix="/api")
app.include_router(players_router, prefix="/api")
app.include_router(lp_events_router, prefix="/api")
app.include_router(matches_router, prefix="/api")


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Reports the application version and whether the periodic update
    service is running.
    """
    scheduler = app.state.update_scheduler
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": "0.1.0",
        "debug": settings.debug,
        "update_scheduler_running": bool(scheduler and scheduler.running),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ranked_tracker.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
