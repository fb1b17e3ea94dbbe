"""Matches feature - recent ranked games read from the Riot API."""

from .router import router as matches_router
from .service import MatchService
from .schemas import GameSummary, GameParticipantSummary

__all__ = [
    "matches_router",
    "MatchService",
    "GameSummary",
    "GameParticipantSummary",
]
