"""
Riot API client package for League of Legends API integration.

This package provides an async HTTP client for the Riot API with typed
response models and typed errors.
"""

from .client import RiotAPIClient
from .errors import (
    RiotAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    BadRequestError,
    ServiceUnavailableError,
)
from .models import (
    AccountDTO,
    SummonerDTO,
    LeagueEntryDTO,
    CurrentGameInfoDTO,
    MatchDTO,
    ParticipantDTO,
)
from .endpoints import RiotAPIEndpoints

__all__ = [
    "RiotAPIClient",
    "RiotAPIError",
    "RateLimitError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "BadRequestError",
    "ServiceUnavailableError",
    "AccountDTO",
    "SummonerDTO",
    "LeagueEntryDTO",
    "CurrentGameInfoDTO",
    "MatchDTO",
    "ParticipantDTO",
    "RiotAPIEndpoints",
]
