"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import get_db, db_manager, DatabaseManager
from .exceptions import (
    ServiceException,
    PlayerNotFoundError,
    PlayerAlreadyTrackedError,
    ValidationError,
    ExternalServiceError,
)
from .enums import Tier, Division, QueueType
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "get_db",
    "db_manager",
    "DatabaseManager",
    # Exceptions
    "ServiceException",
    "PlayerNotFoundError",
    "PlayerAlreadyTrackedError",
    "ValidationError",
    "ExternalServiceError",
    # Enums
    "Tier",
    "Division",
    "QueueType",
    # Models
    "Base",
]
