"""
Ranked Tracker Application Package.

Tracks the solo queue standing of a fixed set of League of Legends accounts:
a periodic update service keeps ranks in sync with the Riot API and records
rank history and LP changes.
"""

from .core import get_global_settings, db_manager, get_db

__version__ = "0.1.0"

__all__ = [
    "get_global_settings",
    "db_manager",
    "get_db",
]
