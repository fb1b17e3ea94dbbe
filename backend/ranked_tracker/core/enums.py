"""Shared enums used across features.

This module provides a single source of truth for enums used in both models and schemas.
Ranked enums carry an explicit total order so that comparisons never depend on
string-keyed lookup tables.
"""

from enum import Enum


class Tier(str, Enum):
    """League of Legends rank tiers, declared from lowest to highest."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def order(self) -> int:
        """Position in the ladder (IRON == 0, CHALLENGER == 9)."""
        return _TIER_ORDER.index(self)

    @property
    def is_apex(self) -> bool:
        """Whether the tier has no divisions (MASTER and above)."""
        return self in (Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER)


class Division(str, Enum):
    """Rank divisions, declared from lowest (IV) to highest (I)."""

    IV = "IV"
    III = "III"
    II = "II"
    I = "I"  # noqa: E741

    @property
    def order(self) -> int:
        """Position inside a tier (IV == 0, I == 3)."""
        return _DIVISION_ORDER.index(self)


class QueueType(str, Enum):
    """Ranked queue identifiers as returned by league-v4."""

    RANKED_SOLO_5x5 = "RANKED_SOLO_5x5"
    RANKED_FLEX_SR = "RANKED_FLEX_SR"


_TIER_ORDER = tuple(Tier)
_DIVISION_ORDER = tuple(Division)
