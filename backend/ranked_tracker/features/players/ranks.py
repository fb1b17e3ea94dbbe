"""Ranked snapshot value object and LP arithmetic.

Raw league points are not comparable across a division or tier boundary, so
every delta goes through :func:`calculate_lp_difference`. A boundary crossing
always credits (or charges) exactly one division width of 100 LP, even when
the player skipped several divisions at once.
"""

from dataclasses import dataclass
from typing import Optional

from ranked_tracker.core.enums import Division, Tier

DIVISION_WIDTH = 100


def parse_tier(value: Optional[str]) -> Optional[Tier]:
    """Map an upstream tier string to :class:`Tier` (None when unknown)."""
    if not value:
        return None
    try:
        return Tier(value.upper())
    except ValueError:
        return None


def parse_division(value: Optional[str]) -> Optional[Division]:
    """Map an upstream division string to :class:`Division` (None when unknown)."""
    if not value:
        return None
    try:
        return Division(value.upper())
    except ValueError:
        return None


@dataclass(frozen=True)
class RankSnapshot:
    """Solo queue standing at one point in time.

    ``tier`` None means unranked; LP and counters then default to 0.
    """

    tier: Optional[str] = None
    rank: Optional[str] = None
    league_points: int = 0
    wins: int = 0
    losses: int = 0

    @property
    def has_ranked_data(self) -> bool:
        """Whether any ranked field carries a value worth sampling into history."""
        return (
            self.tier is not None
            or self.rank is not None
            or bool(self.league_points)
            or bool(self.wins)
            or bool(self.losses)
        )

    @property
    def total_games(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Win rate as a percentage (0-100)."""
        if self.total_games == 0:
            return 0.0
        return (self.wins / self.total_games) * 100


def has_rank_changed(previous: RankSnapshot, current: RankSnapshot) -> bool:
    """True when tier, division or LP differ between two snapshots."""
    return (
        previous.tier != current.tier
        or previous.rank != current.rank
        or previous.league_points != current.league_points
    )


def _promotion(previous_lp: int, new_lp: int) -> int:
    return (DIVISION_WIDTH - previous_lp) + new_lp


def _demotion(previous_lp: int, new_lp: int) -> int:
    return -(previous_lp + (DIVISION_WIDTH - new_lp))


def calculate_lp_difference(previous: RankSnapshot, current: RankSnapshot) -> int:
    """Signed LP change between two snapshots.

    Rules, first match wins:

    1. same tier and division: ``new - previous``
    2. same tier, better division: ``(100 - previous) + new``
    3. same tier, worse division: ``-(previous + (100 - new))``
    4. better tier: ``(100 - previous) + new``
    5. worse tier: ``-(previous + (100 - new))``
    6. anything not comparable (unknown tier or division): ``new - previous``

    :param previous: Stored snapshot before reconciliation
    :param current: Snapshot just fetched from upstream
    :returns: Signed LP delta
    """
    previous_lp = previous.league_points
    new_lp = current.league_points

    if previous.tier == current.tier and previous.rank == current.rank:
        return new_lp - previous_lp

    previous_tier = parse_tier(previous.tier)
    new_tier = parse_tier(current.tier)
    if previous_tier is None or new_tier is None:
        return new_lp - previous_lp

    if previous_tier == new_tier:
        previous_division = parse_division(previous.rank)
        new_division = parse_division(current.rank)
        if previous_division is None or new_division is None:
            return new_lp - previous_lp
        if new_division.order > previous_division.order:
            return _promotion(previous_lp, new_lp)
        if new_division.order < previous_division.order:
            return _demotion(previous_lp, new_lp)
        return new_lp - previous_lp

    if new_tier.order > previous_tier.order:
        return _promotion(previous_lp, new_lp)
    return _demotion(previous_lp, new_lp)


def rank_sort_key(snapshot: RankSnapshot) -> tuple[int, int, int, int]:
    """Sort key for leaderboards; sort ascending to get the best player first.

    Ranked players come before unranked ones. Higher tiers come first. From
    MASTER upwards only LP counts, below that the division decides before LP.
    """
    tier = parse_tier(snapshot.tier)
    if tier is None:
        return (1, 0, 0, -snapshot.league_points)

    if tier.is_apex:
        return (0, -tier.order, 0, -snapshot.league_points)

    division = parse_division(snapshot.rank)
    division_order = division.order if division is not None else -1
    return (0, -tier.order, -division_order, -snapshot.league_points)
