"""Players feature - tracked accounts, history samples and LP events."""

from .orm_models import PlayerORM, PlayerHistoryORM, LPTrackerEventORM
from .service import PlayerService
from .ranks import RankSnapshot, calculate_lp_difference, rank_sort_key

__all__ = [
    "PlayerORM",
    "PlayerHistoryORM",
    "LPTrackerEventORM",
    "PlayerService",
    "RankSnapshot",
    "calculate_lp_difference",
    "rank_sort_key",
]
