"""Transformers for converting between layers in players feature.

ORM models → Pydantic schemas (API responses). Computed fields come from the
domain model so every endpoint presents them the same way.
"""

from .orm_models import PlayerORM, PlayerHistoryORM, LPTrackerEventORM
from .schemas import PlayerResponse, PlayerHistoryResponse, LPEventResponse


def player_orm_to_response(player: PlayerORM) -> PlayerResponse:
    """Transform PlayerORM domain model to PlayerResponse API schema.

    :param player: Player domain model from database
    :returns: Player response schema for API
    """
    response = PlayerResponse.model_validate(player)

    response.win_rate = round(player.win_rate, 1)
    response.total_games = player.total_games
    response.display_rank = player.display_rank

    return response


def history_orm_to_response(entry: PlayerHistoryORM) -> PlayerHistoryResponse:
    return PlayerHistoryResponse.model_validate(entry)


def lp_event_orm_to_response(event: LPTrackerEventORM) -> LPEventResponse:
    return LPEventResponse.model_validate(event)
