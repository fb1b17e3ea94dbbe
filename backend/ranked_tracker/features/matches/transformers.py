"""Transformers from Riot match DTOs to game summaries.

Only ranked solo games are kept; any other queue transforms to None.
"""

from typing import Optional

import structlog

from ranked_tracker.core.riot_api.constants import QueueId
from ranked_tracker.core.riot_api.models import MatchDTO, ParticipantDTO

from .schemas import GameParticipantSummary, GameSummary

logger = structlog.get_logger(__name__)


def participant_to_summary(participant: ParticipantDTO) -> GameParticipantSummary:
    return GameParticipantSummary(
        champion_id=participant.champion_id,
        champion_name=participant.champion_name,
        summoner_name=participant.display_name,
        total_damage_dealt_to_champions=participant.total_damage_dealt_to_champions,
        kills=participant.kills,
        deaths=participant.deaths,
        assists=participant.assists,
        cs=participant.creep_score,
    )


def match_to_game_summary(match: MatchDTO, puuid: str) -> Optional[GameSummary]:
    """Game card of ``puuid`` in ``match``.

    :param match: Match details from match-v5
    :param puuid: Tracked player
    :returns: GameSummary, or None when the match is not ranked solo
    :raises ValueError: If the player did not take part in the match
    """
    if match.info.queue_id != QueueId.RANKED_SOLO_5X5:
        logger.debug(
            "Skipping non solo queue match",
            match_id=match.match_id,
            queue_id=match.info.queue_id,
        )
        return None

    participants = match.info.participants
    player = next((p for p in participants if p.puuid == puuid), None)
    if player is None:
        raise ValueError(f"Participant {puuid} not found in match {match.match_id}")

    allies = [p for p in participants if p.team_id == player.team_id and p.puuid != puuid]
    enemies = [p for p in participants if p.team_id != player.team_id]

    return GameSummary(
        game_id=match.match_id,
        game_creation=match.info.game_creation,
        game_duration=match.info.game_duration,
        champion_id=player.champion_id,
        champion_name=player.champion_name,
        win=player.win,
        kills=player.kills,
        deaths=player.deaths,
        assists=player.assists,
        total_damage_dealt_to_champions=player.total_damage_dealt_to_champions,
        cs=player.creep_score,
        summoner1_id=player.summoner1_id,
        summoner2_id=player.summoner2_id,
        items=player.items,
        allies=[participant_to_summary(p) for p in allies],
        enemies=[participant_to_summary(p) for p in enemies],
    )
