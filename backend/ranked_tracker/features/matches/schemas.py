"""Pydantic schemas for the recent games endpoint."""

from typing import List, Optional

from pydantic import BaseModel, Field


class GameParticipantSummary(BaseModel):
    """Ally or enemy line of a game card."""

    champion_id: int
    champion_name: str
    summoner_name: str = Field(..., description="Riot ID (name #tag) when available")
    total_damage_dealt_to_champions: int = 0
    kills: int
    deaths: int
    assists: int
    cs: int = Field(..., description="Lane minions plus jungle monsters")


class GameSummary(BaseModel):
    """One ranked solo game seen from the tracked player."""

    game_id: str = Field(..., description="Match ID")
    game_creation: int = Field(..., description="Epoch milliseconds")
    game_duration: int = Field(..., description="Duration in seconds")
    champion_id: int
    champion_name: str
    win: bool
    kills: int
    deaths: int
    assists: int
    total_damage_dealt_to_champions: int = 0
    cs: int
    summoner1_id: Optional[int] = None
    summoner2_id: Optional[int] = None
    items: List[int] = Field(..., description="Item slots 0-6")
    allies: List[GameParticipantSummary] = Field(default_factory=list)
    enemies: List[GameParticipantSummary] = Field(default_factory=list)
