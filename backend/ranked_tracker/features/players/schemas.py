"""Pydantic schemas for the players feature."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class PlayerBase(BaseModel):
    """Base player schema with owner metadata."""

    player_name: Optional[str] = Field(
        None, max_length=64, description="Human owner of the account"
    )
    role: Optional[str] = Field(None, max_length=16, description="Preferred role")
    is_main: bool = Field(False, description="Whether this is the owner's main account")


class PlayerCreate(PlayerBase):
    """Schema for registering a new tracked account."""

    summoner_name: str = Field(
        ...,
        min_length=3,
        max_length=128,
        description="Riot ID in format name#tag",
    )


class PlayerUpdate(BaseModel):
    """Schema for owner metadata changes. Ranked fields are never writable."""

    player_name: Optional[str] = Field(None, max_length=64)
    role: Optional[str] = Field(None, max_length=16)
    is_main: Optional[bool] = None


class PlayerResponse(PlayerBase):
    """Schema for player response data."""

    id: int = Field(..., description="Database ID")
    puuid: str = Field(..., description="Player's PUUID")
    summoner_name: str = Field(..., description="Riot ID in format name#tag")
    profile_icon_id: Optional[int] = Field(None, description="Profile icon ID")
    tier: Optional[str] = Field(None, description="Solo queue tier, null when unranked")
    rank: Optional[str] = Field(None, description="Solo queue division")
    league_points: int = 0
    wins: int = 0
    losses: int = 0
    in_game: bool = False
    last_update: Optional[datetime] = None
    created_at: Optional[datetime] = None

    # Computed fields from domain logic
    win_rate: Optional[float] = Field(
        None, description="Win rate as percentage (calculated from wins/losses)"
    )
    total_games: Optional[int] = Field(
        None, description="Total number of games (wins + losses)"
    )
    display_rank: Optional[str] = Field(
        None, description="Human-readable rank display (e.g., 'Gold II')"
    )

    model_config = ConfigDict(from_attributes=True)


class PlayerHistoryResponse(BaseModel):
    """One periodic history sample."""

    id: int
    player_id: int
    tier: Optional[str] = None
    rank: Optional[str] = None
    league_points: int = 0
    wins: int = 0
    losses: int = 0
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class LPEventResponse(BaseModel):
    """One rank change with its LP delta."""

    id: int
    player_id: int
    summoner_name: str
    previous_tier: Optional[str] = None
    previous_rank: Optional[str] = None
    previous_lp: int = 0
    tier: Optional[str] = None
    rank: Optional[str] = None
    current_lp: int = 0
    difference: int
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
