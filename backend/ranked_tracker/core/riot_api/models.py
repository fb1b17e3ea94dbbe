"""Pydantic models for Riot API response data.

Identity fields are optional on purpose: upstream sometimes answers with a
partial payload, and the update service must see it to reject it instead of
failing on parsing.
"""

from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict


class AccountDTO(BaseModel):
    """Riot Account information (account-v1)."""

    puuid: str
    game_name: Optional[str] = Field(None, alias="gameName")
    tag_line: Optional[str] = Field(None, alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)


class SummonerDTO(BaseModel):
    """League of Legends Summoner information (summoner-v4)."""

    puuid: str
    profile_icon_id: Optional[int] = Field(None, alias="profileIconId")
    summoner_level: Optional[int] = Field(None, alias="summonerLevel")
    revision_date: Optional[int] = Field(None, alias="revisionDate")

    model_config = ConfigDict(populate_by_name=True)


class LeagueEntryDTO(BaseModel):
    """League entry information (league-v4)."""

    league_id: Optional[str] = Field(None, alias="leagueId")
    puuid: Optional[str] = None
    queue_type: str = Field(..., alias="queueType")
    tier: Optional[str] = None
    rank: Optional[str] = None
    league_points: int = Field(0, alias="leaguePoints")
    wins: int = 0
    losses: int = 0
    veteran: bool = False
    inactive: bool = False
    fresh_blood: bool = Field(False, alias="freshBlood")
    hot_streak: bool = Field(False, alias="hotStreak")

    model_config = ConfigDict(populate_by_name=True)


class CurrentGameInfoDTO(BaseModel):
    """Active game information (spectator-v5)."""

    game_id: int = Field(..., alias="gameId")
    game_mode: Optional[str] = Field(None, alias="gameMode")
    game_queue_config_id: Optional[int] = Field(None, alias="gameQueueConfigId")
    game_start_time: Optional[int] = Field(None, alias="gameStartTime")

    model_config = ConfigDict(populate_by_name=True)


class ParticipantDTO(BaseModel):
    """Match participant information."""

    puuid: str
    summoner_name: Optional[str] = Field(None, alias="summonerName")
    riot_id_game_name: Optional[str] = Field(None, alias="riotIdGameName")
    riot_id_tagline: Optional[str] = Field(None, alias="riotIdTagline")

    team_id: int = Field(..., alias="teamId")
    win: bool
    champion_id: int = Field(..., alias="championId")
    champion_name: str = Field(..., alias="championName")
    kills: int
    deaths: int
    assists: int
    total_damage_dealt_to_champions: int = Field(
        0, alias="totalDamageDealtToChampions"
    )
    total_minions_killed: int = Field(0, alias="totalMinionsKilled")
    neutral_minions_killed: int = Field(0, alias="neutralMinionsKilled")
    summoner1_id: Optional[int] = Field(None, alias="summoner1Id")
    summoner2_id: Optional[int] = Field(None, alias="summoner2Id")
    item0: int = 0
    item1: int = 0
    item2: int = 0
    item3: int = 0
    item4: int = 0
    item5: int = 0
    item6: int = 0

    @property
    def items(self) -> List[int]:
        """Item slots 0-6 in display order."""
        return [
            self.item0,
            self.item1,
            self.item2,
            self.item3,
            self.item4,
            self.item5,
            self.item6,
        ]

    @property
    def creep_score(self) -> int:
        """Lane minions plus jungle monsters."""
        return self.total_minions_killed + self.neutral_minions_killed

    @property
    def display_name(self) -> str:
        """Riot ID when available, legacy summoner name otherwise."""
        if self.riot_id_game_name:
            if self.riot_id_tagline:
                return f"{self.riot_id_game_name} #{self.riot_id_tagline}"
            return self.riot_id_game_name
        return self.summoner_name or ""

    model_config = ConfigDict(populate_by_name=True)


class MatchInfoDTO(BaseModel):
    """Match information."""

    game_creation: int = Field(..., alias="gameCreation")
    game_duration: int = Field(..., alias="gameDuration")
    queue_id: int = Field(..., alias="queueId")
    participants: List[ParticipantDTO]

    model_config = ConfigDict(populate_by_name=True)


class MatchMetadataDTO(BaseModel):
    """Match metadata."""

    match_id: str = Field(..., alias="matchId")
    participants: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class MatchDTO(BaseModel):
    """Complete match data."""

    metadata: MatchMetadataDTO
    info: MatchInfoDTO

    @property
    def match_id(self) -> str:
        """Get match ID from metadata."""
        return self.metadata.match_id

    model_config = ConfigDict(populate_by_name=True)
