"""Pydantic models for Riot API response data.

Participant stat fields are optional: upstream omits fields for remade,
abandoned or legacy games, and the transformer decides what a usable
participant is.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class ParticipantDTO(BaseModel):
    """Match participant information."""

    puuid: str
    summoner_name: Optional[str] = Field(None, alias="summonerName")
    riot_id_game_name: Optional[str] = Field(None, alias="riotIdGameName")
    riot_id_tagline: Optional[str] = Field(None, alias="riotIdTagline")

    team_id: Optional[int] = Field(None, alias="teamId")
    win: Optional[bool] = None

    champion_id: Optional[int] = Field(None, alias="championId")
    champion_name: Optional[str] = Field(None, alias="championName")

    kills: Optional[int] = None
    deaths: Optional[int] = None
    assists: Optional[int] = None

    gold_earned: Optional[int] = Field(None, alias="goldEarned")
    gold_spent: Optional[int] = Field(None, alias="goldSpent")
    total_damage_dealt: Optional[int] = Field(None, alias="totalDamageDealt")
    total_damage_dealt_to_champions: Optional[int] = Field(
        None, alias="totalDamageDealtToChampions"
    )
    total_damage_taken: Optional[int] = Field(None, alias="totalDamageTaken")
    total_heal: Optional[int] = Field(None, alias="totalHeal")
    total_heals_on_teammates: Optional[int] = Field(
        None, alias="totalHealsOnTeammates"
    )

    vision_score: Optional[float] = Field(None, alias="visionScore")
    wards_placed: Optional[int] = Field(None, alias="wardsPlaced")
    wards_killed: Optional[int] = Field(None, alias="wardsKilled")
    vision_wards_bought_in_game: Optional[int] = Field(
        None, alias="visionWardsBoughtInGame"
    )

    total_minions_killed: Optional[int] = Field(None, alias="totalMinionsKilled")
    neutral_minions_killed: Optional[int] = Field(None, alias="neutralMinionsKilled")

    role: Optional[str] = None
    lane: Optional[str] = None
    team_position: Optional[str] = Field(None, alias="teamPosition")
    individual_position: Optional[str] = Field(None, alias="individualPosition")

    item0: Optional[int] = None
    item1: Optional[int] = None
    item2: Optional[int] = None
    item3: Optional[int] = None
    item4: Optional[int] = None
    item5: Optional[int] = None
    item6: Optional[int] = None
    summoner1_id: Optional[int] = Field(None, alias="summoner1Id")
    summoner2_id: Optional[int] = Field(None, alias="summoner2Id")

    double_kills: Optional[int] = Field(None, alias="doubleKills")
    triple_kills: Optional[int] = Field(None, alias="tripleKills")
    quadra_kills: Optional[int] = Field(None, alias="quadraKills")
    penta_kills: Optional[int] = Field(None, alias="pentaKills")
    largest_killing_spree: Optional[int] = Field(None, alias="largestKillingSpree")

    baron_kills: Optional[int] = Field(None, alias="baronKills")
    dragon_kills: Optional[int] = Field(None, alias="dragonKills")
    objectives_stolen: Optional[int] = Field(None, alias="objectivesStolen")
    objectives_stolen_assists: Optional[int] = Field(
        None, alias="objectivesStolenAssists"
    )
    total_time_spent_dead: Optional[int] = Field(None, alias="totalTimeSpentDead")

    challenges: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def display_name(self) -> str:
        """Riot ID game name when present, legacy summoner name otherwise."""
        return self.riot_id_game_name or self.summoner_name or "Unknown"

    @property
    def items(self) -> List[int]:
        """Non-empty item slots in slot order."""
        slots = [
            self.item0,
            self.item1,
            self.item2,
            self.item3,
            self.item4,
            self.item5,
            self.item6,
        ]
        return [item for item in slots if item]


class MatchInfoDTO(BaseModel):
    """Match information."""

    game_creation: int = Field(..., alias="gameCreation")
    game_duration: int = Field(..., alias="gameDuration")
    game_end_timestamp: Optional[int] = Field(None, alias="gameEndTimestamp")
    queue_id: Optional[int] = Field(None, alias="queueId")
    game_mode: str = Field(..., alias="gameMode")
    game_type: Optional[str] = Field(None, alias="gameType")
    participants: List[ParticipantDTO]

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MatchMetadataDTO(BaseModel):
    """Match metadata."""

    match_id: str = Field(..., alias="matchId")
    participants: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MatchDTO(BaseModel):
    """Complete match information."""

    metadata: MatchMetadataDTO
    info: MatchInfoDTO

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LeagueEntryDTO(BaseModel):
    """League entry information."""

    league_id: Optional[str] = Field(None, alias="leagueId")
    puuid: Optional[str] = None
    queue_type: str = Field(..., alias="queueType")
    tier: str
    rank: Optional[str] = None
    league_points: int = Field(..., alias="leaguePoints")
    wins: int
    losses: int
    hot_streak: bool = Field(False, alias="hotStreak")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def win_rate(self) -> float:
        """Win rate in percent, 0 when no games are recorded."""
        total = self.wins + self.losses
        return (self.wins / total) * 100 if total > 0 else 0.0
