"""Normalized match records consumed by the analyzers.

A record is built once by the transformer, cached as its JSON dump and
never mutated afterwards.
"""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from rift_recap.utils.statistics import kda_ratio


class StubParticipant(BaseModel):
    """A participant whose upstream entry lacked core stats."""

    kind: Literal["stub"] = "stub"
    puuid: str
    display_name: str = "Unknown"

    model_config = ConfigDict(frozen=True)


class FullParticipant(BaseModel):
    """A participant with the complete per-match stat line."""

    kind: Literal["full"] = "full"
    puuid: str
    display_name: str = "Unknown"

    champion_id: int = 0
    champion_name: str
    team_id: Optional[int] = None
    win: bool

    kills: int
    deaths: int
    assists: int

    gold_earned: int = 0
    gold_spent: int = 0
    total_damage_dealt: int = 0
    total_damage_dealt_to_champions: int = 0
    total_damage_taken: int = 0
    total_heal: int = 0
    total_heals_on_teammates: int = 0

    vision_score: float = 0.0
    wards_placed: int = 0
    wards_killed: int = 0
    vision_wards_bought: int = 0

    total_minions_killed: int = 0
    neutral_minions_killed: int = 0

    role: Optional[str] = None
    lane: Optional[str] = None
    team_position: Optional[str] = None
    individual_position: Optional[str] = None

    items: List[int] = Field(default_factory=list)
    summoner1_id: Optional[int] = None
    summoner2_id: Optional[int] = None

    double_kills: int = 0
    triple_kills: int = 0
    quadra_kills: int = 0
    penta_kills: int = 0
    largest_killing_spree: int = 0

    baron_kills: int = 0
    dragon_kills: int = 0
    elder_dragon_kills: int = 0
    objectives_stolen: int = 0
    objectives_stolen_assists: int = 0

    # Telemetry that upstream does not always report
    total_time_spent_dead: Optional[int] = None
    skillshots_hit: Optional[int] = None
    skillshots_dodged: Optional[int] = None
    solo_kills: Optional[int] = None
    elder_dragon_multikills: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @property
    def kda(self) -> float:
        return kda_ratio(self.kills, self.deaths, self.assists)

    @property
    def creep_score(self) -> int:
        return self.total_minions_killed + self.neutral_minions_killed

    @property
    def position(self) -> Optional[str]:
        """teamPosition, falling back to individualPosition."""
        return self.team_position or self.individual_position or None


Participant = Annotated[
    Union[FullParticipant, StubParticipant], Field(discriminator="kind")
]


class MatchRecord(BaseModel):
    """One finished game as seen by the analyzers."""

    match_id: str
    game_creation: int  # epoch milliseconds
    game_duration: int  # seconds
    game_mode: str
    game_type: Optional[str] = None
    queue_id: Optional[int] = None
    participants: List[Participant]

    model_config = ConfigDict(frozen=True)

    def find_full(self, puuid: str) -> Optional[FullParticipant]:
        """Return the player's full stat line, or None if absent or a stub."""
        for participant in self.participants:
            if participant.puuid == puuid:
                if isinstance(participant, FullParticipant):
                    return participant
                return None
        return None

    @property
    def duration_minutes(self) -> float:
        return self.game_duration / 60

    @property
    def created_at(self) -> datetime:
        """Creation time in UTC."""
        return datetime.fromtimestamp(self.game_creation / 1000, tz=timezone.utc)

    @property
    def month(self) -> int:
        return self.created_at.month
