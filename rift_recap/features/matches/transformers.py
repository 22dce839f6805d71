"""Transformers from Riot API DTOs to normalized match records."""

from typing import List, Union

import structlog
from pydantic import ValidationError

from rift_recap.core.exceptions import MatchNormalizationError
from rift_recap.core.riot_api.models import MatchDTO, ParticipantDTO

from .records import FullParticipant, MatchRecord, StubParticipant

logger = structlog.get_logger(__name__)

# Upstream fields a participant must carry to count as a full stat line
REQUIRED_PARTICIPANT_FIELDS = (
    "champion_name",
    "win",
    "kills",
    "deaths",
    "assists",
)


class MatchTransformer:
    """Builds MatchRecords from match-v5 payloads."""

    @staticmethod
    def is_complete(participant: ParticipantDTO) -> bool:
        """True when every required stat is present on the upstream entry."""
        return all(
            getattr(participant, field) is not None
            for field in REQUIRED_PARTICIPANT_FIELDS
        )

    @classmethod
    def participant(
        cls, dto: ParticipantDTO
    ) -> Union[FullParticipant, StubParticipant]:
        """Tag a participant as full or stub from the shape of its entry."""
        if not cls.is_complete(dto):
            return StubParticipant(puuid=dto.puuid, display_name=dto.display_name)

        challenges = dto.challenges or {}
        return FullParticipant(
            puuid=dto.puuid,
            display_name=dto.display_name,
            champion_id=dto.champion_id or 0,
            champion_name=dto.champion_name,
            team_id=dto.team_id,
            win=dto.win,
            kills=dto.kills,
            deaths=dto.deaths,
            assists=dto.assists,
            gold_earned=dto.gold_earned or 0,
            gold_spent=dto.gold_spent or 0,
            total_damage_dealt=dto.total_damage_dealt or 0,
            total_damage_dealt_to_champions=dto.total_damage_dealt_to_champions or 0,
            total_damage_taken=dto.total_damage_taken or 0,
            total_heal=dto.total_heal or 0,
            total_heals_on_teammates=dto.total_heals_on_teammates or 0,
            vision_score=dto.vision_score or 0.0,
            wards_placed=dto.wards_placed or 0,
            wards_killed=dto.wards_killed or 0,
            vision_wards_bought=dto.vision_wards_bought_in_game or 0,
            total_minions_killed=dto.total_minions_killed or 0,
            neutral_minions_killed=dto.neutral_minions_killed or 0,
            role=dto.role,
            lane=dto.lane,
            team_position=dto.team_position or None,
            individual_position=dto.individual_position or None,
            items=dto.items,
            summoner1_id=dto.summoner1_id,
            summoner2_id=dto.summoner2_id,
            double_kills=dto.double_kills or 0,
            triple_kills=dto.triple_kills or 0,
            quadra_kills=dto.quadra_kills or 0,
            penta_kills=dto.penta_kills or 0,
            largest_killing_spree=dto.largest_killing_spree or 0,
            baron_kills=dto.baron_kills or 0,
            dragon_kills=dto.dragon_kills or 0,
            elder_dragon_kills=challenges.get("teamElderDragonKills") or 0,
            objectives_stolen=dto.objectives_stolen or 0,
            objectives_stolen_assists=dto.objectives_stolen_assists or 0,
            total_time_spent_dead=dto.total_time_spent_dead,
            skillshots_hit=challenges.get("skillshotsHit"),
            skillshots_dodged=challenges.get("skillshotsDodged"),
            solo_kills=challenges.get("soloKills"),
            elder_dragon_multikills=challenges.get("elderDragonMultikills"),
        )

    @classmethod
    def to_record(cls, match: MatchDTO) -> MatchRecord:
        """
        Normalize a match-v5 payload.

        Older payloads without gameEndTimestamp report gameDuration in
        milliseconds; newer ones report seconds.

        :param match: Parsed upstream match
        :returns: Immutable MatchRecord
        :raises MatchNormalizationError: If the payload cannot be normalized
        """
        info = match.info
        duration = info.game_duration
        if info.game_end_timestamp is None:
            duration = duration // 1000

        try:
            participants: List[Union[FullParticipant, StubParticipant]] = [
                cls.participant(p) for p in info.participants
            ]
            record = MatchRecord(
                match_id=match.metadata.match_id,
                game_creation=info.game_creation,
                game_duration=duration,
                game_mode=info.game_mode,
                game_type=info.game_type,
                queue_id=info.queue_id,
                participants=participants,
            )
        except ValidationError as e:
            raise MatchNormalizationError(
                match.metadata.match_id, f"Invalid participant data: {e}"
            ) from e

        stubs = sum(1 for p in participants if p.kind == "stub")
        if stubs:
            logger.debug(
                "Match normalized with stub participants",
                match_id=record.match_id,
                stubs=stubs,
            )
        return record
