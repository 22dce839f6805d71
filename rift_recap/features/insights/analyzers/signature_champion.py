"""
Signature Champion scene: the most-played champion's profile.

Radar axes are normalized to 0..100 against fixed ceilings so they stay
comparable across units.
"""

from dataclasses import dataclass
from typing import Dict, List

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import kda_ratio, normalize, safe_divide, win_rate

from ..schemas import RadarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer

# Axis ceilings: a value at the ceiling scores 100
KDA_CEILING = 5.0
DAMAGE_PER_MINUTE_CEILING = 1000.0
VISION_CEILING = 50.0
CS_PER_MINUTE_CEILING = 10.0

RADAR_CATEGORIES = ["Win Rate", "KDA", "Damage/Min", "Vision", "CS/Min"]


@dataclass
class ChampionTotals:
    champion_id: int
    champion_name: str
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    gold: int = 0
    damage: int = 0
    vision: float = 0.0
    creep_score: int = 0
    seconds: int = 0

    @property
    def win_rate(self) -> float:
        return win_rate(self.wins, self.games)

    @property
    def kda(self) -> float:
        return kda_ratio(self.kills, self.deaths, self.assists)

    @property
    def minutes(self) -> float:
        return self.seconds / 60


class SignatureChampionAnalyzer(MatchFoldAnalyzer):
    """Profiles the player's most-played champion."""

    scene_id = "signature_champion"
    label = "Signature Champion"
    visualization_kind = VisualizationKind.RADAR
    subject = "your signature champion"
    no_data_summary = "No champion data to profile yet"

    def new_accumulator(self) -> Dict[str, ChampionTotals]:
        # Insertion order records first appearance, used to break ties
        return {}

    def fold(
        self, acc: Dict[str, ChampionTotals], record: MatchRecord, player: FullParticipant
    ) -> None:
        totals = acc.get(player.champion_name)
        if totals is None:
            totals = ChampionTotals(player.champion_id, player.champion_name)
            acc[player.champion_name] = totals
        totals.games += 1
        totals.wins += int(player.win)
        totals.kills += player.kills
        totals.deaths += player.deaths
        totals.assists += player.assists
        totals.gold += player.gold_earned
        totals.damage += player.total_damage_dealt_to_champions
        totals.vision += player.vision_score
        totals.creep_score += player.creep_score
        totals.seconds += record.game_duration

    def build_insight(
        self, acc: Dict[str, ChampionTotals], coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        ranked: List[ChampionTotals] = sorted(
            acc.values(), key=lambda c: c.games, reverse=True
        )
        main = ranked[0]

        damage_per_minute = safe_divide(main.damage, main.minutes)
        avg_vision = safe_divide(main.vision, main.games)
        cs_per_minute = safe_divide(main.creep_score, main.minutes)
        avg_gold = safe_divide(main.gold, main.games)

        raw_values = [
            round(main.win_rate, 1),
            round(main.kda, 2),
            round(damage_per_minute, 0),
            round(avg_vision, 1),
            round(cs_per_minute, 1),
        ]
        values = [
            round(main.win_rate, 1),
            round(normalize(main.kda, KDA_CEILING), 1),
            round(normalize(damage_per_minute, DAMAGE_PER_MINUTE_CEILING), 1),
            round(normalize(avg_vision, VISION_CEILING), 1),
            round(normalize(cs_per_minute, CS_PER_MINUTE_CEILING), 1),
        ]

        per_game = (
            f"{main.kills / main.games:.1f}/{main.deaths / main.games:.1f}/"
            f"{main.assists / main.games:.1f}"
        )
        details = [
            f"You've mastered {main.champion_name} with {main.games} games played",
            f"Win rate: {main.win_rate:.1f}% ({main.wins} wins out of {main.games} games)",
            f"Average KDA: {main.kda:.2f} ({per_game})",
            f"Average gold per game: {avg_gold:,.0f}",
            f"Damage per minute: {damage_per_minute:.0f}, CS per minute: {cs_per_minute:.1f}",
            "Most played champions:",
        ]
        for index, champion in enumerate(ranked[:3], start=1):
            details.append(
                f"  {index}. {champion.champion_name}: {champion.games} games, "
                f"{champion.win_rate:.1f}% win rate"
            )

        return self._create_payload(
            summary=(
                f"{main.champion_name} is your signature champion. {main.games} games played "
                f"with {main.win_rate:.1f}% win rate."
            ),
            details=details,
            action=(
                "Keep dominating with your signature pick!"
                if main.win_rate >= 60
                else "Practice more to improve your win rate"
            ),
            metrics=[
                SceneMetric(label="Signature Champion", value=main.champion_name),
                SceneMetric(label="Games Played", value=main.games),
                SceneMetric(
                    label="Win Rate",
                    value=round(main.win_rate, 1),
                    unit="%",
                    context=f"{main.wins}W {main.games - main.wins}L",
                ),
                SceneMetric(label="Average KDA", value=round(main.kda, 2), context=per_game),
            ],
            viz_data=RadarViz(
                subject=main.champion_name,
                categories=RADAR_CATEGORIES,
                values=values,
                raw_values=raw_values,
            ),
        )
