"""Damage Share scene: how much of the player's damage lands on champions."""

from dataclasses import dataclass
from typing import Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import DAMAGE_BENCHMARKS
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer
from .common import GameMark, mark_if_better


@dataclass
class DamageAccumulator:
    games: int = 0
    damage_dealt: int = 0
    damage_to_champions: int = 0
    peak: Optional[GameMark] = None


class DamageShareAnalyzer(MatchFoldAnalyzer):
    """Totals damage dealt and compares the average against role benchmarks."""

    scene_id = "damage_share"
    label = "Damage Share"
    visualization_kind = VisualizationKind.BAR
    subject = "your damage output"
    no_data_summary = "No damage data to show yet"

    def new_accumulator(self) -> DamageAccumulator:
        return DamageAccumulator()

    def fold(
        self, acc: DamageAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        acc.games += 1
        acc.damage_dealt += player.total_damage_dealt
        acc.damage_to_champions += player.total_damage_dealt_to_champions
        acc.peak = mark_if_better(
            acc.peak, player.total_damage_dealt_to_champions, record, player
        )

    def build_insight(
        self, acc: DamageAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        avg_dealt = safe_divide(acc.damage_dealt, acc.games)
        avg_to_champions = safe_divide(acc.damage_to_champions, acc.games)
        champion_share = safe_divide(acc.damage_to_champions, acc.damage_dealt) * 100
        peak = acc.peak

        return self._create_payload(
            summary=(
                f"{acc.damage_to_champions:,} total damage to champions across {acc.games} games. "
                f"Your peak was {peak.value:,.0f} damage with {peak.champion_name}."
            ),
            details=[
                f"Total damage dealt: {acc.damage_dealt:,} (avg: {avg_dealt:,.0f}/game)",
                f"Total damage to champions: {acc.damage_to_champions:,} "
                f"(avg: {avg_to_champions:,.0f}/game)",
                f"{champion_share:.1f}% of your damage went to champions",
                f"Highest damage game: {peak.value:,.0f} with {peak.champion_name}",
                f"That match had a KDA of {peak.score_line} on {peak.date}",
            ],
            action=(
                "Excellent focus on champion damage! Keep pressuring your opponents."
                if champion_share >= 60
                else "Try to focus more damage on enemy champions rather than minions and objectives."
            ),
            metrics=[
                SceneMetric(
                    label="Total Damage to Champions",
                    value=round(acc.damage_to_champions / 1000),
                    unit="K",
                    context=f"{avg_to_champions:,.0f} avg/game",
                ),
                SceneMetric(
                    label="Champion Damage %",
                    value=round(champion_share, 1),
                    unit="%",
                    context="of total damage",
                ),
                SceneMetric(
                    label="Peak Damage Game",
                    value=round(peak.value / 1000),
                    unit="K",
                    context=f"with {peak.champion_name}",
                ),
                SceneMetric(label="Games Analyzed", value=acc.games),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(label="Your Average", value=round(avg_to_champions)),
                    Bar(label="DPS Benchmark", value=DAMAGE_BENCHMARKS["dps"]),
                    Bar(label="Carry Benchmark", value=DAMAGE_BENCHMARKS["carry"]),
                    Bar(label="Support Benchmark", value=DAMAGE_BENCHMARKS["support"]),
                ]
            ),
        )
