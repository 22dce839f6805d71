"""Damage Taken scene: how much punishment the player soaks up."""

from dataclasses import dataclass
from typing import Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import TANK_BENCHMARKS, TANK_DEFAULT, TANK_LEVELS, rate_strict
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer
from .common import GameMark, mark_if_better


@dataclass
class DamageTakenAccumulator:
    games: int = 0
    damage_taken: int = 0
    peak: Optional[GameMark] = None


class DamageTakenAnalyzer(MatchFoldAnalyzer):
    """Classifies frontline presence from average damage taken."""

    scene_id = "damage_taken"
    label = "Damage Taken"
    visualization_kind = VisualizationKind.BAR
    subject = "your damage taken"
    no_data_summary = "No damage taken data to show yet"

    def new_accumulator(self) -> DamageTakenAccumulator:
        return DamageTakenAccumulator()

    def fold(
        self, acc: DamageTakenAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        acc.games += 1
        acc.damage_taken += player.total_damage_taken
        acc.peak = mark_if_better(acc.peak, player.total_damage_taken, record, player)

    def build_insight(
        self, acc: DamageTakenAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        avg_taken = safe_divide(acc.damage_taken, acc.games)
        tank_level = rate_strict(avg_taken, TANK_LEVELS, TANK_DEFAULT)
        is_tanky = tank_level == "High"
        peak = acc.peak

        return self._create_payload(
            summary=(
                f"{acc.damage_taken:,} total damage absorbed across {acc.games} games. "
                f"Your toughest battle was {peak.value:,.0f} damage taken with {peak.champion_name}."
            ),
            details=[
                f"Total damage taken: {acc.damage_taken:,} (avg: {avg_taken:,.0f}/game)",
                f"Tank level: {tank_level} - You {'excel at' if is_tanky else 'could improve'} "
                "frontline presence",
                f"Highest damage taken: {peak.value:,.0f} with {peak.champion_name}",
                f"That match: {'Victory' if peak.win else 'Defeat'} - KDA {peak.score_line} "
                f"on {peak.date}",
                "High deaths in your peak tanking game - consider building more defensive items"
                if peak.deaths > 10
                else "Great survival while tanking damage!",
            ],
            action=(
                "Excellent tanking! Your frontline presence is a key asset to your team."
                if is_tanky
                else "If you're playing tanks or bruisers, work on positioning to absorb more "
                "damage for your team."
            ),
            metrics=[
                SceneMetric(
                    label="Total Damage Taken",
                    value=round(acc.damage_taken / 1000),
                    unit="K",
                    context=f"{avg_taken:,.0f} avg/game",
                ),
                SceneMetric(
                    label="Tank Level",
                    value=tank_level,
                    context=f"{avg_taken:,.0f} avg damage/game",
                ),
                SceneMetric(
                    label="Peak Tanking Game",
                    value=round(peak.value / 1000),
                    unit="K",
                    context=f"with {peak.champion_name}",
                ),
                SceneMetric(label="Games Analyzed", value=acc.games),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(label="Your Average", value=round(avg_taken)),
                    Bar(label="Tank Benchmark", value=TANK_BENCHMARKS["tank"]),
                    Bar(label="Fighter Benchmark", value=TANK_BENCHMARKS["fighter"]),
                    Bar(label="Assassin Benchmark", value=TANK_BENCHMARKS["assassin"]),
                ]
            ),
        )
