"""Gold Share scene: gold income across the year."""

from dataclasses import dataclass, field
from typing import Dict, List

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import FARMING_DEFAULT, FARMING_LEVELS, MONTH_NAMES, rate_strict
from ..schemas import (
    LinePoint,
    LineSeries,
    LineViz,
    SceneContext,
    SceneMetric,
    ScenePayload,
    VisualizationKind,
)
from .base_analyzer import Coverage, MatchFoldAnalyzer


@dataclass
class GoldAccumulator:
    games: int = 0
    gold_earned: int = 0
    gold_spent: int = 0
    gpm_by_month: Dict[int, List[float]] = field(default_factory=dict)


class GoldShareAnalyzer(MatchFoldAnalyzer):
    """Gold earned, spent and gold-per-minute by month."""

    scene_id = "gold_share"
    label = "Gold Share"
    visualization_kind = VisualizationKind.LINE
    subject = "your gold income"
    no_data_summary = "No gold data to show yet"

    def new_accumulator(self) -> GoldAccumulator:
        return GoldAccumulator()

    def fold(self, acc: GoldAccumulator, record: MatchRecord, player: FullParticipant) -> None:
        acc.games += 1
        acc.gold_earned += player.gold_earned
        acc.gold_spent += player.gold_spent
        gpm = safe_divide(player.gold_earned, record.duration_minutes)
        acc.gpm_by_month.setdefault(record.month, []).append(gpm)

    def build_insight(
        self, acc: GoldAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        all_gpm = [gpm for month in sorted(acc.gpm_by_month) for gpm in acc.gpm_by_month[month]]
        avg_gpm = round(safe_divide(sum(all_gpm), len(all_gpm)))
        avg_earned = safe_divide(acc.gold_earned, acc.games)
        avg_spent = safe_divide(acc.gold_spent, acc.games)
        efficiency = safe_divide(acc.gold_spent, acc.gold_earned) * 100
        farming_level = rate_strict(avg_gpm, FARMING_LEVELS, FARMING_DEFAULT)

        points = []
        for month in range(1, 13):
            values = acc.gpm_by_month.get(month)
            points.append(
                LinePoint(
                    label=MONTH_NAMES[month - 1],
                    value=round(sum(values) / len(values)) if values else None,
                )
            )

        if avg_gpm > 400:
            action = "Outstanding gold generation! You're maximizing your income effectively."
        elif avg_gpm > 300:
            action = "Solid gold income. Work on improving CS and objective participation."
        else:
            action = (
                "Focus on farming fundamentals - aim for 6+ CS per minute to boost your gold income."
            )

        return self._create_payload(
            summary=(
                f"{acc.gold_earned:,} total gold earned across {acc.games} games with an average "
                f"of {avg_gpm} gold per minute."
            ),
            details=[
                f"Total gold earned: {acc.gold_earned:,} (avg: {avg_earned:,.0f}/game)",
                f"Total gold spent: {acc.gold_spent:,} (avg: {avg_spent:,.0f}/game)",
                f"Gold efficiency: {efficiency:.1f}% (spent vs earned)",
                f"Average gold per minute: {avg_gpm} GPM",
                f"Farming level: {farming_level}",
                "You're farming efficiently - keep up the good work!"
                if avg_gpm > 350
                else "Focus on last-hitting minions and participating in objectives to improve "
                "gold income",
            ],
            action=action,
            metrics=[
                SceneMetric(
                    label="Total Gold Earned",
                    value=round(acc.gold_earned / 1000),
                    unit="K",
                    context=f"{avg_earned:,.0f} avg/game",
                ),
                SceneMetric(
                    label="Total Gold Spent",
                    value=round(acc.gold_spent / 1000),
                    unit="K",
                    context=f"{efficiency:.1f}% efficiency",
                ),
                SceneMetric(
                    label="Average Gold Per Minute",
                    value=avg_gpm,
                    unit="GPM",
                    context=farming_level,
                ),
                SceneMetric(label="Games Analyzed", value=acc.games),
            ],
            viz_data=LineViz(
                series=[LineSeries(name="Gold Per Minute", points=points)],
                annotation=f"Farming level: {farming_level}",
            ),
        )
