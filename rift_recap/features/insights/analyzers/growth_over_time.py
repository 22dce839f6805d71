"""
Growth Over Time scene: is the player trending up or down?

Monthly averages of damage to champions, gold earned and win rate are
split chronologically into two halves; the percentage change between the
halves classifies each metric and the overall trend.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import percent_change, safe_mean

from ..scene_config import MONTH_NAMES
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

IMPROVING = "Improving"
DECLINING = "Declining"
CONSISTENT = "Consistent"


@dataclass
class MonthBucket:
    damage: List[float] = field(default_factory=list)
    gold: List[float] = field(default_factory=list)
    wins: List[float] = field(default_factory=list)


@dataclass
class GrowthAccumulator:
    months: Dict[int, MonthBucket] = field(default_factory=dict)


def split_halves(series: List[float]) -> Tuple[List[float], List[float]]:
    """First ``n // 2`` values and the rest."""
    middle = len(series) // 2
    return series[:middle], series[middle:]


def half_change(series: List[float]) -> float:
    """Percent change between the averages of the two halves, 0 if under 2 points."""
    if len(series) < 2:
        return 0.0
    first, second = split_halves(series)
    return percent_change(safe_mean(first), safe_mean(second))


def classify(change: float, threshold: float) -> str:
    if change > threshold:
        return IMPROVING
    if change < -threshold:
        return DECLINING
    return CONSISTENT


class GrowthOverTimeAnalyzer(MatchFoldAnalyzer):
    """Month-over-month trend of damage, gold and win rate."""

    scene_id = "growth_over_time"
    label = "Growth Over Time"
    visualization_kind = VisualizationKind.LINE
    subject = "your growth"
    no_data_summary = "No growth data available"
    no_data_action = "Play games across several months to enable growth tracking"

    def new_accumulator(self) -> GrowthAccumulator:
        return GrowthAccumulator()

    def fold(self, acc: GrowthAccumulator, record: MatchRecord, player: FullParticipant) -> None:
        bucket = acc.months.setdefault(record.month, MonthBucket())
        bucket.damage.append(player.total_damage_dealt_to_champions)
        bucket.gold.append(player.gold_earned)
        bucket.wins.append(100.0 if player.win else 0.0)

    def build_insight(
        self, acc: GrowthAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        threshold = self.settings.growth_trend_threshold_pct
        months = sorted(acc.months)
        damage = [safe_mean(acc.months[m].damage) for m in months]
        gold = [safe_mean(acc.months[m].gold) for m in months]
        wins = [safe_mean(acc.months[m].wins) for m in months]

        changes = {
            "Damage": half_change(damage),
            "Gold": half_change(gold),
            "Win Rate": half_change(wins),
        }
        overall = safe_mean(list(changes.values()))
        trend = classify(overall, threshold) if len(months) >= 2 else CONSISTENT

        details = [f"Tracked {len(months)} active months"]
        if len(months) < 2:
            details.append("At least two active months are needed to measure a trend")
        else:
            first, second = split_halves(months)
            details.append(
                f"Compared {MONTH_NAMES[first[0] - 1]}-{MONTH_NAMES[first[-1] - 1]} "
                f"with {MONTH_NAMES[second[0] - 1]}-{MONTH_NAMES[second[-1] - 1]}"
            )
        for name, change in changes.items():
            details.append(f"{name}: {change:+.1f}% ({classify(change, threshold)})")

        strongest = max(changes, key=lambda name: changes[name])
        if trend == IMPROVING:
            summary = f"You're improving! Your key stats rose {overall:+.1f}% across the year."
            action = f"Keep it up - {strongest.lower()} is your strongest growth area."
        elif trend == DECLINING:
            summary = f"Your key stats dipped {overall:+.1f}% in the second half of the year."
            action = "Go back to fundamentals: CS, map awareness and a small champion pool."
        else:
            summary = "Your performance stayed consistent across the year."
            action = "Pick one area to push, such as damage or farming, to break through."

        metrics = [
            SceneMetric(
                label=f"{name} Change",
                value=round(change, 1),
                unit="%",
                trend=self._trend(change, threshold),
            )
            for name, change in changes.items()
        ]
        metrics.append(
            SceneMetric(
                label="Overall Trend",
                value=trend,
                trend=self._trend(overall, threshold),
                context=f"{overall:+.1f}% average change",
            )
        )

        def series(name: str, values: List[float]) -> LineSeries:
            by_month = dict(zip(months, values))
            return LineSeries(
                name=name,
                points=[
                    LinePoint(
                        label=MONTH_NAMES[m - 1],
                        value=round(by_month[m], 1) if m in by_month else None,
                    )
                    for m in range(1, 13)
                ],
            )

        return self._create_payload(
            summary=summary,
            details=details,
            action=action,
            metrics=metrics,
            viz_data=LineViz(
                series=[
                    series("Damage to Champions", damage),
                    series("Gold Earned", gold),
                    series("Win Rate", wins),
                ],
                annotation=trend,
            ),
        )

    @staticmethod
    def _trend(change: float, threshold: float) -> str:
        if change > threshold:
            return "up"
        if change < -threshold:
            return "down"
        return "stable"
