"""Total Healed scene: self-sustain versus healing the team."""

from dataclasses import dataclass
from typing import Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import HEALER_DEFAULT, HEALER_ROLES, rate_strict
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer
from .common import GameMark, mark_if_better


@dataclass
class HealingAccumulator:
    games: int = 0
    total_heal: int = 0
    heals_on_teammates: int = 0
    peak: Optional[GameMark] = None
    peak_teammate_heal: int = 0


class TotalHealedAnalyzer(MatchFoldAnalyzer):
    """Splits healing into self-sustain and teammate healing."""

    scene_id = "total_healed"
    label = "Total Healed"
    visualization_kind = VisualizationKind.BAR
    subject = "your healing"
    no_data_summary = "No healing data to show yet"

    def new_accumulator(self) -> HealingAccumulator:
        return HealingAccumulator()

    def fold(
        self, acc: HealingAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        acc.games += 1
        acc.total_heal += player.total_heal
        acc.heals_on_teammates += player.total_heals_on_teammates
        peak = mark_if_better(acc.peak, player.total_heal, record, player)
        if peak is not acc.peak:
            acc.peak = peak
            acc.peak_teammate_heal = player.total_heals_on_teammates

    def build_insight(
        self, acc: HealingAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        avg_heal = safe_divide(acc.total_heal, acc.games)
        teammate_pct = safe_divide(acc.heals_on_teammates, acc.total_heal) * 100
        role = rate_strict(teammate_pct, HEALER_ROLES, HEALER_DEFAULT)
        self_heal = max(acc.total_heal - acc.heals_on_teammates, 0)
        peak = acc.peak

        if role == "Team Healer":
            action = "Excellent team support! Your healing is keeping your team in fights."
        elif teammate_pct > 0:
            action = (
                "You're contributing healing to your team. Consider champions with more "
                "support capabilities if you enjoy this role."
            )
        else:
            action = (
                "You rely on self-healing. Consider champions with team healing if you want "
                "to support more."
            )

        return self._create_payload(
            summary=(
                f"{acc.total_heal:,} total healing across {acc.games} games. Your best healing "
                f"performance was {peak.value:,.0f} with {peak.champion_name}."
            ),
            details=[
                f"Total healing done: {acc.total_heal:,} (avg: {avg_heal:,.0f}/game)",
                f"Healing on teammates: {acc.heals_on_teammates:,} "
                f"({teammate_pct:.1f}% of total healing)",
                f"Healing role: {role}",
                f"Highest healing game: {peak.value:,.0f} with {peak.champion_name}",
                f"That match: {'Victory' if peak.win else 'Defeat'} - KDA {peak.score_line} "
                f"on {peak.date}",
                f"{acc.peak_teammate_heal:,} healing went to teammates in your peak game"
                if acc.peak_teammate_heal > 0
                else "All healing was self-sustain in your peak game",
            ],
            action=action,
            metrics=[
                SceneMetric(
                    label="Total Healing",
                    value=round(acc.total_heal / 1000),
                    unit="K",
                    context=f"{avg_heal:,.0f} avg/game",
                ),
                SceneMetric(
                    label="Teammate Healing",
                    value=round(acc.heals_on_teammates / 1000),
                    unit="K",
                    context=f"{teammate_pct:.1f}% of total",
                ),
                SceneMetric(label="Healing Role", value=role),
                SceneMetric(
                    label="Peak Healing Game",
                    value=round(peak.value / 1000),
                    unit="K",
                    context=f"with {peak.champion_name}",
                ),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(label="Self Healing", value=self_heal),
                    Bar(label="Teammate Healing", value=acc.heals_on_teammates),
                ]
            ),
        )
