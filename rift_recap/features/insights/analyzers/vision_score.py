"""Vision Score scene: map control through wards and vision."""

from dataclasses import dataclass
from typing import Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import VISION_RATINGS, rate
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer
from .common import GameMark, mark_if_better


@dataclass
class VisionAccumulator:
    games: int = 0
    vision_score: float = 0.0
    vision_per_minute: float = 0.0
    wards_placed: int = 0
    wards_killed: int = 0
    control_wards: int = 0
    best: Optional[GameMark] = None
    best_wards_placed: int = 0


class VisionScoreAnalyzer(MatchFoldAnalyzer):
    """Average vision output and a rating against fixed tiers."""

    scene_id = "vision_score"
    label = "Vision Score"
    visualization_kind = VisualizationKind.BAR
    subject = "your vision control"
    no_data_summary = "No vision data to show yet"

    def new_accumulator(self) -> VisionAccumulator:
        return VisionAccumulator()

    def fold(self, acc: VisionAccumulator, record: MatchRecord, player: FullParticipant) -> None:
        acc.games += 1
        acc.vision_score += player.vision_score
        acc.vision_per_minute += safe_divide(player.vision_score, record.duration_minutes)
        acc.wards_placed += player.wards_placed
        acc.wards_killed += player.wards_killed
        acc.control_wards += player.vision_wards_bought
        best = mark_if_better(acc.best, player.vision_score, record, player)
        if best is not acc.best:
            acc.best = best
            acc.best_wards_placed = player.wards_placed

    def build_insight(
        self, acc: VisionAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        avg_score = safe_divide(acc.vision_score, acc.games)
        avg_per_minute = safe_divide(acc.vision_per_minute, acc.games)
        avg_placed = safe_divide(acc.wards_placed, acc.games)
        avg_killed = safe_divide(acc.wards_killed, acc.games)
        avg_control = safe_divide(acc.control_wards, acc.games)
        rating = rate(avg_score, VISION_RATINGS)
        best = acc.best

        if avg_score >= 40:
            action = "Your vision game is strong. Keep denying enemy wards around objectives."
        elif avg_control < 1:
            action = "Buy at least one control ward every back and place it around objectives."
        else:
            action = "Ward more often before objectives spawn and sweep enemy vision when you rotate."

        return self._create_payload(
            summary=(
                f"{rating}: you averaged {avg_score:.0f} vision score across {acc.games} games, "
                f"placing {acc.wards_placed:,} wards."
            ),
            details=[
                f"Average vision score: {avg_score:.1f} ({avg_per_minute:.1f} per minute)",
                f"Wards placed: {acc.wards_placed:,} (avg: {avg_placed:.1f}/game)",
                f"Wards cleared: {acc.wards_killed:,} (avg: {avg_killed:.1f}/game)",
                f"Control wards bought: {acc.control_wards:,} (avg: {avg_control:.1f}/game)",
                f"Best vision game: {best.value:.0f} with {best.champion_name} on {best.date} "
                f"({acc.best_wards_placed} wards placed)",
            ],
            action=action,
            metrics=[
                SceneMetric(
                    label="Average Vision Score",
                    value=round(avg_score, 1),
                    context=rating,
                ),
                SceneMetric(
                    label="Wards Placed",
                    value=acc.wards_placed,
                    context=f"{avg_placed:.1f} per game",
                ),
                SceneMetric(
                    label="Wards Cleared",
                    value=acc.wards_killed,
                    context=f"{avg_killed:.1f} per game",
                ),
                SceneMetric(
                    label="Control Wards",
                    value=acc.control_wards,
                    context=f"{avg_control:.1f} per game",
                ),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(
                        label="Vision Score",
                        value=round(avg_score, 1),
                        benchmark=VISION_RATINGS[1][0],
                    ),
                    Bar(label="Wards Placed", value=round(avg_placed, 1)),
                    Bar(label="Wards Cleared", value=round(avg_killed, 1)),
                    Bar(label="Control Wards", value=round(avg_control, 1)),
                ]
            ),
        )
