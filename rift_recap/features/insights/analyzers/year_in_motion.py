"""
Year in Motion scene: when the player played over the year.

Buckets game time into calendar months (UTC) and renders all twelve
months, leaving months without games empty rather than zero.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import kda_ratio, safe_divide

from ..scene_config import MONTH_NAMES
from ..schemas import (
    HeatmapCell,
    HeatmapViz,
    SceneContext,
    SceneMetric,
    ScenePayload,
    VisualizationKind,
)
from .base_analyzer import Coverage, MatchFoldAnalyzer


@dataclass
class BestGame:
    match_id: str
    champion_name: str
    kills: int
    deaths: int
    assists: int
    kda: float
    month: int


@dataclass
class YearInMotionAccumulator:
    hours: Dict[int, float] = field(default_factory=dict)
    matches: Dict[int, int] = field(default_factory=dict)
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    best_game: Optional[BestGame] = None


class YearInMotionAnalyzer(MatchFoldAnalyzer):
    """Monthly play-time heatmap with the standout game of the year."""

    scene_id = "year_in_motion"
    label = "Year in Motion"
    visualization_kind = VisualizationKind.HEATMAP
    subject = "your year in motion"
    no_data_summary = "No games to chart for this year yet"

    def new_accumulator(self) -> YearInMotionAccumulator:
        return YearInMotionAccumulator()

    def fold(
        self, acc: YearInMotionAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        month = record.month
        acc.hours[month] = acc.hours.get(month, 0.0) + record.game_duration / 3600
        acc.matches[month] = acc.matches.get(month, 0) + 1
        acc.kills += player.kills
        acc.deaths += player.deaths
        acc.assists += player.assists

        # Strictly greater: the first game with the top KDA keeps the spot
        if acc.best_game is None or player.kda > acc.best_game.kda:
            acc.best_game = BestGame(
                match_id=record.match_id,
                champion_name=player.champion_name,
                kills=player.kills,
                deaths=player.deaths,
                assists=player.assists,
                kda=player.kda,
                month=month,
            )

    def build_insight(
        self, acc: YearInMotionAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        max_hours = max(acc.hours.values())
        cells = []
        for month in range(1, 13):
            if month in acc.matches:
                hours = acc.hours[month]
                cells.append(
                    HeatmapCell(
                        month=MONTH_NAMES[month - 1],
                        hours=round(hours, 2),
                        matches=acc.matches[month],
                        intensity=round(safe_divide(hours, max_hours), 4),
                    )
                )
            else:
                cells.append(HeatmapCell(month=MONTH_NAMES[month - 1]))

        # Calendar order, strict comparison: earliest month wins ties
        peak_month = None
        for month in range(1, 13):
            if month in acc.hours and (
                peak_month is None or acc.hours[month] > acc.hours[peak_month]
            ):
                peak_month = month
        peak_name = MONTH_NAMES[peak_month - 1]

        total_hours = sum(acc.hours.values())
        total_matches = sum(acc.matches.values())
        active_months = len(acc.matches)
        overall_kda = kda_ratio(acc.kills, acc.deaths, acc.assists)
        best = acc.best_game

        details = [
            f"You played {total_matches} games across {active_months} of 12 months",
            f"Total time on the Rift: {total_hours:.1f} hours",
            f"Your busiest month was {peak_name} with {acc.hours[peak_month]:.1f} hours "
            f"over {acc.matches[peak_month]} games",
            f"Overall KDA: {overall_kda:.2f}",
            f"Best game: {best.champion_name} {best.kills}/{best.deaths}/{best.assists} "
            f"({best.kda:.2f} KDA) in {MONTH_NAMES[best.month - 1]}",
        ]
        if active_months < 12:
            quiet = [MONTH_NAMES[m - 1] for m in range(1, 13) if m not in acc.matches]
            details.append(f"Months without games: {', '.join(quiet)}")

        action = (
            "You kept a steady rhythm all year. Keep the momentum going!"
            if active_months >= 10
            else "Try to play more consistently across the year to keep your skills sharp."
        )

        return self._create_payload(
            summary=(
                f"You spent {total_hours:.1f} hours on the Rift across {total_matches} games, "
                f"peaking in {peak_name}."
            ),
            details=details,
            action=action,
            metrics=[
                SceneMetric(label="Total Matches", value=total_matches),
                SceneMetric(
                    label="Hours Played",
                    value=round(total_hours, 1),
                    unit="hours",
                    context=f"{safe_divide(total_hours * 60, total_matches):.0f} min per game",
                ),
                SceneMetric(
                    label="Peak Month",
                    value=peak_name,
                    context=f"{acc.matches[peak_month]} games",
                ),
                SceneMetric(
                    label="Best Game KDA",
                    value=round(best.kda, 2),
                    context=f"{best.champion_name} {best.kills}/{best.deaths}/{best.assists}",
                ),
            ],
            viz_data=HeatmapViz(
                months=cells,
                peak_month=peak_name,
                total_hours=round(total_hours, 2),
                total_matches=total_matches,
            ),
        )
