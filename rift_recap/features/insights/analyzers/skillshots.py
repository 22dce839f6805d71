"""Shared fold for the skillshot scenes (hits landed and hits dodged)."""

from abc import abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import RatingTable, rate
from ..schemas import (
    HighlightStat,
    HighlightViz,
    SceneContext,
    SceneMetric,
    ScenePayload,
    VisualizationKind,
)
from .base_analyzer import Coverage, MatchFoldAnalyzer
from .common import GameMark, mark_if_better


@dataclass
class SkillshotAccumulator:
    games: int = 0
    games_with_data: int = 0
    total: int = 0
    best: Optional[GameMark] = None


@dataclass(frozen=True)
class SkillshotSummary:
    """Derived numbers handed to the scene-specific wording."""

    total: int
    games: int
    games_with_data: int
    average: float
    average_with_data: float
    rating: str
    best: Optional[GameMark]


class SkillshotAnalyzer(MatchFoldAnalyzer):
    """
    Totals one optional skillshot counter.

    The counter is telemetry that upstream does not report for every game;
    games without it still count as processed but not as games with data.
    """

    visualization_kind = VisualizationKind.HIGHLIGHT
    ratings: RatingTable = []
    stat_label: str = ""
    unit: str = ""

    @abstractmethod
    def read(self, player: FullParticipant) -> Optional[int]:
        """Return the counter for one game, None when not reported."""

    @abstractmethod
    def describe(self, summary: SkillshotSummary) -> Tuple[str, List[str], str]:
        """Return ``(summary, details, action)`` wording for the scene."""

    def new_accumulator(self) -> SkillshotAccumulator:
        return SkillshotAccumulator()

    def fold(
        self, acc: SkillshotAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        acc.games += 1
        value = self.read(player)
        if not value:
            return
        acc.games_with_data += 1
        acc.total += value
        acc.best = mark_if_better(acc.best, value, record, player)

    def build_insight(
        self, acc: SkillshotAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        average = safe_divide(acc.total, acc.games)
        result = SkillshotSummary(
            total=acc.total,
            games=acc.games,
            games_with_data=acc.games_with_data,
            average=average,
            average_with_data=safe_divide(acc.total, acc.games_with_data),
            rating=rate(average, self.ratings),
            best=acc.best,
        )
        summary, details, action = self.describe(result)

        if acc.games_with_data < acc.games / 2:
            details.append(
                f"Note: only {acc.games_with_data} of {acc.games} games reported "
                f"{self.stat_label.lower()}, so totals may be understated."
            )

        best_value = int(acc.best.value) if acc.best else 0
        return self._create_payload(
            summary=summary,
            details=details,
            action=action,
            metrics=[
                SceneMetric(label=f"Total {self.stat_label}", value=acc.total, context=result.rating),
                SceneMetric(
                    label="Average Per Game",
                    value=round(average, 1),
                    unit=self.unit,
                    context=f"across {acc.games} games",
                ),
                SceneMetric(
                    label="Best Game",
                    value=best_value,
                    unit=self.unit,
                    context=acc.best.champion_name if acc.best else "N/A",
                ),
                SceneMetric(
                    label="Data Coverage",
                    value=acc.games_with_data,
                    context=f"of {acc.games} games",
                ),
            ],
            viz_data=HighlightViz(
                main_stat=HighlightStat(
                    label=f"Total {self.stat_label}", value=acc.total, unit=self.unit
                ),
                stats=[
                    HighlightStat(label="Average Per Game", value=round(average, 1)),
                    HighlightStat(label="Best Game", value=best_value),
                    HighlightStat(label="Games Analyzed", value=acc.games),
                ],
            ),
        )
