"""
Weaknesses scene ("Areas for Growth").

Time spent dead is taken from telemetry when the record carries it and
estimated from a death-timer model otherwise. Deaths attributed to gank
pressure are always an estimate. Anything derived from an estimate is
tagged ``estimated`` in the payload.
"""

from dataclasses import dataclass
from typing import Dict, List

from rift_recap.core.riot_api.constants import LANE_POSITIONS
from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import normalize, safe_divide, win_rate

from ..scene_config import LATE_GAME_MINUTES, WEAKNESS_BENCHMARKS
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer

WEAKNESS_ACTIONS: Dict[str, str] = {
    "Survivability": "Track the enemy jungler and play safer when your lane is pushed.",
    "Time Alive": "Avoid dying late in the game when death timers are longest.",
    "Vision Control": "Place a ward every time you back and clear vision near objectives.",
    "Farming": "Practice last-hitting and keep catching waves between fights.",
    "Late Game": "Group with your team after 30 minutes and play around Baron and Elder.",
}


@dataclass
class WeaknessAccumulator:
    games: int = 0
    deaths: int = 0
    seconds_played: int = 0
    seconds_dead: float = 0.0
    measured_games: int = 0
    estimated_games: int = 0
    lane_games: int = 0
    gank_deaths: float = 0.0
    vision_score: float = 0.0
    creep_score: int = 0
    late_games: int = 0
    late_wins: int = 0


@dataclass(frozen=True)
class Category:
    name: str
    score: float
    detail: str
    estimated: bool = False


class WeaknessesAnalyzer(MatchFoldAnalyzer):
    """Scores survivability, vision, farming and late-game play against benchmarks."""

    scene_id = "weaknesses"
    label = "Areas for Growth"
    visualization_kind = VisualizationKind.BAR
    subject = "your areas for growth"
    no_data_summary = "No weakness analysis available"

    def estimate_death_seconds(self, deaths: int, minutes: float) -> float:
        """Death-timer model: per-death respawn grows with game length, capped."""
        per_death = min(
            self.settings.death_timer_base_seconds
            + minutes * self.settings.death_timer_per_minute,
            self.settings.death_timer_cap_seconds,
        )
        return per_death * deaths

    def new_accumulator(self) -> WeaknessAccumulator:
        return WeaknessAccumulator()

    def fold(
        self, acc: WeaknessAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        minutes = record.duration_minutes
        acc.games += 1
        acc.deaths += player.deaths
        acc.seconds_played += record.game_duration
        acc.vision_score += player.vision_score
        acc.creep_score += player.creep_score

        if player.total_time_spent_dead is not None:
            acc.seconds_dead += player.total_time_spent_dead
            acc.measured_games += 1
        else:
            acc.seconds_dead += self.estimate_death_seconds(player.deaths, minutes)
            acc.estimated_games += 1

        if (player.position or "").upper() in LANE_POSITIONS:
            acc.lane_games += 1
            acc.gank_deaths += player.deaths * self.settings.gank_death_fraction

        if minutes > LATE_GAME_MINUTES:
            acc.late_games += 1
            acc.late_wins += int(player.win)

    def _categories(self, acc: WeaknessAccumulator) -> List[Category]:
        minutes = acc.seconds_played / 60
        deaths_per_game = safe_divide(acc.deaths, acc.games)
        dead_pct = safe_divide(acc.seconds_dead, acc.seconds_played) * 100
        vision_per_minute = safe_divide(acc.vision_score, minutes)
        cs_per_minute = safe_divide(acc.creep_score, minutes)

        categories = [
            Category(
                "Survivability",
                100.0
                if deaths_per_game == 0
                else normalize(WEAKNESS_BENCHMARKS["deaths_per_game"], deaths_per_game),
                f"{deaths_per_game:.1f} deaths per game",
            ),
            Category(
                "Time Alive",
                100.0
                if dead_pct == 0
                else normalize(WEAKNESS_BENCHMARKS["time_dead_pct"], dead_pct),
                f"{dead_pct:.1f}% of game time spent dead",
                estimated=acc.estimated_games > 0,
            ),
            Category(
                "Vision Control",
                normalize(vision_per_minute, WEAKNESS_BENCHMARKS["vision_per_minute"]),
                f"{vision_per_minute:.2f} vision score per minute",
            ),
            Category(
                "Farming",
                normalize(cs_per_minute, WEAKNESS_BENCHMARKS["cs_per_minute"]),
                f"{cs_per_minute:.1f} CS per minute",
            ),
        ]
        if acc.late_games:
            late_wr = win_rate(acc.late_wins, acc.late_games)
            categories.append(
                Category(
                    "Late Game",
                    normalize(late_wr, WEAKNESS_BENCHMARKS["late_game_win_rate"]),
                    f"{late_wr:.1f}% win rate in games over {LATE_GAME_MINUTES} minutes",
                )
            )
        return categories

    def build_insight(
        self, acc: WeaknessAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        categories = self._categories(acc)
        weakest: List[Category] = sorted(categories, key=lambda c: c.score)[:2]
        minutes_dead = acc.seconds_dead / 60
        dead_estimated = acc.estimated_games > 0
        deaths_per_game = safe_divide(acc.deaths, acc.games)

        details = [f"{c.name}: {c.detail} (score {c.score:.0f}/100)" for c in categories]
        details.append(
            f"Death time measured in {acc.measured_games} games, "
            f"estimated in {acc.estimated_games} games"
        )
        gank_share = self.settings.gank_death_fraction
        if acc.lane_games:
            details.append(
                f"Estimated {acc.gank_deaths:.0f} lane deaths to gank pressure "
                f"({gank_share:.0%} of deaths across {acc.lane_games} lane games)"
            )

        top_issue = weakest[0]
        metrics = [
            SceneMetric(
                label="Deaths per Game",
                value=round(deaths_per_game, 1),
                context=f"{acc.deaths} deaths in {acc.games} games",
            ),
            SceneMetric(
                label="Time Spent Dead",
                value=round(minutes_dead, 1),
                unit="minutes",
                context="estimated from death timers" if dead_estimated else "measured",
                estimated=dead_estimated,
            ),
            SceneMetric(
                label="Weakest Area",
                value=top_issue.name,
                context=f"score {top_issue.score:.0f}/100",
                estimated=top_issue.estimated,
            ),
        ]
        if acc.lane_games:
            metrics.append(
                SceneMetric(
                    label="Deaths to Ganks",
                    value=round(acc.gank_deaths, 1),
                    context=f"{gank_share:.0%} of lane deaths",
                    estimated=True,
                )
            )

        return self._create_payload(
            summary=(
                f"Your biggest opportunities are {self._join(weakest)}. "
                f"Fixing {top_issue.name.lower()} alone could swing more games your way."
            ),
            details=details,
            action=WEAKNESS_ACTIONS[top_issue.name],
            metrics=metrics,
            viz_data=BarViz(
                bars=[
                    Bar(
                        label=c.name,
                        value=round(c.score, 1),
                        max_value=100,
                        benchmark=100,
                        estimated=c.estimated,
                    )
                    for c in categories
                ]
            ),
        )

    @staticmethod
    def _join(categories: List[Category]) -> str:
        names = [c.name.lower() for c in categories]
        return " and ".join(names)
