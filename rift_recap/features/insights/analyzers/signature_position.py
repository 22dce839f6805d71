"""Signature Position scene: where the player plays and where they win."""

from dataclasses import dataclass, field
from typing import Dict, List

from rift_recap.core.riot_api.constants import POSITIONS
from rift_recap.core.exceptions import NoMatchDataError
from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import kda_ratio, safe_divide, win_rate

from ..scene_config import MIN_GAMES_FOR_POSITION_WIN_RATE, POSITION_NAMES
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer

SPECIALIST_SHARE = 0.7
FLEX_POSITION_COUNT = 3


@dataclass
class PositionTotals:
    position: str
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    champions: Dict[str, int] = field(default_factory=dict)

    @property
    def losses(self) -> int:
        return self.games - self.wins

    @property
    def win_rate(self) -> float:
        return win_rate(self.wins, self.games)

    @property
    def kda(self) -> float:
        return kda_ratio(self.kills, self.deaths, self.assists)

    @property
    def name(self) -> str:
        return POSITION_NAMES[self.position]


@dataclass
class PositionAccumulator:
    games: int = 0
    positions: Dict[str, PositionTotals] = field(
        default_factory=lambda: {pos: PositionTotals(pos) for pos in POSITIONS}
    )


class SignaturePositionAnalyzer(MatchFoldAnalyzer):
    """Per-position record and the position with the best win rate."""

    scene_id = "signature_position"
    label = "Signature Position"
    visualization_kind = VisualizationKind.BAR
    subject = "your positions"
    no_data_summary = "No position data to show yet"

    def new_accumulator(self) -> PositionAccumulator:
        return PositionAccumulator()

    def fold(
        self, acc: PositionAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        acc.games += 1
        position = (player.position or "").upper()
        totals = acc.positions.get(position)
        if totals is None:
            return
        totals.games += 1
        totals.wins += int(player.win)
        totals.kills += player.kills
        totals.deaths += player.deaths
        totals.assists += player.assists
        totals.champions[player.champion_name] = (
            totals.champions.get(player.champion_name, 0) + 1
        )

    def build_insight(
        self, acc: PositionAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        played: List[PositionTotals] = sorted(
            (p for p in acc.positions.values() if p.games > 0),
            key=lambda p: p.games,
            reverse=True,
        )
        if not played:
            raise NoMatchDataError("None of the analyzed games had an assigned position")

        main = played[0]
        best = main
        eligible = [p for p in played if p.games >= MIN_GAMES_FOR_POSITION_WIN_RATE]
        if eligible:
            best = eligible[0]
            for candidate in eligible[1:]:
                if candidate.win_rate > best.win_rate:
                    best = candidate

        is_flex = len(played) >= FLEX_POSITION_COUNT
        is_specialist = safe_divide(main.games, acc.games) >= SPECIALIST_SHARE
        if is_specialist:
            style = f"You're a {main.name} specialist!"
        elif is_flex:
            style = "You're a flexible player who adapts to team needs"
        else:
            style = "You have a preferred position but can flex when needed"

        top_champions = sorted(main.champions.items(), key=lambda kv: kv[1], reverse=True)[:3]

        details = [
            f"Most played position: {main.name} ({main.games} games, {main.win_rate:.1f}% WR)",
            f"Best win rate: {best.name} ({best.wins}W-{best.losses}L, {best.win_rate:.1f}% WR)",
            f"Positions played: {len(played)} different roles",
            style,
            f"Average KDA on best position: {best.kda:.2f}",
        ]
        if top_champions:
            details.append(
                f"Top champions in {main.name}: "
                + ", ".join(f"{name} ({games})" for name, games in top_champions)
            )

        return self._create_payload(
            summary=(
                f"{best.name} is your strongest position with {best.win_rate:.1f}% win rate "
                f"across {best.games} games."
            ),
            details=details,
            action=(
                f"Keep dominating {best.name}! It's both your most played and best performing role."
                if best.position == main.position
                else f"Consider playing more {best.name} - it's your highest win rate position!"
            ),
            metrics=[
                SceneMetric(
                    label="Best Position",
                    value=best.name,
                    context=f"{best.win_rate:.1f}% WR",
                ),
                SceneMetric(
                    label="Win Rate",
                    value=round(best.win_rate, 1),
                    unit="%",
                    context=f"{best.wins}W-{best.losses}L",
                ),
                SceneMetric(
                    label="Most Played", value=main.name, context=f"{main.games} games"
                ),
                SceneMetric(
                    label="Positions Played",
                    value=len(played),
                    context="Flex Player" if is_flex else "Specialist",
                ),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(label=p.name, value=p.games, benchmark=round(p.win_rate, 1))
                    for p in played
                ]
            ),
        )
