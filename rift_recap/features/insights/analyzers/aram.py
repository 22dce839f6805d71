"""ARAM scene: performance on the Howling Abyss."""

from dataclasses import dataclass, field
from typing import Dict, List

from rift_recap.core.exceptions import NoMatchDataError
from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import kda_ratio, safe_divide, win_rate

from ..schemas import (
    ChampionTally,
    HighlightStat,
    InfographicViz,
    SceneContext,
    SceneMetric,
    ScenePayload,
    VisualizationKind,
)
from .base_analyzer import Coverage, MatchFoldAnalyzer

ARAM_GAME_MODE = "ARAM"


@dataclass
class AramAccumulator:
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    damage: int = 0
    highest_damage: int = 0
    champions: Dict[str, List[int]] = field(default_factory=dict)  # name -> [games, wins]


class AramAnalyzer(MatchFoldAnalyzer):
    """ARAM-only record, damage and favorite picks."""

    scene_id = "aram"
    label = "ARAM Adventures"
    visualization_kind = VisualizationKind.INFOGRAPHIC
    subject = "your ARAM games"
    no_data_summary = "No ARAM data available"
    no_data_action = "Play ARAM games to unlock your Howling Abyss recap"

    def new_accumulator(self) -> AramAccumulator:
        return AramAccumulator()

    def fold(self, acc: AramAccumulator, record: MatchRecord, player: FullParticipant) -> None:
        if record.game_mode != ARAM_GAME_MODE:
            return
        acc.games += 1
        acc.wins += int(player.win)
        acc.kills += player.kills
        acc.deaths += player.deaths
        acc.assists += player.assists
        acc.damage += player.total_damage_dealt_to_champions
        acc.highest_damage = max(acc.highest_damage, player.total_damage_dealt_to_champions)
        tally = acc.champions.setdefault(player.champion_name, [0, 0])
        tally[0] += 1
        tally[1] += int(player.win)

    def build_insight(
        self, acc: AramAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        if acc.games == 0:
            raise NoMatchDataError(
                f"None of the {coverage.processed} analyzed games were ARAM games"
            )

        wr = win_rate(acc.wins, acc.games)
        kda = kda_ratio(acc.kills, acc.deaths, acc.assists)
        avg_damage = safe_divide(acc.damage, acc.games)
        top = sorted(acc.champions.items(), key=lambda kv: kv[1][0], reverse=True)[:3]
        favorite = top[0][0]

        details = [
            f"ARAM games: {acc.games} of {coverage.processed} analyzed games",
            f"Record: {acc.wins}W-{acc.games - acc.wins}L ({wr:.1f}% win rate)",
            f"KDA: {kda:.2f} ({acc.kills}/{acc.deaths}/{acc.assists})",
            f"Average damage to champions: {avg_damage:,.0f}",
            f"Distinct champions rolled: {len(acc.champions)}",
        ]

        return self._create_payload(
            summary=(
                f"You played {acc.games} ARAM games with a {wr:.1f}% win rate, "
                f"dealing {avg_damage:,.0f} damage per game."
            ),
            details=details,
            action=(
                "Your teamfighting shines in ARAM. Bring that aggression to the Rift!"
                if wr >= 50
                else "Focus on poke and positioning in the early fights to win more ARAMs."
            ),
            metrics=[
                SceneMetric(label="ARAM Games", value=acc.games),
                SceneMetric(
                    label="ARAM Win Rate",
                    value=round(wr, 1),
                    unit="%",
                    context=f"{acc.wins}W-{acc.games - acc.wins}L",
                ),
                SceneMetric(label="Highest Damage", value=acc.highest_damage),
                SceneMetric(label="Favorite Pick", value=favorite, context=f"{top[0][1][0]} games"),
            ],
            viz_data=InfographicViz(
                tiles=[
                    HighlightStat(label="Games", value=acc.games),
                    HighlightStat(label="Win Rate", value=round(wr, 1), unit="%"),
                    HighlightStat(label="KDA", value=round(kda, 2)),
                    HighlightStat(label="Avg Damage", value=round(avg_damage)),
                ],
                top_items=[
                    ChampionTally(
                        name=name,
                        games=games,
                        wins=wins,
                        win_rate=round(win_rate(wins, games), 1),
                    )
                    for name, (games, wins) in top
                ],
            ),
        )
