"""
Best Friend scene ("Trusted Ally"): who the player queues with most.

Every other full participant on the player's team is a co-occurrence.
The team comes from ``team_id`` when the player has one, otherwise from
matching the win/loss outcome.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import win_rate

from ..scene_config import ALLY_TIERS, MAX_RECENT_SHARED_GAMES, rate
from ..schemas import (
    AllySummary,
    BadgeViz,
    SceneContext,
    SceneMetric,
    ScenePayload,
    SharedGame,
    VisualizationKind,
)
from .base_analyzer import Coverage, MatchFoldAnalyzer

SOLO_TIER = "Solo Player"


@dataclass
class AllyTotals:
    puuid: str
    display_name: str
    first_seen: int
    games: int = 0
    wins: int = 0
    champions: List[str] = field(default_factory=list)
    shared_games: List[SharedGame] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        return round(win_rate(self.wins, self.games), 2)

    def summary(self) -> AllySummary:
        recent = sorted(self.shared_games, key=lambda g: g.game_creation, reverse=True)
        return AllySummary(
            puuid=self.puuid,
            display_name=self.display_name,
            games=self.games,
            wins=self.wins,
            win_rate=self.win_rate,
            champions=list(self.champions),
            recent_games=recent[:MAX_RECENT_SHARED_GAMES],
        )


@dataclass
class AllyAccumulator:
    allies: Dict[str, AllyTotals] = field(default_factory=dict)
    games: int = 0


def teammates_of(record: MatchRecord, player: FullParticipant) -> List[FullParticipant]:
    """Full participants on the player's team, excluding the player."""
    teammates = []
    for other in record.participants:
        if not isinstance(other, FullParticipant) or other.puuid == player.puuid:
            continue
        if player.team_id is not None:
            same_team = other.team_id == player.team_id
        else:
            same_team = other.win == player.win
        if same_team:
            teammates.append(other)
    return teammates


def ally_tier(games: int) -> str:
    return rate(games, ALLY_TIERS)


class BestFriendAnalyzer(MatchFoldAnalyzer):
    """Ranks teammates by games played together."""

    scene_id = "best_friend"
    label = "Trusted Ally"
    visualization_kind = VisualizationKind.BADGE
    subject = "your allies"
    no_data_summary = "No ally data available"
    no_data_action = "Play games with friends to enable ally synergy analysis"

    def new_accumulator(self) -> AllyAccumulator:
        return AllyAccumulator()

    def fold(self, acc: AllyAccumulator, record: MatchRecord, player: FullParticipant) -> None:
        acc.games += 1
        for teammate in teammates_of(record, player):
            ally = acc.allies.get(teammate.puuid)
            if ally is None:
                ally = AllyTotals(
                    puuid=teammate.puuid,
                    display_name=teammate.display_name,
                    first_seen=len(acc.allies),
                )
                acc.allies[teammate.puuid] = ally
            ally.games += 1
            ally.wins += int(player.win)
            if teammate.champion_name not in ally.champions:
                ally.champions.append(teammate.champion_name)
            ally.shared_games.append(
                SharedGame(
                    match_id=record.match_id,
                    game_creation=record.game_creation,
                    win=player.win,
                    champion_name=player.champion_name,
                    ally_champion_name=teammate.champion_name,
                )
            )

    def build_insight(
        self, acc: AllyAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        if not acc.allies:
            return self._solo_payload(acc.games)

        ranked = sorted(
            acc.allies.values(), key=lambda a: (-a.games, -a.wins, a.first_seen)
        )
        top = ranked[0]
        tier = ally_tier(top.games)
        repeat_allies = [a for a in ranked if a.games > 1]

        details = [
            f"Your most frequent teammate: {top.display_name} ({top.games} games together)",
            f"Record together: {top.wins}W-{top.games - top.wins}L ({top.win_rate:.2f}% win rate)",
            f"Champions they played with you: {', '.join(top.champions[:5])}",
            f"You shared the Rift with {len(ranked)} different teammates, "
            f"{len(repeat_allies)} of them more than once",
        ]
        for index, ally in enumerate(ranked[1:3], start=2):
            details.append(
                f"  {index}. {ally.display_name}: {ally.games} games, {ally.win_rate:.2f}% win rate"
            )

        return self._create_payload(
            summary=(
                f"{top.display_name} is your {tier}! You've played {top.games} games together "
                f"with a {top.win_rate:.2f}% win rate."
            ),
            details=details,
            action=(
                f"Keep queueing with {top.display_name} - you win more together!"
                if top.win_rate >= 50
                else f"Try new strategies with {top.display_name} to turn your duo record around."
            ),
            metrics=[
                SceneMetric(label="Best Partner", value=top.display_name, context=tier),
                SceneMetric(
                    label="Games Together",
                    value=top.games,
                    context=f"{top.wins}W-{top.games - top.wins}L",
                ),
                SceneMetric(label="Duo Win Rate", value=top.win_rate, unit="%"),
                SceneMetric(
                    label="Trusted Allies",
                    value=len(repeat_allies),
                    context="teammates you played with more than once",
                ),
            ],
            viz_data=BadgeViz(
                title=tier,
                tier=tier,
                allies=[ally.summary() for ally in ranked[:5]],
            ),
        )

    def _solo_payload(self, games: int) -> ScenePayload:
        return self._create_payload(
            summary="You're a lone wolf! No teammates showed up in your analyzed games.",
            details=[
                f"Analyzed {games} games without finding a teammate with full match data",
                "Every victory was earned alongside strangers",
            ],
            action="Try queueing with a friend - duos often climb faster together.",
            metrics=[
                SceneMetric(label="Trusted Allies", value=0, context=SOLO_TIER),
                SceneMetric(label="Games Analyzed", value=games),
            ],
            viz_data=BadgeViz(title=SOLO_TIER, tier=SOLO_TIER, allies=[]),
        )
