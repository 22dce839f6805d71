"""
Dragon Slayer scene: objective control.

Dragon souls are not reported by upstream; a win with enough dragon kills
is counted as a soul and tagged as an estimate.
"""

from dataclasses import dataclass
from typing import Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import DRAGON_SOUL_MIN_DRAGONS, OBJECTIVE_RATINGS, rate
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer


@dataclass
class ObjectiveGame:
    objectives: int
    champion_name: str
    date: str
    barons: int
    dragons: int
    elders: int


@dataclass
class ObjectiveAccumulator:
    games: int = 0
    barons: int = 0
    dragons: int = 0
    elders: int = 0
    elder_multikills: int = 0
    stolen: int = 0
    stolen_assists: int = 0
    solo_kills: int = 0
    souls: int = 0
    best: Optional[ObjectiveGame] = None


class DragonSlayerAnalyzer(MatchFoldAnalyzer):
    """Barons, dragons, elders and steals, rated by objective participation."""

    scene_id = "dragon_slayer"
    label = "Dragon Slayer"
    visualization_kind = VisualizationKind.BAR
    subject = "objective control"
    no_data_summary = "No objective data to show yet"

    def new_accumulator(self) -> ObjectiveAccumulator:
        return ObjectiveAccumulator()

    def fold(
        self, acc: ObjectiveAccumulator, record: MatchRecord, player: FullParticipant
    ) -> None:
        acc.games += 1
        acc.barons += player.baron_kills
        acc.dragons += player.dragon_kills
        acc.elders += player.elder_dragon_kills
        acc.elder_multikills += player.elder_dragon_multikills or 0
        acc.stolen += player.objectives_stolen
        acc.stolen_assists += player.objectives_stolen_assists
        acc.solo_kills += player.solo_kills or 0
        if player.win and player.dragon_kills >= DRAGON_SOUL_MIN_DRAGONS:
            acc.souls += 1

        total = player.baron_kills + player.dragon_kills + player.elder_dragon_kills
        if total > 0 and (acc.best is None or total > acc.best.objectives):
            acc.best = ObjectiveGame(
                objectives=total,
                champion_name=player.champion_name,
                date=record.created_at.strftime("%Y-%m-%d"),
                barons=player.baron_kills,
                dragons=player.dragon_kills,
                elders=player.elder_dragon_kills,
            )

    def build_insight(
        self, acc: ObjectiveAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        games = acc.games
        avg_barons = safe_divide(acc.barons, games)
        avg_dragons = safe_divide(acc.dragons, games)
        avg_elders = safe_divide(acc.elders, games)
        participation = safe_divide(acc.barons + acc.dragons + acc.elders, games) * 100
        rating = rate(participation, OBJECTIVE_RATINGS)

        details = [
            f"Objective participation: {participation:.0f}% ({rating})",
            f"  Baron kills: {acc.barons} ({avg_barons:.2f} per game)",
            f"  Dragon kills: {acc.dragons} ({avg_dragons:.2f} per game)",
            f"  Elder Dragons: {acc.elders}",
            f"  Elder Dragon multikills: {acc.elder_multikills}",
            f"  Dragon Souls (estimated): {acc.souls}",
        ]
        if acc.best is not None:
            details.append(
                f"Best objective game: {acc.best.champion_name} on {acc.best.date} - "
                f"{acc.best.barons} barons, {acc.best.dragons} dragons, {acc.best.elders} elders"
            )
        if avg_dragons >= 3:
            details.append("Excellent dragon control! You're consistently securing drakes.")
        elif avg_dragons >= 2:
            details.append("Good dragon presence. Keep prioritizing objectives!")
        elif avg_dragons >= 1:
            details.append("Decent objective participation. Focus on being at drake spawns.")
        else:
            details.append("Work on objective priority! Dragons and barons win games.")
        if acc.stolen:
            details.append(
                f"Great steals! You've stolen {acc.stolen} objectives with "
                f"{acc.stolen_assists} assists."
            )

        if participation >= 200:
            summary = (
                f"{rating}! You're a true objective king with {acc.barons} Baron kills and "
                f"{acc.dragons} Dragon kills across {games} games."
            )
            action = "Keep dominating objectives! Consider shotcalling for your team."
        elif participation >= 100:
            summary = (
                f"{rating}! You're building strong objective control with {acc.barons} Barons "
                f"and {acc.dragons} Dragons across {games} games."
            )
            action = "Focus on objective timing and practice smite and execute thresholds for steals!"
        elif participation >= 50:
            summary = (
                f"{rating}! You're getting involved with objectives - {acc.dragons} Dragons and "
                f"{acc.barons} Barons secured across {games} games."
            )
            action = "Rotate for dragons 30 seconds before spawn and group for Baron after picks."
        else:
            summary = (
                f"{rating}. With {acc.dragons} Dragons and {acc.barons} Barons across {games} "
                "games, there's room to improve objective focus."
            )
            action = "Set timers for dragon spawns and get vision 30 seconds before they spawn."
        if safe_divide(acc.solo_kills, games) >= 1:
            summary += f" You're also getting {acc.solo_kills} solo kills!"

        return self._create_payload(
            summary=summary,
            details=details,
            action=action,
            metrics=[
                SceneMetric(
                    label="Dragons Slain",
                    value=acc.dragons,
                    context=f"{avg_dragons:.2f} per game",
                ),
                SceneMetric(
                    label="Barons Secured",
                    value=acc.barons,
                    context=f"{avg_barons:.2f} per game",
                ),
                SceneMetric(
                    label="Dragon Souls",
                    value=acc.souls,
                    context=f"wins with {DRAGON_SOUL_MIN_DRAGONS}+ dragons",
                    estimated=True,
                ),
                SceneMetric(
                    label="Elder Dragons",
                    value=acc.elders,
                    context=f"{avg_elders:.2f} per game",
                ),
                SceneMetric(
                    label="Objectives Stolen",
                    value=acc.stolen,
                    unit="steals",
                    context=f"+{acc.stolen_assists} assists" if acc.stolen_assists else "clutch plays",
                ),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(label="Baron Kills", value=acc.barons, max_value=max(20, acc.barons)),
                    Bar(label="Dragon Kills", value=acc.dragons, max_value=max(50, acc.dragons)),
                    Bar(label="Elder Dragons", value=acc.elders, max_value=max(10, acc.elders)),
                    Bar(label="Dragon Souls", value=acc.souls, estimated=True),
                    Bar(label="Objectives Stolen", value=acc.stolen),
                ]
            ),
        )
