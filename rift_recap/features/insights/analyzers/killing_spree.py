"""Killing Spree scene: multikills and the longest streak of the year."""

from dataclasses import dataclass, field
from typing import Dict, List

from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.utils.statistics import safe_divide

from ..scene_config import (
    MULTIKILL_DEFAULT,
    MULTIKILL_RATINGS,
    SPREE_RATINGS,
    rate,
)
from ..schemas import Bar, BarViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import Coverage, MatchFoldAnalyzer
from .common import plural


@dataclass
class MultikillGame:
    match_id: str
    champion_name: str
    date: str
    count: int


@dataclass
class SpreeAccumulator:
    games: int = 0
    doubles: int = 0
    triples: int = 0
    quadras: int = 0
    pentas: int = 0
    longest_spree: int = 0
    longest_spree_champion: str = ""
    penta_games: List[MultikillGame] = field(default_factory=list)
    quadra_games: List[MultikillGame] = field(default_factory=list)


def multikill_rating(counts: Dict[str, int]) -> str:
    for stat, minimum, label in MULTIKILL_RATINGS:
        if counts[stat] >= minimum:
            return label
    return MULTIKILL_DEFAULT


class KillingSpreeAnalyzer(MatchFoldAnalyzer):
    """Counts multikills and rates the longest killing spree."""

    scene_id = "killing_spree"
    label = "Killing Spree"
    visualization_kind = VisualizationKind.BAR
    subject = "your killing sprees"
    no_data_summary = "No multikill data to show yet"

    def new_accumulator(self) -> SpreeAccumulator:
        return SpreeAccumulator()

    def fold(self, acc: SpreeAccumulator, record: MatchRecord, player: FullParticipant) -> None:
        acc.games += 1
        acc.doubles += player.double_kills
        acc.triples += player.triple_kills
        acc.quadras += player.quadra_kills
        acc.pentas += player.penta_kills
        if player.largest_killing_spree > acc.longest_spree:
            acc.longest_spree = player.largest_killing_spree
            acc.longest_spree_champion = player.champion_name

        date = record.created_at.strftime("%Y-%m-%d")
        if player.penta_kills:
            acc.penta_games.append(
                MultikillGame(record.match_id, player.champion_name, date, player.penta_kills)
            )
        if player.quadra_kills:
            acc.quadra_games.append(
                MultikillGame(record.match_id, player.champion_name, date, player.quadra_kills)
            )

    def build_insight(
        self, acc: SpreeAccumulator, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        rating = multikill_rating(
            {"penta": acc.pentas, "quadra": acc.quadras, "triple": acc.triples}
        )
        spree_rating = rate(acc.longest_spree, SPREE_RATINGS)
        doubles_per_game = safe_divide(acc.doubles, acc.games)

        details = [
            f"Multikills across {acc.games} games:",
            f"  Double kills: {acc.doubles}",
            f"  Triple kills: {acc.triples}",
            f"  Quadra kills: {acc.quadras}",
            f"  Pentakills: {acc.pentas}",
        ]
        if acc.longest_spree > 0:
            details.append(
                f"Longest killing spree: {acc.longest_spree} kills on "
                f"{acc.longest_spree_champion} ({spree_rating})"
            )
        if acc.penta_games:
            details.append("Pentakill games:")
            for index, game in enumerate(acc.penta_games[:5], start=1):
                details.append(
                    f"  {index}. {game.champion_name} - {plural(game.count, 'penta')} ({game.date})"
                )
        if acc.quadra_games:
            details.append("Quadra kill games:")
            for index, game in enumerate(acc.quadra_games[:3], start=1):
                details.append(
                    f"  {index}. {game.champion_name} - {plural(game.count, 'quadra')} ({game.date})"
                )
        if doubles_per_game >= 2:
            details.append("You find double kills almost every fight!")
        elif doubles_per_game >= 1:
            details.append("A double kill per game on average - strong skirmishing.")
        elif doubles_per_game >= 0.5:
            details.append("Solid multikill potential. Look for cleanup opportunities.")

        if acc.pentas:
            summary = (
                f"{rating}! You've earned {plural(acc.pentas, 'pentakill')} this year. Your "
                f"longest killing spree reached {acc.longest_spree} kills."
            )
            action = "Keep hunting those pentas - you know how to close out teamfights."
        elif acc.quadras:
            summary = (
                f"{rating}! {plural(acc.quadras, 'quadra kill')} this year and a longest spree of "
                f"{acc.longest_spree}. The penta is within reach."
            )
            action = "Save key abilities for the last enemy standing to convert quadras into pentas."
        else:
            summary = (
                f"{rating}: {acc.triples} triples and {acc.doubles} doubles across "
                f"{acc.games} games, with a longest spree of {acc.longest_spree}."
            )
            action = "Look for teamfights where your team has the numbers advantage to chain kills."

        return self._create_payload(
            summary=summary,
            details=details,
            action=action,
            metrics=[
                SceneMetric(
                    label="Pentakills",
                    value=acc.pentas,
                    context=rating if acc.pentas else "The dream awaits",
                ),
                SceneMetric(label="Quadra Kills", value=acc.quadras),
                SceneMetric(label="Triple Kills", value=acc.triples),
                SceneMetric(
                    label="Double Kills",
                    value=acc.doubles,
                    context=f"{doubles_per_game:.2f} per game",
                ),
                SceneMetric(
                    label="Longest Spree",
                    value=acc.longest_spree,
                    unit="kills",
                    context=spree_rating,
                ),
            ],
            viz_data=BarViz(
                bars=[
                    Bar(label="Double Kills", value=acc.doubles),
                    Bar(label="Triple Kills", value=acc.triples),
                    Bar(label="Quadra Kills", value=acc.quadras),
                    Bar(label="Pentakills", value=acc.pentas),
                ]
            ),
        )
