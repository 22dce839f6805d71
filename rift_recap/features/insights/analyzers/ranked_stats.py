"""
Ranked Stats scene ("Ranked Journey").

Standings come from an injected lookup. The games-needed projection is a
heuristic based on configured average LP per win and per loss.
"""

import math
from typing import Awaitable, Callable, List, Optional

from rift_recap.core.config import Settings
from rift_recap.core.riot_api.constants import DIVISIONS, RankedQueue, Tier
from rift_recap.core.riot_api.models import LeagueEntryDTO
from rift_recap.utils.statistics import safe_divide

from ..schemas import GoalViz, SceneContext, SceneMetric, ScenePayload, VisualizationKind
from .base_analyzer import BaseSceneAnalyzer

RankedLookup = Callable[[str], Awaitable[List[LeagueEntryDTO]]]

POINTS_PER_DIVISION = 100
OPEN_ENDED = "100+"
NOT_APPLICABLE = "N/A"
MAX_PROJECTED_GAMES = 100

QUEUE_NAMES = {
    RankedQueue.SOLO.value: "Solo/Duo",
    RankedQueue.FLEX.value: "Flex",
}


def pick_entry(entries: List[LeagueEntryDTO]) -> Optional[LeagueEntryDTO]:
    """Solo queue standing when present, flex otherwise."""
    for queue in (RankedQueue.SOLO, RankedQueue.FLEX):
        for entry in entries:
            if entry.queue_type == queue.value:
                return entry
    return None


def display_rank(tier: Tier, division: Optional[str] = None) -> str:
    """"Gold II" style name; apex tiers have no division."""
    name = tier.value.title()
    return name if tier.is_apex or not division else f"{name} {division}"


def next_milestone(tier: Tier, division: Optional[str]) -> Optional[str]:
    """Display name of the next division up, or None for apex tiers."""
    if tier.is_apex:
        return None
    index = DIVISIONS.index(division) if division in DIVISIONS else 0
    if index + 1 < len(DIVISIONS):
        return display_rank(tier, DIVISIONS[index + 1])
    following = tier.next_tier()
    if following is None:
        return None
    return display_rank(following, DIVISIONS[0])


def net_points_per_game(win_fraction: float, per_win: float, per_loss: float) -> float:
    return per_win * win_fraction + per_loss * (1 - win_fraction)


def games_needed(points: int, net: float) -> str:
    """ceil(points / net), or the open-ended sentinel when the climb never ends."""
    if points <= 0:
        return "0"
    if net <= 0:
        return OPEN_ENDED
    games = math.ceil(points / net)
    return OPEN_ENDED if games > MAX_PROJECTED_GAMES else str(games)


class RankedStatsAnalyzer(BaseSceneAnalyzer):
    """Current standing plus a projection to the next division."""

    scene_id = "ranked_stats"
    label = "Ranked Journey"
    visualization_kind = VisualizationKind.GOAL
    subject = "your ranked journey"
    no_data_summary = "No ranked data available"

    def __init__(self, lookup: RankedLookup, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.lookup = lookup

    async def analyze(self, ctx: SceneContext) -> ScenePayload:
        entries = await self.lookup(ctx.puuid)
        entry = pick_entry(entries)
        if entry is None:
            return self._unranked_payload()

        tier = Tier(entry.tier.upper())
        division = None if tier.is_apex else entry.rank
        queue_name = QUEUE_NAMES.get(entry.queue_type, entry.queue_type)
        rank_name = display_rank(tier, division)
        total_games = entry.wins + entry.losses
        win_fraction = safe_divide(entry.wins, total_games)
        net = net_points_per_game(
            win_fraction, self.settings.lp_per_win, self.settings.lp_per_loss
        )

        target = next_milestone(tier, division)
        if target is None:
            points_to_target = None
            needed = NOT_APPLICABLE
            progress = 100.0
        else:
            points_to_target = max(POINTS_PER_DIVISION - entry.league_points, 0)
            needed = games_needed(points_to_target, net)
            progress = float(min(max(entry.league_points, 0), POINTS_PER_DIVISION))

        details = [
            f"{queue_name} Rank: {rank_name}",
            f"League Points: {entry.league_points} LP",
            f"Record: {entry.wins}W - {entry.losses}L ({win_fraction * 100:.1f}% win rate)",
            f"Total Games: {total_games}",
            f"Estimated net LP per game: {net:+.1f}",
        ]
        if target is None:
            details.append("Apex tiers have no divisions; every LP counts on the ladder")
        elif needed == OPEN_ENDED:
            details.append(
                f"At your current win rate the climb to {target} is open-ended"
            )
        else:
            details.append(
                f"Estimated {needed} games to reach {target} "
                f"({points_to_target} LP to go)"
            )
        for other in entries:
            if other is not entry and other.queue_type in QUEUE_NAMES:
                details.append(
                    f"{QUEUE_NAMES[other.queue_type]}: "
                    f"{' '.join(filter(None, [other.tier.title(), other.rank]))} "
                    f"({other.league_points} LP)"
                )

        return self._create_payload(
            summary=(
                f"You're {rank_name} in {queue_name} with {entry.league_points} LP. "
                f"Your {entry.wins}-{entry.losses} record shows "
                f"{win_fraction * 100:.1f}% win rate."
            ),
            details=details,
            action=(
                "Keep climbing! Your win rate shows you belong at this elo or higher."
                if win_fraction >= 0.5
                else "Focus on improving fundamentals to boost your win rate and climb the ladder."
            ),
            metrics=[
                SceneMetric(
                    label=f"{queue_name} Rank",
                    value=rank_name,
                    context=f"{entry.league_points} LP",
                ),
                SceneMetric(
                    label="Win Rate",
                    value=round(win_fraction * 100, 1),
                    unit="%",
                    context=f"{entry.wins}W-{entry.losses}L",
                ),
                SceneMetric(
                    label="Games to Next Division",
                    value=needed,
                    context=target if target else "Apex tier",
                    estimated=True,
                ),
            ],
            viz_data=GoalViz(
                current=rank_name,
                target=target,
                progress=progress,
                points_to_target=points_to_target,
                games_needed=needed,
                estimated=True,
            ),
        )

    def _unranked_payload(self) -> ScenePayload:
        return self._create_payload(
            summary="You haven't placed in ranked this season yet.",
            details=["No Solo/Duo or Flex standing was found for this season"],
            action="Play your placement games to start your ranked journey!",
            metrics=[SceneMetric(label="Rank", value="Unranked")],
            viz_data=GoalViz(current="Unranked"),
        )
