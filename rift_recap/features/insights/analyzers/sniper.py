"""Sniper scene: skillshots landed."""

from typing import List, Optional, Tuple

from rift_recap.features.matches.records import FullParticipant

from ..scene_config import SNIPER_RATINGS
from .skillshots import SkillshotAnalyzer, SkillshotSummary


class SniperAnalyzer(SkillshotAnalyzer):
    scene_id = "sniper"
    label = "Sniper"
    subject = "your skillshot accuracy"
    no_data_summary = "No skillshot data to show yet"
    ratings = SNIPER_RATINGS
    stat_label = "Skillshots Hit"
    unit = "hits"

    def read(self, player: FullParticipant) -> Optional[int]:
        return player.skillshots_hit

    def describe(self, s: SkillshotSummary) -> Tuple[str, List[str], str]:
        details = [
            f"Analyzed {s.games} matches for skillshot accuracy",
            f"Games with skillshot data: {s.games_with_data}",
            f"Total skillshots hit: {s.total}",
            f"Average per game: {s.average:.1f}",
            f"Average (games with data): {s.average_with_data:.1f}",
        ]
        if s.best is not None:
            details.append(
                f"Best accuracy game: {int(s.best.value)} skillshots on "
                f"{s.best.champion_name} ({s.best.date}), {s.best.score_line}"
            )

        if s.average >= 35:
            details.append("Incredible accuracy! Your skillshot precision is elite-tier.")
        elif s.average >= 25:
            details.append("Excellent aim! You're consistently landing skillshots.")
        elif s.average >= 15:
            details.append("Good accuracy! Keep practicing prediction and positioning.")
        elif s.average >= 10:
            details.append("Decent skillshot usage. Watch enemy movement patterns.")
        else:
            details.append("Room to grow! Practice skillshot prediction in the practice tool.")

        if s.games_with_data == 0:
            return (
                "No skillshot data is available for your matches. It isn't tracked for "
                "every champion or game mode.",
                details,
                "Play skillshot-heavy champions like Ezreal, Lux or Xerath to see this stat populate!",
            )
        if s.average >= 35:
            summary = (
                f"{s.rating}! You've landed {s.total} skillshots across {s.games} games, "
                f"averaging {s.average:.1f} per game."
            )
            action = "Your aim is already elite. Use skillshots for zoning and objective control too."
        elif s.average >= 20:
            summary = (
                f"{s.rating}! With {s.total} skillshots landed ({s.average:.1f} per game), "
                "you're showing strong mechanical skill."
            )
            action = "Predict enemy movement and use fog of war for surprise angles."
        elif s.average >= 10:
            summary = (
                f"{s.rating}. You've hit {s.total} skillshots across {s.games} games "
                f"({s.average:.1f} average)."
            )
            action = "Aim where enemies are going, not where they are, and drill combos in practice tool."
        else:
            summary = (
                f"{s.rating}. With {s.total} skillshots hit ({s.average:.1f} per game), "
                "there's potential to improve."
            )
            action = "Practice skillshot champions in normals and watch high-elo players' prediction."
        if s.best is not None:
            summary += f" Your best game was {int(s.best.value)} hits on {s.best.champion_name}."
        return summary, details, action
