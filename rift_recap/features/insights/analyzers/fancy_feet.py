"""Fancy Feet scene: skillshots dodged."""

from typing import List, Optional, Tuple

from rift_recap.features.matches.records import FullParticipant

from ..scene_config import DODGE_RATINGS
from .skillshots import SkillshotAnalyzer, SkillshotSummary


class FancyFeetAnalyzer(SkillshotAnalyzer):
    scene_id = "fancy_feet"
    label = "Fancy Feet"
    subject = "your dodging"
    no_data_summary = "No dodge data to show yet"
    ratings = DODGE_RATINGS
    stat_label = "Skillshots Dodged"
    unit = "dodges"

    def read(self, player: FullParticipant) -> Optional[int]:
        return player.skillshots_dodged

    def describe(self, s: SkillshotSummary) -> Tuple[str, List[str], str]:
        details = [
            f"Analyzed {s.games} matches for evasion",
            f"Games with dodge data: {s.games_with_data}",
            f"Total skillshots dodged: {s.total}",
            f"Average per game: {s.average:.1f}",
        ]
        if s.best is not None:
            details.append(
                f"Best evasion game: {int(s.best.value)} dodges on "
                f"{s.best.champion_name} ({s.best.date}), {s.best.score_line}"
            )

        if s.games_with_data == 0:
            return (
                "No dodge data is available for your matches yet.",
                details,
                "Play a few more games on the Rift to start tracking your evasion.",
            )
        if s.average >= 30:
            summary = (
                f"{s.rating}! You sidestepped {s.total} skillshots across {s.games} games, "
                f"{s.average:.1f} per game."
            )
            action = "Your movement is elite. Use it to bait cooldowns before your team engages."
        elif s.average >= 12:
            summary = (
                f"{s.rating}! {s.total} skillshots dodged ({s.average:.1f} per game) shows "
                "you keep your character moving."
            )
            action = "Keep strafing between auto attacks and respect the enemy's key ability range."
        else:
            summary = (
                f"{s.rating}. You dodged {s.total} skillshots ({s.average:.1f} per game)."
            )
            action = "Stay out of straight lines with minions and move unpredictably in lane."
        return summary, details, action
