"""Helpers shared by the match-folding analyzers."""

from dataclasses import dataclass
from typing import Optional

from rift_recap.features.matches.records import FullParticipant, MatchRecord


@dataclass
class GameMark:
    """A single standout game, kept for "best game" style details."""

    value: float
    match_id: str
    champion_name: str
    date: str
    kills: int
    deaths: int
    assists: int
    win: bool

    @property
    def score_line(self) -> str:
        return f"{self.kills}/{self.deaths}/{self.assists}"


def mark_if_better(
    current: Optional[GameMark],
    value: float,
    record: MatchRecord,
    player: FullParticipant,
) -> Optional[GameMark]:
    """
    Return a new mark when ``value`` strictly beats ``current``.

    Ties keep the earlier game, so results do not depend on fetch order.
    """
    if current is not None and value <= current.value:
        return current
    return GameMark(
        value=value,
        match_id=record.match_id,
        champion_name=player.champion_name,
        date=record.created_at.strftime("%Y-%m-%d"),
        kills=player.kills,
        deaths=player.deaths,
        assists=player.assists,
        win=player.win,
    )


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"
