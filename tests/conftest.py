"""
Shared fixtures: match record builders and a fetcher backed by seeded stores.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional
from unittest.mock import AsyncMock

import pytest

from rift_recap.core.cache import TTLStore
from rift_recap.core.config import Settings
from rift_recap.core.riot_api.errors import NotFoundError
from rift_recap.features.matches.fetcher import MatchFetcher
from rift_recap.features.matches.records import FullParticipant, MatchRecord
from rift_recap.features.matches.store import MatchRecordStore

PLAYER = "player-puuid"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def epoch_ms(year: int, month: int, day: int = 15, hour: int = 12) -> int:
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp() * 1000)


def participant(puuid: str = PLAYER, **overrides) -> FullParticipant:
    fields = {
        "puuid": puuid,
        "display_name": puuid,
        "champion_name": "Ahri",
        "team_id": 100,
        "win": True,
        "kills": 5,
        "deaths": 2,
        "assists": 5,
        "gold_earned": 12000,
        "gold_spent": 11000,
        "total_damage_dealt": 120000,
        "total_damage_dealt_to_champions": 20000,
        "total_damage_taken": 18000,
        "total_heal": 3000,
        "total_heals_on_teammates": 0,
        "vision_score": 20.0,
        "wards_placed": 10,
        "wards_killed": 2,
        "vision_wards_bought": 1,
        "total_minions_killed": 180,
        "neutral_minions_killed": 10,
        "team_position": "MIDDLE",
    }
    fields.update(overrides)
    return FullParticipant(**fields)


def record(
    match_id: str,
    player: Optional[FullParticipant] = None,
    others: Iterable = (),
    game_creation: Optional[int] = None,
    game_duration: int = 1800,
    game_mode: str = "CLASSIC",
) -> MatchRecord:
    return MatchRecord(
        match_id=match_id,
        game_creation=game_creation if game_creation is not None else epoch_ms(2025, 3),
        game_duration=game_duration,
        game_mode=game_mode,
        game_type="MATCHED_GAME",
        queue_id=420,
        participants=[player or participant(), *others],
    )


@pytest.fixture
def settings() -> Settings:
    """Settings with no inter-batch delay and default heuristics."""
    return Settings(riot_api_key="test-key", fetch_batch_delay_ms=0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_fetcher(settings):
    """
    Build a MatchFetcher whose store is seeded with ``records``.

    Ids that are not seeded fail upstream with a 404.
    """

    def build(records: Iterable[MatchRecord] = ()) -> MatchFetcher:
        store = MatchRecordStore(TTLStore(ttl=3600, name="test-matches"))
        for item in records:
            store.put(item)
        client = AsyncMock()
        client.get_match.side_effect = NotFoundError("Resource not found", status_code=404)
        return MatchFetcher(client, store, settings)

    return build


@pytest.fixture
def make_participant():
    return participant


@pytest.fixture
def make_record():
    return record


@pytest.fixture
def at():
    """Epoch milliseconds for a UTC calendar date."""
    return epoch_ms
