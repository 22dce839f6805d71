"""
Tests for the Areas for Growth scene.
"""

import pytest

from rift_recap.features.insights.analyzers import WeaknessesAnalyzer
from rift_recap.features.insights.schemas import SceneContext

PLAYER = "player-puuid"


def metric(payload, label):
    return next((m for m in payload.insight.metrics if m.label == label), None)


async def compute(fetcher, settings, records):
    return await WeaknessesAnalyzer(fetcher, settings).compute(
        SceneContext(puuid=PLAYER, match_ids=[r.match_id for r in records])
    )


@pytest.mark.parametrize(
    "deaths,minutes,expected",
    [
        (3, 30, 180),  # 15 + 30 * 1.5 = 60 per death
        (2, 10, 60),
        (1, 40, 60),  # capped
        (0, 25, 0),
    ],
)
def test_estimate_death_seconds(settings, deaths, minutes, expected):
    analyzer = WeaknessesAnalyzer(fetcher=None, settings=settings)
    assert analyzer.estimate_death_seconds(deaths, minutes) == expected


class TestWeaknessesAnalyzer:
    """Test cases for WeaknessesAnalyzer."""

    @pytest.mark.asyncio
    async def test_estimated_time_dead_is_tagged(
        self, make_fetcher, make_record, make_participant, settings
    ):
        records = [make_record("NA1_1", player=make_participant(deaths=3), game_duration=1800)]

        payload = await compute(make_fetcher(records), settings, records)

        dead = metric(payload, "Time Spent Dead")
        assert dead.value == 3.0
        assert dead.estimated is True
        time_alive = next(b for b in payload.insight.viz_data.bars if b.label == "Time Alive")
        assert time_alive.estimated is True
        assert "Death time measured in 0 games, estimated in 1 games" in payload.insight.details

    @pytest.mark.asyncio
    async def test_measured_time_dead_is_not_estimated(
        self, make_fetcher, make_record, make_participant, settings
    ):
        records = [
            make_record(
                "NA1_1",
                player=make_participant(deaths=3, total_time_spent_dead=120),
                game_duration=1800,
            )
        ]

        payload = await compute(make_fetcher(records), settings, records)

        dead = metric(payload, "Time Spent Dead")
        assert dead.value == 2.0
        assert dead.estimated is False

    @pytest.mark.asyncio
    async def test_gank_deaths_only_for_lane_players(
        self, make_fetcher, make_record, make_participant, settings
    ):
        laner = [make_record("NA1_1", player=make_participant(deaths=4, team_position="TOP"))]
        support = [make_record("NA1_2", player=make_participant(deaths=4, team_position="UTILITY"))]

        lane_payload = await compute(make_fetcher(laner), settings, laner)
        support_payload = await compute(make_fetcher(support), settings, support)

        ganks = metric(lane_payload, "Deaths to Ganks")
        assert ganks.value == 1.4
        assert ganks.estimated is True
        assert metric(support_payload, "Deaths to Ganks") is None

    @pytest.mark.asyncio
    async def test_weakest_area_drives_action(
        self, make_fetcher, make_record, make_participant, settings
    ):
        records = [
            make_record(
                "NA1_1",
                player=make_participant(
                    deaths=1,
                    total_time_spent_dead=30,
                    vision_score=1.0,
                    total_minions_killed=200,
                ),
                game_duration=1500,
            )
        ]

        payload = await compute(make_fetcher(records), settings, records)

        assert metric(payload, "Weakest Area").value == "Vision Control"
        assert payload.insight.action.startswith("Place a ward")
