"""
Tests for the Trusted Ally scene.
"""

import pytest

from rift_recap.features.insights.analyzers import BestFriendAnalyzer
from rift_recap.features.insights.analyzers.best_friend import ally_tier, teammates_of
from rift_recap.features.insights.schemas import SceneContext

PLAYER = "player-puuid"


def metric(payload, label):
    return next(m for m in payload.insight.metrics if m.label == label)


async def compute(fetcher, settings, records):
    return await BestFriendAnalyzer(fetcher, settings).compute(
        SceneContext(puuid=PLAYER, match_ids=[r.match_id for r in records])
    )


@pytest.mark.parametrize(
    "games,tier",
    [
        (50, "Inseparable Duo"),
        (20, "Trusted Partner"),
        (12, "Regular Duo"),
        (5, "Frequent Ally"),
        (4, "Acquaintance"),
    ],
)
def test_ally_tier_thresholds_are_inclusive(games, tier):
    assert ally_tier(games) == tier


def test_team_inferred_from_outcome_without_team_id(make_record, make_participant):
    player = make_participant(team_id=None, win=True)
    ally = make_participant("ally", team_id=None, win=True)
    enemy = make_participant("enemy", team_id=None, win=False)

    mates = teammates_of(make_record("NA1_1", player=player, others=[ally, enemy]), player)

    assert [m.puuid for m in mates] == ["ally"]


class TestBestFriendAnalyzer:
    """Test cases for BestFriendAnalyzer."""

    @pytest.mark.asyncio
    async def test_duo_record_and_tier(self, make_fetcher, make_record, make_participant, at, settings):
        records = [
            make_record(
                f"NA1_{i}",
                player=make_participant(win=i < 7),
                others=[
                    make_participant("duo", display_name="Duo", champion_name="Thresh", team_id=100),
                    make_participant("enemy", team_id=200, win=i >= 7),
                ],
                game_creation=at(2025, 4, day=i + 1),
            )
            for i in range(12)
        ]

        payload = await compute(make_fetcher(records), settings, records)
        badge = payload.insight.viz_data

        assert metric(payload, "Best Partner").value == "Duo"
        assert metric(payload, "Games Together").value == 12
        assert metric(payload, "Duo Win Rate").value == 58.33
        assert badge.tier == "Regular Duo"
        top = badge.allies[0]
        assert top.champions == ["Thresh"]
        assert len(top.recent_games) == 5
        assert top.recent_games[0].match_id == "NA1_11"
        assert all(ally.puuid != "enemy" for ally in badge.allies)

    @pytest.mark.asyncio
    async def test_ranking_ties_break_on_wins_then_first_seen(
        self, make_fetcher, make_record, make_participant, settings
    ):
        records = [
            make_record(
                "NA1_1",
                player=make_participant(win=False),
                others=[make_participant("early", team_id=100), make_participant("late", team_id=100)],
            ),
            make_record(
                "NA1_2",
                player=make_participant(win=True),
                others=[make_participant("late", team_id=100)],
            ),
            make_record(
                "NA1_3",
                player=make_participant(win=True),
                others=[make_participant("early", team_id=100)],
            ),
        ]

        payload = await compute(make_fetcher(records), settings, records)

        assert [a.puuid for a in payload.insight.viz_data.allies] == ["early", "late"]

    @pytest.mark.asyncio
    async def test_no_teammates_gives_solo_payload(
        self, make_fetcher, make_record, make_participant, settings
    ):
        records = [
            make_record("NA1_1", others=[make_participant("enemy", team_id=200)]),
        ]

        payload = await compute(make_fetcher(records), settings, records)

        assert not payload.is_fallback
        assert metric(payload, "Trusted Allies").value == 0
        assert payload.insight.viz_data.allies == []
        assert payload.insight.viz_data.tier == "Solo Player"
