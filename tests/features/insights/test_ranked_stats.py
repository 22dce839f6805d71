"""
Tests for the Ranked Journey scene.
"""

from unittest.mock import AsyncMock

import pytest

from rift_recap.core.riot_api.constants import Tier
from rift_recap.core.riot_api.errors import ServiceUnavailableError
from rift_recap.core.riot_api.models import LeagueEntryDTO
from rift_recap.features.insights.analyzers import RankedStatsAnalyzer
from rift_recap.features.insights.analyzers.ranked_stats import (
    display_rank,
    games_needed,
    next_milestone,
    pick_entry,
)
from rift_recap.features.insights.schemas import SceneContext

PLAYER = "player-puuid"
CTX = SceneContext(puuid=PLAYER, match_ids=["NA1_1"])


def entry(queue="RANKED_SOLO_5x5", tier="GOLD", rank="II", lp=50, wins=60, losses=40):
    return LeagueEntryDTO.model_validate(
        {
            "queueType": queue,
            "tier": tier,
            "rank": rank,
            "leaguePoints": lp,
            "wins": wins,
            "losses": losses,
        }
    )


def metric(payload, label):
    return next(m for m in payload.insight.metrics if m.label == label)


async def compute(settings, entries):
    analyzer = RankedStatsAnalyzer(AsyncMock(return_value=entries), settings)
    return await analyzer.compute(CTX)


def test_display_rank():
    assert display_rank(Tier.GOLD, "II") == "Gold II"
    assert display_rank(Tier.MASTER, "I") == "Master"


def test_next_milestone_climbs_divisions_then_tiers():
    assert next_milestone(Tier.GOLD, "II") == "Gold I"
    assert next_milestone(Tier.GOLD, "I") == "Platinum IV"
    assert next_milestone(Tier.DIAMOND, "I") == "Master"
    assert next_milestone(Tier.CHALLENGER, None) is None


def test_games_needed_edges():
    assert games_needed(0, 5.0) == "0"
    assert games_needed(50, 0.0) == "100+"
    assert games_needed(50, -3.0) == "100+"
    assert games_needed(50, 0.24) == "100+"
    assert games_needed(50, 4.8) == "11"


def test_pick_entry_prefers_solo_queue():
    flex = entry(queue="RANKED_FLEX_SR", tier="SILVER")
    solo = entry()
    assert pick_entry([flex, solo]) is solo
    assert pick_entry([flex]) is flex
    assert pick_entry([entry(queue="CHERRY")]) is None


class TestRankedStatsAnalyzer:
    """Test cases for RankedStatsAnalyzer."""

    @pytest.mark.asyncio
    async def test_projection_to_next_division(self, settings):
        payload = await compute(settings, [entry(lp=50, wins=60, losses=40)])
        goal = payload.insight.viz_data

        projection = metric(payload, "Games to Next Division")
        assert projection.value == "11"
        assert projection.estimated is True
        assert metric(payload, "Solo/Duo Rank").value == "Gold II"
        assert goal.target == "Gold I"
        assert goal.points_to_target == 50
        assert goal.games_needed == "11"
        assert goal.estimated is True

    @pytest.mark.asyncio
    async def test_losing_record_is_open_ended(self, settings):
        payload = await compute(settings, [entry(lp=50, wins=48, losses=52)])

        assert metric(payload, "Games to Next Division").value == "100+"

    @pytest.mark.asyncio
    async def test_apex_tier_has_no_milestone(self, settings):
        payload = await compute(settings, [entry(tier="MASTER", rank="I", lp=230)])
        goal = payload.insight.viz_data

        assert goal.current == "Master"
        assert goal.target is None
        assert goal.points_to_target is None
        assert goal.games_needed == "N/A"

    @pytest.mark.asyncio
    async def test_other_queue_listed_in_details(self, settings):
        payload = await compute(
            settings, [entry(), entry(queue="RANKED_FLEX_SR", tier="SILVER", rank="I", lp=10)]
        )

        assert "Flex: Silver I (10 LP)" in payload.insight.details

    @pytest.mark.asyncio
    async def test_unranked(self, settings):
        payload = await compute(settings, [])

        assert not payload.is_fallback
        assert metric(payload, "Rank").value == "Unranked"
        assert payload.insight.viz_data.current == "Unranked"

    @pytest.mark.asyncio
    async def test_lookup_failure_becomes_error_payload(self, settings):
        lookup = AsyncMock(side_effect=ServiceUnavailableError("Service unavailable", status_code=503))
        analyzer = RankedStatsAnalyzer(lookup, settings)

        payload = await analyzer.compute(CTX)

        assert payload.insight.summary == "Unable to analyze your ranked journey"
        assert payload.insight.metrics == []
