"""
Behaviour every scene analyzer shares: fallbacks, coverage and stability.
"""

from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs

from rift_recap.features.insights.analyzers import YearInMotionAnalyzer
from rift_recap.features.insights.registry import build_default_registry
from rift_recap.features.insights.schemas import SceneContext
from rift_recap.features.matches.records import StubParticipant

PLAYER = "player-puuid"


@pytest.fixture
def registry(make_fetcher, settings):
    lookup = AsyncMock(return_value=[])
    return build_default_registry(make_fetcher(), lookup, settings)


@pytest.mark.asyncio
async def test_empty_match_ids_give_no_data_payload_for_every_scene(registry):
    ctx = SceneContext(puuid=PLAYER, match_ids=[])

    for definition in registry.all():
        payload = await registry.compute(definition.id, ctx)

        assert payload.scene_id == definition.id
        assert payload.visualization_kind == definition.visualization_kind
        assert payload.insight.metrics == []
        assert payload.insight.details
        assert payload.insight.viz_data.kind == definition.visualization_kind.value


@pytest.mark.asyncio
async def test_all_failed_fetches_fall_back_to_no_data(make_fetcher, settings):
    analyzer = YearInMotionAnalyzer(make_fetcher(), settings)

    payload = await analyzer.compute(SceneContext(puuid=PLAYER, match_ids=["NA1_x", "NA1_y"]))

    assert payload.is_fallback
    assert payload.insight.summary == analyzer.no_data_summary


@pytest.mark.asyncio
async def test_player_only_as_stub_counts_as_no_data(make_fetcher, make_record, settings):
    record = make_record("NA1_1").model_copy(
        update={"participants": [StubParticipant(puuid=PLAYER)]}
    )
    analyzer = YearInMotionAnalyzer(make_fetcher([record]), settings)

    payload = await analyzer.compute(SceneContext(puuid=PLAYER, match_ids=["NA1_1"]))

    assert payload.is_fallback


@pytest.mark.asyncio
async def test_partial_coverage_reported_in_details(make_fetcher, make_record, settings):
    fetcher = make_fetcher([make_record("NA1_1"), make_record("NA1_3")])
    analyzer = YearInMotionAnalyzer(fetcher, settings)

    payload = await analyzer.compute(
        SceneContext(puuid=PLAYER, match_ids=["NA1_1", "NA1_2", "NA1_3"])
    )

    assert not payload.is_fallback
    assert payload.insight.details[-1] == "Coverage: 2 of 3 matches analyzed (1 failed to load)"


@pytest.mark.asyncio
async def test_full_coverage_line(make_fetcher, make_record, settings):
    analyzer = YearInMotionAnalyzer(make_fetcher([make_record("NA1_1")]), settings)

    payload = await analyzer.compute(SceneContext(puuid=PLAYER, match_ids=["NA1_1"]))

    assert payload.insight.details[-1] == "Coverage: 1 of 1 matches analyzed"


@pytest.mark.asyncio
async def test_unexpected_fault_becomes_error_payload(make_fetcher, make_record, settings):
    analyzer = YearInMotionAnalyzer(make_fetcher([make_record("NA1_1")]), settings)

    def explode(acc, record, player):
        raise ZeroDivisionError("bad math")

    analyzer.fold = explode

    payload = await analyzer.compute(SceneContext(puuid=PLAYER, match_ids=["NA1_1"]))

    assert payload.insight.summary == "Unable to analyze your year in motion"
    assert payload.insight.metrics == []
    assert "bad math" in payload.insight.details


@pytest.mark.asyncio
async def test_repeated_computation_is_identical(
    make_fetcher, make_record, make_participant, at, settings
):
    records = [
        make_record(
            f"NA1_{i}",
            player=make_participant(kills=i, win=i % 2 == 0),
            others=[make_participant(f"ally-{i % 3}", team_id=100)],
            game_creation=at(2025, 1 + i % 12),
        )
        for i in range(15)
    ]
    ids = [r.match_id for r in records]
    registry = build_default_registry(make_fetcher(records), AsyncMock(return_value=[]), settings)
    ctx = SceneContext(puuid=PLAYER, match_ids=ids)

    for definition in registry.all():
        first = await registry.compute(definition.id, ctx)
        second = await registry.compute(definition.id, ctx)
        assert first.model_dump_json() == second.model_dump_json()


def test_analysis_start_log_without_context(make_fetcher, settings):
    analyzer = YearInMotionAnalyzer(make_fetcher(), settings)

    with capture_logs() as logs:
        analyzer._log_analysis_start(PLAYER)

    assert logs == [
        {
            "event": "Starting scene analysis",
            "scene": "year_in_motion",
            "puuid": PLAYER,
            "log_level": "debug",
        }
    ]
