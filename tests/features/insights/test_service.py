"""
Tests for the insight cache and the service facade.
"""

from unittest.mock import AsyncMock

import pytest

from rift_recap.core.cache import TTLStore
from rift_recap.core.exceptions import SceneNotFoundError
from rift_recap.features.insights.cache import InsightCache, insight_key
from rift_recap.features.insights.registry import build_default_registry
from rift_recap.features.insights.service import InsightService

PLAYER = "player-puuid"


@pytest.fixture
def insight_store(clock):
    return TTLStore(ttl=3600, clock=clock, name="test-insights")


@pytest.fixture
def make_service(make_fetcher, insight_store, settings):
    def build(records=()):
        fetcher = make_fetcher(records)
        registry = build_default_registry(fetcher, AsyncMock(return_value=[]), settings)
        return InsightService(registry, InsightCache(insight_store), settings), fetcher

    return build


class TestInsightCache:
    """Test cases for InsightCache."""

    @pytest.mark.asyncio
    async def test_unreadable_entry_is_a_miss(self, insight_store):
        cache = InsightCache(insight_store)
        insight_store.set(insight_key(PLAYER, "sniper", "2025"), "{not json")

        assert cache.get(PLAYER, "sniper", "2025") is None
        assert len(insight_store) == 0


class TestInsightService:
    """Test cases for InsightService."""

    @pytest.mark.asyncio
    async def test_successful_payload_is_memoized(self, make_service, make_record, insight_store, settings):
        service, fetcher = make_service([make_record("NA1_1")])

        first = await service.compute("year_in_motion", PLAYER, ["NA1_1"])
        # Drop the record so a recomputation would fall back to no-data
        fetcher.store.store.clear()
        second = await service.compute("year_in_motion", PLAYER, ["NA1_1"])

        assert second.model_dump_json() == first.model_dump_json()
        assert insight_key(PLAYER, "year_in_motion", settings.season) in insight_store.entries

    @pytest.mark.asyncio
    async def test_fallback_payload_not_memoized(self, make_service, insight_store):
        service, _ = make_service()

        payload = await service.compute("year_in_motion", PLAYER, ["NA1_missing"])

        assert payload.is_fallback
        assert len(insight_store) == 0

    @pytest.mark.asyncio
    async def test_season_partitions_cache(self, make_service, make_record, insight_store):
        service, _ = make_service([make_record("NA1_1")])

        await service.compute("path_forward", PLAYER, ["NA1_1"], season="2024")
        await service.compute("path_forward", PLAYER, ["NA1_1"], season="2025")

        assert insight_key(PLAYER, "path_forward", "2024") in insight_store.entries
        assert insight_key(PLAYER, "path_forward", "2025") in insight_store.entries

    @pytest.mark.asyncio
    async def test_cache_expires(self, make_service, make_record, insight_store, clock, settings):
        service, _ = make_service([make_record("NA1_1")])
        await service.compute("path_forward", PLAYER, ["NA1_1"])

        clock.advance(3601)

        assert service.cache.get(PLAYER, "path_forward", settings.season) is None

    @pytest.mark.asyncio
    async def test_compute_all_in_canonical_order(self, make_service, make_record):
        service, _ = make_service([make_record("NA1_1")])

        payloads = await service.compute_all(PLAYER, ["NA1_1"])

        assert [p.scene_id for p in payloads] == [s.id for s in service.list_scenes()]
        assert len(payloads) == 18

    @pytest.mark.asyncio
    async def test_unknown_scene(self, make_service):
        service, _ = make_service()

        with pytest.raises(SceneNotFoundError):
            await service.compute("legacy", PLAYER, ["NA1_1"])

    @pytest.mark.asyncio
    async def test_clear_cache(self, make_service, make_record, insight_store):
        service, _ = make_service([make_record("NA1_1")])
        await service.compute("path_forward", PLAYER, ["NA1_1"])

        service.clear_cache()

        assert len(insight_store) == 0

    @pytest.mark.asyncio
    async def test_create_wires_default_registry(self, settings):
        service = InsightService.create(settings)
        try:
            assert len(service.list_scenes()) == 18
            assert service.client is not None
            assert len(service.stores) == 2
        finally:
            await service.close()
