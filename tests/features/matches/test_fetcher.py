"""
Tests for the record store and cache-first match fetching.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from rift_recap.core.cache import TTLStore
from rift_recap.core.exceptions import MatchNormalizationError, UpstreamFetchError
from rift_recap.core.riot_api.client import RiotAPIClient
from rift_recap.core.riot_api.constants import Platform, Region
from rift_recap.core.riot_api.errors import RiotAPIError
from rift_recap.core.riot_api.models import MatchDTO
from rift_recap.features.matches.fetcher import MatchFetcher
from rift_recap.features.matches.store import MatchRecordStore, match_key


def match_dto(match_id: str) -> MatchDTO:
    return MatchDTO.model_validate(
        {
            "metadata": {"matchId": match_id},
            "info": {
                "gameCreation": 1735732800000,
                "gameDuration": 1500,
                "gameEndTimestamp": 1735734300000,
                "gameMode": "CLASSIC",
                "participants": [
                    {
                        "puuid": "p1",
                        "championName": "Garen",
                        "win": False,
                        "kills": 1,
                        "deaths": 6,
                        "assists": 3,
                    }
                ],
            },
        }
    )


@pytest.fixture
def store(clock):
    return MatchRecordStore(TTLStore(ttl=600, clock=clock))


@pytest.fixture
def client():
    client = AsyncMock()
    client.get_match.side_effect = lambda match_id: match_dto(match_id)
    return client


class TestMatchRecordStore:
    """Test cases for MatchRecordStore."""

    def test_put_and_get(self, store, make_record):
        record = make_record("NA1_1")

        store.put(record)

        assert store.get("NA1_1") == record
        assert match_key("NA1_1") in store.store.entries

    def test_unreadable_entry_is_a_miss(self, store):
        store.store.set(match_key("NA1_1"), {"garbage": True})

        assert store.get("NA1_1") is None
        assert len(store.store) == 0

    def test_entry_expires(self, store, clock, make_record):
        store.put(make_record("NA1_1"))
        clock.advance(601)
        assert store.get("NA1_1") is None


class TestMatchFetcher:
    """Test cases for MatchFetcher."""

    @pytest.mark.asyncio
    async def test_fetch_writes_store_once(self, client, store, settings):
        fetcher = MatchFetcher(client, store, settings)

        first = await fetcher.fetch("NA1_1")
        second = await fetcher.fetch("NA1_1")

        assert first == second
        assert first.find_full("p1").champion_name == "Garen"
        client.get_match.assert_awaited_once_with("NA1_1")

    @pytest.mark.asyncio
    async def test_cache_hit_skips_upstream(self, client, store, settings, make_record):
        store.put(make_record("NA1_cached"))
        fetcher = MatchFetcher(client, store, settings)

        record = await fetcher.fetch("NA1_cached")

        assert record.match_id == "NA1_cached"
        client.get_match.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_wrapped_and_not_cached(self, store, settings):
        client = AsyncMock()
        client.get_match.side_effect = RiotAPIError("Unexpected status 500", status_code=500)
        fetcher = MatchFetcher(client, store, settings)

        with pytest.raises(UpstreamFetchError) as exc_info:
            await fetcher.fetch("NA1_1")

        assert exc_info.value.match_id == "NA1_1"
        assert exc_info.value.status_code == 500
        assert len(store.store) == 0

    @pytest.mark.asyncio
    async def test_fetch_many_keeps_order_and_isolates_failures(self, store, settings):
        client = AsyncMock()

        async def get_match(match_id):
            if match_id == "NA1_2":
                raise RiotAPIError("Resource not found", status_code=404)
            return match_dto(match_id)

        client.get_match.side_effect = get_match
        fetcher = MatchFetcher(client, store, settings)

        results = await fetcher.fetch_many(["NA1_1", "NA1_2", "NA1_3"])

        assert [r.item for r in results] == ["NA1_1", "NA1_2", "NA1_3"]
        assert [r.ok for r in results] == [True, False, True]
        assert isinstance(results[1].error, UpstreamFetchError)


def client_returning(response: httpx.Response) -> RiotAPIClient:
    return RiotAPIClient(
        api_key="test_api_key",
        region=Region.AMERICAS,
        platform=Platform.NA1,
        max_retries=0,
        transport=httpx.MockTransport(lambda request: response),
    )


class TestMalformedUpstreamBodies:
    """Unusable 200 bodies surface as normalization failures."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>oops</html>"),
            httpx.Response(200, json={"metadata": {"matchId": "NA1_1"}, "info": {}}),
        ],
        ids=["not-json", "wrong-shape"],
    )
    async def test_fetch_raises_normalization_error(self, response, store, settings):
        async with client_returning(response) as client:
            fetcher = MatchFetcher(client, store, settings)

            with pytest.raises(MatchNormalizationError) as exc_info:
                await fetcher.fetch("NA1_1")

        assert isinstance(exc_info.value, UpstreamFetchError)
        assert exc_info.value.match_id == "NA1_1"
        assert exc_info.value.status_code == 200
        assert len(store.store) == 0

    @pytest.mark.asyncio
    async def test_fetch_many_reports_malformed_body_per_item(self, store, settings):
        response = httpx.Response(200, text="not json")
        async with client_returning(response) as client:
            fetcher = MatchFetcher(client, store, settings)

            results = await fetcher.fetch_many(["NA1_1"])

        assert results[0].ok is False
        assert isinstance(results[0].error, MatchNormalizationError)
