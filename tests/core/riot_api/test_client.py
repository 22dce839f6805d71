"""
Tests for Riot API client.
"""

import httpx
import pytest
import pytest_asyncio

from rift_recap.core.riot_api.client import RiotAPIClient
from rift_recap.core.riot_api.constants import Platform, Region
from rift_recap.core.riot_api.errors import (
    AuthenticationError,
    BadRequestError,
    MalformedResponseError,
    ServiceUnavailableError,
    error_for_status,
    NotFoundError,
    RateLimitError,
    RiotAPIError,
)
from rift_recap.core.riot_api.models import MatchDTO


@pytest.fixture
def sample_match_data():
    """Minimal match-v5 payload."""
    return {
        "metadata": {"matchId": "NA1_1", "participants": ["p1", "p2"]},
        "info": {
            "gameCreation": 1735732800000,
            "gameDuration": 1800,
            "gameEndTimestamp": 1735734600000,
            "gameMode": "CLASSIC",
            "gameType": "MATCHED_GAME",
            "queueId": 420,
            "participants": [
                {
                    "puuid": "p1",
                    "riotIdGameName": "Player One",
                    "championName": "Ahri",
                    "teamId": 100,
                    "win": True,
                    "kills": 3,
                    "deaths": 2,
                    "assists": 2,
                },
                {"puuid": "p2", "summonerName": "Legacy"},
            ],
        },
    }


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_client(handler, sleep=None, max_retries=3) -> RiotAPIClient:
    return RiotAPIClient(
        api_key="test_api_key",
        region=Region.AMERICAS,
        platform=Platform.NA1,
        max_retries=max_retries,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
        sleep=sleep or RecordingSleep(),
    )


class TestRiotAPIClient:
    """Test cases for RiotAPIClient."""

    @pytest.mark.asyncio
    async def test_get_match_sends_token_and_parses(self, sample_match_data):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("X-Riot-Token")
            return httpx.Response(200, json=sample_match_data)

        async with make_client(handler) as client:
            match = await client.get_match("NA1_1")

        assert isinstance(match, MatchDTO)
        assert match.metadata.match_id == "NA1_1"
        assert seen["url"] == "https://americas.api.riotgames.com/lol/match/v5/matches/NA1_1"
        assert seen["token"] == "test_api_key"

    @pytest.mark.asyncio
    async def test_429_waits_retry_after_then_succeeds(self, sample_match_data):
        responses = iter(
            [
                httpx.Response(429, headers={"Retry-After": "2"}),
                httpx.Response(200, json=sample_match_data),
            ]
        )
        sleep = RecordingSleep()

        async with make_client(lambda request: next(responses), sleep=sleep) as client:
            match = await client.get_match("NA1_1")

        assert match.metadata.match_id == "NA1_1"
        assert sleep.calls == [2.0]

    @pytest.mark.asyncio
    async def test_429_without_header_defaults_to_one_second(self, sample_match_data):
        responses = iter(
            [httpx.Response(429), httpx.Response(200, json=sample_match_data)]
        )
        sleep = RecordingSleep()

        async with make_client(lambda request: next(responses), sleep=sleep) as client:
            await client.get_match("NA1_1")

        assert sleep.calls == [1.0]

    @pytest.mark.asyncio
    async def test_429_exhausting_retries_raises_rate_limit(self):
        sleep = RecordingSleep()
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(429, headers={"Retry-After": "3"})

        async with make_client(handler, sleep=sleep, max_retries=2) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_match("NA1_1")

        assert exc_info.value.retry_after == 3.0
        assert len(calls) == 3
        assert sleep.calls == [3.0, 3.0]

    @pytest.mark.asyncio
    async def test_404_is_terminal(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404)

        async with make_client(handler) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.get_match("NA1_missing")

        assert exc_info.value.status_code == 404
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_terminal(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        async with make_client(handler) as client:
            with pytest.raises(RiotAPIError) as exc_info:
                await client.get_match("NA1_1")

        assert exc_info.value.status_code == 500
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_401_raises_authentication_error(self):
        async with make_client(lambda request: httpx.Response(401)) as client:
            with pytest.raises(AuthenticationError):
                await client.get_match("NA1_1")

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(RiotAPIError):
                await client.get_match("NA1_1")

    @pytest.mark.asyncio
    async def test_league_entries_by_puuid(self):
        entries = [
            {
                "queueType": "RANKED_SOLO_5x5",
                "tier": "GOLD",
                "rank": "II",
                "leaguePoints": 50,
                "wins": 30,
                "losses": 20,
            }
        ]
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, json=entries)

        async with make_client(handler) as client:
            result = await client.get_league_entries_by_puuid("abc")

        assert seen["url"] == "https://na1.api.riotgames.com/lol/league/v4/entries/by-puuid/abc"
        assert result[0].tier == "GOLD"
        assert result[0].win_rate == 60.0


@pytest_asyncio.fixture
async def closed_client():
    client = make_client(lambda request: httpx.Response(200, json=[]))
    yield client
    await client.close()


@pytest.mark.asyncio
async def test_session_started_lazily(closed_client):
    assert closed_client.session is None

    await closed_client.get_league_entries_by_puuid("abc")

    assert closed_client.session is not None


class TestMalformedResponses:
    """200 responses whose body cannot be used."""

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with make_client(handler) as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await client.get_match("NA1_1")

        assert exc_info.value.status_code == 200
        assert exc_info.value.url.endswith("/matches/NA1_1")

    @pytest.mark.asyncio
    async def test_match_with_wrong_shape(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"metadata": {"matchId": "NA1_1"}, "info": {}})

        async with make_client(handler) as client:
            with pytest.raises(MalformedResponseError):
                await client.get_match("NA1_1")

    @pytest.mark.asyncio
    async def test_league_entry_with_wrong_shape(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"queueType": 5}])

        async with make_client(handler) as client:
            with pytest.raises(MalformedResponseError):
                await client.get_league_entries_by_puuid("p1")


class TestErrorForStatus:
    """Status to error mapping."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (400, BadRequestError),
            (401, AuthenticationError),
            (404, NotFoundError),
            (503, ServiceUnavailableError),
        ],
    )
    def test_known_statuses(self, status, expected):
        error = error_for_status(status, "https://example/lol")
        assert type(error) is expected
        assert error.status_code == status
        assert error.url == "https://example/lol"

    def test_unknown_status_is_base_error(self):
        error = error_for_status(502)
        assert type(error) is RiotAPIError
        assert str(error) == "Riot API Error 502: Unexpected status 502"

    def test_rate_limit_str_mentions_retry_after(self):
        error = RateLimitError("Rate limit exceeded", status_code=429, retry_after=2.0)
        assert "retry after 2.0s" in str(error)
