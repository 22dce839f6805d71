"""Riot API HTTP client with 429 backoff, error handling, and authentication."""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx
import structlog
from pydantic import ValidationError

from ..config import get_global_settings
from .constants import Platform, Region
from .endpoints import RiotAPIEndpoints
from .errors import (
    MalformedResponseError,
    RateLimitError,
    RiotAPIError,
    error_for_status,
)
from .models import LeagueEntryDTO, MatchDTO

logger = structlog.get_logger(__name__)

DEFAULT_RETRY_AFTER = 1.0


class RiotAPIClient:
    """Riot API client for the match-v5 and league-v4 endpoints.

    Only 429 responses are retried, sleeping for the Retry-After the API
    sends. Every other failure is terminal for the request.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        region: Optional[Region] = None,
        platform: Optional[Platform] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize Riot API client.

        Args:
            api_key: Riot API key (uses config if None)
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
            max_retries: Retries on 429 (uses config if None)
            timeout: Request timeout in seconds (uses config if None)
            transport: Optional httpx transport, used by tests
            sleep: Coroutine used to wait out Retry-After
        """
        settings = get_global_settings()
        self.api_key = api_key or settings.riot_api_key
        self.region = region or Region(settings.riot_region.lower())
        self.platform = platform or Platform(settings.riot_platform.lower())
        self.max_retries = (
            settings.riot_max_retries if max_retries is None else max_retries
        )
        self.timeout = settings.riot_request_timeout if timeout is None else timeout
        self.endpoints = RiotAPIEndpoints(self.region, self.platform)

        self._transport = transport
        self._sleep = sleep
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "X-Riot-Token": self.api_key,
                        "Accept": "application/json",
                        "User-Agent": "RiftRecap/0.1",
                    }
                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout),
                        transport=self._transport,
                    )
                    logger.info(
                        "Riot API client session started",
                        region=self._enum_str(self.region),
                        platform=self._enum_str(self.platform),
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    @staticmethod
    def _parse_retry_after(headers: httpx.Headers) -> float:
        """Read Retry-After as seconds, falling back to one second."""
        try:
            return float(headers.get("Retry-After", DEFAULT_RETRY_AFTER))
        except (TypeError, ValueError):
            return DEFAULT_RETRY_AFTER

    async def _make_request(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make a GET request, waiting out 429 responses.

        Args:
            url: Request URL
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            RateLimitError: 429 persisted past the retry budget
            RiotAPIError: Any other failure
        """
        await self.start_session()

        if self.session is None:
            raise RiotAPIError("Session not initialized")

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.session.get(url, params=params)
            except httpx.HTTPError as e:
                logger.warning("Riot API request failed", url=url, error=str(e))
                raise RiotAPIError(f"Request failed: {e}", url=url) from e

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as e:
                    raise MalformedResponseError(
                        f"Response body is not JSON: {e}", status_code=200, url=url
                    ) from e

            if response.status_code == 429:
                retry_after = self._parse_retry_after(response.headers)
                if attempt < self.max_retries:
                    logger.warning(
                        "Rate limited by Riot API, backing off",
                        url=url,
                        retry_after=retry_after,
                        attempt=attempt + 1,
                        max_retries=self.max_retries,
                    )
                    await self._sleep(retry_after)
                    continue
                raise RateLimitError(
                    "Rate limit exceeded",
                    status_code=429,
                    url=url,
                    retry_after=retry_after,
                )

            raise error_for_status(response.status_code, url)

        # Unreachable: the loop either returns or raises
        raise RiotAPIError("Retry loop exhausted")

    @staticmethod
    def _enum_str(value: Union[Region, Platform, str]) -> str:
        """Extract string value from enum or return as-is."""
        return value.value if hasattr(value, "value") else value

    # Match endpoints
    async def get_match(
        self, match_id: str, region: Optional[Region] = None
    ) -> MatchDTO:
        """Get match details by match ID."""
        url = self.endpoints.match_by_id(match_id, region)
        response = await self._make_request(url)
        try:
            return MatchDTO.model_validate(response)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected match shape: {e.error_count()} validation errors",
                status_code=200,
                url=url,
            ) from e

    # League endpoints
    async def get_league_entries_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> List[LeagueEntryDTO]:
        """Get league entries by PUUID."""
        url = self.endpoints.league_entries_by_puuid(puuid, platform)
        response = await self._make_request(url)

        # API returns a list of league entries
        if not isinstance(response, list):
            raise RiotAPIError(
                f"Expected list response for league entries, got {type(response)}"
            )

        try:
            return [LeagueEntryDTO.model_validate(entry) for entry in response]
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected league entry shape: {e.error_count()} validation errors",
                status_code=200,
                url=url,
            ) from e
