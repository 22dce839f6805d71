"""
Insight service.

Facade over the scene registry and the insight cache. Orchestration
(which match ids belong to a player and season) happens upstream of this
service; it only computes and memoizes scene payloads.
"""

from typing import List, Optional, Sequence

import structlog

from rift_recap.core.cache import TTLStore
from rift_recap.core.config import Settings, get_global_settings
from rift_recap.core.riot_api.client import RiotAPIClient
from rift_recap.core.riot_api.constants import Platform, Region
from rift_recap.features.matches.fetcher import MatchFetcher
from rift_recap.features.matches.store import MatchRecordStore

from .cache import InsightCache
from .registry import SceneRegistry, build_default_registry
from .schemas import SceneContext, SceneDescriptor, ScenePayload

logger = structlog.get_logger(__name__)


class InsightService:
    """Service computing recap scenes with a memoizing cache in front.

    Typical use::

        async with InsightService.create() as service:
            payload = await service.compute("sniper", puuid, match_ids)
    """

    def __init__(
        self,
        registry: SceneRegistry,
        cache: InsightCache,
        settings: Optional[Settings] = None,
        client: Optional[RiotAPIClient] = None,
        stores: Sequence[TTLStore] = (),
    ):
        """
        Initialize insight service.

        :param registry: Scenes to compute
        :param cache: Memo for successful payloads
        :param settings: Defaults to the global settings
        :param client: Riot client owned by the service, closed by ``close``
        :param stores: TTL stores whose sweepers the service runs
        """
        self.registry = registry
        self.cache = cache
        self.settings = settings or get_global_settings()
        self.client = client
        self.stores = list(stores)

    @classmethod
    def create(cls, settings: Optional[Settings] = None) -> "InsightService":
        """Wire a client, both stores, the fetcher and the default registry."""
        settings = settings or get_global_settings()
        client = RiotAPIClient(
            api_key=settings.riot_api_key,
            region=Region(settings.riot_region.lower()),
            platform=Platform(settings.riot_platform.lower()),
            max_retries=settings.riot_max_retries,
            timeout=settings.riot_request_timeout,
        )
        match_store = TTLStore(
            ttl=settings.match_cache_ttl,
            sweep_interval=settings.cache_sweep_interval,
            name="matches",
        )
        insight_store = TTLStore(
            ttl=settings.insight_cache_ttl,
            sweep_interval=settings.cache_sweep_interval,
            name="insights",
        )
        fetcher = MatchFetcher(client, MatchRecordStore(match_store), settings)
        registry = build_default_registry(
            fetcher, client.get_league_entries_by_puuid, settings
        )
        return cls(
            registry,
            InsightCache(insight_store),
            settings,
            client=client,
            stores=[match_store, insight_store],
        )

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start background cache sweeping."""
        for store in self.stores:
            store.start_sweeper()

    async def close(self) -> None:
        """Stop sweepers and close the owned client."""
        for store in self.stores:
            await store.stop_sweeper()
        if self.client is not None:
            await self.client.close()

    def list_scenes(self) -> List[SceneDescriptor]:
        return self.registry.list_scenes()

    async def compute(
        self,
        scene_id: str,
        puuid: str,
        match_ids: Sequence[str],
        season: Optional[str] = None,
    ) -> ScenePayload:
        """
        Compute one scene, serving it from the insight cache when possible.

        :param scene_id: Registered scene id
        :param puuid: Player UUID
        :param match_ids: Matches to analyze, in the order they should be folded
        :param season: Cache partition, defaults to the configured season
        :returns: Scene payload; fallbacks are returned but not cached
        :raises SceneNotFoundError: If ``scene_id`` is not registered
        """
        season = season or self.settings.season
        definition = self.registry.get(scene_id)

        cached = self.cache.get(puuid, scene_id, season)
        if cached is not None:
            logger.debug("Insight cache hit", scene=scene_id, puuid=puuid, season=season)
            return cached

        payload = await definition.analyzer.compute(
            SceneContext(puuid=puuid, match_ids=list(match_ids))
        )
        stored = self.cache.put(puuid, season, payload)
        logger.info(
            "Scene computed",
            scene=scene_id,
            puuid=puuid,
            season=season,
            cached=stored,
        )
        return payload

    async def compute_all(
        self,
        puuid: str,
        match_ids: Sequence[str],
        season: Optional[str] = None,
    ) -> List[ScenePayload]:
        """Compute every scene in canonical order, one after another."""
        return [
            await self.compute(definition.id, puuid, match_ids, season)
            for definition in self.registry.all()
        ]

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Insight cache cleared")
