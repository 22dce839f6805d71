"""Insight Cache: memoized scene payloads per player, scene and season."""

from typing import Optional

import structlog
from pydantic import ValidationError

from rift_recap.core.cache import TTLStore

from .schemas import ScenePayload

logger = structlog.get_logger(__name__)


def insight_key(puuid: str, scene_id: str, season: str) -> str:
    return f"insight:{puuid}:{scene_id}:{season}"


class InsightCache:
    """
    Stores successful payloads as JSON dumps.

    Fallback payloads (no metrics) are never stored, and a stored value that
    no longer validates is treated as a miss.
    """

    def __init__(self, store: TTLStore, ttl: Optional[float] = None):
        self.store = store
        self.ttl = ttl

    def get(self, puuid: str, scene_id: str, season: str) -> Optional[ScenePayload]:
        key = insight_key(puuid, scene_id, season)
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return ScenePayload.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable cached insight", key=key, error=str(e))
            self.store.delete(key)
            return None

    def put(self, puuid: str, season: str, payload: ScenePayload) -> bool:
        """
        Store ``payload`` unless it is a fallback.

        :returns: True if the payload was stored
        """
        if payload.is_fallback:
            return False
        self.store.set(
            insight_key(puuid, payload.scene_id, season),
            payload.model_dump_json(),
            self.ttl,
        )
        return True

    def clear(self) -> None:
        self.store.clear()
