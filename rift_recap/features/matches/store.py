"""Record Store: TTL cache of normalized match records."""

from typing import Optional

import structlog
from pydantic import ValidationError

from rift_recap.core.cache import TTLStore

from .records import MatchRecord

logger = structlog.get_logger(__name__)


def match_key(match_id: str) -> str:
    return f"match:{match_id}"


class MatchRecordStore:
    """Caches MatchRecords as JSON dumps under ``match:{match_id}``."""

    def __init__(self, store: TTLStore, ttl: Optional[float] = None):
        self.store = store
        self.ttl = ttl

    def get(self, match_id: str) -> Optional[MatchRecord]:
        """Return the cached record, or None on a miss or an unreadable entry."""
        key = match_key(match_id)
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return MatchRecord.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable cached match record",
                match_id=match_id,
                error=str(e),
            )
            self.store.delete(key)
            return None

    def put(self, record: MatchRecord) -> None:
        self.store.set(
            match_key(record.match_id), record.model_dump(mode="json"), self.ttl
        )
