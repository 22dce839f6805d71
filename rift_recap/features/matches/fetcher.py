"""Cache-first retrieval of match records."""

from typing import List, Optional, Sequence

import structlog

from rift_recap.core.config import Settings, get_global_settings
from rift_recap.core.exceptions import MatchNormalizationError, UpstreamFetchError
from rift_recap.core.riot_api.client import RiotAPIClient
from rift_recap.core.riot_api.errors import MalformedResponseError, RiotAPIError
from rift_recap.utils.concurrency import ItemResult, bounded_map

from .records import MatchRecord
from .store import MatchRecordStore
from .transformers import MatchTransformer

logger = structlog.get_logger(__name__)


class MatchFetcher:
    """Fetches MatchRecords, consulting the Record Store before the network.

    A successful upstream fetch is written to the store exactly once; a
    failed one leaves the store untouched.
    """

    def __init__(
        self,
        client: RiotAPIClient,
        store: MatchRecordStore,
        settings: Optional[Settings] = None,
    ):
        self.client = client
        self.store = store
        self.settings = settings or get_global_settings()

    async def fetch(self, match_id: str) -> MatchRecord:
        """
        Return the record for ``match_id``.

        :param match_id: Upstream match identifier
        :returns: Normalized match record
        :raises MatchNormalizationError: If upstream sent an unusable body
        :raises UpstreamFetchError: If the match could not be obtained
        """
        cached = self.store.get(match_id)
        if cached is not None:
            return cached

        try:
            match = await self.client.get_match(match_id)
        except MalformedResponseError as e:
            logger.warning("Malformed match payload", match_id=match_id, error=str(e))
            raise MatchNormalizationError(match_id, e.message, e.status_code) from e
        except RiotAPIError as e:
            logger.warning(
                "Match fetch failed",
                match_id=match_id,
                status_code=e.status_code,
                error=str(e),
            )
            raise UpstreamFetchError(match_id, e.message, e.status_code) from e

        record = MatchTransformer.to_record(match)
        self.store.put(record)
        return record

    async def fetch_many(
        self, match_ids: Sequence[str]
    ) -> List[ItemResult[str, MatchRecord]]:
        """Fetch every id with the configured batch size and pacing."""
        return await bounded_map(
            match_ids,
            self.fetch,
            batch_size=self.settings.fetch_batch_size,
            batch_delay=self.settings.fetch_batch_delay,
        )
