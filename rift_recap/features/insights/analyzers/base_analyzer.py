"""
Base classes for scene analyzers.

Every analyzer turns ``{puuid, match_ids}`` into a ScenePayload and never
raises: missing data becomes a no-data payload and unexpected faults
become an error payload.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from rift_recap.core.config import Settings, get_global_settings
from rift_recap.core.exceptions import (
    AnalyzerInternalError,
    NoMatchDataError,
    PartialCoverageError,
)
from rift_recap.features.matches.fetcher import MatchFetcher
from rift_recap.features.matches.records import FullParticipant, MatchRecord

from ..schemas import (
    SceneContext,
    SceneInsight,
    SceneMetric,
    ScenePayload,
    VisualizationKind,
    VizData,
    empty_viz,
)


@dataclass(frozen=True)
class Coverage:
    """How many of the requested matches made it into the fold."""

    requested: int
    processed: int
    failed: int

    @property
    def line(self) -> str:
        text = f"Coverage: {self.processed} of {self.requested} matches analyzed"
        if self.failed:
            text += f" ({self.failed} failed to load)"
        return text


class BaseSceneAnalyzer(ABC):
    """
    Abstract base class for scene analyzers.

    Subclasses set ``scene_id``, ``label``, ``visualization_kind`` and
    ``subject`` and implement ``analyze``; ``compute`` wraps it in the
    failure boundary.
    """

    scene_id: str = ""
    label: str = ""
    visualization_kind: VisualizationKind = VisualizationKind.HIGHLIGHT
    subject: str = "your matches"
    no_data_summary: str = "Not enough match data yet"
    no_data_action: str = "Play a few more games and check back!"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_global_settings()
        self.logger = structlog.get_logger(f"{__name__}.{self.scene_id}")

    async def compute(self, ctx: SceneContext) -> ScenePayload:
        """
        Compute this scene's payload.

        :param ctx: Player id and the match ids to analyze
        :returns: ScenePayload; a fallback payload when data is missing or
            the analysis fails
        """
        self._log_analysis_start(ctx.puuid, {"match_count": len(ctx.match_ids)})

        try:
            if not ctx.match_ids:
                raise NoMatchDataError("No matches were supplied for analysis")
            payload = await self.analyze(ctx)
        except NoMatchDataError as e:
            self.logger.info(
                "Scene has no data", scene=self.scene_id, puuid=ctx.puuid, reason=str(e)
            )
            return self._create_no_data_payload(str(e))
        except Exception as e:
            return self._create_error_payload(e, ctx.puuid)

        self._log_analysis_result(ctx.puuid, payload)
        return payload

    @abstractmethod
    async def analyze(self, ctx: SceneContext) -> ScenePayload:
        """
        Produce the payload for a non-empty match id list.

        :raises NoMatchDataError: If nothing usable was found
        """

    def _create_payload(
        self,
        summary: str,
        details: List[str],
        action: str,
        metrics: List[SceneMetric],
        viz_data: VizData,
    ) -> ScenePayload:
        return ScenePayload(
            scene_id=self.scene_id,
            visualization_kind=self.visualization_kind,
            insight=SceneInsight(
                summary=summary,
                details=details,
                action=action,
                metrics=metrics,
                viz_data=viz_data,
            ),
        )

    def _create_no_data_payload(self, reason: str) -> ScenePayload:
        return self._create_payload(
            summary=self.no_data_summary,
            details=[reason, f"We need at least one finished game to analyze {self.subject}."],
            action=self.no_data_action,
            metrics=[],
            viz_data=empty_viz(self.visualization_kind),
        )

    def _create_error_payload(self, error: Exception, puuid: str) -> ScenePayload:
        """
        Create a ScenePayload for analysis errors.

        :param error: Exception that occurred during analysis
        :param puuid: Player UUID
        :returns: Error payload with no metrics
        """
        wrapped = AnalyzerInternalError(self.scene_id, error)
        self.logger.error(
            "Scene analysis failed",
            scene=self.scene_id,
            puuid=puuid,
            error=str(wrapped),
            error_type=type(error).__name__,
            exc_info=True,
        )
        return self._create_payload(
            summary=f"Unable to analyze {self.subject}",
            details=[
                "There was an error processing your match data",
                str(error) or type(error).__name__,
            ],
            action="Please try again later",
            metrics=[],
            viz_data=empty_viz(self.visualization_kind),
        )

    def _log_analysis_start(
        self, puuid: str, context: Optional[Dict[str, Any]] = None
    ):
        """Log the start of scene analysis."""
        self.logger.debug(
            "Starting scene analysis",
            scene=self.scene_id,
            puuid=puuid,
            **(context or {}),
        )

    def _log_analysis_result(self, puuid: str, payload: ScenePayload):
        """Log the result of scene analysis."""
        self.logger.info(
            "Scene analysis completed",
            scene=self.scene_id,
            puuid=puuid,
            metrics=len(payload.insight.metrics),
        )


class MatchFoldAnalyzer(BaseSceneAnalyzer):
    """
    Analyzer that folds over the player's match records.

    Records are fetched through the bounded mapper and folded in input
    order, so results never depend on fetch completion order. Matches that
    fail to load, or where the player is not a full participant, are
    skipped and reported in the coverage line.
    """

    def __init__(self, fetcher: MatchFetcher, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.fetcher = fetcher

    @abstractmethod
    def new_accumulator(self) -> Any:
        """Fresh accumulator for one computation."""

    @abstractmethod
    def fold(self, acc: Any, record: MatchRecord, player: FullParticipant) -> None:
        """Add one match to the accumulator."""

    @abstractmethod
    def build_insight(
        self, acc: Any, coverage: Coverage, ctx: SceneContext
    ) -> ScenePayload:
        """Derive the payload from a non-empty accumulator."""

    async def analyze(self, ctx: SceneContext) -> ScenePayload:
        results = await self.fetcher.fetch_many(ctx.match_ids)

        acc = self.new_accumulator()
        processed = 0
        failed = 0
        for result in results:
            if not result.ok:
                failed += 1
                continue
            player = result.value.find_full(ctx.puuid)
            if player is None:
                continue
            self.fold(acc, result.value, player)
            processed += 1

        coverage = Coverage(
            requested=len(ctx.match_ids), processed=processed, failed=failed
        )
        if failed:
            partial = PartialCoverageError(len(ctx.match_ids), processed, failed)
            self.logger.warning(
                "Partial match coverage",
                scene=self.scene_id,
                puuid=ctx.puuid,
                error=str(partial),
            )
        if processed == 0:
            raise NoMatchDataError(
                f"None of the {len(ctx.match_ids)} matches contained usable data for this player"
            )

        payload = self.build_insight(acc, coverage, ctx)
        payload.insight.details.append(coverage.line)
        return payload
