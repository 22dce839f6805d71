"""Exception taxonomy for the insight engine.

Analyzers convert every one of these into a payload at their boundary;
nothing raised here ever escapes ``compute``.
"""

from typing import Optional


class InsightEngineError(Exception):
    """Base exception for insight engine errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamFetchError(InsightEngineError):
    """A single match could not be obtained from the upstream API."""

    def __init__(
        self, match_id: str, message: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.match_id = match_id
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"Fetch of {self.match_id} failed ({self.status_code}): {self.message}"
        return f"Fetch of {self.match_id} failed: {self.message}"


class MatchNormalizationError(UpstreamFetchError):
    """Upstream returned a payload that cannot be turned into a MatchRecord."""


class NoMatchDataError(InsightEngineError):
    """No usable match data for the requested player."""


class PartialCoverageError(InsightEngineError):
    """Some match ids failed to load. Logged, never raised out of an analyzer."""

    def __init__(self, requested: int, processed: int, failed: int) -> None:
        super().__init__(
            f"Analyzed {processed} of {requested} matches ({failed} failed to load)"
        )
        self.requested = requested
        self.processed = processed
        self.failed = failed


class AnalyzerInternalError(InsightEngineError):
    """Unexpected fault inside an analyzer."""

    def __init__(self, scene_id: str, cause: BaseException) -> None:
        super().__init__(f"{scene_id} analysis failed: {cause}")
        self.scene_id = scene_id
        self.cause = cause


class SceneNotFoundError(InsightEngineError):
    """Requested scene id is not registered."""

    def __init__(self, scene_id: str) -> None:
        super().__init__(f"Unknown scene: {scene_id}")
        self.scene_id = scene_id
