"""
Scene registry.

Maps scene ids to analyzers and keeps the canonical recap order.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import structlog

from rift_recap.core.config import Settings, get_global_settings
from rift_recap.core.exceptions import SceneNotFoundError
from rift_recap.features.matches.fetcher import MatchFetcher

from .analyzers import (
    AramAnalyzer,
    BaseSceneAnalyzer,
    BestFriendAnalyzer,
    DamageShareAnalyzer,
    DamageTakenAnalyzer,
    DragonSlayerAnalyzer,
    FancyFeetAnalyzer,
    GoldShareAnalyzer,
    GrowthOverTimeAnalyzer,
    KillingSpreeAnalyzer,
    PathForwardAnalyzer,
    RankedLookup,
    RankedStatsAnalyzer,
    SignatureChampionAnalyzer,
    SignaturePositionAnalyzer,
    SniperAnalyzer,
    TotalHealedAnalyzer,
    VisionScoreAnalyzer,
    WeaknessesAnalyzer,
    YearInMotionAnalyzer,
)
from .scene_config import validate_configuration
from .schemas import SceneContext, SceneDescriptor, ScenePayload, VisualizationKind

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SceneDefinition:
    """A registered scene and the analyzer that computes it."""

    id: str
    label: str
    visualization_kind: VisualizationKind
    analyzer: BaseSceneAnalyzer

    def describe(self) -> SceneDescriptor:
        return SceneDescriptor(
            id=self.id, label=self.label, visualization_kind=self.visualization_kind
        )


class SceneRegistry:
    """Ordered collection of scenes, in registration order."""

    def __init__(self):
        self._scenes: Dict[str, SceneDefinition] = {}

    def register(self, analyzer: BaseSceneAnalyzer) -> SceneDefinition:
        """
        Register an analyzer under its ``scene_id``.

        :raises ValueError: If the id is already registered
        """
        if analyzer.scene_id in self._scenes:
            raise ValueError(f"Scene '{analyzer.scene_id}' is already registered")
        definition = SceneDefinition(
            id=analyzer.scene_id,
            label=analyzer.label,
            visualization_kind=analyzer.visualization_kind,
            analyzer=analyzer,
        )
        self._scenes[definition.id] = definition
        return definition

    def get(self, scene_id: str) -> SceneDefinition:
        try:
            return self._scenes[scene_id]
        except KeyError:
            raise SceneNotFoundError(scene_id) from None

    def all(self) -> List[SceneDefinition]:
        return list(self._scenes.values())

    def list_scenes(self) -> List[SceneDescriptor]:
        return [definition.describe() for definition in self._scenes.values()]

    async def compute(self, scene_id: str, ctx: SceneContext) -> ScenePayload:
        """
        Compute one scene.

        :raises SceneNotFoundError: If ``scene_id`` is not registered
        """
        return await self.get(scene_id).analyzer.compute(ctx)

    def __contains__(self, scene_id: str) -> bool:
        return scene_id in self._scenes

    def __len__(self) -> int:
        return len(self._scenes)


def build_default_registry(
    fetcher: MatchFetcher,
    ranked_lookup: RankedLookup,
    settings: Optional[Settings] = None,
) -> SceneRegistry:
    """Registry with every recap scene in canonical order."""
    settings = settings or get_global_settings()
    validate_configuration()

    registry = SceneRegistry()
    for analyzer in (
        YearInMotionAnalyzer(fetcher, settings),
        SignatureChampionAnalyzer(fetcher, settings),
        DamageShareAnalyzer(fetcher, settings),
        DamageTakenAnalyzer(fetcher, settings),
        TotalHealedAnalyzer(fetcher, settings),
        GoldShareAnalyzer(fetcher, settings),
        SignaturePositionAnalyzer(fetcher, settings),
        GrowthOverTimeAnalyzer(fetcher, settings),
        VisionScoreAnalyzer(fetcher, settings),
        WeaknessesAnalyzer(fetcher, settings),
        BestFriendAnalyzer(fetcher, settings),
        AramAnalyzer(fetcher, settings),
        RankedStatsAnalyzer(ranked_lookup, settings),
        KillingSpreeAnalyzer(fetcher, settings),
        DragonSlayerAnalyzer(fetcher, settings),
        SniperAnalyzer(fetcher, settings),
        FancyFeetAnalyzer(fetcher, settings),
        PathForwardAnalyzer(settings),
    ):
        registry.register(analyzer)

    logger.info("Scene registry built", scenes=len(registry))
    return registry
