"""Recap scenes: analyzers, registry, insight cache and service."""

from .cache import InsightCache
from .registry import SceneDefinition, SceneRegistry, build_default_registry
from .schemas import SceneContext, SceneDescriptor, SceneInsight, SceneMetric, ScenePayload
from .service import InsightService

__all__ = [
    "InsightCache",
    "InsightService",
    "SceneContext",
    "SceneDefinition",
    "SceneDescriptor",
    "SceneInsight",
    "SceneMetric",
    "ScenePayload",
    "SceneRegistry",
    "build_default_registry",
]
