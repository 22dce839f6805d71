"""
Tests for the scene registry.
"""

from unittest.mock import AsyncMock

import pytest

from rift_recap.core.exceptions import SceneNotFoundError
from rift_recap.features.insights.analyzers import PathForwardAnalyzer
from rift_recap.features.insights.registry import SceneRegistry, build_default_registry
from rift_recap.features.insights.scene_config import validate_configuration
from rift_recap.features.insights.schemas import SceneContext, VisualizationKind

CANONICAL_ORDER = [
    "year_in_motion",
    "signature_champion",
    "damage_share",
    "damage_taken",
    "total_healed",
    "gold_share",
    "signature_position",
    "growth_over_time",
    "vision_score",
    "weaknesses",
    "best_friend",
    "aram",
    "ranked_stats",
    "killing_spree",
    "dragon_slayer",
    "sniper",
    "fancy_feet",
    "path_forward",
]


@pytest.fixture
def registry(make_fetcher, settings):
    return build_default_registry(make_fetcher(), AsyncMock(return_value=[]), settings)


def test_default_registry_order(registry):
    assert [scene.id for scene in registry.list_scenes()] == CANONICAL_ORDER


def test_descriptors(registry):
    scenes = {scene.id: scene for scene in registry.list_scenes()}

    assert scenes["best_friend"].label == "Trusted Ally"
    assert scenes["best_friend"].visualization_kind == VisualizationKind.BADGE
    assert scenes["ranked_stats"].visualization_kind == VisualizationKind.GOAL
    assert scenes["year_in_motion"].visualization_kind == VisualizationKind.HEATMAP
    assert scenes["signature_champion"].visualization_kind == VisualizationKind.RADAR


def test_descriptor_serializes_camel_case(registry):
    dumped = registry.list_scenes()[0].model_dump(by_alias=True)
    assert dumped == {
        "id": "year_in_motion",
        "label": "Year in Motion",
        "visualizationKind": VisualizationKind.HEATMAP,
    }


def test_duplicate_registration_rejected(settings):
    registry = SceneRegistry()
    registry.register(PathForwardAnalyzer(settings))

    with pytest.raises(ValueError):
        registry.register(PathForwardAnalyzer(settings))


def test_unknown_scene(registry):
    with pytest.raises(SceneNotFoundError):
        registry.get("mvp")


@pytest.mark.asyncio
async def test_compute_unknown_scene_raises(registry):
    with pytest.raises(SceneNotFoundError):
        await registry.compute("mvp", SceneContext(puuid="p", match_ids=["NA1_1"]))


def test_rating_tables_are_ordered():
    validate_configuration()
