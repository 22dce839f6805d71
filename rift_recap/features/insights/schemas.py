"""Pydantic schemas for scene payloads.

Payloads serialize with camelCase aliases for the presentation layer.
Visualization data is a closed set of variants discriminated on ``kind``.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VisualizationKind(str, Enum):
    """Chart family a scene is rendered with."""

    HEATMAP = "heatmap"
    RADAR = "radar"
    LINE = "line"
    BAR = "bar"
    HIGHLIGHT = "highlight"
    BADGE = "badge"
    INFOGRAPHIC = "infographic"
    GOAL = "goal"


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SceneMetric(CamelModel):
    """One headline number of a scene."""

    label: str
    value: Union[int, float, str]
    unit: Optional[str] = None
    trend: Optional[Literal["up", "down", "stable"]] = None
    context: Optional[str] = None
    estimated: bool = Field(
        default=False, description="Derived from a heuristic, not measured telemetry"
    )


# Heatmap


class HeatmapCell(CamelModel):
    month: str
    hours: Optional[float] = None
    matches: Optional[int] = None
    intensity: float = 0.0


class HeatmapViz(CamelModel):
    kind: Literal["heatmap"] = "heatmap"
    months: List[HeatmapCell] = Field(default_factory=list)
    peak_month: Optional[str] = None
    total_hours: float = 0.0
    total_matches: int = 0


# Radar


class RadarViz(CamelModel):
    kind: Literal["radar"] = "radar"
    subject: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    values: List[float] = Field(default_factory=list)
    raw_values: List[float] = Field(default_factory=list)
    max_value: float = 100.0


# Line


class LinePoint(CamelModel):
    label: str
    value: Optional[float] = None


class LineSeries(CamelModel):
    name: str
    points: List[LinePoint] = Field(default_factory=list)


class LineViz(CamelModel):
    kind: Literal["line"] = "line"
    series: List[LineSeries] = Field(default_factory=list)
    annotation: Optional[str] = None


# Bar


class Bar(CamelModel):
    label: str
    value: float
    max_value: Optional[float] = None
    benchmark: Optional[float] = None
    estimated: bool = False


class BarViz(CamelModel):
    kind: Literal["bar"] = "bar"
    bars: List[Bar] = Field(default_factory=list)


# Highlight


class HighlightStat(CamelModel):
    label: str
    value: Union[int, float, str]
    unit: Optional[str] = None


class HighlightViz(CamelModel):
    kind: Literal["highlight"] = "highlight"
    main_stat: Optional[HighlightStat] = None
    stats: List[HighlightStat] = Field(default_factory=list)


# Badge


class SharedGame(CamelModel):
    match_id: str
    game_creation: int
    win: bool
    champion_name: str
    ally_champion_name: str


class AllySummary(CamelModel):
    puuid: str
    display_name: str
    games: int
    wins: int
    win_rate: float
    champions: List[str] = Field(default_factory=list)
    recent_games: List[SharedGame] = Field(default_factory=list)


class BadgeViz(CamelModel):
    kind: Literal["badge"] = "badge"
    title: str = ""
    tier: Optional[str] = None
    allies: List[AllySummary] = Field(default_factory=list)


# Infographic


class ChampionTally(CamelModel):
    name: str
    games: int
    wins: int
    win_rate: float


class InfographicViz(CamelModel):
    kind: Literal["infographic"] = "infographic"
    tiles: List[HighlightStat] = Field(default_factory=list)
    top_items: List[ChampionTally] = Field(default_factory=list)


# Goal


class GoalViz(CamelModel):
    kind: Literal["goal"] = "goal"
    current: str = "Unranked"
    target: Optional[str] = None
    progress: float = 0.0
    points_to_target: Optional[int] = None
    games_needed: str = "N/A"
    estimated: bool = False


VizData = Annotated[
    Union[
        HeatmapViz,
        RadarViz,
        LineViz,
        BarViz,
        HighlightViz,
        BadgeViz,
        InfographicViz,
        GoalViz,
    ],
    Field(discriminator="kind"),
]

EMPTY_VIZ = {
    VisualizationKind.HEATMAP: HeatmapViz,
    VisualizationKind.RADAR: RadarViz,
    VisualizationKind.LINE: LineViz,
    VisualizationKind.BAR: BarViz,
    VisualizationKind.HIGHLIGHT: HighlightViz,
    VisualizationKind.BADGE: BadgeViz,
    VisualizationKind.INFOGRAPHIC: InfographicViz,
    VisualizationKind.GOAL: GoalViz,
}


def empty_viz(kind: VisualizationKind) -> VizData:
    """Empty visualization of the given kind, used by fallback payloads."""
    return EMPTY_VIZ[kind]()


class SceneInsight(CamelModel):
    """Human-readable findings plus the data behind them."""

    summary: str
    details: List[str] = Field(default_factory=list)
    action: str = ""
    metrics: List[SceneMetric] = Field(default_factory=list)
    viz_data: VizData


class ScenePayload(CamelModel):
    """What an analyzer returns for one scene."""

    scene_id: str
    visualization_kind: VisualizationKind
    insight: SceneInsight

    @property
    def is_fallback(self) -> bool:
        """True for no-data and error payloads, which carry no metrics."""
        return not self.insight.metrics


class SceneDescriptor(CamelModel):
    """Registry listing entry."""

    id: str
    label: str
    visualization_kind: VisualizationKind


class SceneContext(BaseModel):
    """Analyzer input: whose matches, and which ones."""

    puuid: str
    match_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
