"""Path Forward scene: the closing card of the recap."""

from ..schemas import (
    HighlightStat,
    HighlightViz,
    SceneContext,
    SceneMetric,
    ScenePayload,
    VisualizationKind,
)
from .base_analyzer import BaseSceneAnalyzer


class PathForwardAnalyzer(BaseSceneAnalyzer):
    """Celebratory closing scene; counts the supplied match ids, fetches nothing."""

    scene_id = "path_forward"
    label = "Path Forward"
    visualization_kind = VisualizationKind.HIGHLIGHT
    subject = "your year"

    async def analyze(self, ctx: SceneContext) -> ScenePayload:
        games = len(ctx.match_ids)
        season = self.settings.season
        next_season = int(season) + 1 if season.isdigit() else "next season"

        return self._create_payload(
            summary=(
                f"What a year it's been! You've played {games} games, created countless "
                "memories and left your mark on the Rift."
            ),
            details=[
                "Thank you for being part of the League of Legends community.",
                f"Your journey through {season} has been remarkable.",
                "Every game is a new opportunity to grow and improve.",
                "See you on the Rift, Summoner!",
            ],
            action="Here's to an even better year ahead. Keep climbing and keep having fun!",
            metrics=[
                SceneMetric(label="Total Games", value=games, context=f"in {season}"),
                SceneMetric(label="Your Journey", value="Continues", context=f"into {next_season}"),
            ],
            viz_data=HighlightViz(
                main_stat=HighlightStat(label=f"{season} Complete", value=games, unit="games"),
                stats=[
                    HighlightStat(label="Games Played", value=games),
                    HighlightStat(label="Status", value="Champion"),
                    HighlightStat(label="Next Stop", value=str(next_season)),
                ],
            ),
        )
