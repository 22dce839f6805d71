"""
Scene analyzers.

One module per recap scene. Match-based scenes fold over the player's
match records; ranked_stats reads league standings and path_forward only
counts the supplied ids.
"""

from .base_analyzer import BaseSceneAnalyzer, Coverage, MatchFoldAnalyzer
from .year_in_motion import YearInMotionAnalyzer
from .signature_champion import SignatureChampionAnalyzer
from .damage_share import DamageShareAnalyzer
from .damage_taken import DamageTakenAnalyzer
from .total_healed import TotalHealedAnalyzer
from .gold_share import GoldShareAnalyzer
from .signature_position import SignaturePositionAnalyzer
from .growth_over_time import GrowthOverTimeAnalyzer
from .vision_score import VisionScoreAnalyzer
from .weaknesses import WeaknessesAnalyzer
from .best_friend import BestFriendAnalyzer
from .aram import AramAnalyzer
from .ranked_stats import RankedLookup, RankedStatsAnalyzer
from .killing_spree import KillingSpreeAnalyzer
from .dragon_slayer import DragonSlayerAnalyzer
from .sniper import SniperAnalyzer
from .fancy_feet import FancyFeetAnalyzer
from .path_forward import PathForwardAnalyzer

__all__ = [
    "BaseSceneAnalyzer",
    "Coverage",
    "MatchFoldAnalyzer",
    "YearInMotionAnalyzer",
    "SignatureChampionAnalyzer",
    "DamageShareAnalyzer",
    "DamageTakenAnalyzer",
    "TotalHealedAnalyzer",
    "GoldShareAnalyzer",
    "SignaturePositionAnalyzer",
    "GrowthOverTimeAnalyzer",
    "VisionScoreAnalyzer",
    "WeaknessesAnalyzer",
    "BestFriendAnalyzer",
    "AramAnalyzer",
    "RankedLookup",
    "RankedStatsAnalyzer",
    "KillingSpreeAnalyzer",
    "DragonSlayerAnalyzer",
    "SniperAnalyzer",
    "FancyFeetAnalyzer",
    "PathForwardAnalyzer",
]
