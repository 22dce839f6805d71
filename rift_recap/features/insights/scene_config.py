"""
Fixed rating thresholds for the scene analyzers.

Tables are ordered from the highest bar to the lowest; the first entry
whose minimum is met wins. Tunable heuristics (death timers, gank share,
LP estimates) live in Settings instead.
"""

from typing import Dict, List, Tuple

import structlog

logger = structlog.get_logger(__name__)

RatingTable = List[Tuple[float, str]]

# Duo partner tiers by games played together (inclusive)
ALLY_TIERS: RatingTable = [
    (50, "Inseparable Duo"),
    (20, "Trusted Partner"),
    (10, "Regular Duo"),
    (5, "Frequent Ally"),
    (0, "Acquaintance"),
]

# Average vision score per game
VISION_RATINGS: RatingTable = [
    (60, "Vision Master"),
    (40, "Vision Expert"),
    (25, "Vision Aware"),
    (0, "Vision Learning"),
]

# Longest killing spree
SPREE_RATINGS: RatingTable = [
    (20, "Legendary"),
    (15, "Godlike"),
    (10, "Dominating"),
    (7, "Killing Spree"),
    (5, "Rampage"),
    (0, "Getting Started"),
]

# Objective participation, percent of games (barons + dragons + elders per game)
OBJECTIVE_RATINGS: RatingTable = [
    (300, "Legendary Slayer"),
    (200, "Dragon Master"),
    (150, "Objective Hunter"),
    (100, "Baron Slayer"),
    (50, "Objective Aware"),
    (0, "Objective Learner"),
]

# Skillshots hit per game
SNIPER_RATINGS: RatingTable = [
    (50, "Legendary Sniper"),
    (35, "Elite Marksman"),
    (25, "Sharpshooter"),
    (15, "Skilled Aimer"),
    (10, "Accuracy Builder"),
    (0, "Developing"),
]

# Skillshots dodged per game
DODGE_RATINGS: RatingTable = [
    (45, "Untouchable"),
    (30, "Matrix Dodger"),
    (20, "Nimble Dancer"),
    (12, "Quick Reflexes"),
    (5, "Evasive"),
    (0, "Developing"),
]

# Multikill rating, checked in order: (stat, minimum, label)
MULTIKILL_RATINGS: List[Tuple[str, int, str]] = [
    ("penta", 5, "Pentakill Legend"),
    ("penta", 3, "Elite Slayer"),
    ("penta", 1, "Pentakill Achiever"),
    ("quadra", 10, "Quadra Master"),
    ("quadra", 5, "Multikill Hunter"),
    ("triple", 20, "Triple Threat"),
    ("triple", 10, "Skilled Eliminator"),
]
MULTIKILL_DEFAULT = "Warming Up"

# Strict thresholds (value must exceed the minimum)
TANK_LEVELS: RatingTable = [
    (25000, "High"),
    (20000, "Medium"),
]
TANK_DEFAULT = "Low"

HEALER_ROLES: RatingTable = [
    (30, "Team Healer"),
    (10, "Hybrid Healer"),
]
HEALER_DEFAULT = "Self-Sustain"

FARMING_LEVELS: RatingTable = [
    (400, "Excellent"),
    (350, "Good"),
    (300, "Average"),
]
FARMING_DEFAULT = "Needs Improvement"

# Damage benchmarks (average damage to champions per game)
DAMAGE_BENCHMARKS: Dict[str, float] = {
    "dps": 25000,
    "carry": 30000,
    "support": 15000,
}

# Damage taken benchmarks (average per game)
TANK_BENCHMARKS: Dict[str, float] = {
    "tank": 30000,
    "fighter": 22000,
    "assassin": 15000,
}

# Per-category benchmarks used to score weaknesses on a 0..100 scale
WEAKNESS_BENCHMARKS: Dict[str, float] = {
    "deaths_per_game": 5.0,  # at or below this scores 100
    "time_dead_pct": 10.0,  # percent of game spent dead
    "vision_per_minute": 1.0,
    "cs_per_minute": 7.0,
    "late_game_win_rate": 50.0,
}

POSITION_NAMES: Dict[str, str] = {
    "TOP": "Top Lane",
    "JUNGLE": "Jungle",
    "MIDDLE": "Mid Lane",
    "BOTTOM": "Bot Lane (ADC)",
    "UTILITY": "Support",
}

LATE_GAME_MINUTES = 30
MIN_GAMES_FOR_POSITION_WIN_RATE = 3
MAX_RECENT_SHARED_GAMES = 5
DRAGON_SOUL_MIN_DRAGONS = 4

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def rate(value: float, table: RatingTable) -> str:
    """Label of the first inclusive threshold ``value`` meets."""
    for minimum, label in table:
        if value >= minimum:
            return label
    return table[-1][1]


def rate_strict(value: float, table: RatingTable, default: str) -> str:
    """Label of the first threshold ``value`` exceeds, else ``default``."""
    for minimum, label in table:
        if value > minimum:
            return label
    return default


def validate_configuration() -> None:
    """
    Validate rating tables are ordered from highest to lowest.

    Raises:
        ValueError: If a table is out of order
    """
    tables = {
        "ALLY_TIERS": ALLY_TIERS,
        "VISION_RATINGS": VISION_RATINGS,
        "SPREE_RATINGS": SPREE_RATINGS,
        "OBJECTIVE_RATINGS": OBJECTIVE_RATINGS,
        "SNIPER_RATINGS": SNIPER_RATINGS,
        "DODGE_RATINGS": DODGE_RATINGS,
        "TANK_LEVELS": TANK_LEVELS,
        "HEALER_ROLES": HEALER_ROLES,
        "FARMING_LEVELS": FARMING_LEVELS,
    }
    for name, table in tables.items():
        minimums = [minimum for minimum, _ in table]
        if minimums != sorted(minimums, reverse=True):
            raise ValueError(f"{name} must be ordered from highest to lowest")

    logger.debug("Scene configuration validated", tables=len(tables))
