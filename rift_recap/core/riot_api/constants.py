"""Riot API constants and enum definitions."""

from enum import Enum


class Region(str, Enum):
    """Riot API regions for regional routing."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"


class RankedQueue(str, Enum):
    """League queue identifiers returned by league-v4."""

    SOLO = "RANKED_SOLO_5x5"
    FLEX = "RANKED_FLEX_SR"


class Tier(str, Enum):
    """Ranked tiers, lowest to highest."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def is_apex(self) -> bool:
        """Apex tiers have no divisions, only a league point ladder."""
        return self in (Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER)

    def next_tier(self) -> "Tier | None":
        """Return the tier above this one, or None at the top."""
        members = list(Tier)
        index = members.index(self)
        return members[index + 1] if index + 1 < len(members) else None


# Divisions ordered from lowest to highest
DIVISIONS = ["IV", "III", "II", "I"]

# Positions reported in teamPosition
POSITIONS = ["TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY"]
LANE_POSITIONS = ["TOP", "MIDDLE", "BOTTOM"]
