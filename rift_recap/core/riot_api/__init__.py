"""Riot API client package."""

from .client import RiotAPIClient
from .constants import Platform, Region, RankedQueue, Tier
from .errors import (
    RiotAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    MalformedResponseError,
    NotFoundError,
    ServiceUnavailableError,
    BadRequestError,
)
from .models import LeagueEntryDTO, MatchDTO, ParticipantDTO

__all__ = [
    "RiotAPIClient",
    "Platform",
    "Region",
    "RankedQueue",
    "Tier",
    "RiotAPIError",
    "RateLimitError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ServiceUnavailableError",
    "BadRequestError",
    "MalformedResponseError",
    "LeagueEntryDTO",
    "MatchDTO",
    "ParticipantDTO",
]
