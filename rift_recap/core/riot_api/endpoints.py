"""Riot API endpoint definitions and routing information."""

from typing import Optional

from .constants import Region, Platform


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(
        self, region: Region = Region.AMERICAS, platform: Platform = Platform.NA1
    ):
        """
        Initialize endpoint configuration.

        Args:
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
        """
        self.region = region
        self.platform = platform

    def get_base_url(self, region: Optional[Region] = None) -> str:
        """Get base URL for regional endpoints."""
        region = region or self.region
        region_str = region.value if isinstance(region, Region) else region
        return f"https://{region_str}.api.riotgames.com"

    def get_platform_url(self, platform: Optional[Platform] = None) -> str:
        """Get base URL for platform endpoints."""
        platform = platform or self.platform
        platform_str = platform.value if isinstance(platform, Platform) else platform
        return f"https://{platform_str}.api.riotgames.com"

    # Match endpoints (Regional)
    def match_by_id(self, match_id: str, region: Optional[Region] = None) -> str:
        """Get match details endpoint."""
        base_url = self.get_base_url(region)
        return f"{base_url}/lol/match/v5/matches/{match_id}"

    # League endpoints (Platform)
    def league_entries_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> str:
        """Get league entries by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return f"{platform_url}/lol/league/v4/entries/by-puuid/{puuid}"
