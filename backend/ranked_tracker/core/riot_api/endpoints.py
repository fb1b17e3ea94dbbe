"""Riot API endpoint definitions and routing information."""

from typing import Optional
from urllib.parse import quote

from .constants import Region, Platform


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(
        self, region: Region = Region.EUROPE, platform: Platform = Platform.EUW1
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

    # Account endpoints (Regional)
    def account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[Region] = None
    ) -> str:
        """Get account by Riot ID endpoint."""
        base_url = self.get_base_url(region)
        return f"{base_url}/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"

    def account_by_puuid(self, puuid: str, region: Optional[Region] = None) -> str:
        """Get account by PUUID endpoint."""
        base_url = self.get_base_url(region)
        return f"{base_url}/riot/account/v1/accounts/by-puuid/{puuid}"

    # Summoner endpoints (Platform)
    def summoner_by_puuid(self, puuid: str, platform: Optional[Platform] = None) -> str:
        """Get summoner by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return f"{platform_url}/lol/summoner/v4/summoners/by-puuid/{puuid}"

    # League endpoints (Platform)
    def league_entries_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> str:
        """Get league entries by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return f"{platform_url}/lol/league/v4/entries/by-puuid/{puuid}"

    # Spectator endpoints (Platform)
    def active_game_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> str:
        """Get current game by PUUID endpoint (404 when not in game)."""
        platform_url = self.get_platform_url(platform)
        return f"{platform_url}/lol/spectator/v5/active-games/by-summoner/{puuid}"

    # Match endpoints (Regional)
    def match_ids_by_puuid(self, puuid: str, region: Optional[Region] = None) -> str:
        """Get match id list endpoint; filters are passed as query params."""
        base_url = self.get_base_url(region)
        return f"{base_url}/lol/match/v5/matches/by-puuid/{puuid}/ids"

    def match_by_id(self, match_id: str, region: Optional[Region] = None) -> str:
        """Get match by ID endpoint."""
        base_url = self.get_base_url(region)
        return f"{base_url}/lol/match/v5/matches/{match_id}"
