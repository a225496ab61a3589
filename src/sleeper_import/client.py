"""Async client for the public Sleeper REST API.

Season-specific endpoints (a user's leagues) take the season in the URL.
Live endpoints (players, trending adds, league rosters) always reflect the
current NFL season.
"""

import logging
from typing import Dict, List, Optional

import httpx

from src.sleeper_import.config import (
    CURRENT_NFL_SEASON,
    DEFAULT_TRENDING_LIMIT,
    SLEEPER_BASE_URL,
)
from src.sleeper_import.errors import SleeperAPIError, UserNotFoundError

logger = logging.getLogger(__name__)


class SleeperClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    No timeout or retry is applied: a failed call raises once and is left to
    the caller to re-trigger.

    Usage::

        async with SleeperClient() as client:
            user = await client.get_user("someone")
    """

    def __init__(
        self,
        base_url: str = SLEEPER_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "SleeperClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, what: str, params: Optional[Dict] = None):
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("Error fetching %s: %s", what, e)
            raise SleeperAPIError(f"Failed to fetch {what}: {e}") from e

        if not response.is_success:
            logger.error("Error fetching %s: HTTP %d", what, response.status_code)
            raise SleeperAPIError(
                f"Failed to fetch {what}: {response.reason_phrase or response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SleeperAPIError(f"Invalid JSON for {what}: {e}") from e

    # ------------------------------------------------------------------
    # Players (live data)
    # ------------------------------------------------------------------
    async def get_all_players(self) -> Dict[str, Dict]:
        """Every NFL player keyed by Sleeper player id."""
        players = await self._get_json("/players/nfl", "players")
        return players or {}

    async def get_trending_adds(self, limit: int = DEFAULT_TRENDING_LIMIT) -> List[Dict]:
        """Players most added across leagues: ``[{"player_id", "count"}, ...]``."""
        trending = await self._get_json(
            "/players/nfl/trending/add", "trending adds", params={"limit": limit}
        )
        return trending or []

    # ------------------------------------------------------------------
    # Users and leagues
    # ------------------------------------------------------------------
    async def get_user(self, username: str) -> Dict:
        """Resolve a username to its user record.

        Raises:
            UserNotFoundError: on 404 or an empty body.
        """
        try:
            user = await self._get_json(f"/user/{username}", "user")
        except SleeperAPIError as e:
            if e.status_code == 404:
                raise UserNotFoundError(
                    f'Username "{username}" not found on Sleeper', status_code=404
                ) from e
            raise

        if not isinstance(user, dict) or not user.get("user_id"):
            raise UserNotFoundError(f'Username "{username}" not found on Sleeper')
        return user

    async def get_user_leagues(
        self, user_id: str, season: Optional[str] = None
    ) -> List[Dict]:
        """League summaries for ``user_id`` in ``season`` (default: current)."""
        target_season = season or CURRENT_NFL_SEASON
        leagues = await self._get_json(
            f"/user/{user_id}/leagues/nfl/{target_season}", "user leagues"
        )
        return leagues or []

    async def get_league(self, league_id: str) -> Dict:
        return await self._get_json(f"/league/{league_id}", "league details")

    async def get_league_rosters(self, league_id: str) -> List[Dict]:
        rosters = await self._get_json(f"/league/{league_id}/rosters", "league rosters")
        return rosters or []

    async def get_league_users(self, league_id: str) -> List[Dict]:
        users = await self._get_json(f"/league/{league_id}/users", "league users")
        return users or []
