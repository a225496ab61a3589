"""Import a Sleeper user's leagues into imported-league records.

Leagues are processed one at a time; each league's rosters and members are
fetched concurrently. A league that fails is logged and skipped so one bad
league never sinks the whole import.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from src.roster_manager.roster_state import ImportedLeague
from src.sleeper_import.client import SleeperClient
from src.sleeper_import.config import CURRENT_NFL_SEASON
from src.sleeper_import.errors import SleeperAPIError
from src.sleeper_import.roster_mapping import convert_roster_to_positions

logger = logging.getLogger(__name__)


def resolve_team_name(users: List[Dict], user_id: str, username: str) -> str:
    """Team name from league metadata, then display name, then username."""
    for user in users:
        if user.get("user_id") == user_id:
            metadata = user.get("metadata") or {}
            return metadata.get("team_name") or user.get("display_name") or username
    return username


def find_user_roster(rosters: List[Dict], user_id: str) -> Optional[Dict]:
    for roster in rosters:
        if roster.get("owner_id") == user_id:
            return roster
    return None


class LeagueImporter:
    """Builds ``ImportedLeague`` records for every league a user belongs to."""

    def __init__(self, client: SleeperClient):
        self.client = client
        self._players: Optional[Dict[str, Dict]] = None

    async def _player_directory(self) -> Dict[str, Dict]:
        # Fetched at most once per import; a failure is retried by the next league.
        if self._players is None:
            self._players = await self.client.get_all_players()
        return self._players

    async def import_user_leagues(
        self, username: str, season: Optional[str] = None
    ) -> List[ImportedLeague]:
        """Import all of ``username``'s leagues for ``season``.

        Returns:
            One record per league where the user's roster was found. May be
            empty.

        Raises:
            UserNotFoundError: if the username does not resolve.
            SleeperAPIError: if the league list cannot be fetched.
        """
        self._players = None
        user = await self.client.get_user(username)
        user_id = user["user_id"]

        target_season = season or CURRENT_NFL_SEASON
        leagues = await self.client.get_user_leagues(user_id, target_season)
        logger.info(
            "Found %d leagues for %s in %s season", len(leagues), username, target_season
        )

        processed = []
        for league in leagues:
            league_name = (
                league.get("name", league.get("league_id"))
                if isinstance(league, dict)
                else league
            )
            try:
                record = await self._process_league(league, user_id, username)
            except (SleeperAPIError, AttributeError, KeyError, TypeError, ValueError) as e:
                logger.error("Error processing league %s: %s", league_name, e)
                continue

            if record is None:
                logger.warning("User %s not found in league %s", username, league_name)
                continue

            processed.append(record)

        logger.info("Imported %d of %d leagues for %s", len(processed), len(leagues), username)
        return processed

    async def _process_league(
        self, league: Dict, user_id: str, username: str
    ) -> Optional[ImportedLeague]:
        league_id = str(league["league_id"])

        rosters, users = await asyncio.gather(
            self.client.get_league_rosters(league_id),
            self.client.get_league_users(league_id),
        )

        user_roster = find_user_roster(rosters, user_id)
        if user_roster is None:
            return None

        players = await self._player_directory()
        roster = convert_roster_to_positions(user_roster.get("players") or [], players)

        return ImportedLeague(
            league_id=league_id,
            name=league.get("name", ""),
            team_name=resolve_team_name(users, user_id, username),
            roster=roster,
            settings=league.get("settings") or {},
            scoring_settings=league.get("scoring_settings") or {},
            season=str(league.get("season", "")),
            total_teams=league.get("total_rosters") or 0,
            user_roster_id=user_roster.get("roster_id"),
        )
