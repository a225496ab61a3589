"""Import a Sleeper user's leagues into local storage from the command line.

Usage:
    python -m src.sleeper_import.run_import <username> [season] [storage_dir]
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.logging_config import setup_logging
from src.roster_manager.errors import RosterManagerError
from src.roster_manager.league_controller import LeagueController
from src.roster_manager.roster_state import ImportedLeague, all_roster_players
from src.roster_manager.state_persistence import UserDataStore
from src.roster_manager.storage import FileStorageBackend
from src.sleeper_import.config import CURRENT_NFL_SEASON
from src.sleeper_import.errors import SleeperAPIError

logger = logging.getLogger(__name__)


def run_import(
    username: str,
    season: str = CURRENT_NFL_SEASON,
    storage_dir: Optional[Path] = None,
) -> List[ImportedLeague]:
    """Import ``username``'s leagues for ``season`` into a file-backed store.

    Raises:
        SleeperAPIError: if Sleeper cannot be reached or the user is unknown.
        RosterManagerError: if no leagues were found or saving failed.
    """
    store = UserDataStore(FileStorageBackend(storage_dir))
    controller = LeagueController(store=store)

    logger.info("Importing Sleeper leagues for %s (%s season)", username, season)
    leagues = asyncio.run(controller.import_from_sleeper(username, season))

    for league in leagues:
        logger.info(
            "  %s - %s (%d players)",
            league.name,
            league.team_name,
            len(all_roster_players(league.roster)),
        )
    if controller.current_league is not None:
        logger.info("Current league: %s", controller.current_league.name)

    return leagues


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__.strip())
        sys.exit(2)

    username = sys.argv[1]
    season = sys.argv[2] if len(sys.argv) > 2 else CURRENT_NFL_SEASON
    storage_dir = Path(sys.argv[3]) if len(sys.argv) > 3 else None

    try:
        imported = run_import(username, season, storage_dir)
        print(f"Imported {len(imported)} leagues for {username}")
    except (SleeperAPIError, RosterManagerError):
        logger.exception("Import failed")
        sys.exit(1)
