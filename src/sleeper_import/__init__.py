from src.sleeper_import.client import SleeperClient
from src.sleeper_import.errors import SleeperAPIError, UserNotFoundError
from src.sleeper_import.importer import LeagueImporter
from src.sleeper_import.player_directory import (
    InjuryData,
    PlayerDirectory,
    PlayerSearchOptions,
    SearchablePlayer,
    TrendingPlayer,
)
from src.sleeper_import.seasons import SeasonTransitionInfo, get_season_transition_info

__all__ = [
    "InjuryData",
    "LeagueImporter",
    "PlayerDirectory",
    "PlayerSearchOptions",
    "SearchablePlayer",
    "SeasonTransitionInfo",
    "SleeperAPIError",
    "SleeperClient",
    "TrendingPlayer",
    "UserNotFoundError",
    "get_season_transition_info",
]
