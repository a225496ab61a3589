from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Persisted user data
USER_DATA_DIR = PROJECT_ROOT / "data" / "user"
STORAGE_KEY = "user-data"
SCHEMA_VERSION = "1.0"

# Closed set of roster position buckets, in display/scan order
POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF")

# Default roster limits: position -> (min, max)
DEFAULT_ROSTER_LIMITS = {
    "QB": (1, 4),
    "RB": (2, 8),
    "WR": (2, 8),
    "TE": (1, 4),
    "K": (1, 2),
    "DEF": (1, 2),
}
DEFAULT_TOTAL_MAX = 16

# Rosters smaller than this get a "fill out your roster" warning
MIN_RECOMMENDED_ROSTER_SIZE = 10

# Starter + depth counts offered to new users
SUGGESTED_ROSTER_COMPOSITION = {
    "QB": 2,
    "RB": 4,
    "WR": 4,
    "TE": 2,
    "K": 1,
    "DEF": 1,
}

# How long a league switch is reported as in progress
SWITCH_SETTLE_SECONDS = 0.3

# Legacy flat-roster migration
LEGACY_ROSTER_ID = "legacy-roster"
LEGACY_ROSTER_NAME = "Imported Roster"
DEFAULT_TEAM_NAME = "My Team"

SOURCE_MANUAL = "manual"
SOURCE_SLEEPER = "sleeper"
