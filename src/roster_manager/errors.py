"""Error taxonomy for roster management.

Storage problems are raised as exceptions. Roster edits report failures as
result values carrying one of the string codes below.
"""

# Result codes for roster edits
DUPLICATE_PLAYER = "duplicate_player"
POSITION_FULL = "position_full"
ROSTER_FULL = "roster_full"
PLAYER_NOT_FOUND = "player_not_found"
MINIMUM_VIOLATION = "minimum_violation"
NOT_MANUAL_ROSTER = "not_manual_roster"
ROSTER_NOT_FOUND = "roster_not_found"
VALIDATION_FAILED = "validation_failed"


class RosterManagerError(Exception):
    """Base class for roster manager failures."""


class StorageUnavailableError(RosterManagerError):
    """Raised when the storage backend cannot be used."""


class StorageWriteError(RosterManagerError):
    """Raised when the user data document cannot be written."""


class NoLeaguesFoundError(RosterManagerError):
    """Raised when an import yields no leagues for the user."""
