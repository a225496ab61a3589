from src.roster_manager.errors import (
    NoLeaguesFoundError,
    RosterManagerError,
    StorageUnavailableError,
    StorageWriteError,
)
from src.roster_manager.roster_rules import RosterChangeResult, RosterRules
from src.roster_manager.roster_state import (
    CurrentLeague,
    ImportedLeague,
    ManualRoster,
    PositionLimit,
    RosterLimits,
    UserData,
)
from src.roster_manager.roster_validator import RosterValidation, RosterValidator
from src.roster_manager.state_persistence import OperationResult, UserDataStore
from src.roster_manager.storage import FileStorageBackend, InMemoryStorageBackend

__all__ = [
    "CurrentLeague",
    "FileStorageBackend",
    "ImportedLeague",
    "InMemoryStorageBackend",
    "ManualRoster",
    "NoLeaguesFoundError",
    "OperationResult",
    "PositionLimit",
    "RosterChangeResult",
    "RosterLimits",
    "RosterManagerError",
    "RosterRules",
    "RosterValidation",
    "RosterValidator",
    "StorageUnavailableError",
    "StorageWriteError",
    "UserData",
    "UserDataStore",
]
