"""State persistence - the versioned user data document and its accessors.

Every operation is a whole-document read-modify-write against the storage
backend: load, change, save. There is no locking; the last writer wins.
"""

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from src.roster_manager.config import SCHEMA_VERSION, STORAGE_KEY
from src.roster_manager.errors import (
    NOT_MANUAL_ROSTER,
    ROSTER_NOT_FOUND,
    VALIDATION_FAILED,
    StorageUnavailableError,
)
from src.roster_manager.migrations import migrate_user_data
from src.roster_manager.roster_rules import RosterRules
from src.roster_manager.roster_state import (
    CurrentLeague,
    ImportedLeague,
    ManualRoster,
    Roster,
    RosterLimits,
    UserData,
    copy_roster,
    normalize_roster,
    utc_now,
)
from src.roster_manager.roster_validator import RosterValidation, RosterValidator
from src.roster_manager.storage import FileStorageBackend

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Outcome of a store-level roster edit."""

    success: bool
    error: Optional[str] = None
    code: Optional[str] = None
    validation: Optional[RosterValidation] = None


class UserDataStore:
    """Loads and saves the user data document through a storage backend."""

    def __init__(self, backend=None, storage_key: str = STORAGE_KEY):
        self.backend = backend if backend is not None else FileStorageBackend()
        self.storage_key = storage_key

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------
    def load(self) -> UserData:
        """Load the stored document.

        Absent, unavailable, or corrupt storage yields a fresh empty document.
        Documents from another schema version are migrated.
        """
        if not self.backend.is_available():
            logger.warning("Storage unavailable; using empty user data")
            return UserData.create_default()

        try:
            stored = self.backend.read(self.storage_key)
        except (OSError, UnicodeDecodeError, StorageUnavailableError) as e:
            logger.warning("Could not read user data: %s", e)
            return UserData.create_default()

        if not stored:
            return UserData.create_default()

        try:
            raw = json.loads(stored)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt user data document: %s", e)
            return UserData.create_default()

        if not isinstance(raw, dict):
            logger.warning("User data document is not an object; ignoring it")
            return UserData.create_default()

        if raw.get("version") != SCHEMA_VERSION:
            logger.info(
                "Migrating user data from version %r to %s",
                raw.get("version"),
                SCHEMA_VERSION,
            )
            return self.migrate(raw)

        try:
            return UserData.from_dict(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Malformed user data document: %s", e)
            return UserData.create_default()

    def save(self, data: UserData) -> None:
        """Stamp version and timestamp, then write the whole document.

        Raises:
            StorageUnavailableError: if the backend cannot be used.
            StorageWriteError: if the write fails.
        """
        if not self.backend.is_available():
            raise StorageUnavailableError("Cannot save user data: storage unavailable")

        data.last_updated = utc_now()
        data.version = SCHEMA_VERSION
        self.backend.write(self.storage_key, json.dumps(data.to_dict(), indent=2))

    @staticmethod
    def migrate(raw) -> UserData:
        """Convert an older stored document to the current schema."""
        return migrate_user_data(raw)

    def clear_all_data(self) -> None:
        """Delete the stored document entirely."""
        if not self.backend.is_available():
            logger.warning("Cannot clear user data: storage unavailable")
            return
        self.backend.delete(self.storage_key)
        logger.info("Cleared all user data")

    # ------------------------------------------------------------------
    # Record management
    # ------------------------------------------------------------------
    def save_sleeper_leagues(self, leagues: List[ImportedLeague], username: str) -> None:
        """Replace the stored Sleeper leagues with a fresh import.

        Manual rosters are untouched. The current pointer is only set when
        nothing is selected yet, so a pointer at a league that is no longer
        stored resolves to None on read.

        Args:
            leagues: Every league from the latest import.
            username: The Sleeper username the leagues were imported for.
        """
        data = self.load()

        data.leagues = list(leagues)
        data.sleeper_username = username

        if not data.current_league_id and leagues:
            data.current_league_id = leagues[0].league_id

        self.save(data)
        logger.info("Saved %d Sleeper leagues for %s", len(leagues), username)

    def save_manual_roster(self, record: ManualRoster) -> None:
        """Insert or update a manual roster by id.

        An update keeps the stored ``created_at``. The record becomes current
        only when nothing is selected yet.

        Args:
            record: The manual roster to store. Its roster is copied.

        Raises:
            StorageUnavailableError: if the backend cannot be used.
            StorageWriteError: if the write fails.
        """
        data = self.load()
        now = utc_now()

        existing = data.find_manual_roster(record.id)
        if existing is not None:
            index = data.manual_rosters.index(existing)
            data.manual_rosters[index] = ManualRoster(
                id=record.id,
                name=record.name,
                team_name=record.team_name,
                roster=copy_roster(record.roster),
                created_at=existing.created_at,
                updated_at=now,
            )
        else:
            data.manual_rosters.append(
                ManualRoster(
                    id=record.id,
                    name=record.name,
                    team_name=record.team_name,
                    roster=copy_roster(record.roster),
                    created_at=now,
                    updated_at=now,
                )
            )

        if not data.current_league_id:
            data.current_league_id = record.id

        self.save(data)
        logger.info("Saved manual roster %s (%s)", record.id, record.name)

    def get_current_league(self) -> Optional[CurrentLeague]:
        """Resolve the current pointer; None if unset or dangling."""
        data = self.load()
        return self._resolve_current(data)

    @staticmethod
    def _resolve_current(data: UserData) -> Optional[CurrentLeague]:
        if not data.current_league_id:
            return None

        league = data.find_league(data.current_league_id)
        if league is not None:
            return CurrentLeague.from_league(league)

        manual = data.find_manual_roster(data.current_league_id)
        if manual is not None:
            return CurrentLeague.from_manual(manual)

        return None

    def set_current_league(self, league_id: str) -> None:
        """Point at ``league_id``. Existence is only checked on read."""
        data = self.load()
        data.current_league_id = league_id
        self.save(data)
        logger.info("Current league set to %s", league_id)

    def get_all_available_leagues(self) -> List[CurrentLeague]:
        """All records: imported leagues first, then manual rosters."""
        data = self.load()
        views = [CurrentLeague.from_league(league) for league in data.leagues]
        views.extend(CurrentLeague.from_manual(manual) for manual in data.manual_rosters)
        return views

    def delete_league(self, league_id: str) -> None:
        """Remove a record and, if it was current, pick the first remaining one."""
        data = self.load()

        data.leagues = [league for league in data.leagues if league.league_id != league_id]
        data.manual_rosters = [m for m in data.manual_rosters if m.id != league_id]

        if data.current_league_id == league_id:
            data.current_league_id = None
            remaining = data.all_record_ids()
            if remaining:
                data.current_league_id = remaining[0]

        self.save(data)
        logger.info("Deleted league %s (current now %s)", league_id, data.current_league_id)

    def has_any_leagues(self) -> bool:
        data = self.load()
        return len(data.leagues) > 0 or len(data.manual_rosters) > 0

    # ------------------------------------------------------------------
    # Current manual roster editing
    # ------------------------------------------------------------------
    def _current_manual_roster(self, data: UserData, action: str):
        current = self._resolve_current(data)
        if current is None or not current.is_manual:
            return None, OperationResult(
                success=False,
                error=(
                    "No manual roster selected. "
                    f"Please select a manual roster to {action} players."
                ),
                code=NOT_MANUAL_ROSTER,
            )
        return data.find_manual_roster(current.id), None

    def add_player_to_current_roster(
        self, name: str, position: str, limits: Optional[RosterLimits] = None
    ) -> OperationResult:
        """Add a player to the current manual roster.

        Args:
            name: Player display name.
            position: Bucket to add the player to.
            limits: Limits to enforce; defaults to the standard table.

        Returns:
            :class:`OperationResult`. ``code`` is ``NOT_MANUAL_ROSTER`` when
            the current selection is missing or imported. Otherwise it is the
            rule code from :meth:`RosterRules.add_player`.
        """
        data = self.load()
        manual, failure = self._current_manual_roster(data, "add")
        if failure:
            return failure

        result = RosterRules(limits).add_player(manual.roster, name, position)
        if result.success:
            manual.roster = result.roster
            manual.updated_at = utc_now()
            self.save(data)
            logger.info("Added %s to %s on roster %s", name, position, manual.id)

        return OperationResult(success=result.success, error=result.error, code=result.code)

    def remove_player_from_current_roster(
        self, name: str, limits: Optional[RosterLimits] = None
    ) -> OperationResult:
        """Remove a player from the current manual roster."""
        data = self.load()
        manual, failure = self._current_manual_roster(data, "remove")
        if failure:
            return failure

        result = RosterRules(limits).remove_player(manual.roster, name)
        if result.success:
            manual.roster = result.roster
            manual.updated_at = utc_now()
            self.save(data)
            logger.info("Removed %s from roster %s", name, manual.id)

        return OperationResult(success=result.success, error=result.error, code=result.code)

    def update_manual_roster(
        self, roster_id: str, roster: Roster, limits: Optional[RosterLimits] = None
    ) -> OperationResult:
        """Replace a manual roster's buckets wholesale, if the result validates.

        Args:
            roster_id: Id of the manual roster to replace.
            roster: New position buckets; normalized before validation.
            limits: Limits to validate against.

        Returns:
            :class:`OperationResult` with ``validation`` attached whenever
            validation ran. Nothing is saved on failure.
        """
        data = self.load()
        manual = data.find_manual_roster(roster_id)
        if manual is None:
            return OperationResult(
                success=False, error="Manual roster not found", code=ROSTER_NOT_FOUND
            )

        new_roster = normalize_roster(roster)
        validation = RosterValidator(limits).validate_roster(new_roster)
        if not validation.valid:
            return OperationResult(
                success=False,
                error=f"Roster validation failed: {', '.join(validation.errors)}",
                code=VALIDATION_FAILED,
                validation=validation,
            )

        manual.roster = new_roster
        manual.updated_at = utc_now()
        self.save(data)
        return OperationResult(success=True, validation=validation)

    def validate_current_roster(
        self, limits: Optional[RosterLimits] = None
    ) -> Optional[RosterValidation]:
        """Validate whichever roster is current; None if nothing is selected."""
        current = self.get_current_league()
        if current is None:
            return None
        return RosterValidator(limits).validate_roster(current.roster)
