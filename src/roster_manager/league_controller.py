"""League controller - selection state machine over the user data store."""

import logging
import time
from typing import List, Optional

from src.roster_manager.config import SWITCH_SETTLE_SECONDS
from src.roster_manager.errors import NoLeaguesFoundError, RosterManagerError
from src.roster_manager.roster_state import (
    CurrentLeague,
    ImportedLeague,
    ManualRoster,
    empty_roster,
)
from src.roster_manager.roster_validator import RosterValidation
from src.roster_manager.state_persistence import OperationResult, UserDataStore
from src.sleeper_import.client import SleeperClient
from src.sleeper_import.config import CURRENT_NFL_SEASON
from src.sleeper_import.errors import SleeperAPIError
from src.sleeper_import.importer import LeagueImporter

logger = logging.getLogger(__name__)


class SelectionState:
    """Selection states reported by ``LeagueController.state``."""

    NO_LEAGUE_SELECTED = "no_league_selected"
    LEAGUE_SELECTED = "league_selected"
    SWITCHING = "switching"
    IMPORTING = "importing"


class LeagueController:
    """Tracks which roster is current and exposes every mutation to the UI.

    The store is the single source of truth: after each mutation the view
    attributes (``current_league``, ``all_leagues``, ``has_leagues``) are
    re-derived from a fresh load rather than patched in place.
    """

    def __init__(
        self,
        store: Optional[UserDataStore] = None,
        importer: Optional[LeagueImporter] = None,
        settle_seconds: float = SWITCH_SETTLE_SECONDS,
    ):
        self.store = store or UserDataStore()
        self.importer = importer
        self.settle_seconds = settle_seconds

        self.current_league: Optional[CurrentLeague] = None
        self.all_leagues: List[CurrentLeague] = []
        self.has_leagues = False
        self.error: Optional[str] = None
        self.loading = False
        self._switch_settles_at = 0.0

        self.refresh()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def switching(self) -> bool:
        """Whether a league switch is still settling."""
        return time.monotonic() < self._switch_settles_at

    @property
    def state(self) -> str:
        if self.loading:
            return SelectionState.IMPORTING
        if self.switching:
            return SelectionState.SWITCHING
        if self.current_league is None:
            return SelectionState.NO_LEAGUE_SELECTED
        return SelectionState.LEAGUE_SELECTED

    def refresh(self) -> None:
        """Re-derive the view from storage."""
        try:
            self.current_league = self.store.get_current_league()
            self.all_leagues = self.store.get_all_available_leagues()
            self.has_leagues = self.store.has_any_leagues()
        except RosterManagerError as e:
            logger.error("Error loading user data: %s", e)
            self.error = "Failed to load user data"

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    async def import_from_sleeper(
        self, username: str, season: str = CURRENT_NFL_SEASON
    ) -> List[ImportedLeague]:
        """Import every league ``username`` has in ``season``.

        Raises:
            UserNotFoundError: if Sleeper does not know the username.
            NoLeaguesFoundError: if no league could be imported. The store
                is left untouched.
            SleeperAPIError: on any other provider failure.
        """
        self.loading = True
        self.error = None
        try:
            if self.importer is not None:
                leagues = await self.importer.import_user_leagues(username, season)
            else:
                async with SleeperClient() as client:
                    leagues = await LeagueImporter(client).import_user_leagues(
                        username, season
                    )

            if not leagues:
                raise NoLeaguesFoundError(
                    f'No leagues found for username "{username}" in {season} season'
                )

            self.store.save_sleeper_leagues(leagues, username)
            self.refresh()
            logger.info("Imported %d leagues for %s (%s)", len(leagues), username, season)
            return leagues
        except (SleeperAPIError, RosterManagerError) as e:
            self.error = str(e) or "Failed to import leagues from Sleeper"
            raise
        except Exception as e:
            logger.error("Unexpected error importing leagues for %s: %s", username, e)
            self.error = str(e) or "Failed to import leagues from Sleeper"
            raise
        finally:
            self.loading = False

    def create_manual_roster(self, name: str, team_name: str) -> Optional[ManualRoster]:
        """Create an empty manual roster; it becomes current only if none is.

        Args:
            name: Roster name shown in the league switcher.
            team_name: Team name for the roster.

        Returns:
            The new :class:`ManualRoster`, or None if it could not be saved.
            The failure text lands in ``error``.
        """
        try:
            record = ManualRoster(
                id=self._new_manual_id(),
                name=name,
                team_name=team_name,
                roster=empty_roster(),
            )
            self.store.save_manual_roster(record)
            self.refresh()
            self.error = None
            return record
        except RosterManagerError as e:
            self.error = str(e) or "Failed to create manual roster"
            return None

    def _new_manual_id(self) -> str:
        taken = set(self.store.load().all_record_ids())
        stamp = int(time.time() * 1000)
        while f"manual-{stamp}" in taken:
            stamp += 1
        return f"manual-{stamp}"

    def switch_league(self, league_id: str) -> None:
        """Make ``league_id`` current and open a short settle window.

        Args:
            league_id: Id of an imported league or a manual roster. An
                unknown id is stored anyway and resolves to no selection.
        """
        self._switch_settles_at = time.monotonic() + self.settle_seconds
        try:
            self.store.set_current_league(league_id)
            self.refresh()
            self.error = None
        except RosterManagerError as e:
            self.error = str(e) or "Failed to switch league"

    def remove_league(self, league_id: str) -> None:
        try:
            self.store.delete_league(league_id)
            self.refresh()
            self.error = None
        except RosterManagerError as e:
            self.error = str(e) or "Failed to remove league"

    def clear_all_user_data(self) -> None:
        try:
            self.store.clear_all_data()
            self.refresh()
            self.error = None
        except RosterManagerError as e:
            self.error = str(e) or "Failed to clear user data"

    # ------------------------------------------------------------------
    # Manual roster editing
    # ------------------------------------------------------------------
    def add_player_to_roster(self, name: str, position: str) -> OperationResult:
        try:
            result = self.store.add_player_to_current_roster(name, position)
        except RosterManagerError as e:
            result = OperationResult(success=False, error=str(e))
        return self._apply_edit(result, "Failed to add player")

    def remove_player_from_roster(self, name: str) -> OperationResult:
        try:
            result = self.store.remove_player_from_current_roster(name)
        except RosterManagerError as e:
            result = OperationResult(success=False, error=str(e))
        return self._apply_edit(result, "Failed to remove player")

    def _apply_edit(self, result: OperationResult, fallback: str) -> OperationResult:
        if result.success:
            self.refresh()
            self.error = None
        else:
            self.error = result.error or fallback
        return result

    def get_roster_validation(self) -> Optional[RosterValidation]:
        return self.store.validate_current_roster()
