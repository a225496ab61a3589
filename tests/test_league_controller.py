"""Tests for the league controller selection state machine."""

import pytest

from src.roster_manager.errors import (
    NOT_MANUAL_ROSTER,
    NoLeaguesFoundError,
)
from src.roster_manager.league_controller import LeagueController, SelectionState
from src.roster_manager.roster_state import ImportedLeague, empty_roster
from src.sleeper_import.errors import SleeperAPIError, UserNotFoundError


def _make_league(league_id="L1", name="Dynasty League"):
    return ImportedLeague(
        league_id=league_id,
        name=name,
        team_name="Team Alpha",
        roster={**empty_roster(), "QB": ["Patrick Mahomes"]},
        season="2025",
    )


class FakeImporter:
    """Stands in for ``LeagueImporter``; records what the controller saw."""

    def __init__(self, leagues=None, error=None):
        self.leagues = leagues or []
        self.error = error
        self.calls = []
        self.controller = None
        self.observed_state = None

    async def import_user_leagues(self, username, season=None):
        self.calls.append((username, season))
        if self.controller is not None:
            self.observed_state = self.controller.state
        if self.error is not None:
            raise self.error
        return list(self.leagues)


def _make_controller(store, importer=None, settle_seconds=0.0):
    controller = LeagueController(store=store, importer=importer, settle_seconds=settle_seconds)
    if importer is not None:
        importer.controller = controller
    return controller


# ── Initial state ────────────────────────────────────────────────────

class TestInitialState:
    def test_empty_store(self, memory_store):
        controller = _make_controller(memory_store)
        assert controller.state == SelectionState.NO_LEAGUE_SELECTED
        assert controller.current_league is None
        assert controller.all_leagues == []
        assert not controller.has_leagues
        assert controller.error is None

    def test_loads_existing_selection(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league()], "alice")
        controller = _make_controller(memory_store)
        assert controller.state == SelectionState.LEAGUE_SELECTED
        assert controller.current_league.id == "L1"


# ── Import ───────────────────────────────────────────────────────────

class TestImport:
    @pytest.mark.anyio
    async def test_successful_import(self, memory_store):
        importer = FakeImporter([_make_league("L1"), _make_league("L2")])
        controller = _make_controller(memory_store, importer)

        leagues = await controller.import_from_sleeper("alice", "2025")

        assert [league.league_id for league in leagues] == ["L1", "L2"]
        assert importer.calls == [("alice", "2025")]
        assert importer.observed_state == SelectionState.IMPORTING
        assert controller.state == SelectionState.LEAGUE_SELECTED
        assert controller.current_league.id == "L1"
        assert len(controller.all_leagues) == 2
        assert memory_store.load().sleeper_username == "alice"
        assert not controller.loading

    @pytest.mark.anyio
    async def test_no_leagues_leaves_store_untouched(self, memory_store):
        controller = _make_controller(memory_store, FakeImporter([]))

        with pytest.raises(NoLeaguesFoundError):
            await controller.import_from_sleeper("alice", "2025")

        assert controller.error == 'No leagues found for username "alice" in 2025 season'
        assert memory_store.backend.read("user-data") is None
        assert controller.state == SelectionState.NO_LEAGUE_SELECTED

    @pytest.mark.anyio
    async def test_unknown_user(self, memory_store):
        error = UserNotFoundError('Username "ghost" not found on Sleeper', status_code=404)
        controller = _make_controller(memory_store, FakeImporter(error=error))

        with pytest.raises(UserNotFoundError):
            await controller.import_from_sleeper("ghost")

        assert controller.error == 'Username "ghost" not found on Sleeper'
        assert not controller.loading
        assert memory_store.backend.read("user-data") is None

    @pytest.mark.anyio
    async def test_network_failure_keeps_previous_selection(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1")], "alice")
        controller = _make_controller(
            memory_store, FakeImporter(error=SleeperAPIError("Failed to fetch user: boom"))
        )

        with pytest.raises(SleeperAPIError):
            await controller.import_from_sleeper("alice")

        assert controller.current_league.id == "L1"
        assert controller.state == SelectionState.LEAGUE_SELECTED

    @pytest.mark.anyio
    async def test_unexpected_error_is_surfaced(self, memory_store):
        controller = _make_controller(memory_store, FakeImporter(error=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            await controller.import_from_sleeper("alice")

        assert controller.error == "boom"
        assert not controller.loading
        assert memory_store.backend.read("user-data") is None

    @pytest.mark.anyio
    async def test_reimport_replaces_previous_leagues(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1"), _make_league("L2")], "alice")
        controller = _make_controller(memory_store, FakeImporter([_make_league("L3")]))

        await controller.import_from_sleeper("bob")

        assert [league.id for league in controller.all_leagues] == ["L3"]
        assert controller.state == SelectionState.NO_LEAGUE_SELECTED

    @pytest.mark.anyio
    async def test_import_keeps_manual_selection(self, memory_store):
        controller = _make_controller(memory_store, FakeImporter([_make_league("L1")]))
        manual = controller.create_manual_roster("Practice", "My Squad")

        await controller.import_from_sleeper("alice")

        assert controller.current_league.id == manual.id


# ── Transitions ──────────────────────────────────────────────────────

class TestTransitions:
    def test_create_manual_roster_becomes_current_when_none(self, memory_store):
        controller = _make_controller(memory_store)
        record = controller.create_manual_roster("Practice", "My Squad")

        assert record.id.startswith("manual-")
        assert record.roster == empty_roster()
        assert controller.current_league.id == record.id
        assert controller.current_league.is_manual
        assert controller.has_leagues

    def test_second_manual_roster_does_not_steal_selection(self, memory_store):
        controller = _make_controller(memory_store)
        first = controller.create_manual_roster("First", "Team 1")
        second = controller.create_manual_roster("Second", "Team 2")

        assert first.id != second.id
        assert controller.current_league.id == first.id
        assert len(controller.all_leagues) == 2

    def test_switch_league(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1"), _make_league("L2")], "alice")
        controller = _make_controller(memory_store)

        controller.switch_league("L2")

        assert controller.current_league.id == "L2"
        assert controller.state == SelectionState.LEAGUE_SELECTED

    def test_switch_reports_switching_until_settled(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1"), _make_league("L2")], "alice")
        controller = _make_controller(memory_store, settle_seconds=60)

        controller.switch_league("L2")

        assert controller.switching
        assert controller.state == SelectionState.SWITCHING
        assert controller.current_league.id == "L2"

    def test_switch_to_unknown_id_clears_selection(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1")], "alice")
        controller = _make_controller(memory_store)

        controller.switch_league("missing")

        assert controller.current_league is None
        assert controller.state == SelectionState.NO_LEAGUE_SELECTED

    def test_remove_current_league_falls_back(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1"), _make_league("L2")], "alice")
        controller = _make_controller(memory_store)

        controller.remove_league("L1")

        assert controller.current_league.id == "L2"
        assert [view.id for view in controller.all_leagues] == ["L2"]

    def test_remove_last_league(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1")], "alice")
        controller = _make_controller(memory_store)

        controller.remove_league("L1")

        assert controller.state == SelectionState.NO_LEAGUE_SELECTED
        assert not controller.has_leagues

    def test_clear_all_user_data(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1")], "alice")
        controller = _make_controller(memory_store)

        controller.clear_all_user_data()

        assert controller.state == SelectionState.NO_LEAGUE_SELECTED
        assert controller.all_leagues == []
        assert memory_store.load().sleeper_username is None


# ── Roster editing ───────────────────────────────────────────────────

class TestRosterEditing:
    def test_add_and_remove(self, memory_store):
        controller = _make_controller(memory_store)
        controller.create_manual_roster("Practice", "My Squad")

        assert controller.add_player_to_roster("Christian McCaffrey", "RB").success
        assert controller.add_player_to_roster("Bijan Robinson", "RB").success
        assert controller.add_player_to_roster("Breece Hall", "RB").success
        assert controller.current_league.roster["RB"] == [
            "Christian McCaffrey", "Bijan Robinson", "Breece Hall",
        ]

        assert controller.remove_player_from_roster("Breece Hall").success
        assert controller.current_league.roster["RB"] == ["Christian McCaffrey", "Bijan Robinson"]
        assert controller.error is None

    def test_failed_edit_sets_error(self, memory_store):
        controller = _make_controller(memory_store)
        controller.create_manual_roster("Practice", "My Squad")
        controller.add_player_to_roster("Patrick Mahomes", "QB")

        result = controller.add_player_to_roster("Patrick Mahomes", "QB")

        assert not result.success
        assert controller.error == "Patrick Mahomes is already on your roster"

    def test_imported_league_rejects_edits(self, memory_store):
        memory_store.save_sleeper_leagues([_make_league("L1")], "alice")
        controller = _make_controller(memory_store)

        result = controller.add_player_to_roster("Someone", "WR")

        assert result.code == NOT_MANUAL_ROSTER
        assert controller.current_league.roster["WR"] == []

    def test_roster_validation(self, memory_store):
        controller = _make_controller(memory_store)
        assert controller.get_roster_validation() is None

        controller.create_manual_roster("Practice", "My Squad")
        validation = controller.get_roster_validation()
        assert not validation.valid
        assert "Not enough QBs: 0/1 minimum" in validation.errors
