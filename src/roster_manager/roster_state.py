"""Roster data models - position buckets, limits, and the persisted user document."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from src.roster_manager.config import (
    DEFAULT_ROSTER_LIMITS,
    DEFAULT_TOTAL_MAX,
    POSITIONS,
    SCHEMA_VERSION,
    SOURCE_MANUAL,
    SOURCE_SLEEPER,
)

Roster = Dict[str, List[str]]


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def empty_roster() -> Roster:
    """Roster with every position bucket present and empty."""
    return {pos: [] for pos in POSITIONS}


def normalize_roster(data: Optional[Dict]) -> Roster:
    """Build a roster holding every known position, dropping unknown keys."""
    data = data or {}
    return {pos: [str(name) for name in (data.get(pos) or [])] for pos in POSITIONS}


def copy_roster(roster: Roster) -> Roster:
    """Copy bucket lists so the copy can be changed independently."""
    return {pos: list(roster.get(pos, [])) for pos in POSITIONS}


def all_roster_players(roster: Roster) -> List[str]:
    """Flatten a roster into a single list in position order."""
    players = []
    for pos in POSITIONS:
        players.extend(roster.get(pos, []))
    return players


@dataclass(frozen=True)
class PositionLimit:
    """Minimum and maximum player count for one position."""

    min: int
    max: int

    def __post_init__(self):
        if self.min < 0 or self.max < 0:
            raise ValueError(f"Position limits must be non-negative ({self.min}, {self.max})")
        if self.min > self.max:
            raise ValueError(f"Position min ({self.min}) exceeds max ({self.max})")


@dataclass(frozen=True)
class RosterLimits:
    """Per-position limits plus the overall roster size cap."""

    positions: Dict[str, PositionLimit]
    total_max: int = DEFAULT_TOTAL_MAX

    def __post_init__(self):
        missing = set(POSITIONS) - set(self.positions)
        if missing:
            raise ValueError(f"Roster limits missing positions: {sorted(missing)}")

    def __getitem__(self, position: str) -> PositionLimit:
        return self.positions[position]

    @classmethod
    def default(cls) -> "RosterLimits":
        return cls.from_table(DEFAULT_ROSTER_LIMITS, DEFAULT_TOTAL_MAX)

    @classmethod
    def from_table(cls, table: Dict[str, Iterable[int]], total_max: int) -> "RosterLimits":
        """Build limits from a ``{"QB": (min, max), ...}`` table."""
        positions = {}
        for pos, (low, high) in table.items():
            positions[pos] = PositionLimit(min=low, max=high)
        return cls(positions=positions, total_max=total_max)


@dataclass
class ManualRoster:
    """A roster created and edited entirely within the app."""

    id: str
    name: str
    team_name: str
    roster: Roster = field(default_factory=empty_roster)
    created_at: str = ""
    updated_at: str = ""
    source: str = SOURCE_MANUAL

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "team_name": self.team_name,
            "roster": copy_roster(self.roster),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ManualRoster":
        return cls(
            id=data["id"],
            name=data["name"],
            team_name=data.get("team_name", ""),
            roster=normalize_roster(data.get("roster")),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class ImportedLeague:
    """League and roster snapshot pulled from Sleeper at import time."""

    league_id: str
    name: str
    team_name: str
    roster: Roster
    settings: Dict = field(default_factory=dict)
    scoring_settings: Dict = field(default_factory=dict)
    season: str = ""
    total_teams: int = 0
    user_roster_id: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            "league_id": self.league_id,
            "name": self.name,
            "team_name": self.team_name,
            "roster": copy_roster(self.roster),
            "settings": self.settings,
            "scoring_settings": self.scoring_settings,
            "season": self.season,
            "total_teams": self.total_teams,
            "user_roster_id": self.user_roster_id,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ImportedLeague":
        return cls(
            league_id=str(data["league_id"]),
            name=data.get("name", ""),
            team_name=data.get("team_name", ""),
            roster=normalize_roster(data.get("roster")),
            settings=data.get("settings") or {},
            scoring_settings=data.get("scoring_settings") or {},
            season=str(data.get("season", "")),
            total_teams=data.get("total_teams") or 0,
            user_roster_id=data.get("user_roster_id"),
        )


@dataclass
class CurrentLeague:
    """Normalized view over either an imported league or a manual roster."""

    id: str
    name: str
    team_name: str
    roster: Roster
    source: str
    settings: Optional[Dict] = None
    scoring_settings: Optional[Dict] = None

    @property
    def is_manual(self) -> bool:
        return self.source == SOURCE_MANUAL

    @classmethod
    def from_league(cls, league: ImportedLeague) -> "CurrentLeague":
        return cls(
            id=league.league_id,
            name=league.name,
            team_name=league.team_name,
            roster=copy_roster(league.roster),
            source=SOURCE_SLEEPER,
            settings=league.settings,
            scoring_settings=league.scoring_settings,
        )

    @classmethod
    def from_manual(cls, manual: ManualRoster) -> "CurrentLeague":
        return cls(
            id=manual.id,
            name=manual.name,
            team_name=manual.team_name,
            roster=copy_roster(manual.roster),
            source=SOURCE_MANUAL,
        )


@dataclass
class UserData:
    """The single persisted document - source of truth for all rosters."""

    version: str
    last_updated: str
    leagues: List[ImportedLeague] = field(default_factory=list)
    manual_rosters: List[ManualRoster] = field(default_factory=list)
    current_league_id: Optional[str] = None
    sleeper_username: Optional[str] = None

    @classmethod
    def create_default(cls) -> "UserData":
        return cls(version=SCHEMA_VERSION, last_updated=utc_now())

    def find_league(self, league_id: str) -> Optional[ImportedLeague]:
        for league in self.leagues:
            if league.league_id == league_id:
                return league
        return None

    def find_manual_roster(self, roster_id: str) -> Optional[ManualRoster]:
        for manual in self.manual_rosters:
            if manual.id == roster_id:
                return manual
        return None

    def all_record_ids(self) -> List[str]:
        """Ids of every record: imported leagues first, then manual rosters."""
        return [league.league_id for league in self.leagues] + [m.id for m in self.manual_rosters]

    def to_dict(self) -> Dict:
        return {
            "version": self.version,
            "last_updated": self.last_updated,
            "current_league_id": self.current_league_id,
            "sleeper_username": self.sleeper_username,
            "leagues": [league.to_dict() for league in self.leagues],
            "manual_rosters": [manual.to_dict() for manual in self.manual_rosters],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "UserData":
        return cls(
            version=data["version"],
            last_updated=data.get("last_updated", ""),
            leagues=[ImportedLeague.from_dict(league) for league in data.get("leagues", [])],
            manual_rosters=[
                ManualRoster.from_dict(m) for m in data.get("manual_rosters", [])
            ],
            current_league_id=data.get("current_league_id"),
            sleeper_username=data.get("sleeper_username"),
        )
