"""Searchable player directory built from the Sleeper player list.

The directory is rebuilt from a fresh player fetch on every call; nothing is
indexed or cached between searches.
"""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.sleeper_import.client import SleeperClient
from src.sleeper_import.config import (
    ACTIVE_STATUS,
    DEFAULT_TRENDING_LIMIT,
    FANTASY_POSITIONS,
    FREE_AGENT_TEAM,
    HEALTHY_STATUS,
    INJURY_STATUS_LABELS,
    NFL_TEAMS,
    UNKNOWN_VALUE,
)
from src.sleeper_import.roster_mapping import defense_name, format_player_name

logger = logging.getLogger(__name__)

# Raw Sleeper fields carried into the search frame
_RAW_COLUMNS = [
    "first_name", "last_name", "position", "team",
    "injury_status", "injury_notes", "status",
    "age", "fantasy_positions", "depth_chart_order",
]

SEARCH_COLUMNS = ["player_id", "name"] + _RAW_COLUMNS


@dataclass
class SearchablePlayer:
    """Read-model projection of one Sleeper player."""

    player_id: str
    name: str
    first_name: str
    last_name: str
    position: str
    team: str
    status: str
    injury_status: Optional[str] = None
    injury_notes: Optional[str] = None
    age: Optional[int] = None
    fantasy_positions: Optional[List[str]] = None
    depth_chart_order: Optional[int] = None


@dataclass
class PlayerSearchOptions:
    query: Optional[str] = None
    positions: List[str] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)
    available_only: bool = False
    injured_only: bool = False
    max_results: Optional[int] = None


@dataclass
class InjuryData:
    player_id: str
    name: str
    position: str
    team: str
    injury_status: str
    injury_notes: Optional[str] = None
    injury_start_date: Optional[str] = None


@dataclass
class TrendingPlayer:
    player_id: str
    name: str
    position: str
    team: str
    count: int  # Number of leagues adding this player


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def _safe_int(val):
    val = _safe(val)
    if val is None:
        return None
    try:
        return int(float(val))
    except (ValueError, TypeError):
        return None


def is_injured(status: Optional[str]) -> bool:
    return bool(status) and status != HEALTHY_STATUS


def format_injury_status(status: str) -> str:
    """Display label for an injury designation."""
    return INJURY_STATUS_LABELS.get(status, f"⚪ {status}")


# ----------------------------------------------------------------------
# Frame building and filtering
# ----------------------------------------------------------------------
def _defense_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "player_id": list(NFL_TEAMS),
            "name": [defense_name(team) for team in NFL_TEAMS],
            "first_name": list(NFL_TEAMS),
            "last_name": "Defense",
            "position": "DEF",
            "team": list(NFL_TEAMS),
            "injury_status": None,
            "injury_notes": None,
            "status": ACTIVE_STATUS,
            "age": None,
            "fantasy_positions": [["DEF"] for _ in NFL_TEAMS],
            "depth_chart_order": None,
        },
        columns=SEARCH_COLUMNS,
    )


def build_searchable_players(players: Dict[str, Dict]) -> pd.DataFrame:
    """Build the sorted search frame: active fantasy players plus team defenses."""
    if players:
        raw = pd.DataFrame.from_dict(players, orient="index").reindex(columns=_RAW_COLUMNS)
        raw["player_id"] = raw.index.astype(str)
    else:
        raw = pd.DataFrame(columns=["player_id"] + _RAW_COLUMNS)

    active = raw[
        (raw["status"] == ACTIVE_STATUS) & raw["position"].isin(FANTASY_POSITIONS)
    ].copy()

    active["first_name"] = active["first_name"].fillna("").astype(str)
    active["last_name"] = active["last_name"].fillna("").astype(str)
    active["name"] = (active["first_name"] + " " + active["last_name"]).str.strip()
    active["team"] = active["team"].fillna("").astype(str).replace("", FREE_AGENT_TEAM)
    active["injury_status"] = active["injury_status"].where(
        active["injury_status"].notna() & (active["injury_status"] != ""), None
    )

    frames = [_defense_frame()]
    if not active.empty:
        frames.insert(0, active[SEARCH_COLUMNS])
    combined = pd.concat(frames, ignore_index=True)

    return combined.sort_values(
        "name", key=lambda s: s.str.lower(), kind="mergesort"
    ).reset_index(drop=True)


def _row_to_player(row: pd.Series) -> SearchablePlayer:
    fantasy_positions = _safe(row.get("fantasy_positions"))
    return SearchablePlayer(
        player_id=str(row["player_id"]),
        name=row["name"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        position=row["position"],
        team=row["team"],
        status=row["status"],
        injury_status=_safe(row.get("injury_status")),
        injury_notes=_safe(row.get("injury_notes")),
        age=_safe_int(row.get("age")),
        fantasy_positions=list(fantasy_positions) if fantasy_positions is not None else None,
        depth_chart_order=_safe_int(row.get("depth_chart_order")),
    )


def filter_players(
    frame: pd.DataFrame, options: Optional[PlayerSearchOptions] = None
) -> List[SearchablePlayer]:
    """Apply search filters in order, then truncate to ``max_results``.

    Truncation is a plain slice of the name-sorted frame, not a ranking.

    Args:
        frame: Output of :func:`build_searchable_players`.
        options: Query, position, team, and status filters. None matches
            everything.

    Returns:
        Matching players as :class:`SearchablePlayer` records, name order.
    """
    options = options or PlayerSearchOptions()
    filtered = frame

    if options.query:
        query = options.query.lower()
        mask = (
            filtered["name"].str.lower().str.contains(query, regex=False)
            | filtered["team"].str.lower().str.contains(query, regex=False)
            | filtered["position"].str.lower().str.contains(query, regex=False)
        )
        filtered = filtered[mask]

    if options.positions:
        filtered = filtered[filtered["position"].isin(options.positions)]

    if options.teams:
        filtered = filtered[filtered["team"].isin(options.teams)]

    if options.available_only:
        status = filtered["injury_status"]
        filtered = filtered[status.isna() | (status == HEALTHY_STATUS)]

    if options.injured_only:
        status = filtered["injury_status"]
        filtered = filtered[status.notna() & (status != HEALTHY_STATUS)]

    if options.max_results and options.max_results > 0:
        filtered = filtered.head(options.max_results)

    return [_row_to_player(row) for _, row in filtered.iterrows()]


def collect_injuries(players: Dict[str, Dict]) -> List[InjuryData]:
    """Every player carrying an injury designation other than Healthy."""
    injuries = []
    for player_id, player in players.items():
        status = player.get("injury_status")
        if not is_injured(status):
            continue
        injuries.append(
            InjuryData(
                player_id=player_id,
                name=format_player_name(player),
                position=player.get("position") or UNKNOWN_VALUE,
                team=player.get("team") or UNKNOWN_VALUE,
                injury_status=status,
                injury_notes=player.get("injury_notes"),
                injury_start_date=player.get("injury_start_date"),
            )
        )
    return injuries


class PlayerDirectory:
    """Player search, injury and trending lookups against the live player list."""

    def __init__(self, client: SleeperClient):
        self.client = client

    async def get_searchable_players(self) -> pd.DataFrame:
        players = await self.client.get_all_players()
        return build_searchable_players(players)

    async def search_players(
        self, options: Optional[PlayerSearchOptions] = None
    ) -> List[SearchablePlayer]:
        """Search the live player list.

        The full player map is fetched on every call.

        Args:
            options: Filters passed to :func:`filter_players`.

        Returns:
            Matching players in name order.

        Raises:
            SleeperAPIError: if the player map cannot be fetched.
        """
        frame = await self.get_searchable_players()
        results = filter_players(frame, options)
        logger.debug("Player search matched %d of %d players", len(results), len(frame))
        return results

    async def get_player_by_name(self, name: str) -> Optional[SearchablePlayer]:
        """Exact, case-insensitive name lookup."""
        frame = await self.get_searchable_players()
        matches = frame[frame["name"].str.lower() == name.lower()]
        if matches.empty:
            return None
        return _row_to_player(matches.iloc[0])

    async def get_injuries(self) -> List[InjuryData]:
        players = await self.client.get_all_players()
        return collect_injuries(players)

    async def cross_check_injuries(self, roster_names: Iterable[str]) -> List[InjuryData]:
        """Injuries among the given player names (case-insensitive)."""
        names = {name.lower() for name in roster_names}
        return [i for i in await self.get_injuries() if i.name.lower() in names]

    async def get_roster_injuries(self, entries: Iterable[Dict]) -> List[InjuryData]:
        """Injuries matching ``{"player_id", "name"}`` entries by id or name."""
        entries = list(entries)
        ids = {entry["player_id"] for entry in entries}
        names = {entry["name"].lower() for entry in entries}
        return [
            i
            for i in await self.get_injuries()
            if i.player_id in ids or i.name.lower() in names
        ]

    async def get_trending_adds(self, limit: int = DEFAULT_TRENDING_LIMIT) -> List[TrendingPlayer]:
        """Most-added players, joined with the player map.

        Args:
            limit: Number of trending entries to request.

        Returns:
            One :class:`TrendingPlayer` per entry. Ids missing from the map
            come back as ``"Unknown Player"``.
        """
        trending, players = await asyncio.gather(
            self.client.get_trending_adds(limit),
            self.client.get_all_players(),
        )

        results = []
        for item in trending:
            player = players.get(item["player_id"])
            results.append(
                TrendingPlayer(
                    player_id=item["player_id"],
                    name=format_player_name(player) if player else "Unknown Player",
                    position=(player or {}).get("position") or UNKNOWN_VALUE,
                    team=(player or {}).get("team") or UNKNOWN_VALUE,
                    count=item.get("count", 0),
                )
            )
        return results
