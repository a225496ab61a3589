"""Mapping of Sleeper player ids onto position-bucketed rosters."""

from typing import Dict, Iterable, List

from src.roster_manager.roster_state import Roster, empty_roster
from src.sleeper_import.config import FANTASY_POSITIONS, FLEX_FALLBACK_POSITIONS


def format_player_name(player: Dict) -> str:
    """Full display name, e.g. "Patrick Mahomes"."""
    return f"{player.get('first_name', '')} {player.get('last_name', '')}".strip()


def is_team_code(player_id: str) -> bool:
    """Defense units use short uppercase team codes (``"KC"``) as their id."""
    return len(player_id) <= 4 and player_id.isupper()


def defense_name(team_code: str) -> str:
    return f"{team_code} Defense"


def convert_roster_to_positions(
    player_ids: Iterable[str], players: Dict[str, Dict]
) -> Roster:
    """Bucket Sleeper player ids by position using the player directory.

    Unknown ids that look like team codes become defense entries. Players
    outside the six buckets fall back to RB, WR, then TE via their fantasy
    positions. Anything else is dropped.

    Args:
        player_ids: Sleeper ids from a league roster's ``players`` list.
        players: The full Sleeper player map, keyed by id.

    Returns:
        A roster with all six position buckets present.
    """
    roster = empty_roster()

    for player_id in player_ids:
        player = players.get(player_id)

        if player is None:
            if is_team_code(player_id):
                roster["DEF"].append(defense_name(player_id))
            continue

        name = format_player_name(player)
        position = player.get("position")

        if position in FANTASY_POSITIONS:
            roster[position].append(name)
            continue

        fantasy_positions = player.get("fantasy_positions") or []
        for fallback in FLEX_FALLBACK_POSITIONS:
            if fallback in fantasy_positions:
                roster[fallback].append(name)
                break

    return roster


def convert_player_ids_to_names(
    player_ids: Iterable[str], players: Dict[str, Dict]
) -> List[str]:
    """Resolve ids to display names, keeping a placeholder for unknown ids."""
    names = []
    for player_id in player_ids:
        player = players.get(player_id)
        if player is not None:
            names.append(format_player_name(player))
        elif is_team_code(player_id):
            names.append(defense_name(player_id))
        else:
            names.append(f"Unknown Player ({player_id})")
    return names
