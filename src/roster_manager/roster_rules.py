"""Roster rule enforcement for adding and removing players."""

from dataclasses import dataclass
from typing import Optional

from src.roster_manager.config import POSITIONS
from src.roster_manager.errors import (
    DUPLICATE_PLAYER,
    MINIMUM_VIOLATION,
    PLAYER_NOT_FOUND,
    POSITION_FULL,
    ROSTER_FULL,
)
from src.roster_manager.roster_state import (
    Roster,
    RosterLimits,
    all_roster_players,
    copy_roster,
)


@dataclass
class RosterChangeResult:
    """Outcome of a roster edit. Callers must check ``success``."""

    success: bool
    roster: Roster
    error: Optional[str] = None
    code: Optional[str] = None


class RosterRules:
    """Enforces position and size limits on roster edits.

    Edits never mutate the roster passed in; each call returns a new roster.
    """

    def __init__(self, limits: Optional[RosterLimits] = None):
        self.limits = limits or RosterLimits.default()

    def add_player(self, roster: Roster, name: str, position: str) -> RosterChangeResult:
        """Append ``name`` to the ``position`` bucket.

        Checks, in order: duplicate anywhere on the roster, position max,
        total roster max.

        Args:
            roster: Current roster; left untouched.
            name: Player display name.
            position: One of ``POSITIONS``.

        Returns:
            :class:`RosterChangeResult` carrying the new roster on success,
            or an unchanged copy plus error text and code on rejection.

        Raises:
            ValueError: if ``position`` is not a known position.
        """
        if position not in POSITIONS:
            raise ValueError(f"Unknown position '{position}'. Must be one of: {POSITIONS}")

        new_roster = copy_roster(roster)
        current_players = all_roster_players(roster)

        if name in current_players:
            return RosterChangeResult(
                success=False,
                roster=new_roster,
                error=f"{name} is already on your roster",
                code=DUPLICATE_PLAYER,
            )

        position_limit = self.limits[position]
        if len(new_roster[position]) >= position_limit.max:
            return RosterChangeResult(
                success=False,
                roster=new_roster,
                error=f"Cannot add more {position}s. Maximum allowed: {position_limit.max}",
                code=POSITION_FULL,
            )

        if len(current_players) >= self.limits.total_max:
            return RosterChangeResult(
                success=False,
                roster=new_roster,
                error=f"Roster is full. Maximum players allowed: {self.limits.total_max}",
                code=ROSTER_FULL,
            )

        new_roster[position].append(name)
        return RosterChangeResult(success=True, roster=new_roster)

    def remove_player(self, roster: Roster, name: str) -> RosterChangeResult:
        """Remove ``name`` from the first bucket (in position order) holding it.

        A rejected removal returns the roster unchanged.

        Returns:
            :class:`RosterChangeResult`; ``code`` is ``PLAYER_NOT_FOUND`` or
            ``MINIMUM_VIOLATION`` on rejection.
        """
        unchanged = copy_roster(roster)

        removed_from = None
        for position in POSITIONS:
            if name in roster.get(position, []):
                removed_from = position
                break

        if removed_from is None:
            return RosterChangeResult(
                success=False,
                roster=unchanged,
                error=f"{name} not found on roster",
                code=PLAYER_NOT_FOUND,
            )

        new_roster = copy_roster(roster)
        new_roster[removed_from] = [p for p in new_roster[removed_from] if p != name]

        position_limit = self.limits[removed_from]
        if len(new_roster[removed_from]) < position_limit.min:
            return RosterChangeResult(
                success=False,
                roster=unchanged,
                error=(
                    f"Cannot remove {name}. "
                    f"Minimum {removed_from}s required: {position_limit.min}"
                ),
                code=MINIMUM_VIOLATION,
            )

        return RosterChangeResult(success=True, roster=new_roster)
