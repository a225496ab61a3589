"""Roster composition validation and summaries."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.roster_manager.config import (
    MIN_RECOMMENDED_ROSTER_SIZE,
    POSITIONS,
    SUGGESTED_ROSTER_COMPOSITION,
)
from src.roster_manager.roster_state import Roster, RosterLimits


@dataclass
class RosterValidation:
    """Validation outcome. Warnings never affect ``valid``."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class RosterValidator:
    """Validates roster composition against position and size limits."""

    def __init__(self, limits: Optional[RosterLimits] = None):
        self.limits = limits or RosterLimits.default()

    def validate_roster(self, roster: Roster) -> RosterValidation:
        """
        Validate a roster's composition.

        Errors: position count outside [min, max], or total above the cap.
        Warnings: position exactly at its minimum, or a small roster.

        Args:
            roster: Position buckets to check. Missing buckets count as empty.

        Returns:
            :class:`RosterValidation` whose ``valid`` is true only when
            ``errors`` is empty.
        """
        errors = []
        warnings = []

        for position in POSITIONS:
            count = len(roster.get(position, []))
            limit = self.limits[position]

            if count < limit.min:
                errors.append(f"Not enough {position}s: {count}/{limit.min} minimum")
            elif count > limit.max:
                errors.append(f"Too many {position}s: {count}/{limit.max} maximum")

            if count == limit.min:
                warnings.append(f"Consider adding more {position}s for depth")

        total = sum(len(roster.get(position, [])) for position in POSITIONS)
        if total > self.limits.total_max:
            errors.append(f"Roster too large: {total}/{self.limits.total_max} maximum")
        elif total < MIN_RECOMMENDED_ROSTER_SIZE:
            warnings.append(
                f"Consider filling out your roster ({total}/{self.limits.total_max})"
            )

        return RosterValidation(valid=len(errors) == 0, errors=errors, warnings=warnings)

    def get_roster_stats(self, roster: Roster) -> Dict:
        """Count players per position and overall."""
        position_counts = {pos: len(roster.get(pos, [])) for pos in POSITIONS}
        total = sum(position_counts.values())
        return {
            "total_players": total,
            "position_counts": position_counts,
            "is_empty": total == 0,
        }

    def get_roster_summary(self, roster: Roster) -> Dict[str, Dict]:
        """Generate summary of roster status per position."""
        summary = {}

        for position in POSITIONS:
            filled = len(roster.get(position, []))
            limit = self.limits[position]
            summary[position] = {
                "filled": filled,
                "min": limit.min,
                "max": limit.max,
                "remaining": max(0, limit.min - filled),
            }

        return summary

    @staticmethod
    def get_suggested_roster_composition() -> Dict[str, int]:
        """Starter plus depth counts suggested for new rosters."""
        return dict(SUGGESTED_ROSTER_COMPOSITION)
