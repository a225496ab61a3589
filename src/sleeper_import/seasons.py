"""NFL season helpers."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.sleeper_import.config import (
    CURRENT_NFL_SEASON,
    NEXT_NFL_SEASON,
    TRANSITION_MONTHS,
)


@dataclass
class SeasonTransitionInfo:
    current: str
    is_transition: bool
    upcoming: Optional[str] = None  # Only set during a transition month


def get_current_nfl_season() -> str:
    return CURRENT_NFL_SEASON


def get_next_nfl_season() -> str:
    return NEXT_NFL_SEASON


def get_season_transition_info(today: Optional[date] = None) -> SeasonTransitionInfo:
    """Whether ``today`` falls in a month where two seasons overlap."""
    today = today or date.today()
    is_transition = today.month in TRANSITION_MONTHS
    return SeasonTransitionInfo(
        current=get_current_nfl_season(),
        is_transition=is_transition,
        upcoming=get_next_nfl_season() if is_transition else None,
    )
