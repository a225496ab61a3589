"""Tests for NFL season helpers."""

from datetime import date

import pytest

from src.sleeper_import.seasons import (
    get_current_nfl_season,
    get_next_nfl_season,
    get_season_transition_info,
)


def test_current_and_next_season():
    assert get_current_nfl_season() == "2025"
    assert get_next_nfl_season() == "2026"


@pytest.mark.parametrize("month", [1, 2, 7, 8])
def test_transition_months(month):
    info = get_season_transition_info(date(2026, month, 15))
    assert info.is_transition
    assert info.current == "2025"
    assert info.upcoming == "2026"


@pytest.mark.parametrize("month", [3, 4, 5, 6, 9, 10, 11, 12])
def test_regular_months(month):
    info = get_season_transition_info(date(2025, month, 15))
    assert not info.is_transition
    assert info.upcoming is None


def test_defaults_to_today():
    info = get_season_transition_info()
    assert info.is_transition == (date.today().month in {1, 2, 7, 8})
