"""Migration of stored user data from older document shapes.

Every legacy shape is classified into one explicit variant before it is
converted. Shapes that are not recognized become an empty document; a
partial recovery is never attempted.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from src.roster_manager.config import (
    DEFAULT_TEAM_NAME,
    LEGACY_ROSTER_ID,
    LEGACY_ROSTER_NAME,
    POSITIONS,
)
from src.roster_manager.roster_state import (
    ImportedLeague,
    ManualRoster,
    UserData,
    utc_now,
)

logger = logging.getLogger(__name__)


@dataclass
class LegacyFlatRoster:
    """Pre-versioned format: position arrays at the document root."""

    team_name: str
    roster: Dict[str, List[str]]
    leagues: List[Dict] = field(default_factory=list)
    sleeper_username: Optional[str] = None


@dataclass
class UnrecognizedDocument:
    """Any shape we do not know how to convert."""

    leagues: List[Dict] = field(default_factory=list)
    sleeper_username: Optional[str] = None


LegacyDocument = Union[LegacyFlatRoster, UnrecognizedDocument]


def _carried_leagues(raw: Dict) -> List[Dict]:
    leagues = raw.get("leagues")
    if not isinstance(leagues, list):
        return []
    return [league for league in leagues if isinstance(league, dict)]


def _carried_username(raw: Dict) -> Optional[str]:
    username = raw.get("sleeper_username") or raw.get("sleeperUsername")
    return username if isinstance(username, str) else None


def classify_legacy_document(raw) -> LegacyDocument:
    """Tag a raw stored document with the legacy shape it matches."""
    if not isinstance(raw, dict):
        return UnrecognizedDocument()

    leagues = _carried_leagues(raw)
    username = _carried_username(raw)

    if raw.get("QB") is not None and raw.get("RB") is not None:
        roster = {}
        for pos in POSITIONS:
            values = raw.get(pos) or []
            roster[pos] = [str(v) for v in values] if isinstance(values, list) else []
        team_name = raw.get("team_name")
        return LegacyFlatRoster(
            team_name=team_name if isinstance(team_name, str) and team_name else DEFAULT_TEAM_NAME,
            roster=roster,
            leagues=leagues,
            sleeper_username=username,
        )

    return UnrecognizedDocument(leagues=leagues, sleeper_username=username)


def _convert_leagues(leagues: List[Dict]) -> List[ImportedLeague]:
    converted = []
    for league in leagues:
        try:
            converted.append(ImportedLeague.from_dict(league))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Dropping unreadable league during migration: %s", e)
    return converted


def migrate_user_data(raw) -> UserData:
    """Convert any older stored document into the current schema.

    Never raises: unrecognized input yields an empty document that still
    keeps the carried-over leagues and username.
    """
    legacy = classify_legacy_document(raw)
    data = UserData.create_default()

    if isinstance(legacy, LegacyFlatRoster):
        now = utc_now()
        data.manual_rosters.append(
            ManualRoster(
                id=LEGACY_ROSTER_ID,
                name=LEGACY_ROSTER_NAME,
                team_name=legacy.team_name,
                roster=legacy.roster,
                created_at=now,
                updated_at=now,
            )
        )
        data.current_league_id = LEGACY_ROSTER_ID
        logger.info("Migrated legacy flat roster into '%s'", LEGACY_ROSTER_NAME)

    data.leagues = _convert_leagues(legacy.leagues)
    data.sleeper_username = legacy.sleeper_username
    return data
