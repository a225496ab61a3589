# Sleeper public API (read-only, no auth)
SLEEPER_BASE_URL = "https://api.sleeper.app/v1"

# Seasons
CURRENT_NFL_SEASON = "2025"
NEXT_NFL_SEASON = "2026"
PREVIOUS_NFL_SEASON = "2024"

# Months where both the ending and the upcoming season carry live data:
# January/February (playoffs, off-season prep) and July/August (drafts)
TRANSITION_MONTHS = {1, 2, 7, 8}

# Positions that map onto roster buckets
FANTASY_POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF")

# Flex-style fallback order for players whose primary position is not a bucket
FLEX_FALLBACK_POSITIONS = ("RB", "WR", "TE")

ACTIVE_STATUS = "Active"
HEALTHY_STATUS = "Healthy"
FREE_AGENT_TEAM = "FA"
UNKNOWN_VALUE = "N/A"

# Team codes that Sleeper also uses as defense player ids
NFL_TEAMS = (
    "ARI", "ATL", "BAL", "BUF", "CAR", "CHI", "CIN", "CLE", "DAL", "DEN",
    "DET", "GB", "HOU", "IND", "JAX", "KC", "LV", "LAC", "LAR", "MIA",
    "MIN", "NE", "NO", "NYG", "NYJ", "PHI", "PIT", "SF", "SEA", "TB",
    "TEN", "WAS",
)

# Display labels for injury designations
INJURY_STATUS_LABELS = {
    "Questionable": "🟡 Questionable",
    "Doubtful": "🟠 Doubtful",
    "Out": "🔴 Out",
    "IR": "⚫ IR",
    "PUP": "⚫ PUP",
    "Suspended": "🚫 Suspended",
}

DEFAULT_TRENDING_LIMIT = 10
