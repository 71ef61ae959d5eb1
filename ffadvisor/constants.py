"""Constants and lookup tables for the fantasy advisor."""

# Fantasy-relevant positions, in display order
FANTASY_POSITIONS = ['QB', 'RB', 'WR', 'TE', 'K', 'DEF']

# Team abbreviation to full name mapping
TEAM_NAMES = {
    'ARI': 'Arizona Cardinals',
    'ATL': 'Atlanta Falcons',
    'BAL': 'Baltimore Ravens',
    'BUF': 'Buffalo Bills',
    'CAR': 'Carolina Panthers',
    'CHI': 'Chicago Bears',
    'CIN': 'Cincinnati Bengals',
    'CLE': 'Cleveland Browns',
    'DAL': 'Dallas Cowboys',
    'DEN': 'Denver Broncos',
    'DET': 'Detroit Lions',
    'GB': 'Green Bay Packers',
    'HOU': 'Houston Texans',
    'IND': 'Indianapolis Colts',
    'JAX': 'Jacksonville Jaguars',
    'KC': 'Kansas City Chiefs',
    'LV': 'Las Vegas Raiders',
    'LAC': 'Los Angeles Chargers',
    'LAR': 'Los Angeles Rams',
    'MIA': 'Miami Dolphins',
    'MIN': 'Minnesota Vikings',
    'NE': 'New England Patriots',
    'NO': 'New Orleans Saints',
    'NYG': 'New York Giants',
    'NYJ': 'New York Jets',
    'PHI': 'Philadelphia Eagles',
    'PIT': 'Pittsburgh Steelers',
    'SF': 'San Francisco 49ers',
    'SEA': 'Seattle Seahawks',
    'TB': 'Tampa Bay Buccaneers',
    'TEN': 'Tennessee Titans',
    'WAS': 'Washington Commanders',
}

NFL_TEAMS = list(TEAM_NAMES)

# Team abbreviation normalization (nflreadpy format -> Sleeper format)
TEAM_ABBREV_NORMALIZE = {
    'LA': 'LAR',   # Los Angeles Rams
    'JAC': 'JAX',  # Jacksonville Jaguars
    'WSH': 'WAS',  # Washington Commanders
}

# Roster depth we want per position (starters + one backup)
IDEAL_ROSTER_SIZE = {
    'QB': 2,
    'RB': 4,
    'WR': 4,
    'TE': 2,
    'K': 1,
    'DEF': 1,
}

# Trade value inflation per position (higher = scarcer)
POSITIONAL_SCARCITY = {
    'QB': 1.0,
    'RB': 1.15,
    'WR': 1.05,
    'TE': 1.1,
    'K': 0.8,
    'DEF': 0.85,
}

# Trade value discount per injury designation
INJURY_DISCOUNT = {
    'Out': 0.5,
    'IR': 0.5,
    'Questionable': 0.85,
}

# Trade value blend of projected / season average / recent form
TRADE_VALUE_WEIGHTS = (0.4, 0.3, 0.3)

# Value difference below which a trade is called fair
TRADE_FAIRNESS_BAND = 2.0

# Average points needed for tiers 1-4 (anything lower is tier 5)
TIER_THRESHOLDS = {
    'QB': [25, 20, 15, 10],
    'RB': [20, 15, 10, 5],
    'WR': [18, 14, 10, 6],
    'TE': [15, 10, 6, 3],
    'K': [10, 8, 6, 4],
    'DEF': [12, 9, 6, 3],
}

# Head-to-head category weights, indexed by category order
COMPARISON_WEIGHTS = (0.35, 0.25, 0.30, 0.10)

# Number of played games that make up "recent form"
RECENT_GAMES = 3

# Injury designations that rule a player out of a lineup
OUT_STATUSES = ('Out', 'IR')

BYE = 'BYE'
