from .models import (
    Player,
    PlayerWithStats,
    GameLogEntry,
    ComparisonCategory,
    ComparisonResult,
    StartSitRecommendation,
    TradeAnalysis,
    ValuedPlayer,
    DropCandidate,
    UpgradeSuggestion,
    RosterWithPlayers,
    MatchupDetails,
    DepthStatus,
)
from .scoring import (
    calculate_fantasy_points,
    score_stat_line,
    has_player_played,
    is_played_game,
    round_points,
)
from .game_log import (
    GameLog,
    build_game_log,
    season_average,
    recent_form,
    calculate_consistency,
    aggregate_player,
)
from .comparison import compare_players, get_start_sit_recommendation
from .trade import analyze_trade, calculate_player_value, get_player_tier
from .waivers import build_free_agent_pool, find_upgrades
from .schedule import (
    NFLSchedule,
    default_schedule,
    get_current_season,
    get_current_week,
)
from .cache import TTLCache
from .sleeper_client import SleeperClient, SleeperAPIError
from .advisor import FantasyAdvisor

__all__ = [
    # Models
    'Player',
    'PlayerWithStats',
    'GameLogEntry',
    'ComparisonCategory',
    'ComparisonResult',
    'StartSitRecommendation',
    'TradeAnalysis',
    'ValuedPlayer',
    'DropCandidate',
    'UpgradeSuggestion',
    'RosterWithPlayers',
    'MatchupDetails',
    'DepthStatus',
    # Scoring
    'calculate_fantasy_points',
    'score_stat_line',
    'has_player_played',
    'is_played_game',
    'round_points',
    # Game logs
    'GameLog',
    'build_game_log',
    'season_average',
    'recent_form',
    'calculate_consistency',
    'aggregate_player',
    # Recommendations
    'compare_players',
    'get_start_sit_recommendation',
    'analyze_trade',
    'calculate_player_value',
    'get_player_tier',
    'build_free_agent_pool',
    'find_upgrades',
    # Schedule
    'NFLSchedule',
    'default_schedule',
    'get_current_season',
    'get_current_week',
    # Sleeper
    'TTLCache',
    'SleeperClient',
    'SleeperAPIError',
    'FantasyAdvisor',
]
