"""Data models for the fantasy advisor."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .schemas import SleeperLeagueUser, SleeperRoster


@dataclass
class Player:
    """A player (or team defense) as shown to the user."""
    id: str
    name: str
    position: str
    team: str = 'FA'
    first_name: str = ''
    last_name: str = ''
    age: Optional[int] = None
    experience: Optional[int] = None
    college: Optional[str] = None
    number: Optional[int] = None
    injury_status: Optional[str] = None
    search_rank: Optional[int] = None
    headshot: Optional[str] = None


@dataclass
class GameLogEntry:
    """One game a player actually played."""
    week: int
    stats: dict
    fantasy_points: float
    projected_points: Optional[float] = None
    opponent: Optional[str] = None


@dataclass
class PlayerWithStats(Player):
    """Player plus aggregates derived from a season of game logs."""
    projected_points: float = 0.0
    avg_points: float = 0.0
    recent_avg_points: float = 0.0
    game_log: List[GameLogEntry] = field(default_factory=list)


@dataclass
class ComparisonCategory:
    """One weighted dimension of a head-to-head comparison."""
    category: str
    player1_value: float
    player2_value: float
    winner: str  # 'player1' | 'player2' | 'tie'


@dataclass
class ComparisonResult:
    player1: PlayerWithStats
    player2: PlayerWithStats
    winner: str
    confidence: int  # 0-100
    breakdown: List[ComparisonCategory] = field(default_factory=list)


@dataclass
class StartSitRecommendation:
    start: PlayerWithStats
    sit: PlayerWithStats
    confidence: int
    reasons: List[str] = field(default_factory=list)


@dataclass
class TradeAnalysis:
    team1_players: List[PlayerWithStats]
    team2_players: List[PlayerWithStats]
    team1_value: float
    team2_value: float
    winner: str  # 'team1' | 'team2' | 'fair'
    value_difference: float
    recommendation: str


class DepthStatus(Enum):
    """Roster depth at a position relative to the ideal roster size."""
    THIN = 'thin'
    FULL = 'full'
    EXCESS = 'excess'

    @property
    def needs_depth(self) -> bool:
        return self is DepthStatus.THIN


@dataclass
class ValuedPlayer:
    """A rostered or available player with this week's projection attached."""
    player: Player
    projected_points: float = 0.0
    recent_avg_points: float = 0.0

    @property
    def id(self) -> str:
        return self.player.id

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def position(self) -> str:
        return self.player.position

    @property
    def team(self) -> str:
        return self.player.team


@dataclass
class DropCandidate(ValuedPlayer):
    """A roster player that can be released without hurting the lineup."""
    excess_reason: str = ''


@dataclass
class UpgradeSuggestion:
    """An add/drop pair proposed by the waiver heuristic."""
    free_agent: ValuedPlayer
    drop_candidate: DropCandidate
    projected_gain: float
    reason: str
    suggestion_type: str  # 'same-position' | 'roster-optimization' | 'bye-week-coverage'


@dataclass
class ByeWeekNeed:
    position: str
    bye_week: int
    starters_on_bye: List[Player] = field(default_factory=list)


@dataclass
class RosterWithPlayers:
    """A league roster resolved against the player directory."""
    roster: SleeperRoster
    owner: Optional[SleeperLeagueUser]
    players: List[Player] = field(default_factory=list)
    starters: List[Player] = field(default_factory=list)
    bench: List[Player] = field(default_factory=list)
    projected_points: float = 0.0


@dataclass
class MatchupDetails:
    matchup_id: int
    week: int
    user_team: RosterWithPlayers
    opponent_team: RosterWithPlayers
    user_projected: float
    opponent_projected: float
    user_actual: float
    opponent_actual: float
    user_player_points: Dict[str, float] = field(default_factory=dict)
    opponent_player_points: Dict[str, float] = field(default_factory=dict)
    player_projections: Dict[str, float] = field(default_factory=dict)
