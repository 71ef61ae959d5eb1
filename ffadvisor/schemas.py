"""Pydantic schemas for Sleeper API payloads and advisor configuration."""

from pydantic import BaseModel, Field, field_validator

VALID_POSITIONS = {'QB', 'RB', 'WR', 'TE', 'K', 'DEF'}


class SleeperPlayer(BaseModel):
    """Player record from the /players/nfl directory."""

    player_id: str
    first_name: str = ''
    last_name: str = ''
    full_name: str | None = None
    position: str | None = None
    team: str | None = None
    age: int | None = None
    years_exp: int | None = None
    college: str | None = None
    status: str | None = None
    injury_status: str | None = None
    number: int | None = None
    search_rank: int | None = None
    fantasy_positions: list[str] | None = None

    @field_validator('first_name', 'last_name', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        """Sleeper sends null names for some placeholder records."""
        return v or ''

    class Config:
        extra = 'ignore'


class SleeperUser(BaseModel):
    """User record from /user/{username}."""

    user_id: str
    username: str | None = None
    display_name: str = ''
    avatar: str | None = None

    class Config:
        extra = 'ignore'


class SleeperLeague(BaseModel):
    """League metadata from /league/{league_id}."""

    league_id: str
    name: str = ''
    status: str = 'in_season'  # pre_draft, drafting, in_season, complete, ...
    sport: str = 'nfl'
    season: str = ''
    season_type: str = 'regular'
    total_rosters: int = 0
    roster_positions: list[str] = Field(default_factory=list)
    settings: dict = Field(default_factory=dict)
    scoring_settings: dict[str, float] = Field(default_factory=dict)
    avatar: str | None = None
    draft_id: str | None = None
    previous_league_id: str | None = None

    class Config:
        extra = 'ignore'


class RosterSettings(BaseModel):
    """Win/loss record and points for a roster."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    fpts: float = 0
    fpts_decimal: float | None = None
    fpts_against: float | None = None
    fpts_against_decimal: float | None = None

    class Config:
        extra = 'ignore'


class SleeperRoster(BaseModel):
    """Roster from /league/{league_id}/rosters."""

    roster_id: int
    owner_id: str | None = None
    league_id: str | None = None
    players: list[str] | None = None
    starters: list[str] | None = None
    reserve: list[str] | None = None
    taxi: list[str] | None = None
    settings: RosterSettings = Field(default_factory=RosterSettings)
    metadata: dict | None = None

    class Config:
        extra = 'ignore'


class SleeperLeagueUser(BaseModel):
    """League member from /league/{league_id}/users."""

    user_id: str
    username: str | None = None
    display_name: str = ''
    avatar: str | None = None
    metadata: dict | None = None
    is_owner: bool | None = None

    @property
    def team_name(self) -> str:
        return (self.metadata or {}).get('team_name') or self.display_name

    class Config:
        extra = 'ignore'


class SleeperMatchup(BaseModel):
    """One roster's side of a weekly matchup."""

    roster_id: int
    matchup_id: int | None = None
    players: list[str] | None = None
    starters: list[str] | None = None
    points: float | None = 0
    starters_points: list[float] | None = None
    players_points: dict[str, float] | None = None
    custom_points: float | None = None

    class Config:
        extra = 'ignore'


class AdvisorConfig(BaseModel):
    """Advisor configuration settings."""

    base_url: str = 'https://api.sleeper.app/v1'
    cdn_url: str = 'https://sleepercdn.com'
    request_timeout: float = Field(default=20.0, gt=0)
    player_cache_ttl: int = Field(default=3600, ge=0)
    max_workers: int = Field(default=8, ge=1, le=64)
    season: str | None = None
    week: int | None = Field(default=None, ge=1, le=18)
    ideal_roster_size: dict[str, int] = Field(
        default_factory=lambda: {'QB': 2, 'RB': 4, 'WR': 4, 'TE': 2, 'K': 1, 'DEF': 1}
    )
    waiver_limit: int = Field(default=10, ge=1)

    @field_validator('ideal_roster_size')
    @classmethod
    def validate_position_slots(cls, v):
        """Ensure all positions are valid fantasy positions."""
        for pos in v:
            if pos not in VALID_POSITIONS:
                raise ValueError(f'Invalid position: {pos}')
            if v[pos] < 0 or v[pos] > 10:
                raise ValueError(f'Invalid roster size for {pos}: {v[pos]}')
        return v

    class Config:
        extra = 'forbid'
