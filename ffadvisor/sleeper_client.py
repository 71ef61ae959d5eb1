"""Read-only client for the Sleeper fantasy API.

Every network call goes through SleeperClient._get, which turns transport
and HTTP failures into SleeperAPIError. Public read methods catch that,
log it, and hand back an empty result, so a failed fetch means "no data
for this scope" rather than a crash. The player directory is the one
exception: nothing can be shown without it, so its failure propagates.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import requests
from pydantic import ValidationError

from .cache import TTLCache
from .config import get_config
from .constants import FANTASY_POSITIONS, NFL_TEAMS, TEAM_NAMES
from .models import MatchupDetails, Player, RosterWithPlayers
from .schedule import get_current_season, get_current_week
from .schemas import (
    AdvisorConfig,
    SleeperLeague,
    SleeperLeagueUser,
    SleeperMatchup,
    SleeperPlayer,
    SleeperRoster,
    SleeperUser,
)
from .scoring import calculate_fantasy_points, round_points

logger = logging.getLogger('ffadvisor.sleeper_client')

DEFENSE_SEARCH_RANK_START = 500
UNRANKED = 9999


class SleeperAPIError(Exception):
    """A Sleeper request failed (network error, bad status or bad body)."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def create_team_defenses() -> list[Player]:
    """One DEF entry per NFL team, ranked after the skill players."""
    return [
        Player(
            id=team,
            name=f'{full_name} DEF',
            position='DEF',
            team=team,
            first_name=full_name,
            last_name='DEF',
            search_rank=DEFENSE_SEARCH_RANK_START + index,
        )
        for index, (team, full_name) in enumerate(TEAM_NAMES.items())
    ]


def is_team_abbreviation(player_id: str) -> bool:
    """Defense player ids are team abbreviations."""
    return player_id.upper() in NFL_TEAMS


class SleeperClient:
    """
    Thin wrapper over the Sleeper REST API.

    Args:
        config: Advisor configuration (default: loaded from data/advisor_config.json)
        cache: Cache for the player directory (default: TTLCache with the configured TTL)
        session: requests.Session to use (default: a new session)
    """

    def __init__(
        self,
        config: Optional[AdvisorConfig] = None,
        cache: Optional[TTLCache] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or get_config()
        self.base_url = self.config.base_url.rstrip('/')
        self.cdn_url = self.config.cdn_url.rstrip('/')
        self.timeout = self.config.request_timeout
        self.cache = cache if cache is not None else TTLCache(ttl=self.config.player_cache_ttl)
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get(self, path: str) -> Any:
        """GET ``path`` relative to the API root and return the decoded JSON."""
        url = f'{self.base_url}/{path.lstrip("/")}'
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SleeperAPIError(f'Request to {url} failed: {e}', url=url) from e

        if not response.ok:
            raise SleeperAPIError(
                f'{response.status_code} {response.reason} from {url}',
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SleeperAPIError(f'Invalid JSON from {url}', url=url) from e

    def _resolve_season(self, season: Optional[str]) -> str:
        return season or self.config.season or get_current_season()

    def _resolve_week(self, week: Optional[int]) -> int:
        return week or self.config.week or get_current_week()

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    def _load_player_directory(self) -> dict[str, SleeperPlayer]:
        data = self._get('players/nfl')
        directory = {}
        skipped = 0
        for player_id, record in data.items():
            try:
                directory[player_id] = SleeperPlayer.model_validate(
                    {**record, 'player_id': record.get('player_id') or player_id}
                )
            except ValidationError:
                skipped += 1
        if skipped:
            logger.debug(f'Skipped {skipped} malformed player records')
        logger.info(f'Loaded {len(directory)} players from Sleeper')
        return directory

    def fetch_all_players(self) -> dict[str, SleeperPlayer]:
        """
        Full player directory keyed by player id, memoised for the cache TTL.

        Raises:
            SleeperAPIError: If the directory cannot be fetched
        """
        return self.cache.get_or_load(self._load_player_directory)

    def get_headshot_url(self, player_id: str, position: Optional[str] = None) -> str:
        """Player photo URL, or the team logo for defenses."""
        if position == 'DEF' or is_team_abbreviation(player_id):
            return f'{self.cdn_url}/images/team_logos/nfl/{player_id.lower()}.png'
        return f'{self.cdn_url}/content/nfl/players/{player_id}.jpg'

    def transform_player(self, sleeper: SleeperPlayer) -> Player:
        """Convert a directory record into a Player."""
        return Player(
            id=sleeper.player_id,
            name=sleeper.full_name or f'{sleeper.first_name} {sleeper.last_name}',
            position=sleeper.position or '',
            team=sleeper.team or 'FA',
            first_name=sleeper.first_name,
            last_name=sleeper.last_name,
            age=sleeper.age,
            experience=sleeper.years_exp,
            college=sleeper.college,
            number=sleeper.number,
            injury_status=sleeper.injury_status,
            search_rank=sleeper.search_rank,
            headshot=self.get_headshot_url(sleeper.player_id),
        )

    def get_fantasy_players(self) -> list[Player]:
        """
        Active QB/RB/WR/TE/K/DEF players with a team, plus one entry per
        team defense, sorted by search rank (unranked last).
        """
        players = [
            self.transform_player(p)
            for p in self.fetch_all_players().values()
            if p.team and p.position in FANTASY_POSITIONS and p.status == 'Active'
        ]
        players.extend(create_team_defenses())
        players.sort(key=lambda p: p.search_rank or UNRANKED)
        return players

    def get_player_by_id(self, player_id: str) -> Optional[Player]:
        sleeper = self.fetch_all_players().get(player_id)
        if sleeper is None:
            return None
        return self.transform_player(sleeper)

    def search_players(self, query: str, position: Optional[str] = None) -> list[Player]:
        """Case-insensitive substring search on player name, optionally by position ('ALL' = any)."""
        needle = query.lower()
        return [
            p for p in self.get_fantasy_players()
            if needle in p.name.lower()
            and (not position or position == 'ALL' or p.position == position)
        ]

    # ------------------------------------------------------------------
    # Stats and projections
    # ------------------------------------------------------------------

    def _get_stat_map(self, kind: str, season: str, week: int) -> dict[str, dict]:
        try:
            return self._get(f'{kind}/nfl/regular/{season}/{week}') or {}
        except SleeperAPIError as e:
            logger.warning(f'Failed to fetch {kind} for {season} week {week}: {e}')
            return {}

    def get_weekly_stats(self, season: str, week: int) -> dict[str, dict]:
        """player id -> stat line for one week ({} on failure)."""
        return self._get_stat_map('stats', season, week)

    def get_weekly_projections(self, season: str, week: int) -> dict[str, dict]:
        """player id -> projected stat line for one week ({} on failure)."""
        return self._get_stat_map('projections', season, week)

    # ------------------------------------------------------------------
    # Users and leagues
    # ------------------------------------------------------------------

    def get_user(self, username: str) -> Optional[SleeperUser]:
        """Look up a user by username; None if unknown or on failure."""
        try:
            data = self._get(f'user/{username}')
        except SleeperAPIError as e:
            if e.status_code == 404:
                return None
            logger.error(f'Error fetching user {username}: {e}')
            return None
        try:
            return SleeperUser.model_validate(data) if data else None
        except ValidationError as e:
            logger.error(f'Unexpected user payload for {username}: {e}')
            return None

    def get_avatar_url(self, avatar_id: Optional[str]) -> Optional[str]:
        if not avatar_id:
            return None
        return f'{self.cdn_url}/avatars/{avatar_id}'

    def get_user_leagues(self, user_id: str, season: Optional[str] = None) -> list[SleeperLeague]:
        season = self._resolve_season(season)
        try:
            data = self._get(f'user/{user_id}/leagues/nfl/{season}')
            return [SleeperLeague.model_validate(league) for league in data or []]
        except (SleeperAPIError, ValidationError) as e:
            logger.error(f'Error fetching leagues for user {user_id}: {e}')
            return []

    def get_league(self, league_id: str) -> Optional[SleeperLeague]:
        try:
            data = self._get(f'league/{league_id}')
            return SleeperLeague.model_validate(data) if data else None
        except (SleeperAPIError, ValidationError) as e:
            logger.error(f'Error fetching league {league_id}: {e}')
            return None

    def get_league_rosters(self, league_id: str) -> list[SleeperRoster]:
        try:
            data = self._get(f'league/{league_id}/rosters')
            return [SleeperRoster.model_validate(roster) for roster in data or []]
        except (SleeperAPIError, ValidationError) as e:
            logger.error(f'Error fetching rosters for league {league_id}: {e}')
            return []

    def get_league_users(self, league_id: str) -> list[SleeperLeagueUser]:
        try:
            data = self._get(f'league/{league_id}/users')
            return [SleeperLeagueUser.model_validate(user) for user in data or []]
        except (SleeperAPIError, ValidationError) as e:
            logger.error(f'Error fetching users for league {league_id}: {e}')
            return []

    def get_league_matchups(self, league_id: str, week: int) -> list[SleeperMatchup]:
        try:
            data = self._get(f'league/{league_id}/matchups/{week}')
            return [SleeperMatchup.model_validate(matchup) for matchup in data or []]
        except (SleeperAPIError, ValidationError) as e:
            logger.error(f'Error fetching week {week} matchups for league {league_id}: {e}')
            return []

    def get_user_roster(self, league_id: str, user_id: str) -> Optional[SleeperRoster]:
        """The roster owned by ``user_id`` in a league, or None."""
        rosters = self.get_league_rosters(league_id)
        return next((r for r in rosters if r.owner_id == user_id), None)

    def get_user_leagues_with_context(self, user_id: str, season: Optional[str] = None) -> list[dict]:
        """
        A user's leagues with their roster id and win/loss record attached.

        Returns:
            List of dicts: {'league', 'user_roster_id', 'user_record'}; the
            last two are None when the user has no roster in that league.
        """
        leagues = self.get_user_leagues(user_id, season)
        if not leagues:
            return []

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            all_rosters = list(executor.map(
                self.get_league_rosters, [league.league_id for league in leagues]
            ))

        results = []
        for league, rosters in zip(leagues, all_rosters):
            roster = next((r for r in rosters if r.owner_id == user_id), None)
            results.append({
                'league': league,
                'user_roster_id': roster.roster_id if roster else None,
                'user_record': {
                    'wins': roster.settings.wins,
                    'losses': roster.settings.losses,
                    'ties': roster.settings.ties,
                } if roster else None,
            })
        return results

    def get_roster_with_players(
        self,
        roster: SleeperRoster,
        league_users: list[SleeperLeagueUser],
        projections: Optional[dict[str, dict]] = None,
    ) -> RosterWithPlayers:
        """
        Resolve a roster's player ids against the directory.

        Ids missing from the directory (empty starter slots) are dropped.
        Projected points sum the current week's projections for starters.

        Args:
            roster: Roster to resolve
            league_users: League members, used to find the owner
            projections: This week's projections (fetched when not given)
        """
        directory = self.fetch_all_players()
        owner = next((u for u in league_users if u.user_id == roster.owner_id), None)

        starter_ids = roster.starters or []
        players = [self.transform_player(directory[pid]) for pid in roster.players or [] if pid in directory]
        starters = [self.transform_player(directory[pid]) for pid in starter_ids if pid in directory]
        starter_set = set(starter_ids)
        bench = [p for p in players if p.id not in starter_set]

        if projections is None:
            projections = self.get_weekly_projections(self._resolve_season(None), self._resolve_week(None))

        projected = sum(
            calculate_fantasy_points(projections[pid])
            for pid in starter_ids
            if pid and pid in projections
        )

        return RosterWithPlayers(
            roster=roster,
            owner=owner,
            players=players,
            starters=starters,
            bench=bench,
            projected_points=round_points(projected),
        )

    def get_user_matchup(
        self,
        league_id: str,
        user_id: str,
        week: Optional[int] = None,
    ) -> Optional[MatchupDetails]:
        """
        The user's head-to-head matchup for a week.

        Returns None when the user has no roster, no matchup that week, or
        no opponent (bye).
        """
        week = self._resolve_week(week)
        season = self._resolve_season(None)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            rosters_future = executor.submit(self.get_league_rosters, league_id)
            users_future = executor.submit(self.get_league_users, league_id)
            matchups_future = executor.submit(self.get_league_matchups, league_id, week)
            projections_future = executor.submit(self.get_weekly_projections, season, week)
            rosters = rosters_future.result()
            league_users = users_future.result()
            matchups = matchups_future.result()
            projections = projections_future.result()

        user_roster = next((r for r in rosters if r.owner_id == user_id), None)
        if user_roster is None:
            return None

        user_matchup = next((m for m in matchups if m.roster_id == user_roster.roster_id), None)
        if user_matchup is None:
            return None

        opponent_matchup = next(
            (m for m in matchups
             if m.matchup_id == user_matchup.matchup_id and m.roster_id != user_roster.roster_id),
            None,
        )
        if opponent_matchup is None:
            return None

        opponent_roster = next((r for r in rosters if r.roster_id == opponent_matchup.roster_id), None)
        if opponent_roster is None:
            return None

        user_team = self.get_roster_with_players(user_roster, league_users, projections)
        opponent_team = self.get_roster_with_players(opponent_roster, league_users, projections)

        player_ids = set(user_matchup.players or []) | set(opponent_matchup.players or [])
        player_projections = {
            pid: calculate_fantasy_points(projections[pid])
            for pid in player_ids
            if pid in projections
        }

        return MatchupDetails(
            matchup_id=user_matchup.matchup_id,
            week=week,
            user_team=user_team,
            opponent_team=opponent_team,
            user_projected=user_team.projected_points,
            opponent_projected=opponent_team.projected_points,
            user_actual=user_matchup.points or 0,
            opponent_actual=opponent_matchup.points or 0,
            user_player_points=user_matchup.players_points or {},
            opponent_player_points=opponent_matchup.players_points or {},
            player_projections=player_projections,
        )

    def get_league_standings(self, league_id: str) -> list[RosterWithPlayers]:
        """Every roster in the league, most wins first, points for breaking ties."""
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            rosters_future = executor.submit(self.get_league_rosters, league_id)
            users_future = executor.submit(self.get_league_users, league_id)
            rosters = rosters_future.result()
            league_users = users_future.result()

        ordered = sorted(rosters, key=lambda r: (-r.settings.wins, -r.settings.fpts))
        if not ordered:
            return []

        projections = self.get_weekly_projections(self._resolve_season(None), self._resolve_week(None))
        return [self.get_roster_with_players(r, league_users, projections) for r in ordered]
