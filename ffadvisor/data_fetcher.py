"""NFL schedule fetching using nflreadpy."""

import logging
from typing import Optional

import polars as pl

try:
    import nflreadpy as nfl
except ImportError:
    raise ImportError("Please install nflreadpy: pip install nflreadpy")

from .constants import BYE, TEAM_ABBREV_NORMALIZE
from .schedule import NFLSchedule

logger = logging.getLogger('ffadvisor.data_fetcher')


class NFLScheduleFetcher:
    """Builds an NFLSchedule for any season from nflreadpy schedule data."""

    def __init__(self, season: int):
        self.season = season
        self._games: Optional[pl.DataFrame] = None

    @property
    def games(self) -> pl.DataFrame:
        """Lazy load regular season games."""
        if self._games is None:
            logger.info(f'Loading NFL schedule for {self.season}...')
            schedules = nfl.load_schedules(seasons=self.season)
            self._games = schedules.filter(pl.col('game_type') == 'REG').select(
                ['week', 'home_team', 'away_team']
            )
        return self._games

    def _normalize_team(self, team: str) -> str:
        """Normalize team abbreviation to Sleeper format."""
        return TEAM_ABBREV_NORMALIZE.get(team, team)

    def build_table(self) -> dict[str, dict[int, str]]:
        """
        Build a team -> week -> opponent table.

        Every regular season week without a game for a team is marked 'BYE'.
        """
        games = self.games
        if games.height == 0:
            logger.warning(f'No regular season games found for {self.season}')
            return {}

        last_week = int(games['week'].max())
        table: dict[str, dict[int, str]] = {}

        for row in games.iter_rows(named=True):
            week = int(row['week'])
            home = self._normalize_team(row['home_team'])
            away = self._normalize_team(row['away_team'])
            table.setdefault(home, {})[week] = away
            table.setdefault(away, {})[week] = home

        for team, weeks in table.items():
            for week in range(1, last_week + 1):
                weeks.setdefault(week, BYE)
            table[team] = dict(sorted(weeks.items()))

        logger.debug(f'Built schedule for {len(table)} teams over {last_week} weeks')
        return table

    def load(self) -> NFLSchedule:
        """Fetch the season and return it as an NFLSchedule."""
        return NFLSchedule(self.build_table(), season=self.season)
