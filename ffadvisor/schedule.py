"""NFL schedule lookups: opponents, bye weeks, and the current season/week.

The default table covers the 2024 regular season (weeks 1-18). Each team maps
week number to opponent abbreviation, with 'BYE' marking the team's bye.
Other seasons can be loaded from nflreadpy via ffadvisor.data_fetcher.
"""

from datetime import date
from typing import Mapping, Optional

from .constants import BYE

SEASON_WEEKS = 18

# Approximate kickoff of week 1 (month, day)
SEASON_START = (9, 5)

NFL_SCHEDULE_2024: dict[str, dict[int, str]] = {
    'ARI': {1: 'BUF', 2: 'LAR', 3: 'DET', 4: 'WAS', 5: 'SF', 6: 'GB', 7: 'LAC', 8: 'MIA', 9: 'CHI', 10: 'NYJ', 11: 'BYE', 12: 'SEA', 13: 'MIN', 14: 'SEA', 15: 'NE', 16: 'CAR', 17: 'LAR', 18: 'SF'},
    'ATL': {1: 'PIT', 2: 'PHI', 3: 'KC', 4: 'NO', 5: 'BYE', 6: 'CAR', 7: 'SEA', 8: 'TB', 9: 'DAL', 10: 'NO', 11: 'DEN', 12: 'BYE', 13: 'LAC', 14: 'MIN', 15: 'LV', 16: 'NYG', 17: 'WAS', 18: 'CAR'},
    'BAL': {1: 'KC', 2: 'LV', 3: 'DAL', 4: 'BUF', 5: 'CIN', 6: 'WAS', 7: 'TB', 8: 'CLE', 9: 'DEN', 10: 'CIN', 11: 'PIT', 12: 'LAC', 13: 'PHI', 14: 'BYE', 15: 'NYG', 16: 'PIT', 17: 'HOU', 18: 'CLE'},
    'BUF': {1: 'ARI', 2: 'MIA', 3: 'JAX', 4: 'BAL', 5: 'HOU', 6: 'NYJ', 7: 'TEN', 8: 'SEA', 9: 'MIA', 10: 'IND', 11: 'KC', 12: 'BYE', 13: 'SF', 14: 'LAR', 15: 'DET', 16: 'NE', 17: 'NYJ', 18: 'NE'},
    'CAR': {1: 'NO', 2: 'LAC', 3: 'LV', 4: 'CIN', 5: 'CHI', 6: 'ATL', 7: 'WAS', 8: 'DEN', 9: 'NO', 10: 'NYG', 11: 'BYE', 12: 'KC', 13: 'TB', 14: 'PHI', 15: 'DAL', 16: 'ARI', 17: 'TB', 18: 'ATL'},
    'CHI': {1: 'TEN', 2: 'HOU', 3: 'IND', 4: 'LAR', 5: 'CAR', 6: 'JAX', 7: 'BYE', 8: 'WAS', 9: 'ARI', 10: 'NE', 11: 'GB', 12: 'MIN', 13: 'DET', 14: 'SF', 15: 'MIN', 16: 'DET', 17: 'SEA', 18: 'GB'},
    'CIN': {1: 'NE', 2: 'KC', 3: 'WAS', 4: 'CAR', 5: 'BAL', 6: 'NYG', 7: 'CLE', 8: 'PHI', 9: 'LV', 10: 'BAL', 11: 'LAC', 12: 'BYE', 13: 'PIT', 14: 'DAL', 15: 'TEN', 16: 'CLE', 17: 'DEN', 18: 'PIT'},
    'CLE': {1: 'DAL', 2: 'JAX', 3: 'NYG', 4: 'LV', 5: 'WAS', 6: 'PHI', 7: 'CIN', 8: 'BAL', 9: 'LAC', 10: 'BYE', 11: 'NO', 12: 'PIT', 13: 'DEN', 14: 'PIT', 15: 'KC', 16: 'CIN', 17: 'MIA', 18: 'BAL'},
    'DAL': {1: 'CLE', 2: 'NO', 3: 'BAL', 4: 'NYG', 5: 'PIT', 6: 'DET', 7: 'BYE', 8: 'SF', 9: 'ATL', 10: 'PHI', 11: 'HOU', 12: 'WAS', 13: 'NYG', 14: 'CIN', 15: 'CAR', 16: 'TB', 17: 'PHI', 18: 'WAS'},
    'DEN': {1: 'SEA', 2: 'PIT', 3: 'TB', 4: 'NYJ', 5: 'LV', 6: 'LAC', 7: 'NO', 8: 'CAR', 9: 'BAL', 10: 'KC', 11: 'ATL', 12: 'LV', 13: 'CLE', 14: 'BYE', 15: 'IND', 16: 'LAC', 17: 'CIN', 18: 'KC'},
    'DET': {1: 'LAR', 2: 'TB', 3: 'ARI', 4: 'SEA', 5: 'BYE', 6: 'DAL', 7: 'MIN', 8: 'TEN', 9: 'GB', 10: 'HOU', 11: 'JAX', 12: 'IND', 13: 'CHI', 14: 'GB', 15: 'BUF', 16: 'CHI', 17: 'SF', 18: 'MIN'},
    'GB': {1: 'PHI', 2: 'IND', 3: 'TEN', 4: 'MIN', 5: 'LAR', 6: 'ARI', 7: 'HOU', 8: 'JAX', 9: 'DET', 10: 'BYE', 11: 'CHI', 12: 'SF', 13: 'MIA', 14: 'DET', 15: 'SEA', 16: 'NO', 17: 'MIN', 18: 'CHI'},
    'HOU': {1: 'IND', 2: 'CHI', 3: 'MIN', 4: 'JAX', 5: 'BUF', 6: 'NE', 7: 'GB', 8: 'IND', 9: 'NYJ', 10: 'DET', 11: 'DAL', 12: 'TEN', 13: 'JAX', 14: 'BYE', 15: 'MIA', 16: 'KC', 17: 'BAL', 18: 'TEN'},
    'IND': {1: 'HOU', 2: 'GB', 3: 'CHI', 4: 'PIT', 5: 'JAX', 6: 'TEN', 7: 'MIA', 8: 'HOU', 9: 'MIN', 10: 'BUF', 11: 'NYJ', 12: 'DET', 13: 'NE', 14: 'BYE', 15: 'DEN', 16: 'TEN', 17: 'NYG', 18: 'JAX'},
    'JAX': {1: 'MIA', 2: 'CLE', 3: 'BUF', 4: 'HOU', 5: 'IND', 6: 'CHI', 7: 'NE', 8: 'GB', 9: 'PHI', 10: 'MIN', 11: 'DET', 12: 'BYE', 13: 'HOU', 14: 'TEN', 15: 'NYJ', 16: 'LV', 17: 'TEN', 18: 'IND'},
    'KC': {1: 'BAL', 2: 'CIN', 3: 'ATL', 4: 'LAC', 5: 'NO', 6: 'BYE', 7: 'SF', 8: 'LV', 9: 'TB', 10: 'DEN', 11: 'BUF', 12: 'CAR', 13: 'LV', 14: 'LAC', 15: 'CLE', 16: 'HOU', 17: 'PIT', 18: 'DEN'},
    'LV': {1: 'LAC', 2: 'BAL', 3: 'CAR', 4: 'CLE', 5: 'DEN', 6: 'PIT', 7: 'LAR', 8: 'KC', 9: 'CIN', 10: 'BYE', 11: 'MIA', 12: 'DEN', 13: 'KC', 14: 'TB', 15: 'ATL', 16: 'JAX', 17: 'NO', 18: 'LAC'},
    'LAC': {1: 'LV', 2: 'CAR', 3: 'PIT', 4: 'KC', 5: 'BYE', 6: 'DEN', 7: 'ARI', 8: 'NO', 9: 'CLE', 10: 'TEN', 11: 'CIN', 12: 'BAL', 13: 'ATL', 14: 'KC', 15: 'TB', 16: 'DEN', 17: 'NE', 18: 'LV'},
    'LAR': {1: 'DET', 2: 'ARI', 3: 'SF', 4: 'CHI', 5: 'GB', 6: 'BYE', 7: 'LV', 8: 'MIN', 9: 'SEA', 10: 'MIA', 11: 'NE', 12: 'PHI', 13: 'NO', 14: 'BUF', 15: 'SF', 16: 'NYJ', 17: 'ARI', 18: 'SEA'},
    'MIA': {1: 'JAX', 2: 'BUF', 3: 'SEA', 4: 'TEN', 5: 'NE', 6: 'BYE', 7: 'IND', 8: 'ARI', 9: 'BUF', 10: 'LAR', 11: 'LV', 12: 'NE', 13: 'GB', 14: 'NYJ', 15: 'HOU', 16: 'SF', 17: 'CLE', 18: 'NYJ'},
    'MIN': {1: 'NYG', 2: 'SF', 3: 'HOU', 4: 'GB', 5: 'NYJ', 6: 'BYE', 7: 'DET', 8: 'LAR', 9: 'IND', 10: 'JAX', 11: 'TEN', 12: 'CHI', 13: 'ARI', 14: 'ATL', 15: 'CHI', 16: 'SEA', 17: 'GB', 18: 'DET'},
    'NE': {1: 'CIN', 2: 'SEA', 3: 'NYJ', 4: 'SF', 5: 'MIA', 6: 'HOU', 7: 'JAX', 8: 'NYJ', 9: 'TEN', 10: 'CHI', 11: 'LAR', 12: 'MIA', 13: 'IND', 14: 'BYE', 15: 'ARI', 16: 'BUF', 17: 'LAC', 18: 'BUF'},
    'NO': {1: 'CAR', 2: 'DAL', 3: 'PHI', 4: 'ATL', 5: 'KC', 6: 'TB', 7: 'DEN', 8: 'LAC', 9: 'CAR', 10: 'ATL', 11: 'CLE', 12: 'BYE', 13: 'LAR', 14: 'NYG', 15: 'WAS', 16: 'GB', 17: 'LV', 18: 'TB'},
    'NYG': {1: 'MIN', 2: 'WAS', 3: 'CLE', 4: 'DAL', 5: 'SEA', 6: 'CIN', 7: 'PHI', 8: 'PIT', 9: 'WAS', 10: 'CAR', 11: 'BYE', 12: 'TB', 13: 'DAL', 14: 'NO', 15: 'BAL', 16: 'ATL', 17: 'IND', 18: 'PHI'},
    'NYJ': {1: 'SF', 2: 'TEN', 3: 'NE', 4: 'DEN', 5: 'MIN', 6: 'BUF', 7: 'PIT', 8: 'NE', 9: 'HOU', 10: 'ARI', 11: 'IND', 12: 'BYE', 13: 'SEA', 14: 'MIA', 15: 'JAX', 16: 'LAR', 17: 'BUF', 18: 'MIA'},
    'PHI': {1: 'GB', 2: 'ATL', 3: 'NO', 4: 'TB', 5: 'BYE', 6: 'CLE', 7: 'NYG', 8: 'CIN', 9: 'JAX', 10: 'DAL', 11: 'WAS', 12: 'LAR', 13: 'BAL', 14: 'CAR', 15: 'PIT', 16: 'WAS', 17: 'DAL', 18: 'NYG'},
    'PIT': {1: 'ATL', 2: 'DEN', 3: 'LAC', 4: 'IND', 5: 'DAL', 6: 'LV', 7: 'NYJ', 8: 'NYG', 9: 'BYE', 10: 'WAS', 11: 'BAL', 12: 'CLE', 13: 'CIN', 14: 'CLE', 15: 'PHI', 16: 'BAL', 17: 'KC', 18: 'CIN'},
    'SF': {1: 'NYJ', 2: 'MIN', 3: 'LAR', 4: 'NE', 5: 'ARI', 6: 'SEA', 7: 'KC', 8: 'DAL', 9: 'BYE', 10: 'TB', 11: 'SEA', 12: 'GB', 13: 'BUF', 14: 'CHI', 15: 'LAR', 16: 'MIA', 17: 'DET', 18: 'ARI'},
    'SEA': {1: 'DEN', 2: 'NE', 3: 'MIA', 4: 'DET', 5: 'NYG', 6: 'SF', 7: 'ATL', 8: 'BUF', 9: 'LAR', 10: 'BYE', 11: 'SF', 12: 'ARI', 13: 'NYJ', 14: 'ARI', 15: 'GB', 16: 'MIN', 17: 'CHI', 18: 'LAR'},
    'TB': {1: 'WAS', 2: 'DET', 3: 'DEN', 4: 'PHI', 5: 'ATL', 6: 'NO', 7: 'BAL', 8: 'ATL', 9: 'KC', 10: 'SF', 11: 'BYE', 12: 'NYG', 13: 'CAR', 14: 'LV', 15: 'LAC', 16: 'DAL', 17: 'CAR', 18: 'NO'},
    'TEN': {1: 'CHI', 2: 'NYJ', 3: 'GB', 4: 'MIA', 5: 'BYE', 6: 'IND', 7: 'BUF', 8: 'DET', 9: 'NE', 10: 'LAC', 11: 'MIN', 12: 'HOU', 13: 'WAS', 14: 'JAX', 15: 'CIN', 16: 'IND', 17: 'JAX', 18: 'HOU'},
    'WAS': {1: 'TB', 2: 'NYG', 3: 'CIN', 4: 'ARI', 5: 'CLE', 6: 'BAL', 7: 'CAR', 8: 'CHI', 9: 'NYG', 10: 'PIT', 11: 'PHI', 12: 'DAL', 13: 'TEN', 14: 'BYE', 15: 'NO', 16: 'PHI', 17: 'ATL', 18: 'DAL'},
}


class NFLSchedule:
    """Read-only team -> week -> opponent table for one season."""

    def __init__(self, table: Mapping[str, Mapping[int, str]], season: Optional[int] = None):
        self.season = season
        self._table = {
            team.upper(): {int(week): opp for week, opp in weeks.items()}
            for team, weeks in table.items()
        }

    @property
    def teams(self) -> list[str]:
        return sorted(self._table)

    def opponent(self, team: Optional[str], week: int) -> Optional[str]:
        """Opponent for a team in a week ('BYE' on its bye), or None if unknown."""
        if not team:
            return None
        return self._table.get(team.upper(), {}).get(week)

    def bye_week(self, team: Optional[str]) -> Optional[int]:
        """First week the team is on bye, or None if the team is unknown."""
        if not team:
            return None
        for week, opponent in sorted(self._table.get(team.upper(), {}).items()):
            if opponent == BYE:
                return week
        return None

    def has_upcoming_bye(
        self, team: Optional[str], current_week: int, within_weeks: int = 2
    ) -> tuple[bool, Optional[int]]:
        """
        Check whether a team's bye falls in the next ``within_weeks`` weeks.

        The current week itself does not count as upcoming.

        Returns:
            Tuple of (has_upcoming_bye, bye_week)
        """
        bye = self.bye_week(team)
        if bye is None:
            return False, None
        weeks_until_bye = bye - current_week
        return 0 < weeks_until_bye <= within_weeks, bye

    def is_bye_passed(self, team: Optional[str], current_week: int) -> bool:
        """True once the team's bye is behind it (or when there is no bye info)."""
        bye = self.bye_week(team)
        if bye is None:
            return True
        return current_week > bye

    def to_dict(self) -> dict[str, dict[int, str]]:
        return {team: dict(weeks) for team, weeks in self._table.items()}


def default_schedule() -> NFLSchedule:
    """The bundled 2024 schedule table."""
    return NFLSchedule(NFL_SCHEDULE_2024, season=2024)


def get_current_season(today: Optional[date] = None) -> str:
    """
    Current NFL season as a string.

    The season runs September through February, so January through March
    still belong to the previous year's season.
    """
    today = today or date.today()
    if today.month < 4:
        return str(today.year - 1)
    return str(today.year)


def get_current_week(today: Optional[date] = None) -> int:
    """Approximate current NFL week (1-18), counted from early September."""
    today = today or date.today()
    season_start = date(today.year, *SEASON_START)

    if today < season_start:
        return 1

    weeks_passed = (today - season_start).days // 7
    return min(max(1, weeks_passed + 1), SEASON_WEEKS)
