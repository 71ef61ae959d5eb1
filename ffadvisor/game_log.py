"""Season game logs and the aggregates derived from them.

A game log only ever holds games a player actually played. Bye weeks and
weeks missed to injury leave no entry, so "recent form" over the last three
entries may reach further back than the last three calendar weeks.
"""

import math
from typing import Iterator, Mapping, Optional

from .constants import RECENT_GAMES
from .models import GameLogEntry, Player, PlayerWithStats
from .schedule import NFLSchedule
from .scoring import calculate_fantasy_points, is_played_game, round_points

# week -> player id -> stat line
WeeklyStats = Mapping[int, Mapping[str, dict]]


class GameLog:
    """
    Chronological list of played games.

    Entries must be appended in strictly increasing week order; iteration
    and recent() both run oldest to newest.
    """

    def __init__(self, entries: Optional[list[GameLogEntry]] = None):
        self._entries: list[GameLogEntry] = []
        for entry in entries or []:
            self.append(entry)

    def append(self, entry: GameLogEntry) -> None:
        if self._entries and entry.week <= self._entries[-1].week:
            raise ValueError(
                f'Game log entries must be in week order: week {entry.week} '
                f'after week {self._entries[-1].week}'
            )
        self._entries.append(entry)

    def recent(self, n: int = RECENT_GAMES) -> list[GameLogEntry]:
        """The ``n`` most recently played games, oldest first."""
        if n <= 0:
            return []
        return self._entries[-n:]

    @property
    def points(self) -> list[float]:
        return [entry.fantasy_points for entry in self._entries]

    @property
    def weeks(self) -> list[int]:
        return [entry.week for entry in self._entries]

    @property
    def total_points(self) -> float:
        return sum(self.points)

    def entries(self) -> list[GameLogEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[GameLogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def build_game_log(
    player_id: str,
    weekly_stats: WeeklyStats,
    weekly_projections: Optional[WeeklyStats] = None,
    team: Optional[str] = None,
    schedule: Optional[NFLSchedule] = None,
) -> GameLog:
    """
    Build a player's game log from per-week stat maps.

    Weeks missing from ``weekly_stats`` (failed fetches) are skipped. A week
    only produces an entry when is_played_game() holds for the stat line.

    Args:
        player_id: Sleeper player id (team abbreviation for defenses)
        weekly_stats: week -> player id -> stat line
        weekly_projections: week -> player id -> projected stat line
        team: Player's NFL team, for opponent lookup
        schedule: Schedule used for opponent lookup

    Returns:
        GameLog in week order
    """
    weekly_projections = weekly_projections or {}
    log = GameLog()

    for week in sorted(weekly_stats):
        stats = weekly_stats[week].get(player_id)
        if not stats or not is_played_game(stats):
            continue

        projection = weekly_projections.get(week, {}).get(player_id)
        log.append(GameLogEntry(
            week=week,
            stats=stats,
            fantasy_points=calculate_fantasy_points(stats),
            projected_points=calculate_fantasy_points(projection) if projection else None,
            opponent=schedule.opponent(team, week) if schedule else None,
        ))

    return log


def season_average(log: GameLog) -> float:
    """Mean fantasy points over games played (0 if none)."""
    return round_points(_mean(log.points))


def recent_form(log: GameLog, games: int = RECENT_GAMES) -> float:
    """Mean fantasy points over the most recent played games (0 if none)."""
    return round_points(_mean([entry.fantasy_points for entry in log.recent(games)]))


def calculate_consistency(log: GameLog | list[GameLogEntry]) -> float:
    """
    Standard deviation of fantasy points across the game log.

    Lower means more consistent. Fewer than 2 games gives 0.
    """
    points = [entry.fantasy_points for entry in log]
    if len(points) < 2:
        return 0.0

    mean = _mean(points)
    variance = _mean([(p - mean) ** 2 for p in points])
    return round_points(math.sqrt(variance))


def aggregate_player(
    player: Player,
    log: GameLog,
    current_projection: Optional[dict] = None,
) -> PlayerWithStats:
    """
    Combine a player with their game log into a PlayerWithStats.

    Args:
        player: Player record
        log: The player's played-games log
        current_projection: This week's projected stat line, if any

    Returns:
        PlayerWithStats with projected, season average and recent form filled in
    """
    base = {name: getattr(player, name) for name in Player.__dataclass_fields__}
    return PlayerWithStats(
        **base,
        projected_points=calculate_fantasy_points(current_projection) if current_projection else 0.0,
        avg_points=season_average(log),
        recent_avg_points=recent_form(log),
        game_log=log.entries(),
    )


def recent_average(player_id: str, recent_stats: list[Mapping[str, dict]]) -> float:
    """
    Recent-form average from a handful of already-fetched weekly stat maps.

    Applies the same played-game test as build_game_log so waiver pool
    numbers agree with player pages.
    """
    points = []
    for week_stats in recent_stats:
        stats = week_stats.get(player_id)
        if stats and is_played_game(stats):
            points.append(calculate_fantasy_points(stats))
    return round_points(_mean(points))

