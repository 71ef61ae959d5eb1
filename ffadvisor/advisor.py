"""Advisor service that ties the Sleeper client to the recommendation engine."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional

from .comparison import compare_players, get_start_sit_recommendation
from .constants import RECENT_GAMES
from .game_log import aggregate_player, build_game_log
from .models import (
    ComparisonResult,
    PlayerWithStats,
    StartSitRecommendation,
    TradeAnalysis,
    UpgradeSuggestion,
)
from .schedule import NFLSchedule, get_current_season, get_current_week
from .sleeper_client import SleeperClient
from .trade import analyze_trade
from .waivers import build_free_agent_pool, find_upgrades

logger = logging.getLogger('ffadvisor.advisor')


class FantasyAdvisor:
    """
    Answers the advisor's questions for one season and week.

    Season and week come from the client's config when set there, and
    otherwise from ``today`` (default: the real date).
    """

    def __init__(self, client: SleeperClient, schedule: NFLSchedule, today: Optional[date] = None):
        self.client = client
        self.schedule = schedule
        self.season = client.config.season or get_current_season(today)
        self.week = client.config.week or get_current_week(today)
        self.max_workers = client.config.max_workers

    def recent_weeks(self, games: int = RECENT_GAMES) -> list[int]:
        """The completed weeks just before the current one (week 1 at the earliest)."""
        return sorted({max(1, self.week - offset) for offset in range(1, games + 1)})

    def _fetch_weeks(self, weeks: list[int]) -> tuple[dict[int, dict], dict[int, dict]]:
        """Fetch stats and projections for several weeks in parallel."""
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            stats_futures = {w: executor.submit(self.client.get_weekly_stats, self.season, w) for w in weeks}
            proj_futures = {w: executor.submit(self.client.get_weekly_projections, self.season, w) for w in weeks}
            weekly_stats = {w: f.result() for w, f in stats_futures.items()}
            weekly_projections = {w: f.result() for w, f in proj_futures.items()}

        # Empty maps mean the fetch failed; leave the week out entirely
        weekly_stats = {w: s for w, s in weekly_stats.items() if s}
        weekly_projections = {w: p for w, p in weekly_projections.items() if p}
        logger.debug(f'Fetched stats for {len(weekly_stats)}/{len(weeks)} weeks')
        return weekly_stats, weekly_projections

    def _with_stats(
        self,
        player_id: str,
        weekly_stats: dict[int, dict],
        weekly_projections: dict[int, dict],
    ) -> Optional[PlayerWithStats]:
        player = self.client.get_player_by_id(player_id)
        if player is None:
            logger.warning(f'Player {player_id} not found')
            return None

        log = build_game_log(
            player_id,
            weekly_stats,
            weekly_projections,
            team=player.team,
            schedule=self.schedule,
        )
        current_projection = weekly_projections.get(self.week, {}).get(player_id)
        return aggregate_player(player, log, current_projection)

    def get_player_with_stats(self, player_id: str) -> Optional[PlayerWithStats]:
        """
        A player with game log, season average, recent form and this week's projection.

        Returns:
            PlayerWithStats, or None if the player id is unknown
        """
        return self.get_players_with_stats([player_id]).get(player_id)

    def get_players_with_stats(self, player_ids: list[str]) -> dict[str, PlayerWithStats]:
        """
        Several players at once, sharing one round of weekly fetches.

        Unknown ids are left out of the result.
        """
        # Load the directory before fanning out so the cache fills once
        self.client.fetch_all_players()
        weekly_stats, weekly_projections = self._fetch_weeks(list(range(1, self.week + 1)))

        players = {}
        for player_id in player_ids:
            player = self._with_stats(player_id, weekly_stats, weekly_projections)
            if player is not None:
                players[player_id] = player
        return players

    def compare(self, player1_id: str, player2_id: str) -> Optional[ComparisonResult]:
        players = self.get_players_with_stats([player1_id, player2_id])
        if player1_id not in players or player2_id not in players:
            return None
        return compare_players(players[player1_id], players[player2_id])

    def start_sit(self, player1_id: str, player2_id: str) -> Optional[StartSitRecommendation]:
        players = self.get_players_with_stats([player1_id, player2_id])
        if player1_id not in players or player2_id not in players:
            return None
        return get_start_sit_recommendation(players[player1_id], players[player2_id])

    def analyze_trade(self, team1_ids: list[str], team2_ids: list[str]) -> TradeAnalysis:
        """Value a trade; unknown player ids are ignored."""
        players = self.get_players_with_stats(team1_ids + team2_ids)
        team1 = [players[pid] for pid in team1_ids if pid in players]
        team2 = [players[pid] for pid in team2_ids if pid in players]
        return analyze_trade(team1, team2)

    def waiver_upgrades(
        self,
        league_id: str,
        user_id: str,
        ideal: Optional[dict[str, int]] = None,
        limit: int = 10,
    ) -> Optional[list[UpgradeSuggestion]]:
        """
        Add/drop suggestions for the user's roster in a league.

        Returns:
            Ranked suggestions, or None when the user has no roster in the league
        """
        rosters = self.client.get_league_rosters(league_id)
        user_roster = next((r for r in rosters if r.owner_id == user_id), None)
        if user_roster is None:
            logger.warning(f'User {user_id} has no roster in league {league_id}')
            return None

        recent = self.recent_weeks()
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            users_future = executor.submit(self.client.get_league_users, league_id)
            players_future = executor.submit(self.client.get_fantasy_players)
            projections_future = executor.submit(self.client.get_weekly_projections, self.season, self.week)
            recent_futures = [executor.submit(self.client.get_weekly_stats, self.season, w) for w in recent]
            league_users = users_future.result()
            fantasy_players = players_future.result()
            projections = projections_future.result()
            recent_stats = [f.result() for f in recent_futures]

        roster = self.client.get_roster_with_players(user_roster, league_users, projections)
        free_agents = build_free_agent_pool(fantasy_players, rosters, projections, recent_stats)
        logger.info(f'{len(free_agents)} free agents available in league {league_id}')

        return find_upgrades(
            roster,
            free_agents,
            projections,
            recent_stats,
            self.schedule,
            self.week,
            ideal=ideal,
            limit=limit,
        )
