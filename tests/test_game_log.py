"""Unit tests for game logs and player aggregates."""

import pytest

from ffadvisor.game_log import (
    GameLog,
    aggregate_player,
    build_game_log,
    calculate_consistency,
    recent_average,
    recent_form,
    season_average,
)
from ffadvisor.models import GameLogEntry, Player
from ffadvisor.schedule import NFLSchedule


def rushing(yards: int) -> dict:
    return {'rush_att': 12, 'rush_yd': yards}


@pytest.fixture
def injury_season():
    """Weeks 1, 2, 3, 5, 8 played; week 4 bye; weeks 6-7 missed to injury."""
    return {
        1: {'4046': rushing(100)},   # 10.0
        2: {'4046': rushing(50)},    # 5.0
        3: {'4046': rushing(80)},    # 8.0
        4: {},
        5: {'4046': rushing(120)},   # 12.0
        6: {'4046': {'rush_att': 0}},
        7: {'4046': {}},
        8: {'4046': rushing(60)},    # 6.0
    }


def entry(week: int, points: float) -> GameLogEntry:
    return GameLogEntry(week=week, stats={}, fantasy_points=points)


class TestGameLog:
    """Tests for the chronological game log."""

    def test_append_in_order(self):
        """Test entries appended in week order are kept in that order."""
        log = GameLog()
        log.append(entry(1, 10))
        log.append(entry(3, 12))
        assert log.weeks == [1, 3]
        assert len(log) == 2

    def test_out_of_order_append_raises(self):
        """Test appending an earlier week raises ValueError."""
        log = GameLog([entry(5, 10)])
        with pytest.raises(ValueError, match='week order'):
            log.append(entry(3, 10))

    def test_duplicate_week_raises(self):
        """Test a week cannot be logged twice."""
        log = GameLog([entry(2, 10)])
        with pytest.raises(ValueError):
            log.append(entry(2, 11))

    def test_recent_returns_last_n_oldest_first(self):
        """Test recent() returns the last n played games, oldest first."""
        log = GameLog([entry(w, w) for w in (1, 2, 3, 5, 8)])
        assert [e.week for e in log.recent(3)] == [3, 5, 8]

    def test_recent_with_fewer_games(self):
        """Test recent() returns everything when fewer than n games exist."""
        log = GameLog([entry(1, 4)])
        assert [e.week for e in log.recent(3)] == [1]
        assert log.recent(0) == []

    def test_entries_is_a_copy(self):
        """Test entries() cannot be used to reorder the log."""
        log = GameLog([entry(1, 4), entry(2, 6)])
        entries = log.entries()
        entries.reverse()
        assert log.weeks == [1, 2]


class TestBuildGameLog:
    """Tests for building a game log from weekly stat maps."""

    def test_skips_unplayed_weeks(self, injury_season):
        """Test bye and injury weeks leave no entries."""
        log = build_game_log('4046', injury_season)
        assert log.weeks == [1, 2, 3, 5, 8]
        assert log.points == [10.0, 5.0, 8.0, 12.0, 6.0]

    def test_recent_form_spans_injury_gap(self, injury_season):
        """Test recent form averages the last 3 played games (weeks 3, 5, 8)."""
        log = build_game_log('4046', injury_season)
        assert recent_form(log) == 8.7  # (8 + 12 + 6) / 3

    def test_season_average(self, injury_season):
        """Test season average is over games played only."""
        log = build_game_log('4046', injury_season)
        assert season_average(log) == 8.2  # 41 / 5

    def test_missing_weeks_are_skipped(self):
        """Test weeks absent from the map (failed fetches) are simply skipped."""
        log = build_game_log('4046', {3: {'4046': rushing(40)}, 1: {'4046': rushing(20)}})
        assert log.weeks == [1, 3]

    def test_projections_and_opponents(self):
        """Test weekly projections and schedule opponents are attached."""
        schedule = NFLSchedule({'KC': {1: 'BAL', 2: 'CIN', 3: 'BYE'}})
        stats = {1: {'4046': rushing(90)}, 2: {'4046': rushing(30)}}
        projections = {1: {'4046': {'rush_yd': 70}}}

        log = build_game_log('4046', stats, projections, team='KC', schedule=schedule)
        first, second = log.entries()

        assert first.opponent == 'BAL'
        assert first.projected_points == 7.0
        assert second.opponent == 'CIN'
        assert second.projected_points is None

    def test_empty_log(self):
        """Test a player with no games averages 0."""
        log = build_game_log('4046', {1: {}, 2: {}})
        assert len(log) == 0
        assert season_average(log) == 0.0
        assert recent_form(log) == 0.0


class TestConsistency:
    """Tests for standard deviation of weekly points."""

    def test_population_standard_deviation(self):
        """Test consistency is the population stdev of weekly points."""
        log = GameLog([entry(1, 10), entry(2, 14)])
        assert calculate_consistency(log) == 2.0

    def test_fewer_than_two_games(self):
        """Test fewer than 2 games gives 0."""
        assert calculate_consistency(GameLog()) == 0.0
        assert calculate_consistency(GameLog([entry(1, 25)])) == 0.0

    def test_accepts_entry_list(self):
        """Test a plain list of entries works too."""
        assert calculate_consistency([entry(1, 7), entry(2, 17)]) == 5.0


class TestAggregation:
    """Tests for combining a player with their game log."""

    def test_aggregate_player(self, injury_season):
        """Test PlayerWithStats carries the player fields and aggregates."""
        player = Player(id='4046', name='Test Back', position='RB', team='KC', injury_status='Questionable')
        log = build_game_log('4046', injury_season)

        result = aggregate_player(player, log, current_projection={'rush_yd': 95, 'rec': 2})

        assert result.name == 'Test Back'
        assert result.injury_status == 'Questionable'
        assert result.projected_points == 11.5
        assert result.avg_points == 8.2
        assert result.recent_avg_points == 8.7
        assert [e.week for e in result.game_log] == [1, 2, 3, 5, 8]

    def test_no_projection(self):
        """Test a missing projection gives 0 projected points."""
        player = Player(id='1', name='Nobody', position='WR')
        assert aggregate_player(player, GameLog()).projected_points == 0.0

    def test_recent_average_uses_played_games(self):
        """Test recent_average applies the same played-game test as the game log."""
        recent_stats = [
            {'4046': rushing(100)},
            {'4046': {'rush_att': 0}},
            {'4046': rushing(50)},
        ]
        assert recent_average('4046', recent_stats) == 7.5
        assert recent_average('9999', recent_stats) == 0.0
