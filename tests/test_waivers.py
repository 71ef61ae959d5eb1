"""Unit tests for the waiver upgrade heuristic."""

import pytest

from ffadvisor.models import (
    ByeWeekNeed,
    DepthStatus,
    DropCandidate,
    Player,
    RosterWithPlayers,
    UpgradeSuggestion,
    ValuedPlayer,
)
from ffadvisor.schedule import NFLSchedule
from ffadvisor.schemas import SleeperRoster
from ffadvisor.waivers import (
    BYE_WEEK_COVERAGE,
    ROSTER_OPTIMIZATION,
    SAME_POSITION,
    build_excess_pool,
    build_free_agent_pool,
    bye_week_suggestions,
    classify_positions,
    count_positions,
    find_bye_week_needs,
    find_upgrades,
    rank_suggestions,
    standard_suggestions,
)

FULL_COUNTS = {'QB': 2, 'RB': 5, 'WR': 3, 'TE': 2, 'K': 1, 'DEF': 1}


def player(pid, pos, team='BBB'):
    return Player(id=pid, name=f'{pos} {pid}', position=pos, team=team)


def valued(pid, pos, proj, team='BBB'):
    return ValuedPlayer(player=player(pid, pos, team), projected_points=proj)


def drop(pid, pos, proj, reason='Low projection', team='BBB'):
    return DropCandidate(player=player(pid, pos, team), projected_points=proj, excess_reason=reason)


@pytest.fixture
def schedule():
    """Teams with byes in weeks 6 (AAA), 9 (BBB), 5 (CCC) and 2 (EEE)."""
    byes = {'AAA': 6, 'BBB': 9, 'CCC': 5, 'EEE': 2}
    return NFLSchedule({
        team: {week: 'BYE' if week == bye else 'OPP' for week in range(1, 19)}
        for team, bye in byes.items()
    })


class TestDepth:
    """Tests for counting and classifying roster depth."""

    def test_count_positions(self):
        players = [valued('1', 'RB', 5), valued('2', 'RB', 6), valued('3', 'QB', 9)]
        assert count_positions(players) == {'RB': 2, 'QB': 1}

    def test_classify_positions(self):
        """Test positions are tagged against the ideal depth."""
        depth = classify_positions({'QB': 2, 'RB': 5, 'WR': 3})
        assert depth['QB'] is DepthStatus.FULL
        assert depth['RB'] is DepthStatus.EXCESS
        assert depth['WR'] is DepthStatus.THIN
        assert depth['DEF'] is DepthStatus.THIN
        assert depth['WR'].needs_depth
        assert not depth['RB'].needs_depth

    def test_custom_ideal(self):
        depth = classify_positions({'RB': 5}, ideal={'RB': 5})
        assert depth['RB'] is DepthStatus.FULL


class TestExcessPool:
    """Tests for build_excess_pool."""

    def test_worst_players_beyond_ideal(self):
        """Test an RB group one over ideal gives up its worst RB."""
        rbs = [valued(f'r{i}', 'RB', proj) for i, proj in enumerate([12, 3, 15, 7, 9])]
        pool = build_excess_pool(rbs, bench=[])
        assert len(pool) == 1
        assert pool[0].id == 'r1'
        assert pool[0].excess_reason == 'RB1 of 5 (only need 4)'

    def test_low_projection_bench(self):
        """Test bench players under 5 points are droppable at any depth."""
        wr = valued('w1', 'WR', 4)
        pool = build_excess_pool([wr], bench=[wr])
        assert [p.id for p in pool] == ['w1']
        assert pool[0].excess_reason == 'Low projection (4.0 pts)'

    def test_no_duplicates_and_sorted(self):
        """Test a player is listed once and the pool runs worst first."""
        rbs = [valued(f'r{i}', 'RB', proj) for i, proj in enumerate([12, 3, 15, 7, 9])]
        wr = valued('w1', 'WR', 2)
        pool = build_excess_pool(rbs + [wr], bench=[rbs[1], wr])
        assert [p.id for p in pool] == ['w1', 'r1']

    def test_nothing_to_drop(self):
        qbs = [valued('q1', 'QB', 20), valued('q2', 'QB', 12)]
        assert build_excess_pool(qbs, bench=[qbs[1]]) == []


class TestByeWeekNeeds:
    """Tests for find_bye_week_needs."""

    def test_starter_without_backup(self, schedule):
        """Test a starter with a bye in 2 weeks and a weak backup is a need."""
        starter = valued('s1', 'RB', 15, team='AAA')
        backup = valued('b1', 'RB', 7, team='BBB')
        needs = find_bye_week_needs([starter], [backup], schedule, current_week=4)
        assert len(needs) == 1
        assert needs[0].position == 'RB'
        assert needs[0].bye_week == 6
        assert needs[0].starters_on_bye[0].id == 's1'

    def test_viable_backup(self, schedule):
        """Test a backup with 8+ points on a different bye covers the starter."""
        starter = valued('s1', 'RB', 15, team='AAA')
        backup = valued('b1', 'RB', 9, team='CCC')
        assert find_bye_week_needs([starter], [backup], schedule, current_week=4) == []

    def test_backup_on_same_bye(self, schedule):
        """Test a backup on the same bye does not count."""
        starter = valued('s1', 'RB', 15, team='AAA')
        backup = valued('b1', 'RB', 12, team='AAA')
        needs = find_bye_week_needs([starter], [backup], schedule, current_week=4)
        assert [n.bye_week for n in needs] == [6]

    def test_bye_this_week_not_upcoming(self, schedule):
        """Test a bye in the current week is not upcoming."""
        starter = valued('s1', 'WR', 15, team='CCC')
        assert find_bye_week_needs([starter], [], schedule, current_week=5) == []

    def test_bye_too_far_away(self, schedule):
        starter = valued('s1', 'WR', 15, team='BBB')
        assert find_bye_week_needs([starter], [], schedule, current_week=4) == []


class TestByeWeekSuggestions:
    """Tests for bye_week_suggestions."""

    def test_fill_in_suggestion(self, schedule):
        """Test an eligible free agent is paired with the best drop candidate."""
        need = ByeWeekNeed(position='RB', bye_week=6, starters_on_bye=[player('s1', 'RB', 'AAA')])
        free_agents = [
            valued('fa1', 'RB', 12, team='AAA'),  # same bye
            valued('fa4', 'WR', 15),              # wrong position
            valued('fa2', 'RB', 10),
            valued('fa3', 'RB', 5),               # too weak
        ]
        pool = [drop('r5', 'RB', 3), drop('w9', 'WR', 4)]

        suggestions = bye_week_suggestions([need], free_agents, pool, schedule)

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.free_agent.id == 'fa2'
        assert suggestion.drop_candidate.id == 'r5'
        assert suggestion.projected_gain == 7.0
        assert suggestion.suggestion_type == BYE_WEEK_COVERAGE
        assert suggestion.reason == 'Week 6 bye coverage: RB s1 on bye. RB fa2 can fill in.'

    def test_only_first_three_candidates(self, schedule):
        need = ByeWeekNeed(position='RB', bye_week=6, starters_on_bye=[player('s1', 'RB', 'AAA')])
        free_agents = [valued(f'fa{i}', 'RB', 10 - i) for i in range(5)]
        suggestions = bye_week_suggestions([need], free_agents, [drop('r5', 'RB', 3)], schedule)
        assert [s.free_agent.id for s in suggestions] == ['fa0', 'fa1', 'fa2']

    def test_no_drop_candidates(self, schedule):
        need = ByeWeekNeed(position='RB', bye_week=6)
        assert bye_week_suggestions([need], [valued('fa', 'RB', 20)], [], schedule) == []


class TestStandardSuggestions:
    """Tests for same-position and cross-position suggestions."""

    def test_never_adds_to_full_position(self, schedule):
        """Test cross-position adds only go to thin positions."""
        depth = classify_positions(FULL_COUNTS)
        free_agents = [valued('fa_qb', 'QB', 20), valued('fa_te', 'TE', 12), valued('fa_wr', 'WR', 9)]
        pool = [drop('r5', 'RB', 3, reason='RB1 of 5 (only need 4)')]

        suggestions = standard_suggestions(free_agents, pool, depth, FULL_COUNTS, schedule, 4)

        assert [s.free_agent.id for s in suggestions] == ['fa_wr']
        assert suggestions[0].suggestion_type == ROSTER_OPTIMIZATION
        assert suggestions[0].reason == 'Add WR depth (you only have 3). Drop RB r5 (RB1 of 5 (only need 4))'
        assert all(depth[s.free_agent.position] is DepthStatus.THIN
                   for s in suggestions if s.suggestion_type == ROSTER_OPTIMIZATION)

    def test_cross_position_needs_eight_points(self, schedule):
        depth = classify_positions(FULL_COUNTS)
        suggestions = standard_suggestions(
            [valued('fa_wr', 'WR', 7.9)], [drop('r5', 'RB', 3)], depth, FULL_COUNTS, schedule, 4
        )
        assert suggestions == []

    def test_same_position_gain_threshold(self, schedule):
        """Test same-position adds need a gain of at least 2 points."""
        depth = classify_positions(FULL_COUNTS)
        free_agents = [valued('fa_a', 'RB', 5.0), valued('fa_b', 'RB', 4.9)]
        suggestions = standard_suggestions(free_agents, [drop('r5', 'RB', 3)], depth, FULL_COUNTS, schedule, 4)

        assert [s.free_agent.id for s in suggestions] == ['fa_a']
        assert suggestions[0].suggestion_type == SAME_POSITION
        assert suggestions[0].projected_gain == 2.0
        assert suggestions[0].reason == 'RB fa_a projected 2.0 pts higher than RB r5'

    @pytest.mark.parametrize('fa_proj,drop_proj', [(4.1, 2.1), (8.3, 6.3), (19.7, 17.7)])
    def test_same_position_exact_two_point_gain(self, schedule, fa_proj, drop_proj):
        """Test a two-point gain qualifies even when the float difference falls just short."""
        depth = classify_positions(FULL_COUNTS)
        suggestions = standard_suggestions(
            [valued('fa_a', 'RB', fa_proj)], [drop('r5', 'RB', drop_proj)], depth, FULL_COUNTS, schedule, 4
        )

        assert len(suggestions) == 1
        assert suggestions[0].projected_gain == 2.0

    def test_bye_week_done_note(self, schedule):
        """Test a free agent whose bye has passed is noted."""
        depth = classify_positions(FULL_COUNTS)
        free_agents = [valued('fa_a', 'RB', 10, team='EEE')]
        suggestions = standard_suggestions(free_agents, [drop('r5', 'RB', 3)], depth, FULL_COUNTS, schedule, 4)
        assert suggestions[0].reason.endswith('(bye week done)')

    def test_only_top_thirty_free_agents(self, schedule):
        depth = classify_positions(FULL_COUNTS)
        free_agents = [valued(f'fa{i}', 'RB', 40 - i) for i in range(35)]
        suggestions = standard_suggestions(free_agents, [drop('r5', 'RB', 3)], depth, FULL_COUNTS, schedule, 4)
        assert len(suggestions) == 30


class TestRanking:
    """Tests for rank_suggestions."""

    @staticmethod
    def suggestion(fa_id, drop_id, gain):
        return UpgradeSuggestion(
            free_agent=valued(fa_id, 'RB', 10),
            drop_candidate=drop(drop_id, 'RB', 3),
            projected_gain=gain,
            reason='',
            suggestion_type=SAME_POSITION,
        )

    def test_sorted_and_deduplicated(self):
        """Test each free agent and each drop is used at most once, best gain first."""
        suggestions = [
            self.suggestion('a', 'x', 5),
            self.suggestion('b', 'x', 7),
            self.suggestion('a', 'y', 4),
            self.suggestion('c', 'y', 3),
        ]
        ranked = rank_suggestions(suggestions)
        assert [(s.free_agent.id, s.drop_candidate.id) for s in ranked] == [('b', 'x'), ('a', 'y')]

    def test_limit(self):
        suggestions = [self.suggestion(f'fa{i}', f'd{i}', i) for i in range(15)]
        ranked = rank_suggestions(suggestions)
        assert len(ranked) == 10
        assert ranked[0].projected_gain == 14

    def test_ties_keep_order(self):
        ranked = rank_suggestions([self.suggestion('a', 'x', 3), self.suggestion('b', 'y', 3)])
        assert [s.free_agent.id for s in ranked] == ['a', 'b']


class TestFindUpgrades:
    """End-to-end tests for find_upgrades."""

    @pytest.fixture
    def roster(self):
        starters = [
            player('q1', 'QB'), player('r1', 'RB'), player('r2', 'RB'), player('w1', 'WR'),
            player('w2', 'WR'), player('t1', 'TE'), player('k1', 'K'), player('d1', 'DEF'),
        ]
        bench = [
            player('q2', 'QB'), player('r3', 'RB'), player('r4', 'RB'), player('r5', 'RB'),
            player('w3', 'WR'), player('t2', 'TE'),
        ]
        return RosterWithPlayers(
            roster=SleeperRoster(roster_id=1, owner_id='u1'),
            owner=None,
            players=starters + bench,
            starters=starters,
            bench=bench,
        )

    @pytest.fixture
    def projections(self):
        points = {
            'q1': 18, 'r1': 15, 'r2': 12, 'w1': 14, 'w2': 11, 't1': 9, 'k1': 8, 'd1': 7,
            'q2': 10, 'r3': 9, 'r4': 7, 'r5': 3, 'w3': 6, 't2': 5,
        }
        return {pid: {'rec': pts} for pid, pts in points.items()}

    def test_best_move(self, roster, projections, schedule):
        """Test the thin WR slot is filled by dropping the surplus RB."""
        free_agents = [
            valued('fa_qb', 'QB', 20),
            valued('fa_wr', 'WR', 9),
            valued('fa_rb', 'RB', 6),
            valued('fa_rb2', 'RB', 4),
        ]
        upgrades = find_upgrades(roster, free_agents, projections, [], schedule, current_week=4)

        assert len(upgrades) == 1
        assert upgrades[0].free_agent.id == 'fa_wr'
        assert upgrades[0].drop_candidate.id == 'r5'
        assert upgrades[0].projected_gain == 6.0
        assert upgrades[0].suggestion_type == ROSTER_OPTIMIZATION

    def test_no_drop_candidates(self, schedule):
        """Test a roster with nothing to drop gets no suggestions."""
        starters = [player('q1', 'QB'), player('r1', 'RB')]
        roster = RosterWithPlayers(
            roster=SleeperRoster(roster_id=1), owner=None, players=starters, starters=starters, bench=[]
        )
        projections = {'q1': {'rec': 20}, 'r1': {'rec': 15}}
        upgrades = find_upgrades(roster, [valued('fa', 'RB', 30)], projections, [], schedule, 4)
        assert upgrades == []


class TestFreeAgentPool:
    """Tests for build_free_agent_pool."""

    @pytest.fixture
    def players(self):
        return [
            player('p1', 'RB'),
            player('p2', 'WR'),
            player('p3', 'WR'),
            player('p4', 'TE'),
            Player(id='KC', name='Kansas City Chiefs DEF', position='DEF', team='KC'),
        ]

    def test_pool(self, players):
        """Test rostered and idle players are left out, defenses always included."""
        rosters = [SleeperRoster(roster_id=1, players=['p1'])]
        projections = {'p2': {'rec': 8}}
        recent_stats = [{'p4': {'rec_tgt': 3, 'rec': 2}}]

        pool = build_free_agent_pool(players, rosters, projections, recent_stats)

        assert [p.id for p in pool] == ['p2', 'p4', 'KC']
        assert pool[0].projected_points == 8.0
        assert pool[1].recent_avg_points == 2.0

    def test_skill_limit(self, players):
        """Test the skill player cap does not apply to defenses."""
        projections = {'p2': {'rec': 8}, 'p3': {'rec': 5}}
        pool = build_free_agent_pool(players, [], projections, [], limit=2)
        assert [p.id for p in pool] == ['p2', 'KC']
