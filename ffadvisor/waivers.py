"""Waiver wire upgrade suggestions.

The heuristic runs as a pipeline over one snapshot of a roster, the free
agent pool, this week's projections and the last few weeks of stats:

    count_positions -> classify_positions -> build_excess_pool
    find_bye_week_needs -> bye_week_suggestions
    standard_suggestions
    rank_suggestions

No suggestion is ever made without a drop candidate from the excess pool.
"""

import logging
from typing import Iterable, Mapping, Optional

from .constants import FANTASY_POSITIONS, IDEAL_ROSTER_SIZE
from .game_log import recent_average
from .models import (
    ByeWeekNeed,
    DepthStatus,
    DropCandidate,
    Player,
    RosterWithPlayers,
    UpgradeSuggestion,
    ValuedPlayer,
)
from .schedule import NFLSchedule
from .schemas import SleeperRoster
from .scoring import calculate_fantasy_points, round_points

logger = logging.getLogger('ffadvisor.waivers')

SAME_POSITION = 'same-position'
ROSTER_OPTIMIZATION = 'roster-optimization'
BYE_WEEK_COVERAGE = 'bye-week-coverage'

# Bench players projected under this are droppable at any position
LOW_PROJECTION = 5
# A bench backup must be projected at least this to cover a starter's bye
VIABLE_BACKUP = 8
# A free agent must be projected at least this to fill in for a bye
VIABLE_BYE_FILL_IN = 6
# A cross-position add must be projected at least this
CROSS_POSITION_MIN = 8
# Same-position adds must beat the drop by at least this
SAME_POSITION_MIN_GAIN = 2

BYE_LOOKAHEAD_WEEKS = 2
BYE_CANDIDATES_PER_NEED = 3
TOP_FREE_AGENTS = 30
MAX_SUGGESTIONS = 10
SKILL_POOL_SIZE = 200


def value_player(
    player: Player,
    projections: Mapping[str, dict],
    recent_stats: list[Mapping[str, dict]],
) -> ValuedPlayer:
    """Attach this week's projection and recent form to a player."""
    projection = projections.get(player.id)
    return ValuedPlayer(
        player=player,
        projected_points=calculate_fantasy_points(projection) if projection else 0.0,
        recent_avg_points=recent_average(player.id, recent_stats),
    )


def build_free_agent_pool(
    players: list[Player],
    rosters: Iterable[SleeperRoster],
    projections: Mapping[str, dict],
    recent_stats: list[Mapping[str, dict]],
    limit: int = SKILL_POOL_SIZE,
) -> list[ValuedPlayer]:
    """
    Players not on any roster in the league, best projection first.

    Skill players are capped to the first ``limit`` by search rank and must
    show a projection or recent production; defenses are always included.

    Args:
        players: Fantasy-relevant players, sorted by search rank
        rosters: Every roster in the league
        projections: player id -> projected stat line for this week
        recent_stats: Weekly stat maps for recent weeks
        limit: Maximum number of skill players to consider

    Returns:
        List of ValuedPlayer sorted by projected points, descending
    """
    rostered = {pid for roster in rosters for pid in (roster.players or [])}
    available = [p for p in players if p.id not in rostered]

    defenses = [p for p in available if p.position == 'DEF']
    skill_players = [p for p in available if p.position != 'DEF']

    skill_pool = [value_player(p, projections, recent_stats) for p in skill_players[:limit]]
    skill_pool = [p for p in skill_pool if p.projected_points > 0 or p.recent_avg_points > 0]
    defense_pool = [value_player(p, projections, recent_stats) for p in defenses]

    pool = skill_pool + defense_pool
    pool.sort(key=lambda p: p.projected_points, reverse=True)
    logger.debug(f'Free agent pool: {len(skill_pool)} skill players, {len(defense_pool)} defenses')
    return pool


def count_positions(players: Iterable[ValuedPlayer]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for player in players:
        counts[player.position] = counts.get(player.position, 0) + 1
    return counts


def classify_positions(
    counts: Mapping[str, int],
    ideal: Mapping[str, int] = IDEAL_ROSTER_SIZE,
) -> dict[str, DepthStatus]:
    """Tag each fantasy position as THIN, FULL or EXCESS against the ideal depth."""
    depth = {}
    for pos in FANTASY_POSITIONS:
        count = counts.get(pos, 0)
        target = ideal.get(pos, 1)
        if count < target:
            depth[pos] = DepthStatus.THIN
        elif count > target:
            depth[pos] = DepthStatus.EXCESS
        else:
            depth[pos] = DepthStatus.FULL
    return depth


def group_by_position(players: Iterable[ValuedPlayer]) -> dict[str, list[ValuedPlayer]]:
    """Players per position, worst projection first."""
    grouped: dict[str, list[ValuedPlayer]] = {}
    for player in players:
        grouped.setdefault(player.position, []).append(player)
    for pos_players in grouped.values():
        pos_players.sort(key=lambda p: p.projected_points)
    return grouped


def build_excess_pool(
    roster_players: list[ValuedPlayer],
    bench: list[ValuedPlayer],
    ideal: Mapping[str, int] = IDEAL_ROSTER_SIZE,
) -> list[DropCandidate]:
    """
    Drop candidates, worst projection first.

    Positions deeper than ideal give up their worst players beyond the ideal
    count. Bench players projected under 5 are added regardless of depth.
    """
    grouped = group_by_position(roster_players)
    pool: list[DropCandidate] = []
    seen: set[str] = set()

    for pos in FANTASY_POSITIONS:
        pos_players = grouped.get(pos, [])
        count = len(pos_players)
        target = ideal.get(pos, 1)
        excess = count - target
        if excess <= 0:
            continue

        for rank, player in enumerate(pos_players[:excess], start=1):
            pool.append(DropCandidate(
                player=player.player,
                projected_points=player.projected_points,
                recent_avg_points=player.recent_avg_points,
                excess_reason=f'{pos}{rank} of {count} (only need {target})',
            ))
            seen.add(player.id)

    for player in bench:
        if player.projected_points < LOW_PROJECTION and player.id not in seen:
            pool.append(DropCandidate(
                player=player.player,
                projected_points=player.projected_points,
                recent_avg_points=player.recent_avg_points,
                excess_reason=f'Low projection ({player.projected_points:.1f} pts)',
            ))
            seen.add(player.id)

    pool.sort(key=lambda p: p.projected_points)
    return pool


def find_bye_week_needs(
    starters: list[ValuedPlayer],
    bench: list[ValuedPlayer],
    schedule: NFLSchedule,
    current_week: int,
) -> list[ByeWeekNeed]:
    """
    Starters with a bye in the next two weeks and no viable bench backup.

    A backup is viable when it plays the same position, is not on bye the
    same week and is projected for at least 8 points.
    """
    needs = []
    for pos in FANTASY_POSITIONS:
        pos_bench = [b for b in bench if b.position == pos]

        for starter in (s for s in starters if s.position == pos):
            has_bye, bye_week = schedule.has_upcoming_bye(
                starter.team, current_week, BYE_LOOKAHEAD_WEEKS
            )
            if not has_bye:
                continue

            backups = [b for b in pos_bench if schedule.bye_week(b.team) != bye_week]
            best = max(backups, key=lambda b: b.projected_points, default=None)

            if best is None or best.projected_points < VIABLE_BACKUP:
                needs.append(ByeWeekNeed(
                    position=pos,
                    bye_week=bye_week,
                    starters_on_bye=[starter.player],
                ))
    return needs


def bye_week_suggestions(
    needs: list[ByeWeekNeed],
    free_agents: list[ValuedPlayer],
    excess_pool: list[DropCandidate],
    schedule: NFLSchedule,
) -> list[UpgradeSuggestion]:
    """Pair free agents who can fill a bye with the single best drop candidate."""
    if not excess_pool:
        return []

    drop = excess_pool[0]
    suggestions = []

    for need in needs:
        eligible = [
            fa for fa in free_agents
            if fa.position == need.position and schedule.bye_week(fa.team) != need.bye_week
        ]
        starter_names = ', '.join(s.name for s in need.starters_on_bye)

        for fa in eligible[:BYE_CANDIDATES_PER_NEED]:
            if fa.projected_points < VIABLE_BYE_FILL_IN:
                continue
            suggestions.append(UpgradeSuggestion(
                free_agent=fa,
                drop_candidate=drop,
                projected_gain=round_points(fa.projected_points - drop.projected_points),
                reason=(
                    f'Week {need.bye_week} bye coverage: {starter_names} on bye. '
                    f'{fa.name} can fill in.'
                ),
                suggestion_type=BYE_WEEK_COVERAGE,
            ))
    return suggestions


def standard_suggestions(
    free_agents: list[ValuedPlayer],
    excess_pool: list[DropCandidate],
    depth: Mapping[str, DepthStatus],
    counts: Mapping[str, int],
    schedule: NFLSchedule,
    current_week: int,
) -> list[UpgradeSuggestion]:
    """
    Compare the top 30 free agents with every drop candidate.

    Same position: suggest when the free agent gains at least 2 points.
    Cross position: suggest only into a THIN position and only when the free
    agent is projected for at least 8. Full positions never get more depth.
    """
    suggestions = []

    for fa in free_agents[:TOP_FREE_AGENTS]:
        fills_need = depth.get(fa.position, DepthStatus.FULL).needs_depth
        bye_passed = schedule.is_bye_passed(fa.team, current_week)

        for drop in excess_pool:
            gain = round_points(fa.projected_points - drop.projected_points)

            if fa.position == drop.position:
                if gain < SAME_POSITION_MIN_GAIN:
                    continue
                reason = f'{fa.name} projected {gain:.1f} pts higher than {drop.name}'
                if bye_passed:
                    reason += ' (bye week done)'
                suggestion_type = SAME_POSITION
            else:
                if not fills_need or fa.projected_points < CROSS_POSITION_MIN:
                    continue
                reason = (
                    f'Add {fa.position} depth (you only have {counts.get(fa.position, 0)}). '
                    f'Drop {drop.name} ({drop.excess_reason})'
                )
                suggestion_type = ROSTER_OPTIMIZATION

            suggestions.append(UpgradeSuggestion(
                free_agent=fa,
                drop_candidate=drop,
                projected_gain=gain,
                reason=reason,
                suggestion_type=suggestion_type,
            ))
    return suggestions


def rank_suggestions(
    suggestions: list[UpgradeSuggestion],
    limit: int = MAX_SUGGESTIONS,
) -> list[UpgradeSuggestion]:
    """
    Best suggestions first, each free agent and each drop used at most once.

    Ties in gain keep their original order.
    """
    ranked = sorted(suggestions, key=lambda s: s.projected_gain, reverse=True)

    seen_free_agents: set[str] = set()
    seen_drops: set[str] = set()
    unique = []
    for suggestion in ranked:
        if suggestion.free_agent.id in seen_free_agents:
            continue
        if suggestion.drop_candidate.id in seen_drops:
            continue
        seen_free_agents.add(suggestion.free_agent.id)
        seen_drops.add(suggestion.drop_candidate.id)
        unique.append(suggestion)

    return unique[:limit]


def find_upgrades(
    roster: RosterWithPlayers,
    free_agents: list[ValuedPlayer],
    projections: Mapping[str, dict],
    recent_stats: list[Mapping[str, dict]],
    schedule: NFLSchedule,
    current_week: int,
    ideal: Optional[Mapping[str, int]] = None,
    limit: int = MAX_SUGGESTIONS,
) -> list[UpgradeSuggestion]:
    """
    Propose add/drop pairs for a roster, ranked by projected point gain.

    Args:
        roster: The user's roster with starters and bench resolved
        free_agents: Free agent pool, best projection first
        projections: player id -> projected stat line for this week
        recent_stats: Weekly stat maps for recent weeks
        schedule: Schedule used for bye week lookups
        current_week: Current NFL week
        ideal: Ideal roster depth per position (default: IDEAL_ROSTER_SIZE)
        limit: Maximum number of suggestions

    Returns:
        Up to ``limit`` UpgradeSuggestions
    """
    ideal = ideal or IDEAL_ROSTER_SIZE

    starters = [value_player(p, projections, recent_stats) for p in roster.starters]
    bench = [value_player(p, projections, recent_stats) for p in roster.bench]
    roster_players = starters + bench

    counts = count_positions(roster_players)
    depth = classify_positions(counts, ideal)
    excess_pool = build_excess_pool(roster_players, bench, ideal)

    if not excess_pool:
        logger.info('No drop candidates on roster; no upgrades to suggest')
        return []

    needs = find_bye_week_needs(starters, bench, schedule, current_week)
    suggestions = bye_week_suggestions(needs, free_agents, excess_pool, schedule)
    suggestions += standard_suggestions(
        free_agents, excess_pool, depth, counts, schedule, current_week
    )

    ranked = rank_suggestions(suggestions, limit)
    logger.debug(f'{len(suggestions)} raw suggestions, {len(ranked)} after ranking')
    return ranked
