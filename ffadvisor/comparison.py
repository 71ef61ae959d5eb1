"""Head-to-head player comparison and start/sit recommendations."""

import math
from typing import List

from .constants import COMPARISON_WEIGHTS, OUT_STATUSES
from .game_log import calculate_consistency
from .models import (
    ComparisonCategory,
    ComparisonResult,
    PlayerWithStats,
    StartSitRecommendation,
)

PROJECTED = 'Projected Points'
SEASON_AVERAGE = 'Season Average'
RECENT_FORM = 'Recent Form (3wk)'
CONSISTENCY = 'Consistency'

# Fixed order; COMPARISON_WEIGHTS is indexed by position in this tuple
CATEGORIES = (PROJECTED, SEASON_AVERAGE, RECENT_FORM, CONSISTENCY)

# Smallest per-category gap worth mentioning in a start/sit reason
PROJECTED_REASON_THRESHOLD = 2
RECENT_REASON_THRESHOLD = 3

OVERRIDE_CONFIDENCE = 90


def _higher_wins(value1: float, value2: float) -> str:
    if value1 > value2:
        return 'player1'
    if value2 > value1:
        return 'player2'
    return 'tie'


def _lower_wins(value1: float, value2: float) -> str:
    return _higher_wins(value2, value1)


def build_breakdown(player1: PlayerWithStats, player2: PlayerWithStats) -> List[ComparisonCategory]:
    """Per-category values and winners, in CATEGORIES order."""
    proj1, proj2 = player1.projected_points or 0, player2.projected_points or 0
    avg1, avg2 = player1.avg_points or 0, player2.avg_points or 0
    recent1, recent2 = player1.recent_avg_points or 0, player2.recent_avg_points or 0
    consistency1 = calculate_consistency(player1.game_log)
    consistency2 = calculate_consistency(player2.game_log)

    return [
        ComparisonCategory(PROJECTED, proj1, proj2, _higher_wins(proj1, proj2)),
        ComparisonCategory(SEASON_AVERAGE, avg1, avg2, _higher_wins(avg1, avg2)),
        ComparisonCategory(RECENT_FORM, recent1, recent2, _higher_wins(recent1, recent2)),
        ComparisonCategory(CONSISTENCY, consistency1, consistency2, _lower_wins(consistency1, consistency2)),
    ]


def weighted_scores(breakdown: List[ComparisonCategory]) -> tuple[float, float]:
    """
    Overall weighted score for each player.

    Regular categories score each player relative to the better value.
    Consistency is lower-is-better, so each player earns the other's share
    of the combined standard deviation (nothing when both are 0).
    """
    score1 = 0.0
    score2 = 0.0

    for cat, weight in zip(breakdown, COMPARISON_WEIGHTS):
        if cat.category == CONSISTENCY:
            total = cat.player1_value + cat.player2_value
            if total > 0:
                score1 += (cat.player2_value / total) * weight * 100
                score2 += (cat.player1_value / total) * weight * 100
        else:
            max_value = max(cat.player1_value, cat.player2_value, 0.1)
            score1 += (cat.player1_value / max_value) * weight * 100
            score2 += (cat.player2_value / max_value) * weight * 100

    return score1, score2


def calculate_confidence(score1: float, score2: float) -> int:
    """
    Confidence (50-100) from the relative gap between two scores.

    A dead heat is 50; a 20% relative gap gives 100.
    """
    total = score1 + score2
    relative_gap = abs(score1 - score2) / total if total > 0 else 0
    return min(100, math.floor(50 + relative_gap * 250 + 0.5))


def compare_players(player1: PlayerWithStats, player2: PlayerWithStats) -> ComparisonResult:
    """
    Compare two players head-to-head.

    Categories: projected points (35%), season average (25%),
    recent form over the last 3 played games (30%), consistency (10%).

    Args:
        player1: First player with aggregates and game log
        player2: Second player with aggregates and game log

    Returns:
        ComparisonResult with per-category breakdown, overall winner and confidence
    """
    breakdown = build_breakdown(player1, player2)
    score1, score2 = weighted_scores(breakdown)

    return ComparisonResult(
        player1=player1,
        player2=player2,
        winner=_higher_wins(score1, score2),
        confidence=calculate_confidence(score1, score2),
        breakdown=breakdown,
    )


def _reasons_from_breakdown(
    comparison: ComparisonResult,
) -> List[str]:
    reasons = []
    for cat in comparison.breakdown:
        if cat.winner == 'tie':
            continue

        winner = comparison.player1 if cat.winner == 'player1' else comparison.player2
        diff = abs(cat.player1_value - cat.player2_value)

        if cat.category == PROJECTED and diff > PROJECTED_REASON_THRESHOLD:
            reasons.append(f'{winner.name} has {diff:.1f} more projected points this week')
        elif cat.category == RECENT_FORM and diff > RECENT_REASON_THRESHOLD:
            reasons.append(
                f'{winner.name} has been hotter recently (+{diff:.1f} PPG over last 3 games)'
            )
        elif cat.category == CONSISTENCY:
            reasons.append(f'{winner.name} is more consistent week-to-week')
    return reasons


def get_start_sit_recommendation(
    player1: PlayerWithStats,
    player2: PlayerWithStats,
) -> StartSitRecommendation:
    """
    Recommend which of two players to start.

    The head-to-head winner starts (a tie starts player 2). If the player
    to start is Out or on IR, the recommendation flips with a fixed
    confidence of 90 and a single injury reason.
    """
    comparison = compare_players(player1, player2)
    reasons = _reasons_from_breakdown(comparison)

    # Only worth mentioning when exactly one player carries a designation
    if player1.injury_status and not player2.injury_status:
        reasons.append(f'{player1.name} is listed as {player1.injury_status}')
    elif player2.injury_status and not player1.injury_status:
        reasons.append(f'{player2.name} is listed as {player2.injury_status}')

    if comparison.winner == 'player1':
        start, sit = player1, player2
    else:
        start, sit = player2, player1

    if start.injury_status in OUT_STATUSES:
        return StartSitRecommendation(
            start=sit,
            sit=start,
            confidence=OVERRIDE_CONFIDENCE,
            reasons=[f'{start.name} is out with injury'],
        )

    if not reasons:
        reasons.append(f'{start.name} has a slight edge in overall projections')

    return StartSitRecommendation(
        start=start,
        sit=sit,
        confidence=comparison.confidence,
        reasons=reasons,
    )
