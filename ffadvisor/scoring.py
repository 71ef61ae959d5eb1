"""PPR fantasy point calculation from raw Sleeper stat lines."""

import math
from typing import Dict, Tuple


def round_points(value: float) -> float:
    """Round a point value to one decimal place, halves rounding up."""
    return math.floor(value * 10 + 0.5) / 10


def _stat(stats: dict, key: str) -> float:
    return stats.get(key, 0) or 0


def points_allowed_bonus(points_allowed: float) -> int:
    """
    Defensive bonus or penalty for points allowed.

    Tiers (upper bound inclusive):
        - 0: +10
        - 1-6: +7
        - 7-13: +4
        - 14-20: +1
        - 21-27: 0
        - 28-34: -1
        - 35+: -4
    """
    if points_allowed == 0:
        return 10
    elif points_allowed <= 6:
        return 7
    elif points_allowed <= 13:
        return 4
    elif points_allowed <= 20:
        return 1
    elif points_allowed <= 27:
        return 0
    elif points_allowed <= 34:
        return -1
    return -4


def score_stat_line(stats: dict) -> Tuple[float, Dict[str, float]]:
    """
    Score a single player-week stat line under PPR rules.

    Scoring:
        - Passing: 0.04 per yard, 4 per TD, -2 per interception
        - Rushing: 0.1 per yard, 6 per TD
        - Receiving: 1 per reception, 0.1 per yard, 6 per TD
        - Kicking: 3 per field goal made (no distance tiers), 1 per extra point
        - Defense: 1 per sack, 2 per interception, 2 per fumble recovery,
          6 per defensive/ST TD, 2 per safety, 2 per blocked kick,
          1 per forced fumble
        - Points allowed: see points_allowed_bonus (only if pts_allow is present)

    Missing or None fields count as zero, so partial stat lines never fail.

    Args:
        stats: Sleeper stat dict (pass_yd, rush_td, rec, fgm, pts_allow, ...)

    Returns:
        Tuple of (points rounded to one decimal, breakdown by category)
    """
    points = 0.0
    breakdown = {}

    passing = (
        _stat(stats, 'pass_yd') * 0.04
        + _stat(stats, 'pass_td') * 4
        - _stat(stats, 'pass_int') * 2
    )
    if passing:
        breakdown['passing'] = round_points(passing)
    points += passing

    rushing = _stat(stats, 'rush_yd') * 0.1 + _stat(stats, 'rush_td') * 6
    if rushing:
        breakdown['rushing'] = round_points(rushing)
    points += rushing

    receiving = (
        _stat(stats, 'rec') * 1
        + _stat(stats, 'rec_yd') * 0.1
        + _stat(stats, 'rec_td') * 6
    )
    if receiving:
        breakdown['receiving'] = round_points(receiving)
    points += receiving

    kicking = _stat(stats, 'fgm') * 3 + _stat(stats, 'xpm') * 1
    if kicking:
        breakdown['kicking'] = round_points(kicking)
    points += kicking

    defense = (
        _stat(stats, 'sack') * 1
        + _stat(stats, 'int') * 2
        + _stat(stats, 'fum_rec') * 2
        + _stat(stats, 'def_td') * 6
        + _stat(stats, 'safe') * 2
        + _stat(stats, 'blk_kick') * 2
        + _stat(stats, 'ff') * 1
    )
    if defense:
        breakdown['defense'] = round_points(defense)
    points += defense

    points_allowed = stats.get('pts_allow')
    if points_allowed is not None:
        pa_pts = points_allowed_bonus(points_allowed)
        breakdown['points_allowed'] = pa_pts
        points += pa_pts

    return round_points(points), breakdown


def calculate_fantasy_points(stats: dict) -> float:
    """Fantasy points for a stat line, rounded to one decimal."""
    points, _ = score_stat_line(stats)
    return points


def has_player_played(stats: dict) -> bool:
    """Check whether a stat line shows the player or defense took the field."""
    if _stat(stats, 'pass_att') > 0 or _stat(stats, 'rush_att') > 0:
        return True
    if _stat(stats, 'rec_tgt') > 0:
        return True

    # Kickers
    if _stat(stats, 'fga') > 0 or _stat(stats, 'xpa') > 0:
        return True

    # A defense with any data at all has played
    if stats.get('pts_allow') is not None:
        return True
    return _stat(stats, 'sack') > 0 or _stat(stats, 'int') > 0 or _stat(stats, 'def_td') > 0


def is_played_game(stats: dict) -> bool:
    """
    Decide whether a stat line counts as a game played.

    This is the only participation test used by aggregation, so season
    averages and recent form always agree on which weeks count.
    """
    return has_player_played(stats) or calculate_fantasy_points(stats) > 0
