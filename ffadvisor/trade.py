"""Trade valuation and player tiers."""

from typing import Iterable, Optional

from .constants import (
    INJURY_DISCOUNT,
    POSITIONAL_SCARCITY,
    TIER_THRESHOLDS,
    TRADE_FAIRNESS_BAND,
    TRADE_VALUE_WEIGHTS,
)
from .models import PlayerWithStats, TradeAnalysis
from .scoring import round_points


def get_positional_scarcity(position: Optional[str]) -> float:
    """Value multiplier for a position (unknown positions get 1.0)."""
    return POSITIONAL_SCARCITY.get(position or '', 1.0)


def get_injury_discount(status: Optional[str]) -> float:
    """Value multiplier for an injury designation (healthy players get 1.0)."""
    return INJURY_DISCOUNT.get(status or '', 1.0)


def calculate_player_value(player: PlayerWithStats) -> float:
    """
    Trade value for one player.

    Value = (40% projected + 30% season average + 30% recent form)
            x positional scarcity x injury discount, rounded to one decimal.
    """
    proj_weight, avg_weight, recent_weight = TRADE_VALUE_WEIGHTS
    value = (
        (player.projected_points or 0) * proj_weight
        + (player.avg_points or 0) * avg_weight
        + (player.recent_avg_points or 0) * recent_weight
    )
    value *= get_positional_scarcity(player.position)
    value *= get_injury_discount(player.injury_status)
    return round_points(value)


def side_value(players: Iterable[PlayerWithStats]) -> float:
    """Total trade value for one side of a trade."""
    return round_points(sum(calculate_player_value(p) for p in players))


def is_fair_difference(difference: float) -> bool:
    """True when a value difference falls inside the fairness band (strictly under 2)."""
    # Side totals are sums of one-decimal floats; drop representation noise first
    return round(abs(difference), 9) < TRADE_FAIRNESS_BAND


def analyze_trade(
    team1_players: list[PlayerWithStats],
    team2_players: list[PlayerWithStats],
) -> TradeAnalysis:
    """
    Compare the two sides of a trade.

    A side wins only when it leads by at least 2 points of value; anything
    closer is called fair. The band is flat regardless of how many players
    change hands.

    Args:
        team1_players: Players team 1 receives
        team2_players: Players team 2 receives

    Returns:
        TradeAnalysis with side values, winner and a recommendation
    """
    team1_value = side_value(team1_players)
    team2_value = side_value(team2_players)
    difference = abs(team1_value - team2_value)
    value_difference = round_points(difference)

    if is_fair_difference(difference):
        winner = 'fair'
        recommendation = 'This trade is relatively fair. Consider team needs and roster construction.'
    elif team1_value > team2_value:
        winner = 'team1'
        recommendation = f'Team 1 wins this trade by {value_difference:.1f} points of value.'
    else:
        winner = 'team2'
        recommendation = f'Team 2 wins this trade by {value_difference:.1f} points of value.'

    return TradeAnalysis(
        team1_players=team1_players,
        team2_players=team2_players,
        team1_value=team1_value,
        team2_value=team2_value,
        winner=winner,
        value_difference=value_difference,
        recommendation=recommendation,
    )


def get_player_tier(avg_points: float, position: Optional[str]) -> int:
    """
    Tier (1 = elite, 5 = lowest) for a season average at a position.

    Unknown positions use the WR thresholds.
    """
    thresholds = TIER_THRESHOLDS.get(position or '', TIER_THRESHOLDS['WR'])
    for tier, threshold in enumerate(thresholds, start=1):
        if avg_points >= threshold:
            return tier
    return len(thresholds) + 1
