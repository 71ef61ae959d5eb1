"""Sanity checks for scored players, trades and rosters.

Every validator returns a list of warning messages (empty when nothing looks
off) and never raises.
"""

import math

from .models import PlayerWithStats, RosterWithPlayers
from .scoring import score_stat_line

MAX_GAME_POINTS = 70
MIN_GAME_POINTS = -10


def validate_stat_line(name: str, stats: dict) -> list[str]:
    """
    Check that a single stat line scores to something plausible.

    Sanity checks:
    - Total points in a reasonable range (-10 to 70)
    - Breakdown categories add up to the total (within rounding)

    Args:
        name: Player name for messages
        stats: Stat line as returned by Sleeper

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    total, breakdown = score_stat_line(stats)

    if total > MAX_GAME_POINTS:
        warnings.append(f'{name} scored {total:.1f} pts (unusually high - check stat line)')
    elif total < MIN_GAME_POINTS:
        warnings.append(f'{name} scored {total:.1f} pts (unusually low - check stat line)')

    # Each category and the total are rounded separately
    breakdown_sum = sum(breakdown.values())
    diff = abs(breakdown_sum - total)
    if diff > 0.05 * (len(breakdown) + 1):
        warnings.append(
            f'{name} breakdown sum ({breakdown_sum:.1f}) != total ({total:.1f}) - difference: {diff:.1f}'
        )

    return warnings


def validate_player(player: PlayerWithStats) -> list[str]:
    """
    Check a player's aggregates and game log.

    Sanity checks:
    - No NaN or infinite aggregates
    - Every game in range (-10 to 70 points)
    - Game log weeks strictly increasing
    - Season average not above the best single game
    """
    warnings = []

    for field_name in ('projected_points', 'avg_points', 'recent_avg_points'):
        value = getattr(player, field_name)
        if not isinstance(value, (int, float)) or math.isnan(value) or math.isinf(value):
            warnings.append(f'{player.name} has invalid {field_name}: {value!r}')

    for entry in player.game_log:
        if entry.fantasy_points > MAX_GAME_POINTS:
            warnings.append(
                f'{player.name} scored {entry.fantasy_points:.1f} pts in week {entry.week} (unusually high)'
            )
        elif entry.fantasy_points < MIN_GAME_POINTS:
            warnings.append(
                f'{player.name} scored {entry.fantasy_points:.1f} pts in week {entry.week} (unusually low)'
            )

    weeks = [entry.week for entry in player.game_log]
    if any(later <= earlier for earlier, later in zip(weeks, weeks[1:])):
        warnings.append(f'{player.name} game log is out of week order: {weeks}')

    if player.game_log:
        best = max(entry.fantasy_points for entry in player.game_log)
        if player.avg_points > best + 0.1:
            warnings.append(
                f'{player.name} average ({player.avg_points:.1f}) exceeds best game ({best:.1f})'
            )

    return warnings


def validate_trade(
    team1_players: list[PlayerWithStats],
    team2_players: list[PlayerWithStats],
) -> list[str]:
    """
    Check that a proposed trade makes sense.

    Sanity checks:
    - Neither side is empty
    - No player appears on both sides
    - No player appears twice on the same side
    """
    warnings = []

    if not team1_players:
        warnings.append('Team 1 receives no players')
    if not team2_players:
        warnings.append('Team 2 receives no players')

    for label, players in (('Team 1', team1_players), ('Team 2', team2_players)):
        ids = [p.id for p in players]
        repeated = sorted({p.name for p in players if ids.count(p.id) > 1})
        if repeated:
            warnings.append(f'{label} lists players more than once: {", ".join(repeated)}')

    team1_ids = {p.id for p in team1_players}
    on_both = sorted({p.name for p in team2_players if p.id in team1_ids})
    if on_both:
        warnings.append(f'Players on both sides of the trade: {", ".join(on_both)}')

    return warnings


def validate_roster(roster: RosterWithPlayers) -> list[str]:
    """
    Check a resolved roster's composition.

    Sanity checks:
    - At least one kicker and one defense
    - Every starter is on the roster
    - No duplicate players
    """
    warnings = []
    owner = roster.owner.team_name if roster.owner else f'Roster {roster.roster.roster_id}'
    positions = {p.position for p in roster.players}

    if 'K' not in positions:
        warnings.append(f'{owner} has no kicker')
    if 'DEF' not in positions:
        warnings.append(f'{owner} has no defense')

    player_ids = {p.id for p in roster.players}
    missing = [s.name for s in roster.starters if s.id not in player_ids]
    if missing:
        warnings.append(f'{owner} starts players not on the roster: {", ".join(missing)}')

    if len(player_ids) != len(roster.players):
        warnings.append(f'{owner} has duplicate players')

    return warnings
