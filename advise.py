#!/usr/bin/env python3
"""
Fantasy Football Advisor CLI

Looks up players on Sleeper and answers the usual weekly questions: how is
a player doing, who wins head-to-head, who to start, is a trade fair, and
which free agents are worth a waiver claim.

Usage:
    python advise.py player 4046
    python advise.py compare 4046 6794
    python advise.py start-sit 4046 6794
    python advise.py trade --team1 4046 --team2 6794 8138
    python advise.py waivers --league 1048000000000000000 --user some_username
    python advise.py --season 2024 --week 10 --json out/compare.json compare 4046 6794
"""

import argparse
import sys

from ffadvisor import (
    FantasyAdvisor,
    NFLSchedule,
    SleeperAPIError,
    SleeperClient,
    default_schedule,
    get_current_season,
)
from ffadvisor.config import get_config
from ffadvisor.logging_config import setup_logging
from ffadvisor.trade import calculate_player_value, get_player_tier
from ffadvisor.utils import save_json
from ffadvisor.validators import validate_player, validate_trade


def load_schedule(source: str, season: str) -> NFLSchedule:
    """Bundled 2024 table, or the live season from nflreadpy."""
    if source == 'nflreadpy':
        from ffadvisor.data_fetcher import NFLScheduleFetcher
        return NFLScheduleFetcher(int(season)).load()
    return default_schedule()


def print_player(player) -> None:
    print(f"\n{player.name} ({player.position}, {player.team})")
    if player.injury_status:
        print(f"  Status: {player.injury_status}")
    print(f"  Projected:    {player.projected_points:.1f} pts")
    print(f"  Season avg:   {player.avg_points:.1f} pts over {len(player.game_log)} games")
    print(f"  Recent form:  {player.recent_avg_points:.1f} pts (last 3 games)")
    print(f"  Tier:         {get_player_tier(player.avg_points, player.position)}")
    print(f"  Trade value:  {calculate_player_value(player):.1f}")
    for entry in player.game_log:
        opponent = entry.opponent or '-'
        print(f"    Week {entry.week:>2} vs {opponent:<4} {entry.fantasy_points:>5.1f} pts")


def cmd_player(advisor: FantasyAdvisor, args):
    player = advisor.get_player_with_stats(args.player_id)
    if player is None:
        print(f"❌ Player not found: {args.player_id}")
        return None
    print_player(player)
    for warning in validate_player(player):
        print(f"  ⚠️  {warning}")
    return player


def cmd_compare(advisor: FantasyAdvisor, args):
    result = advisor.compare(args.player1, args.player2)
    if result is None:
        print("❌ One or both players not found")
        return None

    print(f"\n{result.player1.name} vs {result.player2.name}")
    for cat in result.breakdown:
        print(f"  {cat.category:<20} {cat.player1_value:>6.1f} {cat.player2_value:>6.1f}  ({cat.winner})")

    if result.winner == 'tie':
        print(f"\nToo close to call ({result.confidence}% confidence)")
    else:
        winner = result.player1 if result.winner == 'player1' else result.player2
        print(f"\nEdge: {winner.name} ({result.confidence}% confidence)")
    return result


def cmd_start_sit(advisor: FantasyAdvisor, args):
    rec = advisor.start_sit(args.player1, args.player2)
    if rec is None:
        print("❌ One or both players not found")
        return None

    print(f"\nStart {rec.start.name}, sit {rec.sit.name} ({rec.confidence}% confidence)")
    for reason in rec.reasons:
        print(f"  - {reason}")
    return rec


def cmd_trade(advisor: FantasyAdvisor, args):
    analysis = advisor.analyze_trade(args.team1, args.team2)

    for label, players, value in (
        ('Team 1 receives', analysis.team1_players, analysis.team1_value),
        ('Team 2 receives', analysis.team2_players, analysis.team2_value),
    ):
        print(f"\n{label} ({value:.1f} value):")
        for player in players:
            print(f"  {player.name} ({player.position}) - {calculate_player_value(player):.1f}")

    for warning in validate_trade(analysis.team1_players, analysis.team2_players):
        print(f"⚠️  {warning}")

    print(f"\n{analysis.recommendation}")
    return analysis


def cmd_waivers(advisor: FantasyAdvisor, args):
    user_id = args.user
    if not user_id.isdigit():
        user = advisor.client.get_user(args.user)
        if user is None:
            print(f"❌ Sleeper user not found: {args.user}")
            return None
        user_id = user.user_id

    config = advisor.client.config
    upgrades = advisor.waiver_upgrades(
        args.league,
        user_id,
        ideal=config.ideal_roster_size,
        limit=config.waiver_limit,
    )
    if upgrades is None:
        print(f"❌ No roster for {args.user} in league {args.league}")
        return None
    if not upgrades:
        print("\nNo waiver upgrades found. Your roster looks set.")
        return upgrades

    print(f"\nTop waiver moves (week {advisor.week}):")
    for rank, upgrade in enumerate(upgrades, 1):
        print(
            f"  {rank}. Add {upgrade.free_agent.name} ({upgrade.free_agent.position}), "
            f"drop {upgrade.drop_candidate.name} (+{upgrade.projected_gain:.1f})"
        )
        print(f"     {upgrade.reason}")
    return upgrades


COMMANDS = {
    'player': cmd_player,
    'compare': cmd_compare,
    'start-sit': cmd_start_sit,
    'trade': cmd_trade,
    'waivers': cmd_waivers,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fantasy Football Advisor (Sleeper, PPR)")
    parser.add_argument(
        "--season", "-y",
        default=None,
        help="NFL season year (defaults to config or today's date)",
    )
    parser.add_argument(
        "--week", "-w",
        type=int,
        default=None,
        help="Current NFL week (defaults to config or today's date)",
    )
    parser.add_argument(
        "--schedule",
        choices=['bundled', 'nflreadpy'],
        default='bundled',
        help="Schedule source for opponents and bye weeks",
    )
    parser.add_argument(
        "--json", "-o",
        dest="json_path",
        default=None,
        help="Also write the result as JSON to this path",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    player = subparsers.add_parser("player", help="Show a player's season")
    player.add_argument("player_id", help="Sleeper player id")

    for name, help_text in (("compare", "Compare two players head-to-head"),
                            ("start-sit", "Pick which of two players to start")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("player1", help="First Sleeper player id")
        sub.add_argument("player2", help="Second Sleeper player id")

    trade = subparsers.add_parser("trade", help="Evaluate a trade")
    trade.add_argument("--team1", nargs="+", required=True, help="Player ids team 1 receives")
    trade.add_argument("--team2", nargs="+", required=True, help="Player ids team 2 receives")

    waivers = subparsers.add_parser("waivers", help="Suggest waiver pickups for your roster")
    waivers.add_argument("--league", "-l", required=True, help="Sleeper league id")
    waivers.add_argument("--user", "-u", required=True, help="Sleeper username or user id")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(level='DEBUG' if args.verbose else None)

    overrides = {k: v for k, v in (('season', args.season), ('week', args.week)) if v is not None}
    config = get_config().model_copy(update=overrides)

    client = SleeperClient(config)
    advisor = FantasyAdvisor(client, load_schedule(args.schedule, config.season or get_current_season()))

    try:
        result = COMMANDS[args.command](advisor, args)
    except SleeperAPIError as e:
        print(f"❌ Sleeper API error: {e}")
        sys.exit(1)

    if result is None:
        sys.exit(1)

    if args.json_path:
        save_json(args.json_path, result)
        print(f"\n✓ Saved to {args.json_path}")


if __name__ == "__main__":
    main()
