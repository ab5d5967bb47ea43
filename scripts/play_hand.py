#!/usr/bin/env python3
"""Deal a hand street by street with odds and a suggested action."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handodds.game.cards import make_rng
from handodds.game.equity import EstimatorConfig, ProbabilityEstimator
from handodds.game.state import Street, deal_initial, next_street
from handodds.strategy import BettingContext, DecisionHeuristic, Player, Position
from handodds.viz import ProbabilityDisplay


def main():
    parser = argparse.ArgumentParser(
        description="Play one hand to the river, showing odds and decisions"
    )
    parser.add_argument(
        "-p", "--pot",
        type=int,
        default=30,
        help="Pot before the decision (default: 30)",
    )
    parser.add_argument(
        "-c", "--to-call",
        type=int,
        default=0,
        help="Bet the player faces on each street (default: 0)",
    )
    parser.add_argument(
        "-s", "--chips",
        type=int,
        default=1000,
        help="Player's chips (default: 1000)",
    )
    parser.add_argument(
        "--min-raise",
        type=int,
        default=20,
        help="Minimum raise (default: 20)",
    )
    parser.add_argument(
        "--position",
        default="normal",
        help="Seat: dealer, cutoff, hijack, lojack, bb, sb, normal (default: normal)",
    )
    parser.add_argument(
        "-n", "--trials",
        type=int,
        default=10000,
        help="Number of Monte Carlo trials (default: 10000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible output",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console)],
        )

    try:
        position = Position.from_string(args.position)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    rng = make_rng(args.seed)
    estimator = ProbabilityEstimator(EstimatorConfig(num_trials=args.trials), rng)
    heuristic = DecisionHeuristic(rng=rng)
    display = ProbabilityDisplay(console)

    state = deal_initial(rng, estimator)
    while True:
        console.print(Rule(state.street.name.title()))
        display.show_cards(state.hole_cards, state.community_cards)
        display.show(state.estimate, state.street)

        player = Player(
            hole_cards=list(state.hole_cards),
            chips=args.chips,
            position=position,
        )
        context = BettingContext(
            community_cards=list(state.community_cards),
            pot=args.pot,
            current_bet=args.to_call,
            min_raise=args.min_raise,
        )
        display.show_decision(heuristic.decide(player, context))
        console.print()

        if state.street is Street.RIVER:
            break
        state = next_street(state, rng, estimator)

    return 0


if __name__ == "__main__":
    sys.exit(main())
