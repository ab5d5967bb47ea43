#!/usr/bin/env python3
"""Show current and possible final hand categories for a hand."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handodds.game.cards import create_deck, ensure_distinct, exclude, make_rng, parse_cards
from handodds.game.equity import EstimatorConfig, ProbabilityEstimator
from handodds.game.state import Street
from handodds.viz import ProbabilityDisplay


def main():
    parser = argparse.ArgumentParser(
        description="Estimate final hand categories by Monte Carlo simulation"
    )
    parser.add_argument(
        "-H", "--hole",
        help="Hole cards (e.g., 'AsKs'); random if omitted",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Board cards, 0/3/4/5 of them (e.g., 'QsJs2d' or 'Qs Js 2d')",
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
        "-w", "--workers",
        type=int,
        default=1,
        help="Worker threads for the simulation (default: 1)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Evaluate the best five cards (textbook straight flush)",
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

    rng = make_rng(args.seed)

    try:
        board = parse_cards(args.board)
        if args.hole:
            hole = parse_cards(args.hole)
        else:
            hole = exclude(create_deck(rng), board)[:2]

        if len(hole) != 2:
            console.print("[red]Hole cards must be exactly 2 cards[/]")
            return 1
        if len(board) not in (0, 3, 4, 5):
            console.print("[red]Board must have 0, 3, 4 or 5 cards[/]")
            return 1
        ensure_distinct(hole + board)

        remaining = exclude(create_deck(rng), hole + board)
        config = EstimatorConfig(
            num_trials=args.trials,
            workers=args.workers,
            strict=args.strict,
        )
        estimate = ProbabilityEstimator(config, rng).estimate(hole, board, remaining)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    display = ProbabilityDisplay(console)
    display.show_cards(hole, board)
    console.print()
    display.show(estimate, Street.from_board_size(len(board)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
