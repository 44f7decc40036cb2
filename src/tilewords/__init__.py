"""Tilewords Puzzle Solver.

Places words from a hand of letter tiles onto a fixed grid, crossword style, using as
many tiles as possible.  Uses an iterative backtracking search seeded with each affordable
word in turn, keeping the board that leaves the fewest tiles in hand.
"""

from sys import argv, exit

from .solver import solver


def main() -> None:
    """Main entry point for the Tilewords solver."""
    # Expect a single argument: the letters in hand
    if len(argv) != 2:
        print("Usage: python -m tilewords <letters>")
        exit(1)
    try:
        solver.run(argv[1])
    except ValueError as e:
        solver.logger.error(str(e))
        exit(1)
