"""Main solver module for Tilewords."""

import random
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from pprint import pformat
from time import time

from tilewords.logging_utils import get_logger
from tilewords.solver.config import SolverConfig
from tilewords.solver.config import config as default_config
from tilewords.solver.leftover import place_leftovers
from tilewords.solver.search import SearchSession, Solution
from tilewords.solver.utils import TIMESTAMP_FMT, int_comma, time_str, validate_board
from tilewords.tiles import TileBag, create_tile_bag, tile_bag_to_string
from tilewords.wordlist import WordIndex, get_letter_frequency, load_word_list

logger = get_logger()


def solve(
    hand: str | TileBag,
    words: Iterable[str] | None = None,
    *,
    index: WordIndex | None = None,
    config: SolverConfig | None = None,
    rng: random.Random | None = None,
) -> Solution:
    """Place as many tiles of `hand` on the board as possible.

    Args:
        hand: The tiles, as a string or a Counter of letters.
        words: Dictionary words.  Ignored if `index` is given; if both are None, the word
            list is loaded from the configured path.
        index: A prebuilt word index, reused across solves.
        config: Solver settings.  Defaults to the module-level settings.
        rng: Random source for the temperature shuffle.  Defaults to a `random.Random`
            seeded from `config.random_seed`.

    Returns:
        The solution.  `solution.board` has any leftover tiles parked in its empty cells;
        `solution.placed_board` is the board as found by the search.
    """
    config = config or default_config
    bag = create_tile_bag(hand) if isinstance(hand, str) else Counter(hand)
    if index is None:
        if words is None:
            words = load_word_list(config.word_list_path, min_len=config.min_word_length)
        index = WordIndex(words)
    if rng is None:
        rng = random.Random(config.random_seed)

    session = SearchSession(
        index,
        rows=config.rows,
        cols=config.cols,
        temperature=config.temperature,
        max_states=config.max_states,
        rng=rng,
    )
    solution = session.search(bag)
    solution.board = place_leftovers(solution.placed_board, bag)
    return solution


def run(letters: str, *, config: SolverConfig | None = None) -> Solution:
    """Run the solver on a hand of letters, logging the process and printing the board.

    Args:
        letters (str): The hand, one letter per tile.
        config (SolverConfig | None): Solver settings.  Defaults to the module-level settings.

    Raises:
        ValueError: If `letters` contains a non-alphabetic character.
    """
    config = config or default_config
    get_logger(config.log_level)

    hand = create_tile_bag(letters)
    start_time = time()
    start_time_str = datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)
    logger.info(f"Start time: {start_time_str}")
    logger.info(f"Solver config:\n{pformat(config.model_dump(), width=120)}")
    logger.info(f"Tile bag: {tile_bag_to_string(hand)} ({hand.total()} tiles)")

    words = load_word_list(config.word_list_path, min_len=config.min_word_length)
    index = WordIndex(words)
    frequency = get_letter_frequency(words)
    rarest = sorted(frequency, key=frequency.__getitem__)[:5]
    logger.info(
        f"Dictionary: {int_comma(len(index))} words, "
        f"{int_comma(len(index.affordable_words(hand)))} affordable, "
        f"rarest letters: {', '.join(rarest)}"
    )

    solution = solve(hand, index=index, config=config)
    stats = solution.stats
    logger.info(
        f"States explored: {int_comma(stats.states_explored)}, "
        f"seeds tried: {int_comma(stats.seeds_tried)}, "
        f"max depth: {stats.max_depth_reached}, "
        f"time taken: {time_str(time() - stats.start_time)}"
    )

    placed = solution.placed_board
    if placed is not None:
        if not validate_board(placed, words):
            logger.warning("Placed board contains a run that is not a dictionary word.")
        logger.info(f"Tiles placed by the search: {len(placed.filled_cells())}")

    solution.board.print()
    if solution.status == "empty_hand":
        print("No tiles in hand.")
    elif solution.perfect:
        print("Solved perfectly!")
    elif placed is not None and placed.is_empty():
        print(f"No word could be placed: all {solution.leftover} tile(s) shown at top-left.")
    else:
        print(f"No perfect solution: {solution.leftover} tile(s) left in hand (shown at top-left).")
    return solution
