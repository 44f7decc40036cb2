"""Search engine: iterative depth-first placement search over board states.

For every affordable seed word (longest first) the seed is laid across the centre of an
empty board, then states are expanded from an explicit stack.  Each state owns its own
board, bag and frontier, so branches never share mutable data.  Expansion stops at the
first perfect solve (no tiles left), and each seed is capped at `max_states` popped states.
"""

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from time import time
from typing import Literal, NamedTuple, TypeVar

from sortedcontainers import SortedKeyList

from tilewords.board import Board, Direction
from tilewords.logging_utils import get_logger
from tilewords.tiles import TileBag, covers, needed, pay, tile_bag_to_string
from tilewords.wordlist import Candidate, WordIndex

logger = get_logger()

T = TypeVar("T")

SolveStatus = Literal["perfect", "partial", "no_placement", "empty_hand"]

ORIENTATIONS = (Direction.ACROSS, Direction.DOWN)
"""Default orientation trial order."""


class Anchor(NamedTuple):
    """An occupied cell from which intersecting words may be tried.

    The letter is cached: a filled cell never changes within a branch.
    """

    row: int
    col: int
    letter: str


Frontier = SortedKeyList
"""Anchors of one branch, kept sorted by the number of index entries for their letter.

Anchors with the same key stay in insertion order.
"""


class SearchState(NamedTuple):
    """A node of the search: owned by the stack entry holding it."""

    board: Board
    bag: TileBag
    frontier: Frontier
    depth: int


@dataclass
class SearchStats:
    """Statistics collected during one solve."""

    states_explored: int = 0
    """Number of states popped, over all seeds."""

    seeds_tried: int = 0
    """Number of seed words placed on the board."""

    max_depth_reached: int = 0

    start_time: float = field(default_factory=time)
    """Timestamp when solving started."""

    improvements: list[int] = field(default_factory=list)
    """Leftover counts at each new best board, in the order they were found."""


@dataclass
class Solution:
    """Result of a solve."""

    board: Board
    """Final board.  Leftover tiles are parked in empty cells once leftover placement ran."""

    leftover: int
    """Number of hand tiles not placed by the search. 0 means a perfect solve."""

    status: SolveStatus

    stats: SearchStats

    placed_board: Board | None = None
    """Best board found by the search, before leftover placement."""

    def __post_init__(self) -> None:
        if self.placed_board is None:
            self.placed_board = self.board

    @property
    def perfect(self) -> bool:
        return self.status in ("perfect", "empty_hand")


def rough_tiles_needed(word: str, board: Board, row: int, col: int, direction: Direction) -> int:
    """Count the empty cells a word would cover, or -1 if it does not fit on the board.

    Only bounds are checked, not legality.
    """
    last = len(word) - 1
    end_row, end_col = (row + last, col) if direction == Direction.DOWN else (row, col + last)
    if not (board.in_bounds(row, col) and board.in_bounds(end_row, end_col)):
        return -1
    return sum(1 for r, c in board.cells(len(word), row, col, direction) if board.is_free(r, c))


def state_key(board: Board, bag: TileBag) -> str:
    """Canonical key of a (board, remaining bag) configuration."""
    return f"{board}|{tile_bag_to_string(bag)}"


class SearchSession:
    """Owns all mutable state of one solve: best board, counters and seen states.

    A session is used for a single `search` call; create a new one for every solve.
    """

    def __init__(
        self,
        index: WordIndex,
        *,
        rows: int = 21,
        cols: int = 21,
        temperature: float = 0.35,
        max_states: int = 1_200_000,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= temperature <= 1.0:
            raise ValueError(f"temperature must be in [0, 1], got {temperature}")
        if max_states <= 0:
            raise ValueError(f"max_states must be positive, got {max_states}")

        self.index = index
        self.rows = rows
        self.cols = cols
        self.temperature = temperature
        self.max_states = max_states
        self.rng = rng if rng is not None else random.Random()

        self.stats = SearchStats()
        self.best_board = Board.blank(rows, cols)
        self.best_leftover = 0
        self.solved_perfect = False
        self._seen: set[str] = set()

    # Frontier handling

    def _anchor_weight(self, anchor: Anchor) -> int:
        return self.index.candidate_count(anchor.letter)

    def new_frontier(self, anchors: Iterable[Anchor]) -> Frontier:
        return SortedKeyList(anchors, key=self._anchor_weight)

    # Ordering

    def maybe_shuffle(self, items: Sequence[T]) -> list[T]:
        """With probability `temperature`, return a shuffled copy; else keep the order."""
        items = list(items)
        if self.temperature == 0:
            return items
        if self.rng.random() < self.temperature:
            self.rng.shuffle(items)
        return items

    def order_candidates(self, board: Board, anchor: Anchor) -> list[Candidate]:
        """Order candidates for an anchor by the rough tiles-needed estimate, descending.

        The stack is LIFO, so the cheapest candidates are pushed last and popped first.
        """

        def rough(candidate: Candidate) -> int:
            word, offset = candidate
            return max(
                rough_tiles_needed(word, board, anchor.row - offset, anchor.col, Direction.DOWN),
                rough_tiles_needed(word, board, anchor.row, anchor.col - offset, Direction.ACROSS),
            )

        return sorted(self.index.candidates_for(anchor.letter), key=rough, reverse=True)

    # Search

    def _push(
        self,
        stack: list[SearchState],
        board: Board,
        bag: TileBag,
        frontier: Frontier,
        depth: int,
    ) -> bool:
        key = state_key(board, bag)
        if key in self._seen:
            return False
        self._seen.add(key)
        stack.append(SearchState(board, bag, frontier, depth))
        return True

    def _record(self, state: SearchState) -> None:
        """Best-solution bookkeeping for a popped state."""
        remaining = state.bag.total()
        if remaining < self.best_leftover:
            self.best_leftover = remaining
            self.best_board = state.board
            self.stats.improvements.append(remaining)
            logger.debug(f"{'  ' * state.depth}new best: {remaining} left")
            if remaining == 0:
                self.solved_perfect = True

    def expand(self, state: SearchState, stack: list[SearchState]) -> int:
        """Push the successors of a state through its most constrained anchor.

        Anchors are tried in frontier (MRV) order.  The next anchor is only tried when the
        previous one produced no new state.

        Returns:
            Number of states pushed.
        """
        for anchor in state.frontier:
            n_pushed = self.expand_anchor(state, anchor, stack)
            if n_pushed:
                return n_pushed
        return 0

    def expand_anchor(self, state: SearchState, anchor: Anchor, stack: list[SearchState]) -> int:
        """Push the legal, affordable, unseen states made by one word through `anchor`."""
        board, bag_left, frontier, depth = state
        n_pushed = 0
        for word, offset in self.maybe_shuffle(self.order_candidates(board, anchor)):
            for direction in self.maybe_shuffle(ORIENTATIONS):
                if direction == Direction.DOWN:
                    row, col = anchor.row - offset, anchor.col
                else:
                    row, col = anchor.row, anchor.col - offset
                if not board.can_place(word, row, col, direction, must_intersect=True):
                    continue

                need = needed(word, board, row, col, direction)
                if not covers(need, bag_left):
                    continue

                next_board = board.place(word, row, col, direction)
                next_frontier = frontier.copy()
                next_frontier.update(
                    Anchor(r, c, word[i])
                    for i, (r, c) in enumerate(board.cells(len(word), row, col, direction))
                    if board.is_free(r, c)
                )
                if self._push(stack, next_board, pay(bag_left, need), next_frontier, depth + 1):
                    n_pushed += 1
        return n_pushed

    def search_seed(self, seed: str, hand: TileBag) -> bool:
        """Run the search for one seed word.

        Returns:
            False if the seed could not be placed, True otherwise.
        """
        blank = Board.blank(self.rows, self.cols)
        center_row = self.rows // 2
        start_col = self.cols // 2 - len(seed) // 2
        if not blank.can_place(seed, center_row, start_col, Direction.ACROSS, must_intersect=False):
            return False
        need = needed(seed, blank, center_row, start_col, Direction.ACROSS)
        if not covers(need, hand):
            return False

        logger.debug(f"Seeding with {seed!r}")
        self.stats.seeds_tried += 1
        self._seen = set()

        board = blank.place(seed, center_row, start_col, Direction.ACROSS)
        frontier = self.new_frontier(
            Anchor(center_row, start_col + i, ch) for i, ch in enumerate(seed)
        )
        stack: list[SearchState] = []
        self._push(stack, board, pay(hand, need), frontier, 0)

        states_explored = 0
        while stack and not self.solved_perfect:
            state = stack.pop()
            states_explored += 1
            if states_explored > self.max_states:
                logger.debug(f"State limit reached for seed {seed!r}, {len(stack)} states dropped")
                break
            self.stats.states_explored += 1
            self.stats.max_depth_reached = max(self.stats.max_depth_reached, state.depth)

            self._record(state)
            if self.solved_perfect:
                break

            self.expand(state, stack)

        return True

    def search(self, hand: TileBag) -> Solution:
        """Search for the placement that leaves the fewest tiles in hand.

        Returns:
            The best board found (without leftover placement) and its leftover count.
        """
        self.stats = SearchStats()
        self.best_board = Board.blank(self.rows, self.cols)
        self.best_leftover = hand.total()
        self.solved_perfect = False
        self._seen = set()

        if self.best_leftover == 0:
            return Solution(self.best_board, 0, "empty_hand", self.stats)

        seeds = self.index.affordable_words(hand)
        logger.debug(f"{len(seeds)} affordable seed words for {tile_bag_to_string(hand)}")

        for seed in seeds:
            self.search_seed(seed, hand)
            if self.solved_perfect:
                break

        status: SolveStatus
        if self.best_leftover == 0:
            status = "perfect"
        elif self.best_leftover == hand.total():
            status = "no_placement"
        else:
            status = "partial"
        return Solution(self.best_board, self.best_leftover, status, self.stats)
