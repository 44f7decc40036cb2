import random
from collections import Counter

import pytest

from tilewords.board import Board, Direction
from tilewords.solver.search import (
    Anchor,
    SearchSession,
    SearchState,
    rough_tiles_needed,
    state_key,
)
from tilewords.solver.utils import get_word_runs, validate_board
from tilewords.tiles import create_tile_bag
from tilewords.wordlist import DEFAULT_WORDS, WordIndex


class NoRandom(random.Random):
    """Random source that fails if it is ever consulted."""

    def random(self):
        raise AssertionError("random source used")


class AlwaysShuffle(random.Random):
    """Random source that always shuffles, by reversing the items."""

    def random(self):
        return 0.0

    def shuffle(self, x):
        x.reverse()


def make_session(words, **kwargs) -> SearchSession:
    kwargs.setdefault("temperature", 0.0)
    return SearchSession(WordIndex(words), **kwargs)


def test_empty_hand():
    solution = make_session(DEFAULT_WORDS).search(create_tile_bag(""))
    assert solution.status == "empty_hand"
    assert solution.leftover == 0
    assert solution.perfect
    assert solution.board.is_empty()


def test_single_seed_is_centred():
    solution = make_session(DEFAULT_WORDS).search(create_tile_bag("apple"))
    assert solution.status == "perfect"
    assert solution.leftover == 0
    assert solution.board.to_rows()[10] == "." * 8 + "apple" + "." * 8
    assert solution.stats.improvements == [0]


def test_no_affordable_word():
    solution = make_session(DEFAULT_WORDS).search(create_tile_bag("xqz"))
    assert solution.status == "no_placement"
    assert solution.leftover == 3
    assert solution.board.is_empty()
    assert solution.stats.seeds_tried == 0


def test_seed_too_long_for_board():
    solution = make_session(["banana"], rows=5, cols=5).search(create_tile_bag("banana"))
    assert solution.status == "no_placement"
    assert solution.leftover == 6


def test_crossing_words_share_a_letter():
    words = ["peel", "swap"]
    hand = create_tile_bag("peelswap")
    solution = make_session(words).search(hand)

    # Both words cross on a single P, so one of the two P tiles stays in hand.
    assert solution.status == "partial"
    assert solution.leftover == 1
    board = solution.board
    assert "".join(board[10, c] for c in range(8, 12)) == "peel"
    assert "".join(board[r, 8] for r in range(7, 11)) == "swap"
    assert validate_board(board, words)


def test_perfect_solve_stops_search():
    solution = make_session(["cat", "tab"]).search(create_tile_bag("catab"))
    assert solution.status == "perfect"
    assert solution.stats.seeds_tried == 1
    assert solution.stats.states_explored == 2
    assert solution.stats.improvements == [2, 0]
    assert get_word_runs(solution.board) == [
        (Direction.ACROSS, 10, 9, "cat"),
        (Direction.DOWN, 10, 11, "tab"),
    ]


def test_state_limit_is_per_seed():
    solution = make_session(["cat", "tab"], max_states=1).search(create_tile_bag("catab"))
    assert solution.status == "partial"
    assert solution.leftover == 2
    assert solution.stats.seeds_tried == 2
    assert solution.stats.states_explored == 2


def test_session_can_be_reused():
    session = make_session(["cat", "tab"])
    first = session.search(create_tile_bag("catab"))
    second = session.search(create_tile_bag("catab"))
    assert first.board == second.board
    assert second.stats.improvements == [2, 0]


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_solutions_are_legal_and_conserve_tiles(seed):
    hand = create_tile_bag("peelswapgrapesplit")
    session = SearchSession(
        WordIndex(DEFAULT_WORDS),
        temperature=0.35,
        max_states=500,
        rng=random.Random(seed),
    )
    solution = session.search(hand)

    placed = solution.board.letters()
    assert placed <= hand
    assert placed.total() + solution.leftover == hand.total()
    assert validate_board(solution.board, DEFAULT_WORDS)

    improvements = solution.stats.improvements
    assert improvements == sorted(improvements, reverse=True)
    assert len(set(improvements)) == len(improvements)
    assert improvements[-1] == solution.leftover


def test_same_seed_same_search():
    def run(seed: int):
        session = SearchSession(
            WordIndex(DEFAULT_WORDS),
            temperature=1.0,
            max_states=300,
            rng=random.Random(seed),
        )
        return session.search(create_tile_bag("peelswapgrapesplit"))

    first, second = run(42), run(42)
    assert first.board == second.board
    assert first.leftover == second.leftover
    assert first.stats.states_explored == second.stats.states_explored


def test_zero_temperature_never_uses_random_source():
    session = make_session(DEFAULT_WORDS, rng=NoRandom(), max_states=200)
    session.search(create_tile_bag("peelswapgrape"))


def test_maybe_shuffle():
    items = list(range(20))
    assert make_session([]).maybe_shuffle(items) == items

    session = make_session([], temperature=1.0, rng=random.Random(0))
    shuffled = session.maybe_shuffle(items)
    assert sorted(shuffled) == items
    assert shuffled != items
    assert items == list(range(20))


def test_invalid_settings():
    with pytest.raises(ValueError):
        make_session([], temperature=1.5)
    with pytest.raises(ValueError):
        make_session([], max_states=0)


def test_frontier_orders_by_candidate_count():
    # Entries per letter: c=2, a=3, t=3, b=1
    session = make_session(["cat", "tab", "act"])
    frontier = session.new_frontier(
        [Anchor(0, 0, "a"), Anchor(0, 1, "t"), Anchor(0, 2, "b"), Anchor(0, 3, "c")]
    )
    assert [a.letter for a in frontier] == ["b", "c", "a", "t"]

    grown = frontier.copy()
    grown.update([Anchor(1, 1, "c")])
    assert list(grown)[:3] == [Anchor(0, 2, "b"), Anchor(0, 3, "c"), Anchor(1, 1, "c")]
    assert len(frontier) == 4


def test_candidates_ordered_by_rough_cost(cat_board):
    session = make_session(["at", "tab", "cat"])
    anchor = Anchor(3, 4, "t")
    ordered = session.order_candidates(cat_board, anchor)
    # tab and cat (2 new tiles at most) keep dictionary order, ahead of at (1)
    assert [c.word for c in ordered] == ["tab", "cat", "at"]


def test_rough_tiles_needed(cat_board):
    assert rough_tiles_needed("abc", Board.blank(5, 5), 0, 3, Direction.ACROSS) == -1
    assert rough_tiles_needed("abc", Board.blank(5, 5), -1, 0, Direction.DOWN) == -1
    assert rough_tiles_needed("abc", Board.blank(5, 5), 0, 0, Direction.DOWN) == 3
    assert rough_tiles_needed("oat", cat_board, 1, 4, Direction.DOWN) == 2


def test_state_key_depends_on_board_and_bag(cat_board):
    bag = Counter("xy")
    assert state_key(cat_board, bag) == state_key(cat_board.copy(), Counter("yx"))
    assert state_key(cat_board, bag) != state_key(cat_board, Counter("x"))
    assert state_key(cat_board, bag) != state_key(Board.blank(7, 7), bag)


def test_orientation_order_follows_temperature():
    board = Board.blank(7, 7).place("a", 3, 3, Direction.ACROSS)
    anchor = Anchor(3, 3, "a")

    def top_of_stack(session: SearchSession) -> Board:
        state = SearchState(board, Counter("t"), session.new_frontier([anchor]), 0)
        stack: list[SearchState] = []
        assert session.expand_anchor(state, anchor, stack) == 2
        return stack[-1].board

    # Across is pushed first, so down is explored first
    top = top_of_stack(make_session(["at"]))
    assert (top[4, 3], top[3, 4]) == ("t", ".")

    top = top_of_stack(make_session(["at"], temperature=1.0, rng=AlwaysShuffle()))
    assert (top[3, 4], top[4, 3]) == ("t", ".")


def test_seen_states_reset_for_each_seed():
    # Both seeds lay the same word, so the second seed starts from a state the first
    # seed already explored.
    solution = make_session(["at", "at"]).search(create_tile_bag("atx"))
    assert solution.stats.seeds_tried == 2
    assert solution.stats.states_explored == 2
    assert solution.leftover == 1
