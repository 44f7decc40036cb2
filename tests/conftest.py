import pytest

from tilewords.board import Board, Direction


@pytest.fixture
def cat_board() -> Board:
    """7x7 board with CAT written across the middle row, starting at column 2."""
    return Board.blank(7, 7).place("cat", 3, 2, Direction.ACROSS)


@pytest.fixture
def cross_board(cat_board: Board) -> Board:
    """CAT across plus BAT down, crossing on the A."""
    return cat_board.place("bat", 2, 3, Direction.DOWN)
