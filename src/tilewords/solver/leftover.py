"""Park unused tiles on the board so that they stay visible."""

from tilewords.board import EMPTY, Board
from tilewords.logging_utils import get_logger
from tilewords.tiles import TileBag

logger = get_logger()


def unplaced_tiles(board: Board, hand: TileBag) -> list[str]:
    """List the hand tiles that are not on the board.

    Letters come in hand order, each repeated by its unplaced count.
    """
    remaining = hand.copy()
    remaining.subtract(board.letters())
    return [ch for ch, n in remaining.items() for _ in range(max(n, 0))]


def place_leftovers(board: Board, hand: TileBag) -> Board:
    """Return a copy of the board with unplaced tiles written into empty cells.

    Cells are filled in row-major order starting at (0, 0), skipping occupied cells.  No
    legality check is made: the result is for display only.  Tiles that do not fit are
    dropped.
    """
    tiles = unplaced_tiles(board, hand)
    new_board = board.copy()
    if not tiles:
        return new_board

    idx = 0
    for n_placed, ch in enumerate(tiles):
        while idx < len(new_board.data) and new_board[idx] != EMPTY:
            idx += 1
        if idx == len(new_board.data):
            logger.warning(f"No empty cell left, {len(tiles) - n_placed} tile(s) not shown.")
            break
        new_board[idx] = ch
        idx += 1
    return new_board
