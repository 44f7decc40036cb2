"""Utility functions for the Tilewords solver."""

from collections.abc import Collection
from typing import TypeAlias

from tilewords.board import EMPTY, Board, Direction

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"

WordRun: TypeAlias = tuple[Direction, int, int, str]
"""A word read off the board: (direction, start_row, start_col, word)."""


def get_word_runs(board: Board) -> list[WordRun]:
    """Get every maximal run of two or more letters on the board.

    Args:
        board (Board): The board to scan.

    Returns:
        A list of (direction, start_row, start_col, word) tuples, across runs first.
    """
    runs: list[WordRun] = []

    # Find across words
    for row, line in enumerate(board.to_rows()):
        for start, segment in _segments(line):
            runs.append((Direction.ACROSS, row, start, segment))

    # Find down words
    for col in range(board.n_cols):
        line = "".join(board[row, col] for row in range(board.n_rows))
        for start, segment in _segments(line):
            runs.append((Direction.DOWN, start, col, segment))

    return runs


def _segments(line: str) -> list[tuple[int, str]]:
    """Split a line of cells into (start, letters) runs of length > 1."""
    segments = []
    start = 0
    for part in line.split(EMPTY):
        if len(part) > 1:
            segments.append((start, part))
        start += len(part) + 1
    return segments


def validate_board(board: Board, word_list: Collection[str]) -> bool:
    """Validate a placement: all runs are dictionary words and the letters are connected.

    A lone letter (a run of length one in both directions) only passes if it is the whole
    board and is itself a word.
    """
    runs = get_word_runs(board)
    if not runs:
        filled = board.letters()
        return filled.total() == 0 or (filled.total() == 1 and next(iter(filled)) in word_list)
    if any(word not in word_list for _, _, _, word in runs):
        return False
    return board.is_connected()


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a "HH:MM:SS.ss" string."""
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"
