"""Classes and functions for representing the game board."""

from array import array
from collections import Counter
from enum import IntEnum
from typing import Iterable

import numpy as np

EMPTY = "."
"""Marker for an empty cell."""


class Direction(IntEnum):
    """Enumeration for word directions."""

    ACROSS = 0
    DOWN = 1


class Board:
    """Store a 2D matrix of characters as a 1D list.

    Contains support for both 1D and 2D indexing.  Empty cells hold `EMPTY`; occupied cells
    hold a lowercase letter.
    """

    def __init__(self, data: str | Iterable[str], rows: int, cols: int) -> None:
        data = list(data) if isinstance(data, str) else data
        self.data = array("w", data)
        self.n_rows = rows
        self.n_cols = cols
        if len(self.data) != rows * cols:
            raise ValueError(f"Board data length does not match dimensions ({rows}, {cols}).")

    @classmethod
    def blank(cls, rows: int, cols: int) -> "Board":
        """Create an empty board."""
        return cls(EMPTY * (rows * cols), rows, cols)

    def copy(self) -> "Board":
        """Generate a copy of the board."""
        return Board(self.data.__copy__(), self.n_rows, self.n_cols)

    def __str__(self) -> str:
        """Returns a string representation of the board."""
        return self.data.tounicode()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.n_rows, self.n_cols, self.data) == (other.n_rows, other.n_cols, other.data)

    def to_rows(self) -> list[str]:
        """Return the board as one string per row."""
        text = str(self)
        return [text[i : i + self.n_cols] for i in range(0, len(text), self.n_cols)]

    def print(self, two_d: bool = True) -> None:
        """Print the board to the console."""
        if two_d:
            for row in self.to_rows():
                print(row)
        else:
            print(self.data.tounicode())

    def __getitem__(self, idx: int | tuple[int, int]) -> str:
        """Get cell content by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            return self.data[idx]
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            return self.data[row * self.n_cols + col]
        raise IndexError("Invalid index type for Board.")

    def __setitem__(self, idx: int | tuple[int, int], value: str) -> None:
        """Set cell content by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            self.data[idx] = value
            return
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            self.data[row * self.n_cols + col] = value
            return
        raise IndexError("Invalid index type for Board.")

    def get_2d_idx(self, one_d_idx: int) -> tuple[int, int]:
        """Convert a 1D index to a (row, col) tuple."""
        return divmod(one_d_idx, self.n_cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def is_free(self, row: int, col: int) -> bool:
        """Whether the cell is empty.  The cell must be in bounds."""
        return self.data[row * self.n_cols + col] == EMPTY

    def is_empty(self) -> bool:
        """Whether no letter has been placed on the board."""
        return self.data.count(EMPTY) == len(self.data)

    def letters(self) -> Counter[str]:
        """Count the letters placed on the board."""
        counts = Counter(self.data)
        del counts[EMPTY]
        return counts

    def filled_cells(self) -> list[tuple[int, int]]:
        """List the occupied cells in row-major order."""
        return [self.get_2d_idx(i) for i, ch in enumerate(self.data) if ch != EMPTY]

    def cells(
        self, length: int, row: int, col: int, direction: Direction
    ) -> list[tuple[int, int]]:
        """List the (row, col) cells covered by a word.  Bounds are not checked."""
        if direction == Direction.DOWN:
            return [(row + i, col) for i in range(length)]
        return [(row, col + i) for i in range(length)]

    def can_place(
        self,
        word: str,
        row: int,
        col: int,
        direction: Direction,
        *,
        must_intersect: bool = True,
    ) -> bool:
        """Check whether `word` may be written starting at (row, col).

        The rules, checked in order (the first violation rejects the placement):

        1. The whole word lies on the board.
        2. Every covered cell is empty or already holds the word's letter.
        3. A newly filled cell has no perpendicular neighbours, so no parallel word
           fragment is formed alongside the word.
        4. The cells just before the start and just after the end of the word are empty or
           off the board, so the word does not fuse with another one.
        5. If `must_intersect` is set, at least one covered cell is already occupied.
        """
        length = len(word)
        if length == 0:
            return False
        d_row, d_col = (1, 0) if direction == Direction.DOWN else (0, 1)
        end_row, end_col = row + d_row * (length - 1), col + d_col * (length - 1)
        if not (self.in_bounds(row, col) and self.in_bounds(end_row, end_col)):
            return False

        intersects = False
        for i, (r, c) in enumerate(self.cells(length, row, col, direction)):
            existing = self[r, c]
            if existing != EMPTY:
                if existing != word[i]:
                    return False
                intersects = True
                continue
            # Perpendicular neighbours of a new tile
            for n_r, n_c in ((r - d_col, c - d_row), (r + d_col, c + d_row)):
                if self.in_bounds(n_r, n_c) and not self.is_free(n_r, n_c):
                    return False

        for n_r, n_c in ((row - d_row, col - d_col), (end_row + d_row, end_col + d_col)):
            if self.in_bounds(n_r, n_c) and not self.is_free(n_r, n_c):
                return False

        return intersects or not must_intersect

    def place(self, word: str, row: int, col: int, direction: Direction) -> "Board":
        """Return a copy of the board with `word` written starting at (row, col)."""
        board = self.copy()
        for ch, (r, c) in zip(word, self.cells(len(word), row, col, direction)):
            board[r, c] = ch
        return board

    def is_connected(self) -> bool:
        """Check if the occupied cells form a single 4-connected group.

        An empty board is considered connected.
        """
        dims = (self.n_rows, self.n_cols)
        occupied = np.array(list(str(self))).reshape(dims) != EMPTY
        visited = np.zeros(dims, dtype=bool)

        starts = np.argwhere(occupied)
        if len(starts) == 0:
            return True

        # Depth-First Search (DFS) to mark all reachable cells
        stack = [tuple(starts[0])]
        while stack:
            r, c = stack.pop()
            if visited[r, c]:
                continue
            visited[r, c] = True

            for delta_r, delta_c in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
                r_new, c_new = r + delta_r, c + delta_c
                if 0 <= r_new < dims[0] and 0 <= c_new < dims[1]:
                    if occupied[r_new, c_new] and not visited[r_new, c_new]:
                        stack.append((r_new, c_new))

        return bool(np.array_equal(visited, occupied))
