"""Module for tile-related functions: the letter bag and its queries."""

from collections import Counter
from collections.abc import Iterable

from tilewords.board import Board, Direction

TileBag = Counter[str]
"""A multiset of available tiles, keyed by lowercase letter."""


def create_tile_bag(tiles: str | Iterable[str]) -> TileBag:
    """Create a tile bag from a string (or iterable) of tiles.

    Args:
        tiles: The tiles, one letter per character.  Case is ignored.

    Returns:
        A Counter mapping each lowercase letter to its number of tiles.  Insertion order
        follows the first appearance of each letter.

    Raises:
        ValueError: If the input contains a non-alphabetic character.
    """
    bag: TileBag = Counter()
    for ch in tiles:
        ch = ch.lower()
        if not ("a" <= ch <= "z"):
            raise ValueError(f"Invalid tile character: {ch!r}")
        bag[ch] += 1
    return bag


def affordable(word: str, bag: TileBag) -> bool:
    """Returns whether the whole word can be paid for from the bag.

    Demand is tallied letter by letter, so the check stops at the first prefix of the
    word that asks for more copies of a letter than the bag holds.
    """
    need: Counter[str] = Counter()
    for ch in word:
        need[ch] += 1
        if need[ch] > bag[ch]:
            return False
    return True


def needed(word: str, board: Board, row: int, col: int, direction: Direction) -> TileBag:
    """Return the new tiles required to write `word` on the board.

    Cells already holding a letter cost nothing: that letter is reused.  The placement
    must be in bounds; callers check with `Board.can_place` first.
    """
    need: TileBag = Counter()
    for i, (r, c) in enumerate(board.cells(len(word), row, col, direction)):
        if board.is_free(r, c):
            need[word[i]] += 1
    return need


def covers(need: TileBag, bag: TileBag) -> bool:
    """Returns whether the bag holds at least the needed count of every letter."""
    return all(bag[ch] >= n for ch, n in need.items())


def pay(bag: TileBag, need: TileBag) -> TileBag:
    """Return a new bag with `need` removed.  The input bag is not modified.

    Raises:
        ValueError: If the bag does not cover the need.
    """
    if not covers(need, bag):
        raise ValueError(
            f"Cannot pay {tile_bag_to_string(need)} from {tile_bag_to_string(bag)}."
        )
    return bag - need


def refund(bag: TileBag, letters: Iterable[str]) -> TileBag:
    """Return a new bag with `letters` put back.  The input bag is not modified."""
    new_bag = bag.copy()
    new_bag.update(letters)
    return new_bag


def tile_bag_to_string(tile_bag: TileBag) -> str:
    """Convert a tile bag to a sorted string of its tiles, e.g. `aelpp`."""
    return "".join(sorted(tile_bag.elements()))
