"""Square arithmetic shared by the move rules and the attack detector."""

from __future__ import annotations

from typing import List, Tuple

from .move import Square
from .position import Position


STRAIGHT_DIRS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL_DIRS: Tuple[Tuple[int, int], ...] = ((1, 1), (-1, -1), (1, -1), (-1, 1))
KING_DIRS = STRAIGHT_DIRS + DIAGONAL_DIRS
KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, -2),
    (-1, -2),
    (1, 2),
    (-1, 2),
)


def in_bounds(rank: int, file: int) -> bool:
    return 0 <= rank < 8 and 0 <= file < 8


def manhattan(a: Square, b: Square) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Square, b: Square) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def is_straight(a: Square, b: Square) -> bool:
    return a != b and (a[0] == b[0] or a[1] == b[1])


def is_diagonal(a: Square, b: Square) -> bool:
    return a != b and abs(a[0] - b[0]) == abs(a[1] - b[1])


def is_knight_jump(a: Square, b: Square) -> bool:
    return sorted((abs(a[0] - b[0]), abs(a[1] - b[1]))) == [1, 2]


def surrounding(sq: Square) -> List[Square]:
    """Return the up to eight squares adjacent to ``sq``."""
    rank, file = sq
    return [
        (rank + dr, file + df)
        for dr, df in KING_DIRS
        if in_bounds(rank + dr, file + df)
    ]


def ray(sq: Square, direction: Tuple[int, int]) -> List[Square]:
    """Squares from ``sq`` (exclusive) to the board edge along ``direction``."""
    dr, df = direction
    rank, file = sq[0] + dr, sq[1] + df
    out: List[Square] = []
    while in_bounds(rank, file):
        out.append((rank, file))
        rank += dr
        file += df
    return out


def squares_between(a: Square, b: Square) -> List[Square]:
    """Squares strictly between ``a`` and ``b`` on a shared line.

    Returns an empty list when the squares are adjacent or do not share a
    rank, file, or diagonal.
    """
    if not (is_straight(a, b) or is_diagonal(a, b)):
        return []
    dr = (b[0] > a[0]) - (b[0] < a[0])
    df = (b[1] > a[1]) - (b[1] < a[1])
    out: List[Square] = []
    rank, file = a[0] + dr, a[1] + df
    while (rank, file) != b:
        out.append((rank, file))
        rank += dr
        file += df
    return out


def pieces_between(position: Position, a: Square, b: Square) -> bool:
    """Whether any occupied square lies strictly between ``a`` and ``b``."""
    return any(position.piece_at(sq) is not None for sq in squares_between(a, b))
