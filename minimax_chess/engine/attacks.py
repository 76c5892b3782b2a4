from __future__ import annotations

from .geometry import DIAGONAL_DIRS, KNIGHT_OFFSETS, STRAIGHT_DIRS, in_bounds
from .move import Square
from .piece import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, forward, opposite
from .position import Position


def is_attacked(position: Position, square: Square, defender: str) -> bool:
    """Return whether any piece of the opponent of ``defender`` attacks ``square``.

    Args:
        position (Position): Position to inspect; it is not modified.
        square (Square): Target square.
        defender (str): Color owning (or about to own) ``square``.

    Returns:
        bool: True on the first attacker found.

    Notes:
        Each ray stops at its first occupied square. Sliders attack along
        their own ray type, a king only from an adjacent square, and a pawn
        only from an adjacent diagonal it advances away from.
    """
    attacker = opposite(defender)
    board = position.board
    rank, file = square

    for dr, df in STRAIGHT_DIRS + DIAGONAL_DIRS:
        diagonal = dr != 0 and df != 0
        r, f = rank + dr, file + df
        dist = 1
        while in_bounds(r, f):
            piece = board[r][f]
            if piece is None:
                r += dr
                f += df
                dist += 1
                continue
            if piece.color == attacker:
                if piece.kind == QUEEN:
                    return True
                if piece.kind == (BISHOP if diagonal else ROOK):
                    return True
                if dist == 1 and piece.kind == KING:
                    return True
                # A pawn captures toward its forward direction, so it sits
                # one rank behind the square from its own point of view.
                if dist == 1 and diagonal and piece.kind == PAWN and dr == -forward(attacker):
                    return True
            break

    for dr, df in KNIGHT_OFFSETS:
        r, f = rank + dr, file + df
        if in_bounds(r, f):
            piece = board[r][f]
            if piece is not None and piece.kind == KNIGHT and piece.color == attacker:
                return True

    return False


def in_check(position: Position, color: str) -> bool:
    """Whether ``color``'s king is attacked."""
    return is_attacked(position, position.find_king(color), color)
