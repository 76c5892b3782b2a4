"""Legal-move filter built on top of the per-piece rules.

Every candidate is tried on its own copy of the position; a candidate is kept
only if the rules accept it and the mover's king is safe afterwards.
"""

from __future__ import annotations

from typing import Iterator, List, Set

from .attacks import in_check
from .errors import IllegalMove
from .geometry import DIAGONAL_DIRS, KING_DIRS, KNIGHT_OFFSETS, STRAIGHT_DIRS, in_bounds, ray
from .move import Move, Square
from .piece import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, forward
from .position import Position
from .rules import play


def candidate_destinations(position: Position, square: Square) -> List[Square]:
    """Pseudo-legal destination candidates for the piece on ``square``.

    The list follows the piece's movement pattern only; occupancy, check and
    castling conditions are left to the rules engine.

    Raises:
        ValueError: If ``square`` is empty.
    """
    piece = position.piece_at(square)
    if piece is None:
        raise ValueError("no piece on square")
    rank, file = square

    if piece.kind == KNIGHT:
        offsets = KNIGHT_OFFSETS
    elif piece.kind == KING:
        offsets = KING_DIRS + ((0, 2), (0, -2))
    elif piece.kind == PAWN:
        step = forward(piece.color)
        offsets = ((step, 0), (2 * step, 0), (step, 1), (step, -1))
    else:
        dirs = {
            BISHOP: DIAGONAL_DIRS,
            ROOK: STRAIGHT_DIRS,
            QUEEN: STRAIGHT_DIRS + DIAGONAL_DIRS,
        }[piece.kind]
        return [sq for d in dirs for sq in ray(square, d)]

    return [(rank + dr, file + df) for dr, df in offsets if in_bounds(rank + dr, file + df)]


def _legal_iter(position: Position, square: Square) -> Iterator[Square]:
    color = position.piece_at(square).color  # type: ignore[union-attr]
    for to_sq in candidate_destinations(position, square):
        trial = position.copy()
        try:
            play(trial, square, to_sq)
        except IllegalMove:
            continue
        if not in_check(trial, color):
            yield to_sq


def legal_destinations(position: Position, square: Square) -> Set[Square]:
    """All squares the piece on ``square`` may legally move to."""
    return set(_legal_iter(position, square))


def has_any_legal_move(position: Position, square: Square) -> bool:
    """Whether the piece on ``square`` has at least one legal move."""
    return next(_legal_iter(position, square), None) is not None


def pieces_of(position: Position, color: str) -> Set[Square]:
    """Every square holding a piece of ``color``."""
    return set(position.pieces_of(color))


def legal_moves(position: Position, color: str) -> List[Move]:
    """Every legal move for ``color``, grouped by origin square from a1.

    Notes:
        Moves are only legal for the side to move; asking for the other side
        returns an empty list because the rules reject moves out of turn.
    """
    moves: List[Move] = []
    for from_sq in position.pieces_of(color):
        moves.extend(Move(from_sq, to_sq) for to_sq in sorted(legal_destinations(position, from_sq)))
    return moves


def side_has_legal_move(position: Position, color: str) -> bool:
    return any(has_any_legal_move(position, sq) for sq in position.pieces_of(color))
