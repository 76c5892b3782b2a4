"""Per-piece move legality and move application.

``attempt_move`` is the public entry point: it validates on a scratch copy and
only commits to the real position when every check passes. ``play`` is the
in-place variant for callers that already own a throwaway copy.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from .attacks import is_attacked
from .errors import (
    EmptySource,
    ExposesOwnKing,
    IllegalMove,
    InvalidPromotionChoice,
    SameColorCapture,
    ShapeIllegal,
    WrongTurn,
)
from .geometry import (
    chebyshev,
    in_bounds,
    is_diagonal,
    is_knight_jump,
    is_straight,
    pieces_between,
)
from .move import Square, square_to_str
from .piece import (
    BISHOP,
    KING,
    KNIGHT,
    PAWN,
    PROMOTION_KINDS,
    QUEEN,
    ROOK,
    WHITE,
    Piece,
    forward,
    opposite,
)
from .position import KING_HOMES, KINGSIDE, QUEENSIDE, ROOK_HOMES, Position


logger = logging.getLogger(__name__)

# A rule either raises ShapeIllegal or returns True when it has already
# completed the whole move itself (castling).
Rule = Callable[[Position, Piece, Square, Square], bool]


def attempt_move(position: Position, from_sq: Square, to_sq: Square) -> None:
    """Validate and apply a move.

    Args:
        position (Position): Position to mutate on success.
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.

    Raises:
        IllegalMove: One of its subclasses when the move is rejected; the
            position is then left exactly as it was.
    """
    scratch = position.copy()
    try:
        play(scratch, from_sq, to_sq)
    except IllegalMove as e:
        logger.debug(
            "rejected move",
            extra={"move": _describe(from_sq, to_sq), "reason": str(e)},
        )
        raise
    position.restore(scratch)


def play(position: Position, from_sq: Square, to_sq: Square) -> None:
    """Apply a move in place.

    On failure ``position`` is left in an unspecified state, so only call this
    on a copy that is discarded when an exception escapes.

    Raises:
        IllegalMove: One of its subclasses when the move is rejected.
    """
    if not (in_bounds(*from_sq) and in_bounds(*to_sq)):
        raise ShapeIllegal("square off the board")
    piece = position.piece_at(from_sq)
    if piece is None:
        raise EmptySource()

    # The en passant square only survives the single ply after a double step
    if position.parity == 0:
        position.en_passant = None

    if piece.color != position.turn:
        raise WrongTurn()
    target = position.piece_at(to_sq)
    if target is not None and target.color == piece.color:
        raise SameColorCapture()
    if from_sq == to_sq:
        raise ShapeIllegal()

    if RULES[piece.kind](position, piece, from_sq, to_sq):
        _advance(position)
        return

    position.set_piece(from_sq, None)
    position.set_piece(to_sq, piece)
    _clear_captured_rook_rights(position, piece.color, to_sq)

    if is_attacked(position, position.find_king(piece.color), piece.color):
        raise ExposesOwnKing()

    if piece.kind == PAWN and to_sq[0] == _last_rank(piece.color):
        choice = position.promotion
        if choice not in PROMOTION_KINDS:
            raise InvalidPromotionChoice(choice)
        position.set_piece(to_sq, Piece(choice, piece.color))

    _advance(position)


def _advance(position: Position) -> None:
    position.turn = opposite(position.turn)
    position.parity = (position.parity + 1) % 2
    position.ply += 1


def _last_rank(color: str) -> int:
    return 7 if color == WHITE else 0


def _clear_captured_rook_rights(position: Position, mover: str, to_sq: Square) -> None:
    # Landing on the opponent's rook home means that rook was captured or had
    # already left; either way the right is gone for good.
    for key, home in ROOK_HOMES.items():
        if home == to_sq and key[0] != mover:
            position.castling[key] = False


def _pawn_rule(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    step = forward(piece.color)
    dr = to_sq[0] - from_sq[0]
    df = to_sq[1] - from_sq[1]
    target = position.piece_at(to_sq)

    if df == 0 and dr == step:
        if target is not None:
            raise ShapeIllegal("pawn is blocked")
        return False

    if df == 0 and dr == 2 * step:
        start_rank = 1 if piece.color == WHITE else 6
        if from_sq[0] != start_rank or target is not None or pieces_between(position, from_sq, to_sq):
            raise ShapeIllegal()
        position.en_passant = (from_sq[0] + step, from_sq[1])
        position.parity = 0
        return False

    if abs(df) == 1 and dr == step:
        if target is not None:
            return False
        if position.en_passant == to_sq:
            captured_sq = (to_sq[0] - step, to_sq[1])
            if position.piece_at(captured_sq) == Piece(PAWN, opposite(piece.color)):
                position.set_piece(captured_sq, None)
                return False
        raise ShapeIllegal("nothing to capture")

    raise ShapeIllegal()


def _king_rule(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    color = piece.color
    rights = dict(position.castling)
    position.castling[(color, KINGSIDE)] = False
    position.castling[(color, QUEENSIDE)] = False

    if chebyshev(from_sq, to_sq) == 1:
        return False
    if from_sq == KING_HOMES[color] and to_sq[0] == from_sq[0] and abs(to_sq[1] - from_sq[1]) == 2:
        side = KINGSIDE if to_sq[1] > from_sq[1] else QUEENSIDE
        _castle(position, color, side, rights[(color, side)], from_sq, to_sq)
        return True
    raise ShapeIllegal()


def _castle(
    position: Position, color: str, side: str, has_right: bool, king_sq: Square, to_sq: Square
) -> None:
    if not has_right:
        raise ShapeIllegal("castling right lost")
    rook = Piece(ROOK, color)
    rook_sq = ROOK_HOMES[(color, side)]
    if position.piece_at(rook_sq) != rook:
        raise ShapeIllegal("rook not on its home square")
    if pieces_between(position, king_sq, rook_sq):
        raise ShapeIllegal("pieces between king and rook")
    if is_attacked(position, king_sq, color):
        raise ShapeIllegal("cannot castle out of check")
    step = 1 if side == KINGSIDE else -1
    transit = (king_sq[0], king_sq[1] + step)
    if is_attacked(position, transit, color):
        raise ShapeIllegal("cannot castle through check")
    if is_attacked(position, to_sq, color):
        raise ShapeIllegal("cannot castle into check")

    position.set_piece(king_sq, None)
    position.set_piece(rook_sq, None)
    position.set_piece(to_sq, Piece(KING, color))
    position.set_piece(transit, rook)


def _rook_rule(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    for key, home in ROOK_HOMES.items():
        if home == from_sq and key[0] == piece.color:
            position.castling[key] = False
    if not is_straight(from_sq, to_sq) or pieces_between(position, from_sq, to_sq):
        raise ShapeIllegal()
    return False


def _bishop_rule(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    if not is_diagonal(from_sq, to_sq) or pieces_between(position, from_sq, to_sq):
        raise ShapeIllegal()
    return False


def _queen_rule(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    if not (is_straight(from_sq, to_sq) or is_diagonal(from_sq, to_sq)):
        raise ShapeIllegal()
    if pieces_between(position, from_sq, to_sq):
        raise ShapeIllegal()
    return False


def _knight_rule(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    if not is_knight_jump(from_sq, to_sq):
        raise ShapeIllegal()
    return False


RULES: Dict[str, Rule] = {
    PAWN: _pawn_rule,
    KNIGHT: _knight_rule,
    BISHOP: _bishop_rule,
    ROOK: _rook_rule,
    QUEEN: _queen_rule,
    KING: _king_rule,
}


def _describe(from_sq: Square, to_sq: Square) -> str:
    try:
        return square_to_str(from_sq) + square_to_str(to_sq)
    except ValueError:
        return f"{from_sq}->{to_sq}"
