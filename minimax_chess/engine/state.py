from __future__ import annotations

from enum import Enum

from .attacks import in_check
from .legal import side_has_legal_move
from .piece import BLACK, WHITE
from .position import Position


class GameState(Enum):
    """Outcome of classifying a position; the value is the display label."""

    CONTINUE = "Game continues"
    WHITE_IN_CHECK = "White is in check"
    BLACK_IN_CHECK = "Black is in check"
    WHITE_CHECKMATE = "White is checkmated"
    BLACK_CHECKMATE = "Black is checkmated"
    WHITE_STALEMATE = "White is stalemated"
    BLACK_STALEMATE = "Black is stalemated"
    DRAW_INSUFFICIENT_MATERIAL = "Draw"

    @property
    def label(self) -> str:
        return self.value

    @property
    def terminal(self) -> bool:
        return self not in (
            GameState.CONTINUE,
            GameState.WHITE_IN_CHECK,
            GameState.BLACK_IN_CHECK,
        )


_CHECKMATE = {WHITE: GameState.WHITE_CHECKMATE, BLACK: GameState.BLACK_CHECKMATE}
_STALEMATE = {WHITE: GameState.WHITE_STALEMATE, BLACK: GameState.BLACK_STALEMATE}


def classify(position: Position) -> GameState:
    """Classify ``position`` for display and search cut-offs.

    Order of evaluation:
    - only the two kings left: draw by insufficient material
    - side to move without a legal move: checkmate if in check, else stalemate
    - white in check, then black in check
    - otherwise the game continues

    Raises:
        RuntimeError: If a king is missing from the board.
    """
    if position.occupied_count() == 2:
        return GameState.DRAW_INSUFFICIENT_MATERIAL

    white_check = in_check(position, WHITE)
    black_check = in_check(position, BLACK)
    mover_check = white_check if position.turn == WHITE else black_check

    if not side_has_legal_move(position, position.turn):
        return _CHECKMATE[position.turn] if mover_check else _STALEMATE[position.turn]

    if white_check:
        return GameState.WHITE_IN_CHECK
    if black_check:
        return GameState.BLACK_IN_CHECK
    return GameState.CONTINUE


def is_terminal(state: GameState) -> bool:
    return state.terminal
