"""Static evaluation.

Pure, deterministic, and side-effect free.
"""

from __future__ import annotations

from typing import Final, Optional

from minimax_chess.engine.piece import BLACK, WHITE
from minimax_chess.engine.position import Position
from minimax_chess.engine.state import GameState, classify


MATE_SCORE: Final = 10_000
STALEMATE_PENALTY: Final = 50
CHECK_PENALTY: Final = 80


def material(position: Position, perspective: str) -> int:
    """Material balance from ``perspective``'s point of view."""
    score = 0
    for row in position.board:
        for piece in row:
            if piece is None:
                continue
            score += piece.value if piece.color == perspective else -piece.value
    return score


def state_adjustment(state: GameState, perspective: str) -> int:
    """Score bonus for a classified state, seen from ``perspective``.

    A stalemate costs ``STALEMATE_PENALTY`` whichever side is stalemated, which
    keeps the engine from steering into draws it could avoid.
    """
    if state == GameState.WHITE_CHECKMATE:
        return -MATE_SCORE if perspective == WHITE else MATE_SCORE
    if state == GameState.BLACK_CHECKMATE:
        return -MATE_SCORE if perspective == BLACK else MATE_SCORE
    if state in (GameState.WHITE_STALEMATE, GameState.BLACK_STALEMATE):
        return -STALEMATE_PENALTY
    if state == GameState.WHITE_IN_CHECK:
        return -CHECK_PENALTY if perspective == WHITE else CHECK_PENALTY
    if state == GameState.BLACK_IN_CHECK:
        return -CHECK_PENALTY if perspective == BLACK else CHECK_PENALTY
    return 0


def evaluate(position: Position, perspective: str, state: Optional[GameState] = None) -> int:
    """Return a static score of ``position`` from ``perspective``.

    Args:
        position (Position): Position to score.
        perspective (str): Color the score is relative to; positive favors it.
        state (Optional[GameState]): Already computed classification, to avoid
            classifying twice.

    Returns:
        int: Material balance plus mate, stalemate and check adjustments.
    """
    if state is None:
        state = classify(position)
    return material(position, perspective) + state_adjustment(state, perspective)
