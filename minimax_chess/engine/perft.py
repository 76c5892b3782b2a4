from __future__ import annotations

from typing import Dict

from .legal import legal_moves
from .position import Position
from .rules import play


def perft(position: Position, depth: int) -> int:
    """Compute the perft node count for ``position`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Note: promotions always produce the configured promotion piece, so counts
    differ from published tables only in positions where a pawn can promote.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = legal_moves(position, position.turn)
    if depth == 1:
        return len(moves)

    nodes = 0
    for m in moves:
        child = position.copy()
        play(child, m.from_sq, m.to_sq)
        nodes += perft(child, depth - 1)
    return nodes


def divide(position: Position, depth: int) -> Dict[str, int]:
    """Split the perft count at ``depth`` by root move.

    Returns:
        Dict[str, int]: Leaf count below each legal root move, keyed by the
            move in coordinate form (``"e2e4"``). The values sum to
            ``perft(position, depth)``.

    Raises:
        ValueError: If ``depth`` is less than 1.
    """
    if depth < 1:
        raise ValueError("depth must be >= 1")
    counts: Dict[str, int] = {}
    for m in legal_moves(position, position.turn):
        child = position.copy()
        play(child, m.from_sq, m.to_sq)
        counts[m.to_uci()] = perft(child, depth - 1)
    return counts
