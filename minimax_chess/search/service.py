from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

from minimax_chess.engine.legal import legal_moves
from minimax_chess.engine.move import Move
from minimax_chess.engine.piece import opposite
from minimax_chess.engine.position import Position
from minimax_chess.engine.rules import play
from minimax_chess.engine.state import classify
from minimax_chess.eval import evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000
DEFAULT_DEPTH = 3


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: Optional[int]
    nodes: int
    depth: int
    time_ms: int


class SearchService:
    """Fixed-depth minimax search with alpha-beta pruning.

    Notes:
    - Move lists are shuffled with the injected ``rng`` before they are
      searched. Ordering only affects which nodes get pruned and which of
      several equally scored moves is picked, never the score itself.
    - Every child is searched on its own copy of the position.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.nodes = 0

    def minimax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        side: str,
        maximizing: str,
        *,
        prune: bool = True,
    ) -> int:
        """Score ``position`` by minimax from ``maximizing``'s point of view.

        Args:
            position (Position): Position with ``side`` to move.
            depth (int): Remaining plies; 0 returns the static evaluation.
            alpha (int): Best score the maximizer is already assured of.
            beta (int): Best score the minimizer is already assured of.
            side (str): Color to move at this node.
            maximizing (str): Color whose score is being maximized.
            prune (bool): When False the window is never tightened, giving a
                plain minimax that visits every node.

        Returns:
            int: Minimax value of the node.
        """
        self.nodes += 1
        state = classify(position)
        if depth == 0 or state.terminal:
            return evaluate(position, maximizing, state)

        moves = legal_moves(position, side)
        self.rng.shuffle(moves)

        if side == maximizing:
            max_eval = -INF
            for m in moves:
                child = position.copy()
                play(child, m.from_sq, m.to_sq)
                score = self.minimax(
                    child, depth - 1, alpha, beta, opposite(side), maximizing, prune=prune
                )
                max_eval = max(max_eval, score)
                if prune:
                    alpha = max(alpha, score)
                    if beta <= alpha:
                        break
            return max_eval

        min_eval = INF
        for m in moves:
            child = position.copy()
            play(child, m.from_sq, m.to_sq)
            score = self.minimax(
                child, depth - 1, alpha, beta, opposite(side), maximizing, prune=prune
            )
            min_eval = min(min_eval, score)
            if prune:
                beta = min(beta, score)
                if beta <= alpha:
                    break
        return min_eval

    def search(self, position: Position, depth: int = DEFAULT_DEPTH) -> SearchResult:
        """Pick the best move for the side to move.

        Each root move is played on a copy and scored with ``minimax`` at
        ``depth`` plies below it. The first move reaching the maximum score
        (in shuffled order) wins.

        Returns:
            SearchResult: ``best_move`` is None when the side to move has no
                legal move.
        """
        if depth < 0:
            raise ValueError("depth must be >= 0")
        start = time.perf_counter()
        self.nodes = 0
        me = position.turn

        moves = legal_moves(position, me)
        self.rng.shuffle(moves)

        best_move: Optional[Move] = None
        best_score: Optional[int] = None
        for m in moves:
            child = position.copy()
            play(child, m.from_sq, m.to_sq)
            score = self.minimax(child, depth, -INF, INF, opposite(me), me)
            if best_score is None or score > best_score:
                best_score = score
                best_move = m

        time_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "search finished",
            extra={
                "best_move": best_move.to_uci() if best_move else None,
                "score": best_score,
                "nodes": self.nodes,
                "depth": depth,
                "time_ms": time_ms,
            },
        )
        return SearchResult(
            best_move=best_move,
            score=best_score,
            nodes=self.nodes,
            depth=depth,
            time_ms=time_ms,
        )

    def choose_move(self, position: Position, depth: int = DEFAULT_DEPTH) -> Move:
        """Return the move the engine plays in ``position``.

        Raises:
            ValueError: If the side to move has no legal move.
        """
        result = self.search(position, depth)
        if result.best_move is None:
            raise ValueError("no legal moves")
        return result.best_move
