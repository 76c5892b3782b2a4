import os
import sys

import pytest


# Ensure the repository root is on sys.path for `from minimax_chess...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from minimax_chess.engine.move import str_to_square  # noqa: E402
from minimax_chess.engine.position import Position  # noqa: E402
from minimax_chess.engine.rules import attempt_move  # noqa: E402


def _play_uci(position: Position, *moves: str) -> None:
    for m in moves:
        attempt_move(position, str_to_square(m[0:2]), str_to_square(m[2:4]))


@pytest.fixture
def play():
    """Apply a sequence of ``"e2e4"``-style moves with ``attempt_move``."""
    return _play_uci


@pytest.fixture
def startpos() -> Position:
    return Position.startpos()


@pytest.fixture
def castling_position() -> Position:
    return Position.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
