from __future__ import annotations

import pytest

from minimax_chess.engine.errors import ShapeIllegal
from minimax_chess.engine.legal import legal_destinations
from minimax_chess.engine.piece import BLACK, PAWN, WHITE, Piece
from minimax_chess.engine.position import Position


def test_white_captures_en_passant_on_next_ply(play) -> None:
    # Black pawn e7 double-steps next to the white pawn on d5
    p = Position.from_fen("4k3/4p3/8/3P4/8/8/8/4K3 b - - 0 1")
    play(p, "e7e5")
    assert p.en_passant == (5, 4)
    assert (5, 4) in legal_destinations(p, (4, 3))

    play(p, "d5e6")
    assert p.piece_at((5, 4)) == Piece(PAWN, WHITE)
    assert p.piece_at((4, 4)) is None  # captured pawn removed
    assert p.piece_at((4, 3)) is None


def test_black_captures_en_passant_on_next_ply(play) -> None:
    p = Position.from_fen("4k3/8/8/8/3p4/8/4P3/4K3 w - - 0 1")
    play(p, "e2e4", "d4e3")
    assert p.piece_at((2, 4)) == Piece(PAWN, BLACK)
    assert p.piece_at((3, 4)) is None


def test_en_passant_expires_after_one_ply(play) -> None:
    p = Position.from_fen("4k3/4p3/8/3P4/8/8/8/4K3 b - - 0 1")
    play(p, "e7e5", "e1e2", "e8d8")
    before = p.copy()
    with pytest.raises(ShapeIllegal):
        play(p, "d5e6")
    assert p == before
    assert " - " in p.to_fen()


def test_en_passant_from_fen(play) -> None:
    p = Position.from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 1")
    play(p, "d5e6")
    assert p.piece_at((4, 4)) is None


def test_en_passant_only_for_the_double_stepped_file(play) -> None:
    # c-pawn is also adjacent to d5 but did not just move
    p = Position.from_fen("4k3/4p3/8/2pP4/8/8/8/4K3 b - - 0 1")
    play(p, "e7e5")
    with pytest.raises(ShapeIllegal):
        play(p, "d5c6")
    play(p, "d5e6")


def test_en_passant_that_exposes_king_is_rejected(play) -> None:
    # Removing both pawns from the fifth rank opens the rook onto the king
    p = Position.from_fen("8/4p3/8/r2P3K/8/8/8/4k3 b - - 0 1")
    play(p, "e7e5")
    assert (5, 4) not in legal_destinations(p, (4, 3))
