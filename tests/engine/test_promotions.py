from __future__ import annotations

import pytest

from minimax_chess.engine.errors import InvalidPromotionChoice, ShapeIllegal
from minimax_chess.engine.game import Game
from minimax_chess.engine.move import parse_uci
from minimax_chess.engine.piece import BLACK, KNIGHT, QUEEN, ROOK, WHITE, Piece
from minimax_chess.engine.position import Position


def test_white_pawn_promotes_to_queen_by_default(play) -> None:
    p = Position.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    play(p, "e7e8")
    assert p.piece_at((7, 4)) == Piece(QUEEN, WHITE)


def test_promotion_uses_configured_piece(play) -> None:
    p = Position.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    p.promotion = "n"
    play(p, "e7e8")
    assert p.piece_at((7, 4)) == Piece(KNIGHT, WHITE)


def test_white_pawn_capture_promotion(play) -> None:
    p = Position.from_fen("3rk3/4P3/8/8/8/8/8/4K3 w - - 0 1")
    play(p, "e7d8")
    assert p.piece_at((7, 3)) == Piece(QUEEN, WHITE)


def test_black_pawn_promotes_on_first_rank(play) -> None:
    p = Position.from_fen("4k3/8/8/8/8/8/3p4/K7 b - - 0 1")
    p.promotion = "r"
    play(p, "d2d1")
    assert p.piece_at((0, 3)) == Piece(ROOK, BLACK)


def test_invalid_promotion_choice_rejects_without_change(play) -> None:
    p = Position.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    p.promotion = "k"
    before = p.copy()
    with pytest.raises(InvalidPromotionChoice):
        play(p, "e7e8")
    assert p == before


def test_promotion_choice_persists_between_moves() -> None:
    game = Game.from_fen("k7/4P3/8/8/8/8/4p3/1K6 w - - 0 1")
    game.set_promotion("B")
    game.apply_move(parse_uci("e7e8"))
    game.apply_move(parse_uci("e2e1"))
    assert game.position.piece_at((7, 4)).kind == "b"
    assert game.position.piece_at((0, 4)).kind == "b"


def test_move_letter_overrides_promotion_choice() -> None:
    game = Game.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    game.apply_move(parse_uci("e7e8n"))
    assert game.position.piece_at((7, 4)) == Piece(KNIGHT, WHITE)
    assert game.position.promotion == "n"


@pytest.mark.parametrize("choice", ["k", "p", "x", ""])
def test_game_rejects_unknown_promotion_choice(choice: str) -> None:
    game = Game.new()
    with pytest.raises(InvalidPromotionChoice):
        game.set_promotion(choice)
    assert game.position.promotion == "q"


def test_rejected_move_keeps_previous_promotion_choice() -> None:
    game = Game.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(ShapeIllegal):
        game.apply_move(parse_uci("e7d8r"))
    assert game.position.promotion == "q"
    assert game.move_stack == []


def test_position_set_promotion_normalizes() -> None:
    p = Position.startpos()
    p.set_promotion(" R ")
    assert p.promotion == "r"
    with pytest.raises(InvalidPromotionChoice, match="invalid piece for promotion: 'x'"):
        p.set_promotion("x")
    assert p.promotion == "r"
