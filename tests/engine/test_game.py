from __future__ import annotations

import pytest

from minimax_chess.engine.errors import ShapeIllegal, WrongTurn
from minimax_chess.engine.game import Game
from minimax_chess.engine.move import parse_uci
from minimax_chess.engine.piece import BLACK, WHITE
from minimax_chess.engine.position import STARTPOS_FEN
from minimax_chess.engine.state import GameState


def test_new_game_starts_from_startpos() -> None:
    game = Game.new()
    assert game.to_fen() == STARTPOS_FEN
    assert game.turn == WHITE
    assert len(game.legal_moves()) == 20
    assert game.state() == GameState.CONTINUE
    assert not game.is_over()


def test_apply_move_records_history() -> None:
    game = Game.new()
    for uci in ("e2e4", "e7e5", "g1f3"):
        game.apply_move(parse_uci(uci))
    assert game.move_history_uci() == ["e2e4", "e7e5", "g1f3"]
    assert game.turn == BLACK
    assert game.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 0 2"


def test_rejected_move_is_not_recorded() -> None:
    game = Game.new()
    with pytest.raises(ShapeIllegal):
        game.apply_move(parse_uci("e2e5"))
    with pytest.raises(WrongTurn):
        game.apply_move(parse_uci("e7e5"))
    assert game.move_stack == []
    assert game.to_fen() == STARTPOS_FEN


def test_game_over_after_mate() -> None:
    game = Game.new()
    for uci in ("f2f3", "e7e5", "g2g4", "d8h4"):
        game.apply_move(parse_uci(uci))
    assert game.state() == GameState.WHITE_CHECKMATE
    assert game.is_over()
    assert game.legal_moves() == []


def test_from_fen_round_trip() -> None:
    fen = "r3k2r/8/8/8/8/8/8/R3K2R b Kq - 0 12"
    assert Game.from_fen(fen).to_fen() == fen
