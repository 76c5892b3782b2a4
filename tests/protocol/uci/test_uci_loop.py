from __future__ import annotations

import io
from typing import List

from minimax_chess.config import EngineSettings
from minimax_chess.protocol.uci.loop import UCIEngine, run_uci


def capture_writer(buf: List[str]):
    def _w(line: str) -> None:
        buf.append(line)

    return _w


def test_basic_handshake():
    eng = UCIEngine()
    out: List[str] = []
    eng.cmd_uci(capture_writer(out))
    assert out[0] == "id name minimax_chess"
    assert any(line.startswith("option name Depth ") for line in out)
    assert out[-1] == "uciok"


def test_isready():
    eng = UCIEngine()
    out: List[str] = []
    eng.cmd_isready(capture_writer(out))
    assert out == ["readyok"]


def test_position_startpos_with_moves():
    eng = UCIEngine()
    eng.cmd_position(["startpos", "moves", "e2e4", "e7e5"])
    assert eng.game.move_history_uci() == ["e2e4", "e7e5"]
    assert eng.game.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2"


def test_position_stops_at_first_illegal_move():
    eng = UCIEngine()
    eng.cmd_position(["startpos", "moves", "e2e4", "e2e4", "e7e5"])
    assert eng.game.move_history_uci() == ["e2e4"]


def test_position_fen_with_promotion_move():
    eng = UCIEngine()
    fen = "k7/4P3/8/8/8/8/8/4K3 w - - 0 1"
    eng.cmd_position(["fen", *fen.split(), "moves", "e7e8n"])
    assert eng.game.position.piece_at((7, 4)).symbol == "N"


def test_invalid_fen_keeps_previous_game():
    eng = UCIEngine()
    eng.cmd_position(["startpos", "moves", "d2d4"])
    eng.cmd_position(["fen", "not", "a", "fen"])
    assert eng.game.move_history_uci() == ["d2d4"]


def test_go_depth_reports_info_and_bestmove():
    eng = UCIEngine()
    eng.cmd_position(["fen", *"4k3/8/8/3q4/8/2N5/8/4K3 w - - 0 1".split()])
    out: List[str] = []
    eng.cmd_go(["depth", "0"], capture_writer(out))
    assert out[0].startswith("info depth 0 ")
    assert " pv c3d5" in out[0]
    assert out[-1] == "bestmove c3d5"


def test_go_without_legal_moves():
    eng = UCIEngine()
    eng.cmd_position(["fen", *"R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1".split()])
    out: List[str] = []
    eng.cmd_go(["depth", "1"], capture_writer(out))
    assert out == ["bestmove (none)"]


def test_setoption_depth_is_clamped():
    eng = UCIEngine()
    eng.cmd_setoption(["name", "Depth", "value", "42"])
    assert eng.settings.depth == 6
    eng.cmd_setoption(["name", "Depth", "value", "1"])
    assert eng.settings.depth == 1
    eng.cmd_setoption(["name", "Depth", "value", "deep"])
    assert eng.settings.depth == 1


def test_setoption_seed_rebuilds_search():
    eng = UCIEngine()
    old = eng.search
    eng.cmd_setoption(["name", "Seed", "value", "7"])
    assert eng.settings.seed == 7
    assert eng.search is not old


def test_ucinewgame_resets_position():
    eng = UCIEngine()
    eng.cmd_position(["startpos", "moves", "e2e4"])
    eng.cmd_ucinewgame()
    assert eng.game.move_stack == []


def test_run_uci_script():
    script = io.StringIO(
        "uci\n"
        "isready\n"
        "\n"
        "bogus command\n"
        "position fen 6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1\n"
        "go depth 1\n"
        "quit\n"
        "isready\n"
    )
    out: List[str] = []
    run_uci(script, capture_writer(out), EngineSettings(seed=1))
    assert "uciok" in out
    assert out.count("readyok") == 1
    assert out[-1] == "bestmove a1a8"


def test_go_depth_is_clamped_to_maximum():
    # The king's only move takes the rook, leaving a drawn two-king position
    eng = UCIEngine()
    eng.cmd_position(["fen", *"7k/8/8/8/8/8/1r6/K7 w - - 0 1".split()])
    out: List[str] = []
    eng.cmd_go(["depth", "99"], capture_writer(out))
    assert out[0].startswith("info depth 6 ")
    assert out[-1] == "bestmove a1b2"
