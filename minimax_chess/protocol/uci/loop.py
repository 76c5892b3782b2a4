from __future__ import annotations

import logging
import random
import sys
from typing import Callable, List, Optional, TextIO

from ...config import MAX_DEPTH, EngineSettings
from ...engine.game import Game
from ...engine.move import parse_uci
from ...search.service import SearchService


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]


class UCIEngine:
    """UCI protocol adapter around the core engine.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Searches run synchronously inside ``go``; there is no ``stop``.
    - Minimal command set: uci, isready, ucinewgame, setoption, position,
      go [depth N], quit.
    """

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings if settings is not None else EngineSettings()
        self.game: Game = Game.new()
        self.search = SearchService(random.Random(self.settings.seed))

    # ---- Command handlers ----
    def cmd_uci(self, write: Writer) -> None:
        write("id name minimax_chess")
        write("id author minimax_chess developers")
        write(f"option name Depth type spin default {self.settings.depth} min 0 max {MAX_DEPTH}")
        write("option name Seed type string default <empty>")
        write("uciok")

    def cmd_isready(self, write: Writer) -> None:
        write("readyok")

    def cmd_ucinewgame(self) -> None:
        self.game = Game.new()

    def cmd_position(self, args: List[str]) -> None:
        # position [startpos | fen <FEN> ] [moves m1 m2 ...]
        if not args:
            return
        idx = 0
        if args[idx] == "startpos":
            self.game = Game.new()
            idx += 1
        elif args[idx] == "fen":
            idx += 1
            fen_tokens: List[str] = []
            while idx < len(args) and args[idx] != "moves":
                fen_tokens.append(args[idx])
                idx += 1
            if fen_tokens:
                try:
                    self.game = Game.from_fen(" ".join(fen_tokens))
                except ValueError:
                    logger.warning("ignoring invalid FEN", extra={"fen": " ".join(fen_tokens)})
                    return
        if idx < len(args) and args[idx] == "moves":
            idx += 1
            while idx < len(args):
                u = args[idx]
                idx += 1
                try:
                    self.game.apply_move(parse_uci(u))
                except ValueError as e:
                    # Stop at the first bad move, keeping the moves before it
                    logger.warning("ignoring move", extra={"move": u, "reason": str(e)})
                    break

    def cmd_setoption(self, args: List[str]) -> None:
        # setoption name <name> [value <value>]
        if not args:
            return
        i = 0
        if args[i] == "name":
            i += 1
        name_tokens: List[str] = []
        while i < len(args) and args[i] != "value":
            name_tokens.append(args[i])
            i += 1
        value_tokens: List[str] = []
        if i < len(args) and args[i] == "value":
            i += 1
            value_tokens = args[i:]
        name = " ".join(name_tokens).strip().lower()
        value = " ".join(value_tokens).strip()
        if name == "depth":
            try:
                self.settings = self.settings.model_copy(
                    update={"depth": min(MAX_DEPTH, max(0, int(value)))}
                )
            except ValueError:
                logger.warning("ignoring setoption", extra={"option": name, "value": value})
        elif name == "seed":
            try:
                seed: Optional[int] = int(value) if value else None
            except ValueError:
                logger.warning("ignoring setoption", extra={"option": name, "value": value})
                return
            self.settings = self.settings.model_copy(update={"seed": seed})
            self.search = SearchService(random.Random(seed))

    def cmd_go(self, args: List[str], write: Writer) -> None:
        depth = self.settings.depth
        if "depth" in args:
            pos = args.index("depth")
            try:
                depth = min(MAX_DEPTH, max(0, int(args[pos + 1])))
            except (IndexError, ValueError):
                pass
        res = self.search.search(self.game.position, depth=depth)
        if res.best_move is None:
            write("bestmove (none)")
            return
        write(
            f"info depth {res.depth} time {res.time_ms} nodes {res.nodes} "
            f"score cp {res.score} pv {res.best_move.to_uci()}"
        )
        write(f"bestmove {res.best_move.to_uci()}")


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_uci(
    stdin: Optional[TextIO] = None,
    write: Writer = _default_writer,
    settings: Optional[EngineSettings] = None,
) -> None:
    eng = UCIEngine(settings)
    for raw in stdin if stdin is not None else sys.stdin:
        line = raw.strip()
        if not line:
            continue
        parts = line.split()
        cmd, args = parts[0], parts[1:]

        if cmd == "uci":
            eng.cmd_uci(write)
        elif cmd == "isready":
            eng.cmd_isready(write)
        elif cmd == "setoption":
            eng.cmd_setoption(args)
        elif cmd == "ucinewgame":
            eng.cmd_ucinewgame()
        elif cmd == "position":
            eng.cmd_position(args)
        elif cmd == "go":
            eng.cmd_go(args, write)
        elif cmd == "quit":
            break
        # Ignore unknown commands per UCI convention


def main() -> None:
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    run_uci()


if __name__ == "__main__":
    main()
