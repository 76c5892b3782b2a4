from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Callable, List, Optional

from pydantic import ValidationError

from minimax_chess.config import EngineSettings
from minimax_chess.engine.errors import IllegalMove, MalformedMoveText
from minimax_chess.engine.game import Game
from minimax_chess.engine.state import GameState
from minimax_chess.protocol.text.render import parse_input, render_board, status_line
from minimax_chess.search.service import SearchService


logger = logging.getLogger(__name__)

Reader = Callable[[], str]
Writer = Callable[[str], None]


def play_game(
    settings: EngineSettings,
    read_line: Reader = input,
    write: Writer = print,
    game: Optional[Game] = None,
) -> GameState:
    """Run the interactive loop until the game ends or the human quits.

    The engine plays ``settings.ai_color``; the human types moves like
    ``e2e4``, a single letter to change the promotion piece, or ``quit``.

    Returns:
        GameState: State of the final position.
    """
    if game is None:
        game = Game.new()
    game.set_promotion(settings.promotion)
    service = SearchService(random.Random(settings.seed))
    message = ""

    while True:
        state = game.state()
        write(render_board(game.position))
        write(status_line(game.position, message, state.label))
        message = ""
        if state.terminal:
            return state

        if game.turn == settings.ai_color:
            move = service.choose_move(game.position, settings.depth)
            game.apply_move(move)
            logger.info("engine move", extra={"move": move.to_uci()})
            continue

        try:
            line = read_line()
        except EOFError:
            return state
        try:
            cmd = parse_input(line)
        except MalformedMoveText as e:
            message = str(e)
            continue
        if cmd.quit:
            return state
        if cmd.promotion is not None:
            try:
                game.set_promotion(cmd.promotion)
                message = f"Updated promotion to '{cmd.promotion}'"
            except IllegalMove as e:
                message = str(e)
            continue
        if cmd.move is None:
            continue
        try:
            game.apply_move(cmd.move)
        except IllegalMove as e:
            message = str(e)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play chess against a minimax engine")
    parser.add_argument("--depth", type=int, default=3, help="Search depth (default: 3)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for move ordering")
    parser.add_argument(
        "--ai-color", default="b", help="Side played by the engine: w or b (default: b)"
    )
    parser.add_argument("--promotion", default="q", help="Promotion piece: q, r, b or n")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = EngineSettings(
            depth=args.depth,
            seed=args.seed,
            ai_color=args.ai_color,
            promotion=args.promotion,
            log_level=args.log_level,
        )
    except ValidationError as e:
        print(f"invalid settings: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.log_level)
    play_game(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
