from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...engine.move import Move, parse_move
from ...engine.piece import COLOR_NAMES
from ...engine.position import Position


QUIT_WORDS = {"quit", "exit"}


@dataclass(frozen=True)
class Command:
    """One line of user input.

    Exactly one of ``move`` or ``promotion`` is set unless ``quit`` is True.
    """

    move: Optional[Move] = None
    promotion: Optional[str] = None
    quit: bool = False


def parse_input(line: str) -> Command:
    """Interpret a line typed by the human player.

    A single character selects the promotion piece (validated when applied),
    ``quit``/``exit`` ends the game, anything else must be a 4-character move.

    Raises:
        MalformedMoveText: If the line is neither of the above.
    """
    text = line.strip()
    if text.lower() in QUIT_WORDS:
        return Command(quit=True)
    if len(text) == 1:
        return Command(promotion=text.lower())
    return Command(move=parse_move(text))


def render_board(position: Position) -> str:
    """Render the board rank 8 first, one symbol per square, blank when empty."""
    lines = []
    for rank in range(7, -1, -1):
        row = position.board[rank]
        lines.append("".join(f"{piece.symbol if piece else ' '} " for piece in row))
    return "\n".join(lines)


def status_line(position: Position, message: str = "", state_label: str = "") -> str:
    return (
        f"{position.ply}. Turn: {COLOR_NAMES[position.turn]} | "
        f"Status: {message} | Game State: {state_label}"
    )
