from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .errors import IllegalMove
from .legal import legal_moves
from .move import Move
from .position import Position
from .rules import attempt_move
from .state import GameState, classify


@dataclass
class Game:
    """Game wrapper around a position with helper operations.

    Responsibility: own the position, expose legal moves, apply moves.
    """

    position: Position
    move_stack: List[Move] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Game":
        return cls(position=Position.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(position=Position.from_fen(fen))

    def to_fen(self) -> str:
        return self.position.to_fen()

    @property
    def turn(self) -> str:
        return self.position.turn

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.position, self.position.turn)

    def set_promotion(self, choice: str) -> None:
        """Select the piece used for every later promotion.

        Raises:
            InvalidPromotionChoice: If ``choice`` is not one of q/r/b/n.
        """
        self.position.set_promotion(choice)

    def apply_move(self, move: Move) -> None:
        """Apply ``move`` to the position.

        A promotion letter carried by the move replaces the configured
        promotion piece first.

        Raises:
            IllegalMove: If the move is rejected; the game is then unchanged.
        """
        previous = self.position.promotion
        if move.promotion is not None:
            self.set_promotion(move.promotion)
        try:
            attempt_move(self.position, move.from_sq, move.to_sq)
        except IllegalMove:
            self.position.promotion = previous
            raise
        self.move_stack.append(move)

    # --- State flags for protocol ---
    def state(self) -> GameState:
        return classify(self.position)

    def is_over(self) -> bool:
        return self.state().terminal

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]
