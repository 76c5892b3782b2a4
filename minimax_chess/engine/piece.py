from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final


WHITE: Final = "w"
BLACK: Final = "b"
COLORS: Final = (WHITE, BLACK)

PAWN: Final = "p"
KNIGHT: Final = "n"
BISHOP: Final = "b"
ROOK: Final = "r"
QUEEN: Final = "q"
KING: Final = "k"
KINDS: Final = (PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING)

# Pieces a pawn may turn into on the last rank
PROMOTION_KINDS: Final = (QUEEN, ROOK, BISHOP, KNIGHT)

PIECE_VALUES: Final[Dict[str, int]] = {
    KING: 900,
    QUEEN: 90,
    ROOK: 50,
    BISHOP: 30,
    KNIGHT: 30,
    PAWN: 10,
}

COLOR_NAMES: Final = {WHITE: "White", BLACK: "Black"}


def opposite(color: str) -> str:
    return BLACK if color == WHITE else WHITE


def forward(color: str) -> int:
    """Rank step a pawn of ``color`` advances by (+1 for white, -1 for black)."""
    return 1 if color == WHITE else -1


@dataclass(frozen=True)
class Piece:
    """A colored chess piece.

    Attributes:
        kind (str): One of ``"p", "n", "b", "r", "q", "k"``.
        color (str): ``"w"`` or ``"b"``.
    """

    kind: str
    color: str

    @property
    def symbol(self) -> str:
        """Single-character symbol, uppercase for white and lowercase for black."""
        return self.kind.upper() if self.color == WHITE else self.kind

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.kind]

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Parse a piece symbol such as ``"N"`` or ``"q"``.

        Raises:
            ValueError: If ``ch`` is not a known piece letter.
        """
        kind = ch.lower()
        if len(ch) != 1 or kind not in KINDS:
            raise ValueError(f"invalid piece symbol: {ch!r}")
        return cls(kind, WHITE if ch.isupper() else BLACK)

    def __str__(self) -> str:
        return self.symbol
