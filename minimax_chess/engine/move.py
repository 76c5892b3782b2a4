from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import MalformedMoveText
from .piece import PROMOTION_KINDS


Square = Tuple[int, int]

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Move:
    """A move request between two squares.

    Attributes:
        from_sq (Square): Origin square as ``(rank, file)``.
        to_sq (Square): Destination square as ``(rank, file)``.
        promotion (Optional[str]): Lowercase promotion piece, if one was
            requested together with the move.
    """

    from_sq: Square
    to_sq: Square
    promotion: Optional[str] = None

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq) + (self.promotion or "")

    def __str__(self) -> str:
        return self.to_uci()


def parse_move(text: str) -> Move:
    """Parse a 4-character coordinate move such as ``"e2e4"``.

    Args:
        text (str): Move text; surrounding whitespace and case are ignored.

    Returns:
        Move: Parsed move without a promotion piece.

    Raises:
        MalformedMoveText: If the text is not exactly four characters or names
            an unknown file or rank.
    """
    mov = text.strip().lower()
    if len(mov) != 4:
        raise MalformedMoveText("invalid length")
    return Move(_parse_square(mov[0:2]), _parse_square(mov[2:4]))


def parse_uci(uci: str) -> Move:
    """Parse a UCI move string, allowing a fifth promotion character.

    Raises:
        MalformedMoveText: If the string has an invalid length, squares, or
            promotion piece.
    """
    uci = uci.strip().lower()
    if len(uci) not in (4, 5):
        raise MalformedMoveText(f"invalid UCI move length: {uci!r}")
    promo: Optional[str] = None
    if len(uci) == 5:
        promo = uci[4]
        if promo not in PROMOTION_KINDS:
            raise MalformedMoveText(f"invalid promotion piece: {promo!r}")
    return Move(_parse_square(uci[0:2]), _parse_square(uci[2:4]), promo)


def _parse_square(s: str) -> Square:
    try:
        return str_to_square(s)
    except ValueError as e:
        raise MalformedMoveText(str(e)) from e


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a ``(rank, file)`` pair.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] not in FILES or s[1] not in RANKS:
        raise ValueError(f"invalid square: {s!r}")
    return RANKS.index(s[1]), FILES.index(s[0])


def square_to_str(sq: Square) -> str:
    """Convert a ``(rank, file)`` pair into algebraic notation.

    Raises:
        ValueError: If either index is outside 0..7.
    """
    rank, file = sq
    if not (0 <= rank < 8 and 0 <= file < 8):
        raise ValueError(f"invalid square: {sq!r}")
    return FILES[file] + RANKS[rank]
