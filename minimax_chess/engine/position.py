from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import InvalidPromotionChoice
from .move import Square, square_to_str, str_to_square
from .piece import BLACK, COLORS, KING, PROMOTION_KINDS, WHITE, Piece


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

KINGSIDE = "k"
QUEENSIDE = "q"

Board = List[List[Optional[Piece]]]
CastlingRights = Dict[Tuple[str, str], bool]

# (color, side) -> rook home square
ROOK_HOMES: Dict[Tuple[str, str], Square] = {
    (WHITE, KINGSIDE): (0, 7),
    (WHITE, QUEENSIDE): (0, 0),
    (BLACK, KINGSIDE): (7, 7),
    (BLACK, QUEENSIDE): (7, 0),
}
KING_HOMES: Dict[str, Square] = {WHITE: (0, 4), BLACK: (7, 4)}

_FEN_CASTLING = {
    "K": (WHITE, KINGSIDE),
    "Q": (WHITE, QUEENSIDE),
    "k": (BLACK, KINGSIDE),
    "q": (BLACK, QUEENSIDE),
}


def _empty_board() -> Board:
    return [[None] * 8 for _ in range(8)]


def _full_rights() -> CastlingRights:
    return {key: True for key in ROOK_HOMES}


@dataclass
class Position:
    """Complete chess position: occupancy plus the state needed by the rules.

    Notes:
    - ``board[rank][file]``; rank 0 / file 0 is a1.
    - ``en_passant`` names the square the last double-stepping pawn skipped
      over. It stays usable only while ``parity`` is 1, i.e. for the single
      ply after the double step.
    - ``castling`` rights are only ever cleared, never re-granted.
    - ``ply`` counts moves for display and starts at 1.
    """

    board: Board = field(default_factory=_empty_board)
    castling: CastlingRights = field(default_factory=_full_rights)
    en_passant: Optional[Square] = None
    turn: str = WHITE
    parity: int = 0
    ply: int = 1
    promotion: str = "q"

    @classmethod
    def empty(cls, turn: str = WHITE) -> "Position":
        """Create a position with no pieces and no castling rights."""
        return cls(castling={key: False for key in ROOK_HOMES}, turn=turn)

    @classmethod
    def startpos(cls) -> "Position":
        """Create a position holding the standard starting array."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        """Create a position from a Forsyth–Edwards Notation (FEN) string.

        Args:
            fen (str): FEN string with six space-separated fields.

        Returns:
            Position: Position described by ``fen``.

        Raises:
            ValueError: If ``fen`` is empty, has the wrong number of fields, or
                contains invalid piece placement, castling rights, en passant
                square, or move counters.

        Notes:
            The halfmove clock is validated but not stored; the fullmove number
            is converted into the ply counter.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise ValueError("FEN must have 6 fields")
        placement, stm, castling, ep, halfmove, fullmove = parts

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        board = _empty_board()
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    if file_idx >= 8:
                        raise ValueError("too many squares in FEN rank")
                    board[rank_idx][file_idx] = Piece.from_symbol(ch)
                    file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")

        if stm not in COLORS:
            raise ValueError("side to move must be 'w' or 'b'")

        rights = {key: False for key in ROOK_HOMES}
        if castling != "-":
            for ch in castling:
                if ch not in _FEN_CASTLING:
                    raise ValueError("invalid castling rights")
                rights[_FEN_CASTLING[ch]] = True

        ep_square: Optional[Square]
        if ep == "-":
            ep_square = None
        else:
            try:
                ep_square = str_to_square(ep)
            except ValueError as e:
                raise ValueError("invalid en passant square") from e
            if ep_square[0] not in (2, 5):
                raise ValueError("invalid en passant square rank")

        try:
            halfmove_clock = int(halfmove)
            fullmove_number = int(fullmove)
        except ValueError as e:
            raise ValueError("invalid move counters in FEN") from e
        if halfmove_clock < 0 or fullmove_number <= 0:
            raise ValueError("invalid move counters in FEN")

        return cls(
            board=board,
            castling=rights,
            en_passant=ep_square,
            turn=stm,
            parity=1 if ep_square is not None else 0,
            ply=2 * (fullmove_number - 1) + (1 if stm == WHITE else 2),
        )

    def to_fen(self) -> str:
        """Serialize the position into FEN.

        Returns:
            str: FEN string. The halfmove clock is always ``0`` since it is not
                tracked.
        """
        ranks_str: List[str] = []
        for rank_idx in range(7, -1, -1):
            run = 0
            row = []
            for piece in self.board[rank_idx]:
                if piece is None:
                    run += 1
                else:
                    if run > 0:
                        row.append(str(run))
                        run = 0
                    row.append(piece.symbol)
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        placement = "/".join(ranks_str)

        castling = "".join(ch for ch, key in _FEN_CASTLING.items() if self.castling[key]) or "-"
        live_ep = self.en_passant if self.parity == 1 else None
        ep = square_to_str(live_ep) if live_ep is not None else "-"
        fullmove = (self.ply + 1) // 2
        return f"{placement} {self.turn} {castling} {ep} 0 {fullmove}"

    def copy(self) -> "Position":
        """Return an independent copy sharing no mutable state with ``self``."""
        return Position(
            board=[row[:] for row in self.board],
            castling=dict(self.castling),
            en_passant=self.en_passant,
            turn=self.turn,
            parity=self.parity,
            ply=self.ply,
            promotion=self.promotion,
        )

    def restore(self, other: "Position") -> None:
        """Overwrite this position's state with ``other``'s (taken by reference)."""
        self.board = other.board
        self.castling = other.castling
        self.en_passant = other.en_passant
        self.turn = other.turn
        self.parity = other.parity
        self.ply = other.ply
        self.promotion = other.promotion

    def set_promotion(self, choice: str) -> None:
        """Select the piece every later promotion turns into.

        Raises:
            InvalidPromotionChoice: If ``choice`` is not one of q/r/b/n.
        """
        choice = choice.strip().lower()
        if choice not in PROMOTION_KINDS:
            raise InvalidPromotionChoice(choice)
        self.promotion = choice

    # --- Occupancy queries ---
    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.board[sq[0]][sq[1]]

    def set_piece(self, sq: Square, piece: Optional[Piece]) -> None:
        self.board[sq[0]][sq[1]] = piece

    def find(self, piece: Piece) -> Optional[Square]:
        for rank, row in enumerate(self.board):
            for file, cell in enumerate(row):
                if cell == piece:
                    return rank, file
        return None

    def find_king(self, color: str) -> Square:
        """Locate the king of ``color``.

        Raises:
            RuntimeError: If the king is missing, which means the position is
                corrupt.
        """
        sq = self.find(Piece(KING, color))
        if sq is None:
            raise RuntimeError(f"no {color} king on the board")
        return sq

    def pieces_of(self, color: str) -> List[Square]:
        """List every square occupied by a piece of ``color``, a1 first."""
        return [
            (rank, file)
            for rank, row in enumerate(self.board)
            for file, cell in enumerate(row)
            if cell is not None and cell.color == color
        ]

    def occupied_count(self) -> int:
        return sum(1 for row in self.board for cell in row if cell is not None)
