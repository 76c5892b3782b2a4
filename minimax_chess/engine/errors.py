from __future__ import annotations


class IllegalMove(ValueError):
    """Base class for every rejected move.

    A rejected move never changes the position; the caller may simply ask for
    another move.
    """


class EmptySource(IllegalMove):
    def __init__(self, message: str = "no piece on the source square") -> None:
        super().__init__(message)


class WrongTurn(IllegalMove):
    def __init__(self, message: str = "piece does not belong to the side to move") -> None:
        super().__init__(message)


class SameColorCapture(IllegalMove):
    def __init__(self, message: str = "destination holds a piece of the same color") -> None:
        super().__init__(message)


class ShapeIllegal(IllegalMove):
    def __init__(self, message: str = "illegal move") -> None:
        super().__init__(message)


class ExposesOwnKing(IllegalMove):
    def __init__(self, message: str = "illegal move; places king in check") -> None:
        super().__init__(message)


class InvalidPromotionChoice(IllegalMove):
    def __init__(self, choice: str) -> None:
        super().__init__(f"invalid piece for promotion: {choice!r}")
        self.choice = choice


class MalformedMoveText(ValueError):
    """Move text that cannot be turned into a pair of squares."""
