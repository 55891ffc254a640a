"""
Custom exceptions used across layers.

Every error here is recoverable by the caller: the engine leaves its state untouched before raising.
"""


class GameError(Exception):
    """Base class for everything the engine or service layer raises on purpose."""


# --- MOVE ERRORS ---
class MoveError(GameError):
    """A move (or undo) request was rejected."""


class NoPieceAtSourceError(MoveError):
    """The square to move from is empty."""


class NotYourTurnError(MoveError):
    """The piece on the square to move from belongs to the side that is not to move."""


class IllegalMoveError(MoveError):
    """Geometry, path or occupancy rule of the piece is violated."""


class NoMoveToUndoError(MoveError):
    """Undo requested while the move history is empty."""


class GameOverError(MoveError):
    """The game has ended. Only a restart (or an undo) brings it back into play."""


# --- INPUT ERRORS ---
class InvalidSquareError(GameError):
    """Coordinates outside of the board, or notation that cannot be read as a square."""


class InvalidPlacementError(GameError):
    """Piece placement string (first field of a FEN string) could not be parsed."""


class InvalidRequestError(GameError):
    """Raised by the validators of the boundary models.

    NOTE: not a ValueError, so pydantic lets it through instead of wrapping it in a ValidationError.
    """
