"""
Type definitions used across layers

(the boundary models speak in plain strings, the domain layer uses the Enums in tactical_chess/chess/pieces.py)
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    OVER = "over"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
