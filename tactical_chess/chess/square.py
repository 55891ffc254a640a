"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from tactical_chess.core.exceptions import InvalidSquareError

# Board is always 8x8 (rows, columns)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """
    Row 0 is the top of the board (black's home rank), row 7 the bottom (white's home rank).
    Column 0 is the a-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' -> (0,0), 'e2' -> (6,4), 'h1' -> (7,7)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        col = ord(sq[0].lower()) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        square = cls(row, col)
        if not square.is_within_bounds():
            raise InvalidSquareError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)


def all_squares() -> list[Square]:
    """Every square of the board, row by row (top-left to bottom-right)."""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
