"""The Game board holds the `position` (the configuration of pieces on the board). It is the single source of truth for the engine."""

from dataclasses import dataclass
from typing import Optional, Self

from tactical_chess.chess.moves import PAWN_STARTING_ROW
from tactical_chess.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType
from tactical_chess.chess.square import BOARD_DIMENSIONS, Square, all_squares
from tactical_chess.core.exceptions import InvalidPlacementError, InvalidSquareError

# read-only view handed to renderers: (type, color) per square, None when empty
SquareView = Optional[tuple[PieceType, Color]]

# White pieces on rows 6/7 (the bottom of the board), black pieces on rows 0/1
STANDARD_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({square: None for square in all_squares()})

    @classmethod
    def standard(cls) -> Self:
        return cls.from_placement(STANDARD_PLACEMENT)

    @classmethod
    def from_placement(cls, placement: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first rank listed is row 0 (black's home rank), read from the a-file to the h-file
        * pawns cover rows 1 and 6 entirely
        * rows 2 through 5 have 8 consecutive empty squares
        * the last rank listed is row 7 (white's home rank, capital letters)

        A pawn that is not on its starting row can never double-step again, so it is marked as moved.
        """
        fen_by_rows = placement.strip().split("/")
        if len(fen_by_rows) != BOARD_DIMENSIONS[0]:
            raise InvalidPlacementError(
                f"Expected {BOARD_DIMENSIONS[0]} rows in {placement!r}, found {len(fen_by_rows)}."
            )

        board = cls.empty()
        for row, fen_one_row in enumerate(fen_by_rows):
            col = 0
            for character in fen_one_row:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                if character.lower() not in FEN_TO_PIECE:
                    raise InvalidPlacementError(
                        f"Unknown piece {character!r} in row {row} of {placement!r}."
                    )
                square = Square(row, col)
                if not square.is_within_bounds():
                    raise InvalidPlacementError(
                        f"Row {row} of {placement!r} is longer than {BOARD_DIMENSIONS[1]} squares."
                    )
                piece = Piece.from_fen(character)
                if piece.type == PieceType.PAWN:
                    piece.has_moved = row != PAWN_STARTING_ROW[piece.color]
                board.position[square] = piece
                col += 1

            if col != BOARD_DIMENSIONS[1]:
                raise InvalidPlacementError(
                    f"Row {row} of {placement!r} covers {col} squares instead of {BOARD_DIMENSIONS[1]}."
                )
        return board

    def to_placement(self) -> str:
        """Rows are separated by slashes."""
        return "/".join(self._row_to_placement(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_placement(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_fen())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def piece(self, square: Square) -> Optional[Piece]:
        if square not in self.position:
            raise InvalidSquareError(f"{square} is not on the board.")
        return self.position[square]

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        if square not in self.position:
            raise InvalidSquareError(f"{square} is not on the board.")
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece(square)
        self.position[square] = None
        return piece

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Update the position on the board. Returns whatever stood on the target square."""
        piece_that_moved = self.remove_piece(from_square)
        captured = self.piece(to_square)
        self.position[to_square] = piece_that_moved
        return captured

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        return next(
            (
                square
                for square, piece in self.position.items()
                if piece is not None
                and piece.type == PieceType.KING
                and piece.color == color
            ),
            None,
        )

    def snapshot(self) -> list[list[SquareView]]:
        """8x8 grid, row by row, for whoever renders the board. Holds no references to the live pieces."""
        return [
            [
                self._view(Square(row, col))
                for col in range(BOARD_DIMENSIONS[1])
            ]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def _view(self, square: Square) -> SquareView:
        piece = self.piece(square)
        return None if piece is None else (piece.type, piece.color)
