"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the movement geometry for each piece type.

Each rule answers a single question: "Can the piece on `from_square` reach `to_square`?"
Friendly fire and turn order are checked later by the RulesEngine, so the same rules double as attack probes for check detection.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol, Self

from tactical_chess.chess.pieces import Color, Piece, PieceType
from tactical_chess.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]

# white moves UP the board (towards row 0), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_STARTING_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


@dataclass(frozen=True)
class MoveRecord:
    """
    A move that has been applied to the board.

    The pieces are snapshots taken BEFORE the move, so undoing can put them back exactly as they were.
    """

    from_square: Square
    to_square: Square
    moved_piece: Piece
    captured_piece: Optional[Piece] = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def snapshot(self) -> Self:
        """Copy with its own piece snapshots, so the copy can be handed out without exposing the stored pieces."""
        return replace(
            self,
            moved_piece=self.moved_piece.snapshot(),
            captured_piece=(
                self.captured_piece.snapshot()
                if self.captured_piece is not None
                else None
            ),
        )

    def to_uci(self) -> str:
        """Long algebraic notation of the squares, e.g. 'e2e4'"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# --- HELPERS ---
def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _delta(from_square: Square, to_square: Square) -> Vector:
    return to_square.row - from_square.row, to_square.col - from_square.col


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between two squares on the same row, column or diagonal.

    Step direction is the sign of the delta along each axis.
    """
    d_row, d_col = _delta(from_square, to_square)
    if not (d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)):
        raise ValueError(
            f"squares_between requires both squares on a shared line.\n from: {from_square}\n to: {to_square}"
        )

    step_row, step_col = _sign(d_row), _sign(d_col)
    squares_found: list[Square] = []
    square = from_square.offset(step_row, step_col)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(step_row, step_col)
    return squares_found


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """Path clearance scan: every square strictly between must be empty."""
    return all(
        board.piece(square) is None
        for square in squares_between(from_square, to_square)
    )


# --- MOVEMENT RULES ---
def pawn_geometry(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two when it has not moved yet (and is still on its starting row), if both squares are empty.
    - takes diagonally (one square forward), only if an opponent's piece stands there.

    NOTE: No en passant and no promotion.
    """
    pawn = board.piece(from_square)
    if pawn is None:
        return False

    direction = PAWN_DIRECTION[pawn.color]
    d_row, d_col = _delta(from_square, to_square)
    target = board.piece(to_square)

    # pawn pushes
    if d_col == 0:
        if d_row == direction:
            return target is None
        if d_row == 2 * direction:
            on_starting_row = from_square.row == PAWN_STARTING_ROW[pawn.color]
            in_between = board.piece(from_square.offset(direction, 0))
            return (
                not pawn.has_moved
                and on_starting_row
                and in_between is None
                and target is None
            )
        return False

    # pawn takes
    if abs(d_col) == 1 and d_row == direction:
        return target is not None and target.color != pawn.color

    return False


def knight_geometry(from_square: Square, to_square: Square, board: Board) -> bool:
    """Knights jump: (|delta_row|, |delta_col|) is (2, 1) or (1, 2). Never blocked."""
    d_row, d_col = _delta(from_square, to_square)
    return (abs(d_row), abs(d_col)) in {(2, 1), (1, 2)}


def rook_geometry(from_square: Square, to_square: Square, board: Board) -> bool:
    """Rooks move either horizontally or vertically, as long as nothing is in the way"""
    d_row, d_col = _delta(from_square, to_square)
    if (d_row == 0) == (d_col == 0):
        # either no movement at all, or not on a straight line
        return False
    return is_path_clear(from_square, to_square, board)


def bishop_geometry(from_square: Square, to_square: Square, board: Board) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    d_row, d_col = _delta(from_square, to_square)
    if d_row == 0 or abs(d_row) != abs(d_col):
        return False
    return is_path_clear(from_square, to_square, board)


def queen_geometry(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_geometry(from_square, to_square, board) or bishop_geometry(
        from_square, to_square, board
    )


def king_geometry(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    No castling.
    """
    d_row, d_col = _delta(from_square, to_square)
    return (d_row, d_col) != (0, 0) and abs(d_row) <= 1 and abs(d_col) <= 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
GeometryFn = Callable[[Square, Square, Board], bool]
MOVEMENT_RULES: dict[PieceType, GeometryFn] = {
    PieceType.PAWN: pawn_geometry,
    PieceType.KNIGHT: knight_geometry,
    PieceType.BISHOP: bishop_geometry,
    PieceType.ROOK: rook_geometry,
    PieceType.QUEEN: queen_geometry,
    PieceType.KING: king_geometry,
}


def can_reach(from_square: Square, to_square: Square, board: Board) -> bool:
    """Look up the rule of the piece standing on `from_square`. Only geometry and path: no friendly fire or turn checks."""
    piece = board.piece(from_square)
    if piece is None or from_square == to_square:
        return False
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(from_square, to_square, board)
