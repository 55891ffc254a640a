"""Unit tests for /tactical_chess/chess/board.py"""

import pytest

from tactical_chess.chess.board import STANDARD_PLACEMENT, Board
from tactical_chess.chess.pieces import Color, Piece, PieceType
from tactical_chess.chess.square import Square
from tactical_chess.core.exceptions import InvalidPlacementError, InvalidSquareError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_PLACEMENT = "/".join(["8"] * 8)


def test_standard_layout() -> None:
    board = Board.standard()
    assert len(board.locate_color(Color.WHITE)) == 16
    assert len(board.locate_color(Color.BLACK)) == 16
    assert board.piece(Square(7, 4)) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Square(0, 3)) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(Square(4, 4)) is None
    assert board.to_placement() == STANDARD_PLACEMENT


@pytest.mark.parametrize("col", range(8))
def test_pawn_rows(col: int) -> None:
    """White pawns on row 6, black pawns on row 1"""
    board = Board.standard()
    assert board.piece(Square(6, col)) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.piece(Square(1, col)) == Piece(PieceType.PAWN, Color.BLACK)


@pytest.mark.parametrize(
    "placement",
    [
        STARTING_POSITION,
        EMPTY_PLACEMENT,
        "K7/8/8/8/4N3/8/6pp/6pk",
        "r3k2r/pp3ppp/2n5/3Q4/1b6/8/PPP2PPP/R3K2N",
    ],
)
def test_placement_round_trip(placement: str) -> None:
    assert Board.from_placement(placement).to_placement() == placement


def test_pawns_off_starting_row_have_moved() -> None:
    board = Board.from_placement("8/8/8/4p3/4P3/8/P7/8")
    assert board.piece(Square(3, 4)).has_moved
    assert board.piece(Square(4, 4)).has_moved
    assert not board.piece(Square(6, 0)).has_moved


def test_other_pieces_have_not_moved() -> None:
    board = Board.from_placement("8/8/8/3Q4/8/8/8/8")
    assert not board.piece(Square(3, 3)).has_moved


@pytest.mark.parametrize(
    "placement",
    [
        "8/8/8/8/8/8/8",  # only 7 rows
        "8/8/8/8/8/8/8/8/8",  # 9 rows
        "7/8/8/8/8/8/8/8",  # short row
        "9/8/8/8/8/8/8/8",  # long row
        "pppppppppp/8/8/8/8/8/8/8",  # too many pieces in a row
        "x7/8/8/8/8/8/8/8",  # unknown piece
    ],
)
def test_invalid_placement(placement: str) -> None:
    with pytest.raises(InvalidPlacementError):
        Board.from_placement(placement)


def test_piece_off_board() -> None:
    board = Board.empty()
    with pytest.raises(InvalidSquareError):
        board.piece(Square(8, 0))
    with pytest.raises(InvalidSquareError):
        board.place_piece(Piece(PieceType.ROOK, Color.WHITE), Square(-1, 0))


def test_move_piece() -> None:
    board = Board.standard()
    captured = board.move_piece(Square(6, 4), Square(4, 4))
    assert captured is None
    assert board.piece(Square(6, 4)) is None
    assert board.piece(Square(4, 4)) == Piece(PieceType.PAWN, Color.WHITE)


def test_move_piece_returns_capture() -> None:
    board = Board.from_placement("8/8/8/3p4/8/8/8/3R4")
    captured = board.move_piece(Square(7, 3), Square(3, 3))
    assert captured == Piece(PieceType.PAWN, Color.BLACK, has_moved=True)
    assert board.piece(Square(3, 3)).type == PieceType.ROOK


def test_remove_piece() -> None:
    board = Board.standard()
    removed = board.remove_piece(Square(0, 0))
    assert removed == Piece(PieceType.ROOK, Color.BLACK)
    assert board.piece(Square(0, 0)) is None


def test_locate_king() -> None:
    board = Board.standard()
    assert board.locate_king(Color.WHITE) == Square(7, 4)
    assert board.locate_king(Color.BLACK) == Square(0, 4)
    assert Board.empty().locate_king(Color.WHITE) is None


def test_snapshot() -> None:
    board = Board.standard()
    snapshot = board.snapshot()
    assert len(snapshot) == 8
    assert all(len(row) == 8 for row in snapshot)
    assert snapshot[7][4] == (PieceType.KING, Color.WHITE)
    assert snapshot[0][0] == (PieceType.ROOK, Color.BLACK)
    assert snapshot[4][4] is None


def test_snapshot_is_detached() -> None:
    """Changing the board afterwards does not change a snapshot already handed out"""
    board = Board.standard()
    snapshot = board.snapshot()
    board.move_piece(Square(6, 4), Square(4, 4))
    assert snapshot[6][4] == (PieceType.PAWN, Color.WHITE)
    assert snapshot[4][4] is None
