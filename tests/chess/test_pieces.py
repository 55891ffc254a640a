"""Unit tests for /tactical_chess/chess/pieces.py"""

import pytest

from tactical_chess.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType


@pytest.mark.parametrize("character, piece_type", FEN_TO_PIECE.items())
def test_from_fen_black(character: str, piece_type: PieceType) -> None:
    """lower case letters are black pieces"""
    piece = Piece.from_fen(character)
    assert piece.type == piece_type
    assert piece.color == Color.BLACK
    assert not piece.has_moved


@pytest.mark.parametrize("character, piece_type", FEN_TO_PIECE.items())
def test_from_fen_white(character: str, piece_type: PieceType) -> None:
    """upper case letters are white pieces"""
    piece = Piece.from_fen(character.upper())
    assert piece.type == piece_type
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("character", ["p", "N", "b", "R", "q", "K"])
def test_to_fen(character: str) -> None:
    assert Piece.from_fen(character).to_fen() == character


def test_opponent() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE


def test_snapshot_is_independent() -> None:
    """Changing the piece on the board must not change a snapshot taken earlier."""
    piece = Piece(PieceType.ROOK, Color.WHITE)
    snapshot = piece.snapshot()
    piece.has_moved = True
    assert snapshot == Piece(PieceType.ROOK, Color.WHITE, has_moved=False)
    assert snapshot is not piece


def test_same_kind_ignores_has_moved() -> None:
    moved = Piece(PieceType.PAWN, Color.BLACK, has_moved=True)
    unmoved = Piece(PieceType.PAWN, Color.BLACK)
    assert moved.is_same_kind(unmoved)
    assert moved != unmoved
    assert not moved.is_same_kind(Piece(PieceType.PAWN, Color.WHITE))
