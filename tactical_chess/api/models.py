"""Requests and Response models (what an input controller sends in / what a renderer gets back)"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from tactical_chess.core.exceptions import InvalidRequestError
from tactical_chess.core.shared_types import Color, PieceType, Status


def _validate_algebraic(value: str) -> str:
    """'a1' - 'h8'. Normalised to lower case."""
    value = value.strip().lower()
    if len(value) != 2:
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")

    file_character, rank_character = value
    if not ("a" <= file_character <= "h" and "1" <= rank_character <= "8"):
        raise InvalidRequestError(f"Square {value!r} is not on the board.")
    return value


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_algebraic(value)


class SelectRequest(BaseModel):
    """A click on a square: ask which moves the piece there can make."""

    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_algebraic(value)


# --- RESPONSE MODELS ---
class PieceView(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: PieceType
    color: Color


class MoveView(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_square: str
    to_square: str
    piece: PieceView
    captured: Optional[PieceView] = None
    uci: str


class GameSnapshot(BaseModel):
    """Everything a renderer needs to draw the game. Row 0 of `board` is the 8th rank."""

    model_config = ConfigDict(frozen=True)

    board: list[list[Optional[PieceView]]]
    placement: str
    side_to_move: Color
    status: Status
    winner: Optional[Color]
    in_check: bool
    captured: dict[Color, list[PieceView]]
    move_history: list[str]


class TargetView(BaseModel):
    model_config = ConfigDict(frozen=True)

    square: str
    is_capture: bool


class LegalMovesResponse(BaseModel):
    square: str
    targets: list[TargetView]
