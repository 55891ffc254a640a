"""
State of a single game: the board plus everything the rules need to remember between moves.

Only the RulesEngine mutates a GameState. Everyone else gets copies / snapshots.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from tactical_chess.chess.board import Board
from tactical_chess.chess.moves import MoveRecord
from tactical_chess.chess.pieces import Color, Piece


class Status(Enum):
    IN_PROGRESS = auto()
    OVER = auto()


def empty_capture_lists() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameState:
    board: Board
    side_to_move: Color = Color.WHITE
    move_history: list[MoveRecord] = field(default_factory=list)
    # keyed by the CAPTURING side
    captured: dict[Color, list[Piece]] = field(default_factory=empty_capture_lists)
    status: Status = Status.IN_PROGRESS
    winner: Optional[Color] = None

    @classmethod
    def new_game(cls) -> Self:
        return cls(board=Board.standard())

    @property
    def is_over(self) -> bool:
        return self.status == Status.OVER

    def switch_side(self) -> None:
        self.side_to_move = self.side_to_move.opponent
