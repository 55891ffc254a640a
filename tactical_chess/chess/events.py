"""
Notifications the engine sends to its observers (renderers, statistics recorders, ...).

Listeners are plain callables registered on the engine. They get called synchronously, after the state change has completed,
with one of the immutable events below.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from tactical_chess.chess.moves import MoveRecord
from tactical_chess.chess.pieces import Color


@dataclass(frozen=True)
class MoveApplied:
    record: MoveRecord
    side_to_move: Color  # side to move AFTER the move


@dataclass(frozen=True)
class MoveUndone:
    record: MoveRecord
    side_to_move: Color


@dataclass(frozen=True)
class GameRestarted:
    pass


@dataclass(frozen=True)
class GameEnded:
    winner: Optional[Color]
    total_moves: int


GameEvent = Union[MoveApplied, MoveUndone, GameRestarted, GameEnded]
Listener = Callable[[GameEvent], None]
