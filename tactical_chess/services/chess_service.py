"""Orchestration of communication from an input controller / renderer to the rules engine (and the reverse direction)."""

import logging
import threading
from typing import Optional, Self

from tactical_chess.api.models import (
    GameSnapshot,
    LegalMovesResponse,
    MoveRequest,
    MoveView,
    PieceView,
    SelectRequest,
    TargetView,
)
from tactical_chess.chess.engine import RulesEngine
from tactical_chess.chess.events import Listener
from tactical_chess.chess.moves import MoveRecord
from tactical_chess.chess.pieces import Color, Piece
from tactical_chess.chess.square import Square
from tactical_chess.core import shared_types
from tactical_chess.core.config import EngineSettings
from tactical_chess.core.exceptions import MoveError

logger = logging.getLogger("tactical_chess.service")


class GameService:
    """
    Single entrypoint for a host application.

    The engine has no internal synchronisation, so every call goes through one (re-entrant) lock:
    moves are applied strictly one after the other, in the order they arrive.
    """

    def __init__(self, engine: RulesEngine) -> None:
        self.engine = engine
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Optional[EngineSettings] = None) -> Self:
        """
        Build the engine from configuration (defaults: standard layout, white to move).

        Logging is left to the host: `configure_logging(settings.log_level)` applies the configured level.
        """
        settings = settings or EngineSettings()
        engine = RulesEngine.from_placement(
            settings.starting_placement,
            side_to_move=Color[settings.first_to_move.name],
        )
        return cls(engine)

    # -- Observers --
    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self.engine.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            self.engine.unsubscribe(listener)

    # -- Input controller --
    def make_move(self, request: MoveRequest) -> MoveView:
        """Make a move attempt. MoveErrors are logged and passed on to the caller to show the user."""
        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)
        with self._lock:
            try:
                record = self.engine.attempt_move(from_square, to_square)
            except MoveError as err:
                logger.warning(
                    "Rejected move %s%s: %s",
                    request.from_square,
                    request.to_square,
                    err,
                )
                raise
        return self._move_view(record)

    def undo(self) -> MoveView:
        with self._lock:
            record = self.engine.undo_last_move()
        return self._move_view(record)

    def restart(self) -> GameSnapshot:
        with self._lock:
            self.engine.restart()
            return self._snapshot()

    def legal_moves(self, request: SelectRequest) -> LegalMovesResponse:
        """
        Destinations for the piece on the selected square (for highlighting).

        Only the side to move gets any: selecting an opponent's piece or an empty square gives an empty list.
        """
        square = Square.from_algebraic(request.square)
        with self._lock:
            piece = self.engine.piece_at(square)
            if (
                piece is None
                or piece.color != self.engine.side_to_move
                or self.engine.is_over
            ):
                targets: list[TargetView] = []
            else:
                targets = [
                    TargetView(
                        square=target.to_algebraic(),
                        is_capture=self.engine.piece_at(target) is not None,
                    )
                    for target in self.engine.legal_moves_from(square)
                ]
        return LegalMovesResponse(square=request.square, targets=targets)

    # -- Renderer --
    def get_game_state(self) -> GameSnapshot:
        with self._lock:
            return self._snapshot()

    # -- Internal helpers --
    def _snapshot(self) -> GameSnapshot:
        """Convert the engine state into the transport model. Must be called while holding the lock."""
        engine = self.engine
        board = [
            [
                None
                if view is None
                else PieceView(
                    type=shared_types.PieceType[view[0].name],
                    color=shared_types.Color[view[1].name],
                )
                for view in row
            ]
            for row in engine.board_snapshot()
        ]
        return GameSnapshot(
            board=board,
            placement=engine.placement(),
            side_to_move=shared_types.Color[engine.side_to_move.name],
            status=shared_types.Status[engine.status.name],
            winner=(
                shared_types.Color[engine.winner.name]
                if engine.winner is not None
                else None
            ),
            in_check=engine.is_in_check(engine.side_to_move),
            captured={
                shared_types.Color[color.name]: [
                    _piece_view(piece) for piece in engine.captured(color)
                ]
                for color in Color
            },
            move_history=[record.to_uci() for record in engine.move_history],
        )

    def _move_view(self, record: MoveRecord) -> MoveView:
        return MoveView(
            from_square=record.from_square.to_algebraic(),
            to_square=record.to_square.to_algebraic(),
            piece=_piece_view(record.moved_piece),
            captured=(
                _piece_view(record.captured_piece)
                if record.captured_piece is not None
                else None
            ),
            uci=record.to_uci(),
        )


def _piece_view(piece: Piece) -> PieceView:
    return PieceView(
        type=shared_types.PieceType[piece.type.name],
        color=shared_types.Color[piece.color.name],
    )
