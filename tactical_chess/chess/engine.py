"""
The RulesEngine is the entrypoint into the domain layer for the service layer (and any other host).
It owns the GameState and is the only object that mutates it:

* validating and applying moves
* keeping the move history and capture lists
* detecting check and checkmate
* undoing the last move / restarting the game

Collaborators observe the engine by subscribing a listener (see events.py) and read it through snapshots.
"""

import logging
from typing import Optional, Self

from tactical_chess.chess.board import Board, SquareView
from tactical_chess.chess.events import (
    GameEnded,
    GameEvent,
    GameRestarted,
    Listener,
    MoveApplied,
    MoveUndone,
)
from tactical_chess.chess.game import GameState, Status
from tactical_chess.chess.moves import MoveRecord, can_reach
from tactical_chess.chess.pieces import Color, Piece
from tactical_chess.chess.square import Square, all_squares
from tactical_chess.core.exceptions import (
    GameOverError,
    IllegalMoveError,
    InvalidSquareError,
    NoMoveToUndoError,
    NoPieceAtSourceError,
    NotYourTurnError,
)

logger = logging.getLogger("tactical_chess.engine")


class RulesEngine:
    def __init__(self, state: Optional[GameState] = None) -> None:
        self._state = state if state is not None else GameState.new_game()
        self._listeners: list[Listener] = []

    @classmethod
    def from_placement(
        cls, placement: str, side_to_move: Color = Color.WHITE
    ) -> Self:
        """Load a constructed position (piece placement part of a FEN string)."""
        board = Board.from_placement(placement)
        return cls(GameState(board=board, side_to_move=side_to_move))

    # --- OBSERVERS ---
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # --- READ-ONLY VIEWS ---
    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    @property
    def status(self) -> Status:
        return self._state.status

    @property
    def is_over(self) -> bool:
        return self._state.is_over

    @property
    def winner(self) -> Optional[Color]:
        return self._state.winner

    @property
    def move_history(self) -> list[MoveRecord]:
        return [record.snapshot() for record in self._state.move_history]

    @property
    def move_count(self) -> int:
        return len(self._state.move_history)

    def captured(self, color: Color) -> list[Piece]:
        """Pieces captured BY `color`, in the order they were taken."""
        return [piece.snapshot() for piece in self._state.captured[color]]

    def piece_at(self, square: Square) -> Optional[Piece]:
        piece = self._state.board.piece(square)
        return None if piece is None else piece.snapshot()

    def board_snapshot(self) -> list[list[SquareView]]:
        return self._state.board.snapshot()

    def placement(self) -> str:
        return self._state.board.to_placement()

    # --- MOVE LEGALITY ---
    def is_legal_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Pure predicate: does not look at whose turn it is and never mutates state.

        1. no-op moves and moves from an empty square are rejected
        2. friendly fire is rejected
        3. the movement rule of the piece type decides

        NOTE: a move that leaves your own king in check is NOT rejected.
        """
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            return False
        if from_square == to_square:
            return False

        board = self._state.board
        piece = board.piece(from_square)
        if piece is None:
            return False

        target = board.piece(to_square)
        if target is not None and target.color == piece.color:
            return False

        return can_reach(from_square, to_square, board)

    def legal_moves_from(self, square: Square) -> list[Square]:
        """Every destination the piece on `square` can legally move to (empty when the square is empty)."""
        if not square.is_within_bounds():
            return []
        return [
            to_square
            for to_square in all_squares()
            if self.is_legal_move(square, to_square)
        ]

    def is_in_check(self, color: Color) -> bool:
        """
        Could any opposing piece move onto the king's square?

        Only geometry and path count for this probe. Without a king on the board there is nothing to be in check.
        """
        board = self._state.board
        king_square = board.locate_king(color)
        if king_square is None:
            return False
        return any(
            can_reach(square, king_square, board)
            for square in board.locate_color(color.opponent)
        )

    def has_any_legal_move(self, color: Color) -> bool:
        """Brute force: try every destination for every piece of `color`, stop at the first legal one."""
        for from_square in self._state.board.locate_color(color):
            for to_square in all_squares():
                if self.is_legal_move(from_square, to_square):
                    return True
        return False

    # --- STATE CHANGES ---
    def attempt_move(self, from_square: Square, to_square: Square) -> MoveRecord:
        """
        Attempt to make a move
        -----

        Checks (state is untouched if any of them fails):
        1. the game is still in progress
        2. there is a piece on the square to move from
        3. that piece belongs to the side to move
        4. the move is legal for that piece

        Updates:
        5. capture the piece on the target square (if any), relocate the moving piece, mark it as moved
        6. record the move, switch the side to move
        7. check for checkmate
        8. notify listeners

        Listeners and the caller get copies of the record: the one kept in the history is only used by undo.
        """
        if self.is_over:
            raise GameOverError(
                f"Game is over ({self._winner_name()} won). Restart to play again."
            )
        self._assert_on_board(from_square, to_square)

        board = self._state.board
        piece = board.piece(from_square)
        if piece is None:
            raise NoPieceAtSourceError(
                f"No piece on {from_square.to_algebraic()} to move."
            )
        if piece.color != self.side_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.side_to_move.name.lower()} to make a move first."
            )
        if not self.is_legal_move(from_square, to_square):
            raise IllegalMoveError(
                f"Move not allowed: {piece.type.name.lower()} from {from_square.to_algebraic()} to {to_square.to_algebraic()}"
            )

        # Store move info before update
        target = board.piece(to_square)
        record = MoveRecord(
            from_square=from_square,
            to_square=to_square,
            moved_piece=piece.snapshot(),
            captured_piece=target.snapshot() if target is not None else None,
        )

        captured = board.move_piece(from_square, to_square)
        if captured is not None:
            self._state.captured[piece.color].append(captured)
        piece.has_moved = True

        self._state.move_history.append(record)
        self._state.switch_side()
        logger.debug(
            "Applied move %s (%s %s)%s",
            record.to_uci(),
            piece.color.name.lower(),
            piece.type.name.lower(),
            " with capture" if record.is_capture else "",
        )

        game_ended = self.evaluate_terminal_state()

        self._notify(MoveApplied(record.snapshot(), self.side_to_move))
        if game_ended:
            self._notify(GameEnded(self.winner, self.move_count))
        return record.snapshot()

    def evaluate_terminal_state(self) -> bool:
        """
        Checkmate test for the side now to move: in check AND no legal move at all.

        Returns True if this call ended the game.
        NOTE: stalemate (no legal move, not in check) does not end the game.
        """
        if self.is_over:
            return False

        color = self.side_to_move
        if self.is_in_check(color) and not self.has_any_legal_move(color):
            self._state.status = Status.OVER
            self._state.winner = color.opponent
            logger.info(
                "Checkmate after %d moves: %s wins",
                self.move_count,
                self._winner_name(),
            )
            return True
        return False

    def undo_last_move(self) -> MoveRecord:
        """
        Take back the most recent move.
        ----

        1. put the moved piece back (as it was before the move, including whether it had moved)
        2. put the captured piece back and drop it from the capture list (most recent entry of the same type)
        3. the side that made the move is to move again
        4. a finished game is back in progress
        """
        if not self._state.move_history:
            raise NoMoveToUndoError("There is no move to undo.")

        record = self._state.move_history.pop()
        board = self._state.board
        mover = record.moved_piece.color

        board.place_piece(record.moved_piece.snapshot(), record.from_square)
        if record.captured_piece is not None:
            board.place_piece(record.captured_piece.snapshot(), record.to_square)
            self._remove_from_capture_list(mover, record.captured_piece)
        else:
            board.place_piece(None, record.to_square)

        self._state.side_to_move = mover
        self._state.status = Status.IN_PROGRESS
        self._state.winner = None
        logger.debug("Undid move %s", record.to_uci())

        self._notify(MoveUndone(record.snapshot(), self.side_to_move))
        return record

    def restart(self) -> None:
        """Back to the standard opening layout, white to move."""
        self._state = GameState.new_game()
        logger.info("Game restarted")
        self._notify(GameRestarted())

    # -- PRIVATE HELPERS ---
    def _remove_from_capture_list(self, capturer: Color, piece: Piece) -> None:
        """Remove the most recently captured piece of the same type (LIFO)."""
        capture_list = self._state.captured[capturer]
        for index in range(len(capture_list) - 1, -1, -1):
            if capture_list[index].is_same_kind(piece):
                del capture_list[index]
                return

    def _assert_on_board(self, *squares: Square) -> None:
        for square in squares:
            if not square.is_within_bounds():
                raise InvalidSquareError(
                    f"Square ({square.row}, {square.col}) is not on the board."
                )

    def _winner_name(self) -> str:
        return self.winner.name.lower() if self.winner is not None else "nobody"

    def _notify(self, event: GameEvent) -> None:
        """Listeners are called in order of registration. A failing listener cannot undo what already happened."""
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Listener %r failed on %s", listener, type(event).__name__
                )
