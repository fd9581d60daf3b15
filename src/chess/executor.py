"""
Applying a move to the board, and taking (exactly one) move back.

The executor does not check legality: callers validate first (see moves.is_legal_move).
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Piece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UndoRecord:
    """Snapshot of the squares involved in a move, taken before the board gets updated."""

    move: Move
    moved_piece: Piece
    captured_piece: Piece

    @classmethod
    def from_move_and_board(cls, move: Move, board: Board) -> Self:
        return cls(
            move=move,
            moved_piece=board.piece(move.from_square),
            captured_piece=board.piece(move.to_square),
        )

    @property
    def is_capture(self) -> bool:
        return not self.captured_piece.is_empty


class MoveExecutor:
    """Owns the single-slot undo buffer for one board."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.last_move: Optional[UndoRecord] = None

    @property
    def has_history(self) -> bool:
        return self.last_move is not None

    def commit(self, move: Move) -> UndoRecord:
        """Move whatever stands on the origin to the destination (overwriting it) and remember how to reverse it."""
        record = UndoRecord.from_move_and_board(move, self.board)
        self.board.remove_piece(move.from_square)
        self.board.place_piece(record.moved_piece, move.to_square)
        self.last_move = record
        return record

    def undo(self) -> bool:
        """
        Put back the last committed move. Returns False (and leaves the board alone) when there is nothing to undo
        or the record does not describe squares on the board.
        """
        record = self.last_move
        if record is None:
            logger.warning("Undo requested without a move to take back.")
            return False

        move = record.move
        if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
            logger.error("Undo record has squares outside the board: %s", move)
            self.last_move = None
            return False

        self.board.place_piece(record.moved_piece, move.from_square)
        self.board.place_piece(record.captured_piece, move.to_square)
        self.last_move = None
        return True
