"""
Check / Checkmate / Stalemate resolution for one color.

Everything here is built on the ordinary move validator: a king is "attacked" when an opponent's piece could legally move
onto its square. Speculative moves ("probes") are played on a copy of the board, so the board passed in is never changed.
"""

import logging
from copy import deepcopy
from typing import Iterator

from src.chess.board import Board
from src.chess.executor import MoveExecutor
from src.chess.moves import KING_DELTAS, MOVEMENT_RULES, Move, is_legal_move, squares_between
from src.chess.pieces import Color, PieceType
from src.chess.square import Square
from src.core.exceptions import GameStateError, KingNotFoundError
from src.core.shared_types import CheckStatus

logger = logging.getLogger(__name__)


def probe(board: Board, move: Move) -> Board:
    """Play the move on a copy of the board and return the copy."""
    snapshot = deepcopy(board)
    MoveExecutor(snapshot).commit(move)
    return snapshot


def find_king(board: Board, color: Color) -> Square:
    kings = board.locate_pieces(PieceType.KING, color)
    if not kings:
        raise KingNotFoundError(f"No {color.name.lower()} king on the board.")
    return kings[0]


def threats(board: Board, color: Color) -> list[Square]:
    """Squares of the opponent's pieces that could move onto the king of `color`."""
    king_square = find_king(board, color)
    return [
        square
        for square in board.locate_color(color.opponent)
        if is_legal_move(board, Move(square, king_square))
    ]


def is_in_check(board: Board, color: Color) -> bool:
    return len(threats(board, color)) > 0


def is_safe_move(board: Board, move: Move, color: Color) -> bool:
    """Legal for the piece AND does not leave (or put) your own king in check."""
    return is_legal_move(board, move) and not is_in_check(probe(board, move), color)


def can_escape(board: Board, color: Color) -> bool:
    """Can the king step onto any neighbouring square where it is no longer attacked?"""
    king_square = find_king(board, color)
    for df, dr in KING_DELTAS:
        target = king_square.offset(df, dr)
        if not target.is_within_bounds():
            continue
        if is_safe_move(board, Move(king_square, target), color):
            return True
    return False


def can_obstruct(board: Board, color: Color) -> bool:
    """
    Can the check be answered by capturing the attacker, or by putting a piece in the way?
    ---

    * Double check: no single move can deal with two attackers (other than moving the king) -> False
    * Knight (and pawn/king) checks cannot be blocked: only capturing the attacker helps
    * Sliding pieces: capture, or interpose a non-king piece on any square between attacker and king

    Every candidate is probed, so pinned defenders do not count.
    """
    attackers = threats(board, color)
    if len(attackers) != 1:
        return False

    attacker_square = attackers[0]
    king_square = find_king(board, color)
    defenders = board.locate_color(color)

    for defender in defenders:
        if is_safe_move(board, Move(defender, attacker_square), color):
            return True

    # NOTE: squares_between is empty for knights and for adjacent attackers
    blocking_squares = squares_between(attacker_square, king_square)
    if board.piece(attacker_square).type == PieceType.KNIGHT:
        blocking_squares = []

    for target in blocking_squares:
        for defender in defenders:
            if board.piece(defender).type == PieceType.KING:
                continue
            if is_safe_move(board, Move(defender, target), color):
                return True
    return False


def classify(board: Board, color: Color) -> CheckStatus:
    if not is_in_check(board, color):
        return CheckStatus.NOT_IN_CHECK
    if can_escape(board, color) or can_obstruct(board, color):
        return CheckStatus.IN_CHECK
    logger.debug("%s is checkmated", color.name.lower())
    return CheckStatus.CHECKMATE


# --- LEGAL MOVE ENUMERATION ---
def _iter_legal_moves(board: Board, color: Color) -> Iterator[Move]:
    for square in board.locate_color(color):
        movement_rule = MOVEMENT_RULES[board.piece(square).type]
        for move in movement_rule(square, board):
            if is_safe_move(board, move, color):
                yield move


def legal_moves(board: Board, color: Color) -> list[Move]:
    """Every move `color` can make in this position."""
    return list(_iter_legal_moves(board, color))


def has_any_legal_move(board: Board, color: Color) -> bool:
    """
    Stalemate support. Only to be asked when `color` is NOT in check:
    having no move while in check is checkmate, which classify() answers.
    """
    if is_in_check(board, color):
        raise GameStateError(
            f"Asked for stalemate while {color.name.lower()} is in check."
        )
    return next(_iter_legal_moves(board, color), None) is not None


def is_stalemate(board: Board, color: Color) -> bool:
    return not is_in_check(board, color) and not has_any_legal_move(board, color)
