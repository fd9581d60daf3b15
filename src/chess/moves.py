"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the rules for each piece type.

* LEGALITY_RULES answer "may the piece on A move to B?" (read-only checks on the board)
* MOVEMENT_RULES list the moves a piece could make at all (used to enumerate legal moves)

Whether a move leaves your own king in check is decided later (resolver / Game)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidRequestError


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Piece: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS

# White moves UP the board, black moves DOWN. Pawns may advance two squares from these ranks.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_STARTING_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 7}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        "e2e4": move the piece that was on e2 to e4
        """
        if len(uci) != 4:
            raise InvalidRequestError(f"Cannot interpret {uci!r} as a move.")
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    @classmethod
    def from_coordinates(cls, text: str) -> Self:
        """The way players type a move: 'e2 e4' (case-insensitive)"""
        parts = text.strip().lower().split()
        if len(parts) != 2:
            raise InvalidRequestError(f"Cannot interpret {text!r} as a move.")
        return cls(Square.from_algebraic(parts[0]), Square.from_algebraic(parts[1]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.file - self.from_square.file,
            self.to_square.rank - self.from_square.rank,
        )

    @property
    def is_null(self) -> bool:
        return self.from_square == self.to_square


# --- LINES ON THE BOARD ---
def line_direction(from_square: Square, to_square: Square) -> Optional[Vector]:
    """Unit step from one square towards the other, if they share a rank, file or diagonal."""
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if df == 0 and dr == 0:
        return None
    if df != 0 and dr != 0 and abs(df) != abs(dr):
        return None
    return (_sign(df), _sign(dr))


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between two squares on the same rank, file or diagonal.
    Empty when the squares are adjacent or do not share a line.
    """
    direction = line_direction(from_square, to_square)
    if direction is None:
        return []

    df, dr = direction
    squares_found: list[Square] = []
    square = from_square.offset(df, dr)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(df, dr)
    return squares_found


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _is_path_clear(move: Move, board: Board) -> bool:
    return all(board.is_empty(sq) for sq in squares_between(move.from_square, move.to_square))


# --- LEGALITY RULES ---
def is_legal_pawn_move(move: Move, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square
    - can move by two from its starting rank, if both squares are empty
    - takes diagonally (one square forward), only when an opponent's piece stands there
    """
    color = board.piece(move.from_square).color
    forward = PAWN_DIRECTION[color]
    df, dr = move.delta
    target = board.piece(move.to_square)

    if df == 0 and dr == forward:
        return target.is_empty

    if df == 0 and dr == 2 * forward:
        on_starting_rank = move.from_square.rank == PAWN_STARTING_RANK[color]
        in_between = move.from_square.offset(0, forward)
        return on_starting_rank and board.is_empty(in_between) and target.is_empty

    if abs(df) == 1 and dr == forward:
        return target.color == color.opponent

    return False


def is_legal_knight_move(move: Move, board: Board) -> bool:
    """Knights jump: |delta_file|, |delta_rank| are 1 and 2 (in either order)"""
    df, dr = move.delta
    return {abs(df), abs(dr)} == {1, 2}


def is_legal_bishop_move(move: Move, board: Board) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|, and nothing may stand in the way"""
    df, dr = move.delta
    return abs(df) == abs(dr) and df != 0 and _is_path_clear(move, board)


def is_legal_rook_move(move: Move, board: Board) -> bool:
    """Rooks move either horizontally or vertically, and nothing may stand in the way"""
    df, dr = move.delta
    return (df == 0) != (dr == 0) and _is_path_clear(move, board)


def is_legal_queen_move(move: Move, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_legal_rook_move(move, board) or is_legal_bishop_move(move, board)


def is_legal_king_move(move: Move, board: Board) -> bool:
    """
    The king can move by a single square at the time. (No castling.)
    """
    df, dr = move.delta
    return max(abs(df), abs(dr)) == 1


# -- STRATEGY PATTERN: LEGALITY RULES ---
LegalityFn = Callable[[Move, Board], bool]
LEGALITY_RULES: dict[PieceType, LegalityFn] = {
    PieceType.PAWN: is_legal_pawn_move,
    PieceType.KNIGHT: is_legal_knight_move,
    PieceType.BISHOP: is_legal_bishop_move,
    PieceType.ROOK: is_legal_rook_move,
    PieceType.QUEEN: is_legal_queen_move,
    PieceType.KING: is_legal_king_move,
}


def is_legal_move(board: Board, move: Move) -> bool:
    """
    Single entry point of the move validator.
    ---

    Checks shared by every piece:
    * both squares on the board
    * there is a piece to move (an empty origin is simply an illegal move)
    * the move is not the null move
    * you cannot move onto your own piece

    then the rule for the moving piece decides. Never changes the board.
    """
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return False

    moving_piece = board.piece(move.from_square)
    rule = LEGALITY_RULES.get(moving_piece.type)
    if rule is None:
        return False

    if move.is_null:
        return False

    if board.piece(move.to_square).color == moving_piece.color:
        return False

    return rule(move, board)


def rejection_reason(board: Board, move: Move, color: Color) -> Optional[str]:
    """Message shown to the player when the move is refused. None means the piece may make the move."""
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return "Invalid Move: square is not on the board."

    moving_piece = board.piece(move.from_square)
    if moving_piece.is_empty:
        return f"Invalid Move: there is no piece on {move.from_square.to_algebraic()}."
    if moving_piece.color != color:
        return f"Invalid Move: the {moving_piece.name} on {move.from_square.to_algebraic()} is not yours."
    if not is_legal_move(board, move):
        return f"Invalid Move: cannot move {moving_piece.name} there."
    return None


# --- MOVEMENT RULES (enumeration of candidate moves) ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. The first occupied square is included when it holds an opponent's piece.
    """

    player_color = board.piece(square).color

    moves: list[Move] = []
    for df, dr in directions:
        target_square = square
        while True:
            target_square = target_square.offset(df, dr)
            if not target_square.is_within_bounds():
                break

            if not board.is_empty(target_square):
                if board.piece(target_square).color == player_color.opponent:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump by a fixed delta"""
    player_color = board.piece(square).color
    moves: list[Move] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if not target_square.is_within_bounds():
            continue

        if board.piece(target_square).color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """Pushes by one and two, and both diagonal takes. The legality rule filters out what is not allowed right now."""
    forward = PAWN_DIRECTION[board.piece(square).color]
    deltas: list[Vector] = [(0, forward), (0, 2 * forward), (1, forward), (-1, forward)]
    moves = [
        Move(square, square.offset(df, dr))
        for df, dr in deltas
        if square.offset(df, dr).is_within_bounds()
    ]
    return [move for move in moves if is_legal_pawn_move(move, board)]


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    return candidate_bishop_moves(square, board) + candidate_rook_moves(square, board)


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}
