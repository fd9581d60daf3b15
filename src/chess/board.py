"""The Game board: the configuration of pieces on the 8x8 grid (and nothing about whose turn it is)"""

from dataclasses import dataclass
from typing import Mapping, Optional, Self

from src.chess.pieces import EMPTY, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, GRID_SIZE, Square
from src.core.exceptions import InvalidFENError, SquareOutOfBoundsError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_TILE = "·"

Grid = list[list[Piece]]


def _empty_grid() -> Grid:
    return [[EMPTY for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]


@dataclass
class Board:
    """
    The pieces live in a 10x10 grid.
    Rows/columns 0 and 9 are the border (axis labels when displayed) and never hold a piece,
    so the interior indices 1..8 map 1:1 onto ranks (row = 9 - rank) and files (column = file).
    """

    grid: Grid

    @classmethod
    def new_board(cls) -> Self:
        """Standard opening position"""
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def empty(cls) -> Self:
        return cls(_empty_grid())

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first part of a FEN string (the piece placement).

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(
                f"Expected {BOARD_DIMENSIONS[1]} ranks in {fen_str!r}, found {len(fen_by_ranks)}."
            )

        board = cls.empty()
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 1
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                try:
                    piece = Piece.from_fen(character)
                except KeyError as exc:
                    raise InvalidFENError(
                        f"Unknown piece {character!r} in {fen_str!r}"
                    ) from exc
                square = Square(file, rank)
                if not square.is_within_bounds():
                    raise InvalidFENError(f"Rank {rank} too long in {fen_str!r}")
                board.place_piece(piece, square)
                file += 1
            if file != BOARD_DIMENSIONS[0] + 1:
                raise InvalidFENError(
                    f"Rank {rank} does not describe {BOARD_DIMENSIONS[0]} files in {fen_str!r}"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1], 0, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            piece = self.piece(Square(file, rank))

            if not piece.is_empty:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- ACCESS ---
    def piece(self, square: Square) -> Piece:
        """The piece on the square. Empty squares hold the EMPTY piece."""
        row, column = self._index(square)
        return self.grid[row][column]

    def place_piece(self, piece: Piece, square: Square) -> None:
        row, column = self._index(square)
        self.grid[row][column] = piece

    def remove_piece(self, square: Square) -> Piece:
        """Clear the square and hand back whatever stood there."""
        removed = self.piece(square)
        self.place_piece(EMPTY, square)
        return removed

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def squares(self) -> list[Square]:
        """All 64 squares, a8 first (reading order of the grid)."""
        return [
            Square.from_grid_index(row, column)
            for row in range(1, GRID_SIZE - 1)
            for column in range(1, GRID_SIZE - 1)
        ]

    def locate_pieces(self, piece_type: PieceType, color: Optional[Color] = None) -> list[Square]:
        return [
            square
            for square in self.squares()
            if self.piece(square).type == piece_type
            and (color is None or self.piece(square).color == color)
        ]

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square in self.squares() if self.piece(square).color == color]

    def _index(self, square: Square) -> tuple[int, int]:
        if not square.is_within_bounds():
            raise SquareOutOfBoundsError(f"{square} is not on the board.")
        return square.to_grid_index()

    # --- DISPLAY ---
    def to_display_string(
        self, perspective: Color, glyphs: Optional[Mapping[Piece, str]] = None
    ) -> str:
        """
        Text grid including the axis labels on all four sides.
        ---

        * perspective WHITE: rank 8 at the top, a-file on the left
        * perspective BLACK: mirrored top-bottom and left-right, so rank 1 is at the top and the h-file on the left

        `glyphs` maps a piece onto the symbol to print. Without one, pieces are shown by their FEN letter.
        """
        indices = range(GRID_SIZE)
        if perspective == Color.BLACK:
            indices = range(GRID_SIZE - 1, -1, -1)

        lines = [
            " ".join(self._display_cell(row, column, glyphs) for column in indices)
            for row in indices
        ]
        return "\n".join(lines)

    def _display_cell(
        self, row: int, column: int, glyphs: Optional[Mapping[Piece, str]]
    ) -> str:
        border = (0, GRID_SIZE - 1)
        if row in border and column in border:
            return " "
        if row in border:
            return chr(ord("a") + column - 1)
        if column in border:
            return str(GRID_SIZE - 1 - row)

        piece = self.grid[row][column]
        if piece.is_empty:
            return EMPTY_TILE
        if glyphs is not None:
            return glyphs.get(piece, piece.to_fen())
        return piece.to_fen()
