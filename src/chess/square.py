"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidRequestError

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)

# The board is stored in a grid with one extra row / column on each side, reserved for the axis labels.
GRID_SIZE = BOARD_DIMENSIONS[0] + 2


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square.")
        file = ord(sq[0].lower()) - ord("a") + 1
        rank = int(sq[1])
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )

    def to_grid_index(self) -> tuple[int, int]:
        """(row, column) in the padded grid. Row 1 is the 8th rank, column 1 the a-file."""
        return GRID_SIZE - 1 - self.rank, self.file

    @classmethod
    def from_grid_index(cls, row: int, column: int) -> Square:
        return cls(file=column, rank=GRID_SIZE - 1 - row)

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)
