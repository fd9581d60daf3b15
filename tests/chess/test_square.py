"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import BOARD_DIMENSIONS, GRID_SIZE, Square
from src.core.exceptions import InvalidRequestError

ALL_SQUARES = [
    (file, rank, f"{ascii_lowercase[file - 1]}{rank}")
    for file in range(1, 9)
    for rank in range(1, 9)
]


@pytest.mark.parametrize("file, rank, notation", ALL_SQUARES)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 1, rank 1, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank


@pytest.mark.parametrize("file, rank, notation", ALL_SQUARES)
def test_to_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """Test the reverse, so the square on the 1st file and 1st rank should be denoted as a1"""
    square = Square(file, rank)
    assert square.to_algebraic() == notation


def test_from_algebraic_ignores_case() -> None:
    assert Square.from_algebraic("E2") == Square(5, 2)


@pytest.mark.parametrize("notation", ["", "e", "e22", "22", "ee"])
def test_from_algebraic_rejects_garbage(notation: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = Square.from_algebraic(notation)


def test_square_within_bounds() -> None:
    """happy case: pieces within the dimensions of the board"""
    for file in range(1, BOARD_DIMENSIONS[0] + 1):
        for rank in range(1, BOARD_DIMENSIONS[1] + 1):
            square = Square(file, rank)
            assert square.is_within_bounds()


def test_square_out_of_bounds() -> None:
    square = Square(BOARD_DIMENSIONS[0] + 1, BOARD_DIMENSIONS[1] + 1)
    assert not square.is_within_bounds()

    square = Square(0, 0)
    assert not square.is_within_bounds()


@pytest.mark.parametrize(
    "notation, row, column",
    [("a8", 1, 1), ("h8", 1, 8), ("a1", 8, 1), ("h1", 8, 8), ("e2", 7, 5)],
)
def test_grid_index(notation: str, row: int, column: int) -> None:
    """row = 9 - rank, column = file. Row/column 0 and 9 are the border of the grid."""
    square = Square.from_algebraic(notation)
    assert square.to_grid_index() == (row, column)
    assert GRID_SIZE - 1 - square.rank == row


@pytest.mark.parametrize("file, rank, notation", ALL_SQUARES)
def test_grid_index_is_invertible(file: int, rank: int, notation: str) -> None:
    square = Square(file, rank)
    assert Square.from_grid_index(*square.to_grid_index()) == square
