"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square

BoardBuilder = Callable[[dict[str, str]], Board]


@pytest.fixture
def board_with() -> BoardBuilder:
    """
    Call the inner function with a mapping of square name -> FEN letter, e.g. {"e1": "K", "e8": "k"}
    Upper case: white pieces, lower case: black pieces. All other squares are empty.
    """

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, fen_char in pieces.items():
            board.place_piece(Piece.from_fen(fen_char), Square.from_algebraic(square_name))
        return board

    return _create_board
