"""Unit tests for src/api/models.py"""

import pytest

from src.api.models import JoinGameRequest, MoveRequest, is_move_notation
from src.chess.moves import Move
from src.chess.square import Square
from src.core.exceptions import InvalidRequestError


# -- Validation - JoinGameRequest --
def test_player_name_is_stripped() -> None:
    request = JoinGameRequest(player_name="  Player 1 ")
    assert request.player_name == "Player 1"


@pytest.mark.parametrize("invalid_name", ["", "   ", "\t\n"])
def test_empty_player_name(invalid_name: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = JoinGameRequest(player_name=invalid_name)


# -- Validation - MoveRequest --
@pytest.mark.parametrize(
    "text, expected",
    [
        ("e2 e4", "e2 e4"),
        ("E2 E4", "e2 e4"),
        ("  a7 a8\n", "a7 a8"),
        ("h1 h1", "h1 h1"),  # well formed, refusing it is the rules engine's job
    ],
)
def test_valid_move_notation(text: str, expected: str) -> None:
    request = MoveRequest(player_name="Player 1", move=text)
    assert request.move == expected


@pytest.mark.parametrize(
    "invalid_move",
    [
        "",
        "e2e4",
        "e2  e4",
        "e2 e9",
        "i2 e4",
        "e2 e4 e5",
        "quit",
        "Ke2",
    ],
)
def test_invalid_move_notation(invalid_move: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(player_name="Player 1", move=invalid_move)
    assert not is_move_notation(invalid_move)


def test_move_request_to_move() -> None:
    request = MoveRequest(player_name="Player 1", move="G1 F3")
    assert request.to_move() == Move(Square.from_algebraic("g1"), Square.from_algebraic("f3"))
