"""Requests and Response models exchanged between the transport and the service"""

import re
from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.moves import Move
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import CheckStatus, Status

PieceColor = str
PlayerName = str

# What a player may type to make a move, e.g. "e2 e4" (case-insensitive)
MOVE_PATTERN = re.compile(r"[a-h][1-8] [a-h][1-8]", re.IGNORECASE)


def is_move_notation(value: str) -> bool:
    return MOVE_PATTERN.fullmatch(value.strip()) is not None


# --- REQUEST MODELS ---
class JoinGameRequest(BaseModel):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value.strip()


class MoveRequest(BaseModel):
    player_name: str
    move: str

    @field_validator("move")
    @classmethod
    def validate_move(cls, value: str) -> str:
        if not is_move_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a move. Expected something like 'e2 e4'."
            )
        return value.strip().lower()

    def to_move(self) -> Move:
        return Move.from_coordinates(self.move)


# --- RESPONSE MODELS ---
class JoinResponse(BaseModel):
    player_name: str
    color: PieceColor
    status: Status


class MoveResponse(BaseModel):
    accepted: bool
    message: str
    status: Status
    # How the move left the opponent. Only set when the move was accepted
    opponent_check: Optional[CheckStatus] = None
    winner: Optional[PlayerName] = None


class GameResponse(BaseModel):
    players: dict[PieceColor, PlayerName]
    status: Status
    color_to_move: PieceColor
    position: str
    move_history: list[str]
    winner: Optional[PlayerName] = None
