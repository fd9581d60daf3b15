"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The transport (higher) and domain (lower) layers both use the model(s) defined here to pass a game across boundaries.
(Decouples what the transport needs to know from the domain objects.)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between Service, Game, and transport layers."""

    position_fen: str
    color_to_move: PieceColor
    moves_uci: list[str]
    registered_players: dict[PieceColor, PlayerName]
    status: str
    winner: Optional[PlayerName] = None
