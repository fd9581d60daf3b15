"""
Custom exceptions shared by all layers.

Everything derives from GameError, so the service / transport layers can catch a single type
and decide per subclass whether the session survives.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong in a chess game."""


# --- Recoverable: the player gets a message and is asked again ---
class IllegalMoveError(GameError):
    """The move breaks the rules. The message is shown to the player."""


class NotYourTurnError(GameError):
    """A player tried to move while waiting for the opponent."""


class GameStateError(GameError):
    """Request does not fit the current status of the game (or a rules function was called out of contract)."""


class InvalidRequestError(GameError):
    """Input could not be interpreted (malformed square names etc.)"""


class InvalidFENError(GameError):
    """Position string could not be parsed."""


class SquareOutOfBoundsError(GameError):
    """Asked for a square that is not on the 8x8 board."""


# --- Fatal: the session cannot continue ---
class KingNotFoundError(GameError):
    """A king is missing from the board. Should never happen in normal play."""


class ConnectionLostError(GameError):
    """One of the clients disconnected."""
