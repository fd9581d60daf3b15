"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    RESIGNED = "resigned"
    ABORTED = "aborted"


# Statuses after which no more moves are accepted
FINISHED_STATUSES: frozenset[Status] = frozenset(
    {Status.CHECKMATE, Status.STALEMATE, Status.RESIGNED, Status.ABORTED}
)


class CheckStatus(StrEnum):
    """Result of asking the rules engine about the king of one color."""

    NOT_IN_CHECK = "not in check"
    IN_CHECK = "in check"
    CHECKMATE = "checkmate"
