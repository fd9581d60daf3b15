"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn:
whose turn it is, whether the requested move is allowed, and what the move means for the opponent
(check, checkmate, stalemate). The service layer passes this information onwards to the players.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.board import Board
from src.chess.executor import MoveExecutor
from src.chess.moves import Move, rejection_reason
from src.chess.pieces import Color
from src.chess.resolver import classify, has_any_legal_move, is_in_check
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    KingNotFoundError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import FINISHED_STATUSES, CheckStatus, Status

logger = logging.getLogger(__name__)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: dict[Color, str]
    status: Status
    color_to_move: Color = Color.WHITE
    moves: list[Move] = field(default_factory=list)
    resigned: Optional[Color] = None
    executor: MoveExecutor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.executor = MoveExecutor(self.board)

    @classmethod
    def new_game(cls, player: str, board: Optional[Board] = None) -> Self:
        """The first player to arrive plays with the white pieces and waits for an opponent."""
        return cls(
            board=board if board is not None else Board.new_board(),
            players={Color.WHITE: player},
            status=Status.WAITING_FOR_PLAYERS,
        )

    def to_model(self) -> GameModel:
        """Encode into the format the Service layer uses"""
        return GameModel(
            position_fen=self.board.to_fen(),
            color_to_move=self.color_to_move.name.lower(),
            moves_uci=[move.to_uci() for move in self.moves],
            registered_players={
                color.name.lower(): name for color, name in self.players.items()
            },
            status=self.status.value,
            winner=self.winner,
        )

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_STATUSES

    @property
    def winner(self) -> Optional[str]:
        """
        Checkmate: the player who is to move got mated, so the opponent wins.
        Resignation: the opponent of the player who resigned wins.
        """
        if self.status == Status.CHECKMATE:
            return self.players.get(self.color_to_move.opponent)
        if self.status == Status.RESIGNED and self.resigned is not None:
            return self.players.get(self.resigned.opponent)
        return None

    def register_player(self, player: str) -> Color:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Player name {player!r} is already taken.")

        self.players[Color.BLACK] = player
        self._change_status(Status.IN_PROGRESS)
        return Color.BLACK

    def player_color(self, player: str) -> Color:
        try:
            return next(color for color, name in self.players.items() if name == player)
        except StopIteration:
            raise GameStateError(f"Player {player!r} is not part of this game.") from None

    def make_move(self, move: Move, player: str) -> CheckStatus:
        """
        Attempt to make a move
        -----

        1. game must be in progress, and it must be your turn
        2. the piece must be yours and allowed to make this move
        3. commit the move. If it leaves your own king in check, take it back and refuse.
        4. pass the turn and check what the move did to the opponent (check? checkmate? stalemate?)

        Returns the check status of the opponent after the move.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)

        player_color = self.color_to_move
        reason = rejection_reason(self.board, move, player_color)
        if reason is not None:
            raise IllegalMoveError(reason)

        self.executor.commit(move)
        try:
            leaves_king_in_check = is_in_check(self.board, player_color)
        except KingNotFoundError:
            self.executor.undo()
            raise
        if leaves_king_in_check:
            self.executor.undo()
            raise IllegalMoveError("Invalid Move: that move leaves your king in check.")

        self.moves.append(move)
        self.color_to_move = player_color.opponent
        logger.info("%s played %s", player, move.to_uci())

        return self._update_game_status()

    def resign(self, player: str) -> None:
        self._assert_in_progress()
        self.resigned = self.player_color(player)
        self._change_status(Status.RESIGNED)

    def abort(self) -> None:
        """Connection lost: the game cannot continue."""
        if not self.is_finished:
            self._change_status(Status.ABORTED)

    def check_status(self, color: Color) -> CheckStatus:
        return classify(self.board, color)

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before making a move."""
        player_to_move = self.players[self.color_to_move]
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _update_game_status(self) -> CheckStatus:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the turn has already passed. At this point the color to move is the opponent of the player who made the move.
        """
        next_color = self.color_to_move
        opponent_status = classify(self.board, next_color)

        if opponent_status == CheckStatus.CHECKMATE:
            self._change_status(Status.CHECKMATE)
        elif opponent_status == CheckStatus.NOT_IN_CHECK and not has_any_legal_move(
            self.board, next_color
        ):
            self._change_status(Status.STALEMATE)

        return opponent_status

    def _change_status(self, new_status: Status) -> None:
        logger.info("Game status: %s -> %s", self.status, new_status)
        self.status = new_status
