"""Orchestration of communication from the transport layer to the game logic (and the reverse direction)."""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    JoinGameRequest,
    JoinResponse,
    MoveRequest,
    MoveResponse,
)
from src.chess.board import Board
from src.chess.game import Game
from src.chess.pieces import Color
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Status

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for one chess game. The game only lives in memory."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game

    @property
    def board(self) -> Board:
        return self._require_game().board

    # -- transport logic ---
    def join(self, request: JoinGameRequest) -> JoinResponse:
        """First player creates the game (and gets white), the second one joins it (black)."""
        if self.game is None:
            self.game = Game.new_game(player=request.player_name)
            color = Color.WHITE
        else:
            color = self.game.register_player(request.player_name)

        logger.info("%s joined as %s", request.player_name, color.name.lower())
        return JoinResponse(
            player_name=request.player_name,
            color=color.name.lower(),
            status=self.game.status,
        )

    def submit_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        Refused moves are not errors for the session: the response carries the reason and the player can try again.
        """
        game = self._require_game()
        try:
            opponent_check = game.make_move(request.to_move(), request.player_name)
        except (IllegalMoveError, NotYourTurnError, GameStateError, InvalidRequestError) as exc:
            logger.info("Move %r by %s refused: %s", request.move, request.player_name, exc)
            return MoveResponse(accepted=False, message=str(exc), status=game.status)

        return MoveResponse(
            accepted=True,
            message=f"{request.player_name} played {request.move}.",
            status=game.status,
            opponent_check=opponent_check,
            winner=game.winner,
        )

    def resign(self, player_name: str) -> GameResponse:
        game = self._require_game()
        game.resign(player_name)
        logger.info("%s resigned", player_name)
        return self.game_state()

    def abort(self) -> GameResponse:
        """A player got disconnected."""
        game = self._require_game()
        game.abort()
        return self.game_state()

    def game_state(self) -> GameResponse:
        return self._create_game_response(self._require_game().to_model())

    def player_to_move(self) -> str:
        game = self._require_game()
        return game.players[game.color_to_move]

    def is_finished(self) -> bool:
        return self.game is not None and self.game.is_finished

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        return GameResponse(
            players=model.registered_players,
            status=Status(model.status),
            color_to_move=model.color_to_move,
            position=model.position_fen,
            move_history=model.moves_uci,
            winner=model.winner,
        )

    def _require_game(self) -> Game:
        if self.game is None:
            raise GameStateError("No game has been created yet.")
        return self.game
