"""
The game server: accepts two players over TCP and referees the game between them.

The first client to connect plays white, the second black. Players strictly alternate:
only the player to move is ever asked for input.
"""

import logging
import socket
from typing import Optional

from pydantic import ValidationError

from src.api.models import JoinGameRequest, MoveRequest
from src.chess.pieces import Color
from src.core.config import ServerConfig
from src.core.exceptions import ConnectionLostError, InvalidRequestError, KingNotFoundError
from src.core.logging_setup import configure_logging
from src.core.shared_types import CheckStatus, Status
from src.server.protocol import QUIT_COMMAND, LineChannel
from src.server.rendering import render_board
from src.services.chess_service import ChessService

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 80
PLAYER_NAMES: dict[Color, str] = {Color.WHITE: "Player 1", Color.BLACK: "Player 2"}


class GameServer:
    def __init__(self, config: ServerConfig, service: Optional[ChessService] = None) -> None:
        self.config = config
        self.service = service if service is not None else ChessService()

    def serve(self) -> None:
        """Wait for two players, play one game, shut down."""
        logger.info("Starting server on %s:%d", self.config.host, self.config.port)
        with socket.create_server((self.config.host, self.config.port)) as listener:
            logger.info("Waiting for first client to connect...")
            white = self._accept(listener)
            white.send("Connection to server successful. Waiting for opponent to connect...")

            logger.info("Waiting for second client to connect...")
            try:
                black = self._accept(listener)
            except OSError:
                white.send("Failed to connect to opponent. Closing server.")
                white.finish()
                white.close()
                raise

            try:
                self.run_session({Color.WHITE: white, Color.BLACK: black})
            finally:
                white.close()
                black.close()
        logger.info("Closing server...")

    def run_session(self, channels: dict[Color, LineChannel]) -> None:
        """Play one game over already connected channels."""
        for color in (Color.WHITE, Color.BLACK):
            self.service.join(JoinGameRequest(player_name=PLAYER_NAMES[color]))

        channels[Color.WHITE].send(f"Opponent connected. Starting Game...\n{SEPARATOR}")
        channels[Color.BLACK].send(f"Connected to server. Starting Game...\n{SEPARATOR}")
        logger.info("Starting game...")

        try:
            while not self.service.is_finished():
                self._play_turn(channels)
        except ConnectionLostError:
            logger.error("A client disconnected. Aborting the game.")
            self.service.abort()
            self._broadcast_safely(channels, "Connection to opponent lost. Game aborted.")
            return
        except KingNotFoundError:
            logger.exception("Board lost a king. Aborting the game.")
            self.service.abort()
            self._broadcast_safely(channels, "Server error: the game cannot continue.")
            return

        self._announce_result(channels)

    # -- turn handling --
    def _play_turn(self, channels: dict[Color, LineChannel]) -> None:
        game = self.service.game
        assert game is not None
        mover = game.color_to_move
        opponent = mover.opponent

        self._send_boards(channels)
        channels[opponent].send("Waiting for opponent to move...")

        player_name = PLAYER_NAMES[mover]
        channels[mover].send("Your move.")
        while True:
            channels[mover].prompt()
            line = channels[mover].read_line()

            if line.strip().lower() == QUIT_COMMAND:
                self.service.resign(player_name)
                return

            try:
                request = MoveRequest(player_name=player_name, move=line)
            except (InvalidRequestError, ValidationError):
                channels[mover].send("TRY AGAIN: input was invalid")
                continue

            response = self.service.submit_move(request)
            if not response.accepted:
                channels[mover].send(response.message)
                continue

            channels[opponent].send(f"Opponent played {request.move}.")
            if response.opponent_check == CheckStatus.IN_CHECK:
                channels[opponent].send("Check! Your king is under attack.")
            return

    def _send_boards(self, channels: dict[Color, LineChannel]) -> None:
        for color, channel in channels.items():
            channel.send(render_board(self.service.board, color))

    def _announce_result(self, channels: dict[Color, LineChannel]) -> None:
        state = self.service.game_state()
        self._send_boards(channels)
        if state.status == Status.CHECKMATE:
            message = f"Checkmate! {state.winner} wins."
        elif state.status == Status.STALEMATE:
            message = "Stalemate. The game is a draw."
        elif state.status == Status.RESIGNED:
            message = f"Resignation. {state.winner} wins."
        else:
            message = f"Game over ({state.status})."
        logger.info(message)
        for channel in channels.values():
            channel.send(message, "Closing server...")
            channel.finish()

    def _broadcast_safely(self, channels: dict[Color, LineChannel], message: str) -> None:
        """Tell whoever is still listening. The other side may be gone already."""
        for color, channel in channels.items():
            try:
                channel.send(message)
                channel.finish()
            except ConnectionLostError:
                logger.info("Could not notify %s", color.name.lower())

    def _accept(self, listener: socket.socket) -> LineChannel:
        sock, address = listener.accept()
        logger.info("Client connected from %s", address)
        return LineChannel(sock, self.config)


def main() -> None:
    config = ServerConfig.from_env()
    configure_logging(config.log_level)
    GameServer(config).serve()


if __name__ == "__main__":
    main()
