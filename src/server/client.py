"""Terminal client: shows what the server sends and asks the player for a move when it is their turn."""

import logging
import socket
from typing import Callable

from src.api.models import is_move_notation
from src.core.config import ServerConfig
from src.core.exceptions import ConnectionLostError
from src.core.logging_setup import configure_logging
from src.server.protocol import QUIT_COMMAND, LineChannel

logger = logging.getLogger(__name__)

HELP_TEXT = "\n".join(
    [
        "=" * 58,
        "The accepted format of a move is:",
        "\t$ current_tile new_tile     (e.g. e2 e4)",
        "Type 'resign' to give up the game.",
        "=" * 58,
    ]
)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class ChessClient:
    def __init__(
        self,
        config: ServerConfig,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
    ) -> None:
        self.config = config
        self.input = input_fn
        self.output = output_fn

    def run(self) -> None:
        sock = socket.create_connection((self.config.host, self.config.port))
        channel = LineChannel(sock, self.config)
        try:
            self.play(channel)
        except ConnectionLostError:
            self.output("ERROR: lost connection to the server.")
        finally:
            channel.close()

    def play(self, channel: LineChannel) -> None:
        """Print every transmission. When the server waits for us, send a move (or resign)."""
        while True:
            transmission = channel.read_transmission(on_line=self.output)
            if transmission.game_over:
                return
            channel.send(self.ask_for_input())

    def ask_for_input(self) -> str:
        """Keep asking until the player typed something worth sending to the server."""
        while True:
            user_input = self.input("Enter move: ").strip()
            command = user_input.lower()

            if command == "help":
                self.output(HELP_TEXT)
                continue

            if command == "resign":
                confirmation = self.input(
                    "Are you sure you want to resign (enter 'yes' to confirm)? "
                )
                if confirmation.strip().lower() == "yes":
                    self.output("Resigning game...")
                    return QUIT_COMMAND
                continue

            if is_move_notation(user_input):
                return user_input

            self.output("TRY AGAIN: input was invalid")


def main() -> None:
    config = ServerConfig.from_env()
    configure_logging(config.log_level)
    try:
        ChessClient(config).run()
    except OSError:
        logger.error("Failed to connect to %s:%d", config.host, config.port)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
