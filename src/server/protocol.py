"""
Line based wire format between server and clients.

Every message is a line of UTF-8 text. Two sentinel lines give the stream its structure:
* end_of_message: the transmission is complete and the receiver is expected to answer
* end_of_game: the game is over, nothing more will follow
"""

import logging
import socket
from dataclasses import dataclass
from typing import Callable, Optional

from src.core.config import ServerConfig
from src.core.exceptions import ConnectionLostError

logger = logging.getLogger(__name__)

# What a client sends to resign
QUIT_COMMAND = "quit"


@dataclass
class Transmission:
    lines: list[str]
    game_over: bool


class LineChannel:
    """One end of a connection: write lines, read lines, and understand the sentinels."""

    def __init__(self, sock: socket.socket, config: ServerConfig) -> None:
        self.sock = sock
        self.config = config
        self._reader = sock.makefile("r", encoding="utf-8", newline="\n")
        self._writer = sock.makefile("w", encoding="utf-8", newline="\n")

    def send(self, *messages: str) -> None:
        """Messages may contain newlines (e.g. a rendered board); they are sent as separate lines."""
        try:
            for message in messages:
                for line in message.split("\n"):
                    self._writer.write(f"{line}\n")
            self._writer.flush()
        except OSError as exc:
            raise ConnectionLostError("Failed to write to the other side.") from exc

    def prompt(self) -> None:
        self.send(self.config.end_of_message)

    def finish(self) -> None:
        self.send(self.config.end_of_game)

    def read_line(self) -> str:
        try:
            line = self._reader.readline()
        except OSError as exc:
            raise ConnectionLostError("Failed to read from the other side.") from exc
        if line == "":
            raise ConnectionLostError("The other side closed the connection.")
        return line.rstrip("\r\n")

    def read_transmission(self, on_line: Optional[Callable[[str], None]] = None) -> Transmission:
        """
        Collect lines up to (not including) the next sentinel.
        `on_line` sees every line as soon as it arrives, so nothing is lost when the connection drops mid-transmission.
        """
        lines: list[str] = []
        while True:
            line = self.read_line()
            if line == self.config.end_of_message:
                return Transmission(lines, game_over=False)
            if line == self.config.end_of_game:
                return Transmission(lines, game_over=True)
            lines.append(line)
            if on_line is not None:
                on_line(line)

    def close(self) -> None:
        for stream in (self._reader, self._writer):
            try:
                stream.close()
            except OSError:
                logger.debug("Stream already closed", exc_info=True)
        self.sock.close()
