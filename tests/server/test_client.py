"""Unit tests for src/server/client.py"""

import socket
from typing import Iterator

import pytest

from src.core.config import ServerConfig
from src.server import client as client_module
from src.server.client import HELP_TEXT, ChessClient
from src.server.protocol import QUIT_COMMAND, LineChannel


class FakeTerminal:
    """Replays typed lines and records everything printed."""

    def __init__(self, typed: list[str]) -> None:
        self._typed: Iterator[str] = iter(typed)
        self.prompts: list[str] = []
        self.printed: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return next(self._typed)

    def print(self, text: str) -> None:
        self.printed.append(text)


def make_client(typed: list[str]) -> tuple[ChessClient, FakeTerminal]:
    terminal = FakeTerminal(typed)
    return ChessClient(ServerConfig(), input_fn=terminal.input, output_fn=terminal.print), terminal


# --- INPUT ---
@pytest.mark.parametrize("typed", ["e2 e4", "  e2 e4 ", "E2 E4"])
def test_valid_move_is_returned(typed: str) -> None:
    client, _ = make_client([typed])
    assert client.ask_for_input() == typed.strip()


def test_asks_again_on_invalid_input() -> None:
    client, terminal = make_client(["e2e4", "castle", "g1 f3"])
    assert client.ask_for_input() == "g1 f3"
    assert terminal.printed == ["TRY AGAIN: input was invalid"] * 2
    assert len(terminal.prompts) == 3


def test_help() -> None:
    client, terminal = make_client(["help", "e2 e4"])
    assert client.ask_for_input() == "e2 e4"
    assert terminal.printed == [HELP_TEXT]


def test_resign_needs_confirmation() -> None:
    client, terminal = make_client(["resign", "no", "resign", "YES"])
    assert client.ask_for_input() == QUIT_COMMAND
    assert terminal.printed == ["Resigning game..."]
    assert len(terminal.prompts) == 4


# --- TALKING TO THE SERVER ---
@pytest.fixture
def server_end() -> Iterator[tuple[LineChannel, socket.socket]]:
    """Server side of a connection, plus the client's socket"""
    server_sock, client_sock = socket.socketpair()
    channel = LineChannel(server_sock, ServerConfig())
    yield channel, client_sock
    channel.close()
    client_sock.close()


def test_play_answers_prompts(server_end: tuple[LineChannel, socket.socket]) -> None:
    server, client_sock = server_end
    server.send("board", "Your move.")
    server.prompt()
    server.send("Checkmate! Player 1 wins.")
    server.finish()

    client, terminal = make_client(["e2 e4"])
    client_channel = LineChannel(client_sock, client.config)
    client.play(client_channel)

    assert terminal.printed == ["board", "Your move.", "Checkmate! Player 1 wins."]
    assert server.read_line() == "e2 e4"


def test_run_reports_lost_connection(
    server_end: tuple[LineChannel, socket.socket], monkeypatch: pytest.MonkeyPatch
) -> None:
    server, client_sock = server_end
    server.send("Connection to server successful. Waiting for opponent to connect...")
    server.close()
    monkeypatch.setattr(client_module.socket, "create_connection", lambda address: client_sock)

    client, terminal = make_client([])
    client.run()

    assert terminal.printed == [
        "Connection to server successful. Waiting for opponent to connect...",
        "ERROR: lost connection to the server.",
    ]
