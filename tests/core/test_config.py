"""Unit tests for src/core/config.py"""

import pytest
from pydantic import ValidationError

from src.core.config import ServerConfig


def test_defaults() -> None:
    config = ServerConfig()
    assert config.host == "localhost"
    assert config.port == 6174
    assert config.end_of_message == "$$STOP$$"
    assert config.end_of_game == "$$END$$"
    assert config.log_level == "INFO"


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_HOST", "0.0.0.0")
    monkeypatch.setenv("CHESS_PORT", "7000")
    monkeypatch.setenv("CHESS_LOG_LEVEL", "debug")
    config = ServerConfig.from_env()
    assert config.host == "0.0.0.0"
    assert config.port == 7000
    assert config.log_level == "DEBUG"


def test_from_env_without_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CHESS_HOST", "CHESS_PORT", "CHESS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    assert ServerConfig.from_env() == ServerConfig()


@pytest.mark.parametrize("port", ["0", "70000", "not a port"])
def test_invalid_port(monkeypatch: pytest.MonkeyPatch, port: str) -> None:
    monkeypatch.setenv("CHESS_PORT", port)
    with pytest.raises(ValidationError):
        _ = ServerConfig.from_env()


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError):
        _ = ServerConfig(log_level="chatty")
