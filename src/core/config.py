"""Settings for the game server and client (read from the environment, with defaults matching the classic setup)."""

import os
from typing import Self

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "CHESS_"


class ServerConfig(BaseModel):
    host: str = "localhost"
    port: int = Field(default=6174, ge=1, le=65535)
    # Line that ends a transmission after which the receiver is expected to answer
    end_of_message: str = "$$STOP$$"
    # Line that tells the client the game has finished
    end_of_game: str = "$$END$$"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Collect CHESS_HOST, CHESS_PORT, CHESS_LOG_LEVEL (if set). Validation is left to pydantic."""
        overrides = {
            field: os.environ[f"{ENV_PREFIX}{field.upper()}"]
            for field in ("host", "port", "log_level")
            if f"{ENV_PREFIX}{field.upper()}" in os.environ
        }
        return cls.model_validate(overrides)
