"""
Engine configuration.

Settings can be passed explicitly or read from the environment (prefix TACTICAL_CHESS_).
The library never installs log handlers by itself: a host application calls `configure_logging()` if it wants output.
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, ConfigDict, field_validator

from tactical_chess.chess.board import STANDARD_PLACEMENT
from tactical_chess.core.exceptions import InvalidRequestError
from tactical_chess.core.shared_types import Color

ENV_PREFIX = "TACTICAL_CHESS_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: str = "WARNING"
    starting_placement: str = STANDARD_PLACEMENT
    first_to_move: Color = Color.WHITE

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise InvalidRequestError(
                f"Unknown log level {value!r}. Pick one from {','.join(LOG_LEVELS)}"
            )
        return level

    @field_validator("starting_placement")
    @classmethod
    def validate_placement(cls, value: str) -> str:
        # only the shape is checked here, the Board does the actual parsing
        ranks = value.strip().split("/")
        if len(ranks) != 8:
            raise InvalidRequestError(
                f"Piece placement must contain 8 '/'-separated ranks, got {len(ranks)}."
            )
        return value.strip()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the settings that are present in the environment, defaults for the rest."""
        environ = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field_name in cls.model_fields:
            env_name = f"{ENV_PREFIX}{field_name.upper()}"
            if env_name in environ:
                values[field_name] = environ[env_name]
        return cls.model_validate(values)


def configure_logging(level: str = "WARNING") -> None:
    """Attach a stream handler to the package logger (for hosts / scripts that have no logging setup of their own)."""
    logger = logging.getLogger("tactical_chess")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
