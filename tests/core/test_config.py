"""Unit tests for tactical_chess/core/config.py"""

import logging
from typing import Iterator

import pytest
from pydantic import ValidationError

from tactical_chess.chess.board import STANDARD_PLACEMENT
from tactical_chess.core.config import EngineSettings, configure_logging
from tactical_chess.core.exceptions import InvalidRequestError
from tactical_chess.core.shared_types import Color


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Package logger, restored to its original state at teardown."""
    logger = logging.getLogger("tactical_chess")
    handlers = list(logger.handlers)
    level = logger.level
    try:
        yield logger
    finally:
        logger.handlers = handlers
        logger.setLevel(level)


def test_defaults() -> None:
    settings = EngineSettings()
    assert settings.log_level == "WARNING"
    assert settings.starting_placement == STANDARD_PLACEMENT
    assert settings.first_to_move == Color.WHITE


def test_from_env() -> None:
    environ = {
        "TACTICAL_CHESS_LOG_LEVEL": "info",
        "TACTICAL_CHESS_STARTING_PLACEMENT": "K7/8/8/8/4N3/8/6pp/6pk",
        "TACTICAL_CHESS_FIRST_TO_MOVE": "black",
        "UNRELATED": "ignored",
    }
    settings = EngineSettings.from_env(environ)
    assert settings.log_level == "INFO"
    assert settings.starting_placement == "K7/8/8/8/4N3/8/6pp/6pk"
    assert settings.first_to_move == Color.BLACK


def test_from_env_empty() -> None:
    assert EngineSettings.from_env({}) == EngineSettings()


def test_from_process_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TACTICAL_CHESS_LOG_LEVEL", "error")
    assert EngineSettings.from_env().log_level == "ERROR"


def test_invalid_log_level() -> None:
    with pytest.raises(InvalidRequestError):
        EngineSettings(log_level="loud")


def test_invalid_placement_shape() -> None:
    with pytest.raises(InvalidRequestError):
        EngineSettings(starting_placement="8/8/8")


def test_settings_frozen() -> None:
    settings = EngineSettings()
    with pytest.raises(ValidationError):
        settings.log_level = "DEBUG"  # type: ignore[misc]


def test_configure_logging(package_logger: logging.Logger) -> None:
    package_logger.handlers = []
    configure_logging("DEBUG")
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1

    # calling twice does not stack handlers
    configure_logging("INFO")
    assert package_logger.level == logging.INFO
    assert len(package_logger.handlers) == 1
