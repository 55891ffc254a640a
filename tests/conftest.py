"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from tactical_chess.chess.engine import RulesEngine
from tactical_chess.chess.pieces import Color


@pytest.fixture
def engine() -> RulesEngine:
    """Fresh game in the standard opening layout."""
    return RulesEngine()


@pytest.fixture
def engine_from() -> Callable[..., RulesEngine]:
    """Call the inner function with a piece placement (and optionally the side to move)"""

    def _create_engine(
        placement: str, side_to_move: Color = Color.WHITE
    ) -> RulesEngine:
        return RulesEngine.from_placement(placement, side_to_move=side_to_move)

    return _create_engine
