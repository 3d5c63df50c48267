"""
Pytest fixtures for TicTacToe tests.
"""

import random

import pytest

from ..engine_core.state import GameSession, GameMode, Mark
from ..bots import HeuristicBot
from ..session import GameLoop


def make_board(text: str) -> list[Mark]:
    """
    Build a board from a 9-character string.

    'X' and 'O' are marks, anything else ('.', '-', ' ') is empty.
    """
    cells = text.replace("\n", "")
    assert len(cells) == 9, f"Board text must have 9 cells: {text!r}"
    return [Mark(c) if c in ("X", "O") else Mark.EMPTY for c in cells]


class FirstChoice:
    """Random stand-in that always picks the first candidate."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    """Random stand-in that always picks the last candidate."""

    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def board_from():
    """Factory turning board text into a list of marks."""
    return make_board


@pytest.fixture
def human_session() -> GameSession:
    """A fresh Human vs Human session."""
    return GameSession(mode=GameMode.HUMAN_VS_HUMAN)


@pytest.fixture
def ai_session() -> GameSession:
    """A fresh Human vs AI session."""
    return GameSession(mode=GameMode.HUMAN_VS_AI)


@pytest.fixture
def bot() -> HeuristicBot:
    """Heuristic bot playing O with a seeded random source."""
    return HeuristicBot(rng=random.Random(1234))


@pytest.fixture
def ai_loop(bot) -> GameLoop:
    """GameLoop with a Human vs AI game started."""
    loop = GameLoop(bot=bot)
    loop.start_session(GameMode.HUMAN_VS_AI)
    return loop


@pytest.fixture
def human_loop() -> GameLoop:
    """GameLoop with a Human vs Human game started."""
    loop = GameLoop()
    loop.start_session(GameMode.HUMAN_VS_HUMAN)
    return loop
