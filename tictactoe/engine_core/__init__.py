"""
Engine Core - Board state and rule evaluation.

The engine is the runtime that:
1. Creates a GameSession for a mode
2. Validates and applies moves via the reducer
3. Detects wins and draws after every move
4. Reports a terminal status the presentation layer can render
"""

from .state import (
    GameSession,
    GameMode,
    GamePhase,
    Mark,
    Move,
    WINNING_LINES,
    CENTER,
    CORNERS,
    SIDES,
    BOARD_SIZE,
)
from .action import MoveError, MoveResult, TerminalStatus
from .rules import check_win, check_draw, legal_moves, is_legal, terminal_status
from .reducer import Reducer, new_session, reset_session, apply_move

__all__ = [
    "GameSession",
    "GameMode",
    "GamePhase",
    "Mark",
    "Move",
    "WINNING_LINES",
    "CENTER",
    "CORNERS",
    "SIDES",
    "BOARD_SIZE",
    "MoveError",
    "MoveResult",
    "TerminalStatus",
    "check_win",
    "check_draw",
    "legal_moves",
    "is_legal",
    "terminal_status",
    "Reducer",
    "new_session",
    "reset_session",
    "apply_move",
]
