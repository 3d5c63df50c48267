"""
Rules - Win/draw detection and legal move generation.

Used by:
1. The reducer, after every applied move
2. Bots, to enumerate playable cells
3. The API, to report highlight data for a finished game
"""

from __future__ import annotations
from typing import Sequence

from .state import GameSession, GamePhase, Mark, WINNING_LINES, BOARD_SIZE
from .action import TerminalStatus


def check_win(board: Sequence[Mark]) -> tuple[int, int, int] | None:
    """
    Find a completed line.

    Lines are scanned in WINNING_LINES order and the first one holding
    three identical non-empty marks is returned, so the caller can
    highlight it. Returns None when no line is complete.
    """
    for line in WINNING_LINES:
        a, b, c = line
        if board[a] != Mark.EMPTY and board[a] == board[b] == board[c]:
            return line
    return None


def check_draw(board: Sequence[Mark]) -> bool:
    """
    True when no cell is empty.

    Only meaningful once check_win() has found nothing; the reducer
    always checks for a win first.
    """
    return Mark.EMPTY not in board


def is_valid_index(index: object) -> bool:
    """Integer cell index in 0..8 (bools and negative indices excluded)."""
    return (
        isinstance(index, int)
        and not isinstance(index, bool)
        and 0 <= index < BOARD_SIZE
    )


def legal_moves(session: GameSession) -> list[int]:
    """Cells the current player may play. Empty once the game is over."""
    if not session.active:
        return []
    return session.empty_cells


def is_legal(session: GameSession, index: object) -> bool:
    """Check if a specific cell can be played right now."""
    return (
        session.active
        and is_valid_index(index)
        and session.board[index] == Mark.EMPTY
    )


def terminal_status(session: GameSession | None) -> TerminalStatus:
    """Status of a session as the boundary reports it."""
    if session is None:
        return TerminalStatus.not_started()
    if session.phase == GamePhase.WON:
        return TerminalStatus.won_by(session.winner, session.winning_line)
    if session.phase == GamePhase.DRAW:
        return TerminalStatus.draw()
    return TerminalStatus.in_progress()
