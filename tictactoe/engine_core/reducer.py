"""
Reducer - Applies moves to a game session.

The reducer is the single point of board mutation.
All moves must go through apply().

Design principles:
- Validates before applying; a rejected move changes nothing
- Returns MoveResult with applied/rejected and the resulting status
- Checks for a win before a draw after every move
- Switches the player only while the game stays in progress
"""

from __future__ import annotations
import logging

from .state import GameSession, GameMode, GamePhase, Mark, Move, empty_board
from .action import MoveError, MoveResult
from .rules import check_win, check_draw, is_valid_index, terminal_status

logger = logging.getLogger(__name__)


class Reducer:
    """
    Reducer applies moves to game sessions.

    Stateless - all state is in GameSession.
    """

    def reset(self, mode: GameMode) -> GameSession:
        """Create a fresh session: empty board, X to move, in progress."""
        session = GameSession(mode=GameMode(mode))
        logger.debug("New %s session", session.mode.value)
        return session

    def restart(self, session: GameSession) -> GameSession:
        """Re-initialize a session in place, keeping its mode."""
        session.board = empty_board()
        session.current_player = Mark.X
        session.phase = GamePhase.IN_PROGRESS
        session.winner = None
        session.winning_line = None
        session.moves = []
        logger.debug("Restarted %s session", session.mode.value)
        return session

    def apply(self, session: GameSession, index: int) -> MoveResult:
        """
        Apply a move for the current player.

        Returns MoveResult; on rejection the session is untouched.
        """
        rejection = self._validate_move(session, index)
        if rejection:
            error, code = rejection
            logger.debug("Rejected move %r: %s", index, error)
            return MoveResult.failure(terminal_status(session), error, code)

        mark = session.current_player
        session.board[index] = mark
        session.moves.append(Move(index=index, mark=mark))

        self._update_phase(session)
        return MoveResult.success(terminal_status(session), index=index, mark=mark)

    def _validate_move(
        self,
        session: GameSession,
        index: int,
    ) -> tuple[str, MoveError] | None:
        """
        Validate that a move is legal in the current state.

        Returns (message, code) if invalid, None if valid.
        """
        if not session.active:
            return "Game is over - no moves allowed", MoveError.INACTIVE_SESSION

        if not is_valid_index(index):
            return f"Invalid cell {index!r}. Must be 0-8.", MoveError.INVALID_INDEX

        if session.board[index] != Mark.EMPTY:
            return (
                f"Cell {index} is already occupied by {session.board[index].value}",
                MoveError.CELL_OCCUPIED,
            )

        return None

    def _update_phase(self, session: GameSession):
        """Win first, then draw, otherwise hand the turn over."""
        line = check_win(session.board)
        if line is not None:
            session.phase = GamePhase.WON
            session.winner = session.current_player
            session.winning_line = line
            logger.info("Player %s won on line %s", session.winner.value, line)
            return

        if check_draw(session.board):
            session.phase = GamePhase.DRAW
            logger.info("Game ended in a draw")
            return

        session.current_player = session.current_player.opposite()


def new_session(mode: GameMode) -> GameSession:
    """Convenience function to start a session for a mode."""
    return Reducer().reset(mode)


def reset_session(session: GameSession) -> GameSession:
    """Convenience function to restart a session with the same mode."""
    return Reducer().restart(session)


def apply_move(session: GameSession, index: int) -> MoveResult:
    """
    Convenience function to apply a move.

    Creates a Reducer and applies the move.
    """
    return Reducer().apply(session, index)
