"""
Move Results - Outcome of applying a move.

Rejected moves are not exceptions. The reducer returns a MoveResult
with applied=False, an error code and the unchanged status, so the
caller can keep rendering the same board.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .state import GamePhase, Mark


class MoveError(Enum):
    """Why a move was rejected."""
    INVALID_INDEX = "INVALID_INDEX"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    INACTIVE_SESSION = "INACTIVE_SESSION"
    WRONG_TURN_FOR_AI = "WRONG_TURN_FOR_AI"


@dataclass(frozen=True)
class TerminalStatus:
    """
    Where the game stands.

    One of:
    - NotStarted (no mode selected yet)
    - InProgress
    - WonBy(mark, line)
    - Draw
    """
    phase: GamePhase
    winner: Mark | None = None
    line: tuple[int, int, int] | None = None

    @classmethod
    def not_started(cls) -> TerminalStatus:
        return cls(phase=GamePhase.NOT_STARTED)

    @classmethod
    def in_progress(cls) -> TerminalStatus:
        return cls(phase=GamePhase.IN_PROGRESS)

    @classmethod
    def won_by(cls, mark: Mark, line: tuple[int, int, int]) -> TerminalStatus:
        return cls(phase=GamePhase.WON, winner=mark, line=line)

    @classmethod
    def draw(cls) -> TerminalStatus:
        return cls(phase=GamePhase.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.phase in {GamePhase.WON, GamePhase.DRAW}


@dataclass
class MoveResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move was applied
    - The status after the call (unchanged on rejection)
    - The cell and mark played (if applied)
    - Error details (if rejected)
    """
    applied: bool
    status: TerminalStatus
    index: int | None = None
    mark: Mark | None = None
    error: str | None = None
    error_code: MoveError | None = None

    @classmethod
    def failure(
        cls,
        status: TerminalStatus,
        error: str,
        error_code: MoveError,
    ) -> MoveResult:
        """Create a rejection result."""
        return cls(applied=False, status=status, error=error, error_code=error_code)

    @classmethod
    def success(cls, status: TerminalStatus, index: int, mark: Mark) -> MoveResult:
        """Create a result for an applied move."""
        return cls(applied=True, status=status, index=index, mark=mark)
