"""
Game State - The board and the session that owns it.

Design principles:
- One owned GameSession value, passed explicitly to every operation
- Mutated in place by the reducer only
- No rendering concerns: the presentation layer reads, never writes
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


BOARD_SIZE = 9

# Rows, columns, then diagonals. Scan order is part of the rules:
# the first matching line is the one reported.
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

CENTER = 4
CORNERS: tuple[int, ...] = (0, 2, 6, 8)
SIDES: tuple[int, ...] = (1, 3, 5, 7)


class Mark(Enum):
    """Contents of a cell."""
    EMPTY = ""
    X = "X"
    O = "O"

    def opposite(self) -> Mark:
        """Get the other player's mark."""
        if self == Mark.X:
            return Mark.O
        if self == Mark.O:
            return Mark.X
        raise ValueError("Empty cell has no opposite mark")


class GameMode(Enum):
    """Who sits on the O side."""
    HUMAN_VS_HUMAN = "human"
    HUMAN_VS_AI = "ai"


class GamePhase(Enum):
    """High-level game phases."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


def empty_board() -> list[Mark]:
    return [Mark.EMPTY] * BOARD_SIZE


@dataclass(frozen=True)
class Move:
    """A mark placed on a cell."""
    index: int
    mark: Mark


@dataclass
class GameSession:
    """
    Complete state of one game.

    Holds the 9-cell board (row-major, 0-8), the player to move,
    the mode chosen for the session and the outcome once terminal.
    X always moves first.
    """
    mode: GameMode
    board: list[Mark] = field(default_factory=empty_board)
    current_player: Mark = Mark.X
    phase: GamePhase = GamePhase.IN_PROGRESS

    # Outcome, set once the game is over
    winner: Mark | None = None
    winning_line: tuple[int, int, int] | None = None

    # Applied moves in order
    moves: list[Move] = field(default_factory=list)

    def __post_init__(self):
        if len(self.board) != BOARD_SIZE:
            raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(self.board)}")

    @property
    def active(self) -> bool:
        """True while moves may be applied."""
        return self.phase == GamePhase.IN_PROGRESS

    @property
    def empty_cells(self) -> list[int]:
        return [i for i, cell in enumerate(self.board) if cell == Mark.EMPTY]

    @property
    def is_full(self) -> bool:
        return Mark.EMPTY not in self.board
