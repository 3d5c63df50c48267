"""
Bot Policy - Interface for bot decision-making.

A BotPolicy looks at a board and returns a decision:
- Which cell to play
- Which rule produced it (for UI/debugging)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..engine_core.state import Mark


class MoveRule(Enum):
    """Rule that selected a move, in priority order."""
    WIN = "win"
    BLOCK = "block"
    CENTER = "center"
    CORNER = "corner"
    SIDE = "side"


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The cell to play
    - The rule that fired
    - Explanation (for UI/debugging)
    """
    index: int
    rule: MoveRule
    explanation: str = ""


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy plays one mark and picks exactly one empty cell.
    """

    mark: Mark

    @abstractmethod
    def select_move(self, board: Sequence[Mark]) -> BotDecision:
        """
        Select a cell to play.

        Args:
            board: Current 9-cell board

        Returns:
            BotDecision with the selected cell

        Raises:
            ValueError: if the board has no empty cell
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__
