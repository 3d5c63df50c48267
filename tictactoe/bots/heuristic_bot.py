"""
Heuristic Bot - The Human vs AI opponent.

This bot:
- Wins immediately when it has two in a line
- Otherwise blocks the opponent's two in a line
- Otherwise prefers center, then a random corner, then a random side

The bot does NOT:
- Search the game tree (no minimax)
- See forks more than one move ahead
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence
import logging
import random

from .policy import BotPolicy, BotDecision, MoveRule
from ..engine_core.state import Mark, WINNING_LINES, CENTER, CORNERS, SIDES

logger = logging.getLogger(__name__)


def find_completing_move(board: Sequence[Mark], mark: Mark) -> int | None:
    """
    Find the empty cell that would complete a line for `mark`.

    Lines are scanned in WINNING_LINES order. Within a line (a, b, c)
    the gap is looked for at c, then b, then a. Returns None if no line
    has two of `mark` and one empty cell.
    """
    for a, b, c in WINNING_LINES:
        if board[a] == mark and board[b] == mark and board[c] == Mark.EMPTY:
            return c
        if board[a] == mark and board[c] == mark and board[b] == Mark.EMPTY:
            return b
        if board[b] == mark and board[c] == mark and board[a] == Mark.EMPTY:
            return a
    return None


@dataclass
class HeuristicBot(BotPolicy):
    """
    Fixed-priority one-ply bot.

    Usage:
        bot = HeuristicBot(rng=random.Random(7))
        decision = bot.select_move(session.board)
        apply_move(session, decision.index)

    The rng is only consulted for corner and side tie-breaks, so a
    seeded or stubbed Random makes every choice reproducible.
    """
    mark: Mark = Mark.O
    rng: random.Random = field(default_factory=random.Random)

    def select_move(self, board: Sequence[Mark]) -> BotDecision:
        if Mark.EMPTY not in board:
            raise ValueError("No empty cells available")

        opponent = self.mark.opposite()

        win = find_completing_move(board, self.mark)
        if win is not None:
            return self._decide(win, MoveRule.WIN, f"Completes a line for {self.mark.value}")

        block = find_completing_move(board, opponent)
        if block is not None:
            return self._decide(block, MoveRule.BLOCK, f"Blocks a line for {opponent.value}")

        if board[CENTER] == Mark.EMPTY:
            return self._decide(CENTER, MoveRule.CENTER, "Center is free")

        corners = [i for i in CORNERS if board[i] == Mark.EMPTY]
        if corners:
            return self._decide(self.rng.choice(corners), MoveRule.CORNER, "Random free corner")

        sides = [i for i in SIDES if board[i] == Mark.EMPTY]
        return self._decide(self.rng.choice(sides), MoveRule.SIDE, "Random free side")

    def _decide(self, index: int, rule: MoveRule, explanation: str) -> BotDecision:
        logger.debug("%s plays %d (%s)", self.get_name(), index, rule.value)
        return BotDecision(index=index, rule=rule, explanation=explanation)
