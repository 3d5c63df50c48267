"""
Bots module - AI opponent implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- BotDecision: The chosen cell and the rule that chose it
- HeuristicBot: Fixed-priority one-ply opponent
"""

from .policy import BotPolicy, BotDecision, MoveRule
from .heuristic_bot import HeuristicBot, find_completing_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "MoveRule",
    "HeuristicBot",
    "find_completing_move",
]
