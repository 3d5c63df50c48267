"""
Game Loop - The boundary a front end drives.

The loop:
1. Player picks a mode -> start_session()
2. Player clicks a cell -> submit_move()
3. In Human vs AI, once it is O's turn, the front end waits its pacing
   delay and calls request_ai_move()
4. Repeat until a win or draw; reset_session() starts over, same mode

Every call returns a TurnResult. Rejected calls are no-ops that carry
an error code and the unchanged status.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..engine_core.state import GameSession, GameMode, GamePhase, Mark
from ..engine_core.action import MoveError, MoveResult, TerminalStatus
from ..engine_core.reducer import Reducer
from ..engine_core.rules import terminal_status
from ..bots import BotPolicy, HeuristicBot, MoveRule

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """
    Result of one boundary call.

    Contains:
    - Whether a move was applied (always True for start/reset)
    - The status after the call
    - The cell and mark played, and the bot rule if the AI moved
    - Error details for a rejected call
    - Whether the AI is now due to move
    """
    applied: bool
    status: TerminalStatus
    index: int | None = None
    mark: Mark | None = None
    rule: MoveRule | None = None
    error: str | None = None
    error_code: MoveError | None = None
    ai_to_move: bool = False

    @classmethod
    def from_move(
        cls,
        result: MoveResult,
        ai_to_move: bool,
        rule: MoveRule | None = None,
    ) -> TurnResult:
        return cls(
            applied=result.applied,
            status=result.status,
            index=result.index,
            mark=result.mark,
            rule=rule,
            error=result.error,
            error_code=result.error_code,
            ai_to_move=ai_to_move,
        )


def status_message(game: GameSession | None) -> str:
    """Status line shown above the board."""
    if game is None:
        return "Select game mode to start"
    if game.phase == GamePhase.WON:
        return f"Player {game.winner.value} has won!"
    if game.phase == GamePhase.DRAW:
        return "Game ended in a draw!"
    return f"It's {game.current_player.value}'s turn"


def turn_indicator(mode: GameMode | None) -> str:
    """Who plays which mark."""
    if mode is None:
        return ""
    opponent = "AI" if mode == GameMode.HUMAN_VS_AI else "Player 2"
    return f"Player X: You | Player O: {opponent}"


class GameLoop:
    """
    The main game driver.

    Usage:
        loop = GameLoop()
        loop.start_session(GameMode.HUMAN_VS_AI)

        result = loop.submit_move(0)
        if result.ai_to_move:
            # after the pacing delay
            result = loop.request_ai_move()

    The loop owns at most one GameSession. Callers must serialize calls.
    """

    def __init__(self, bot: BotPolicy | None = None, reducer: Reducer | None = None):
        self.reducer = reducer or Reducer()
        self.bot = bot or HeuristicBot()
        self.game: GameSession | None = None

    @property
    def mode(self) -> GameMode | None:
        return self.game.mode if self.game else None

    @property
    def status(self) -> TerminalStatus:
        return terminal_status(self.game)

    def is_ai_turn(self) -> bool:
        """True when the bot is due to move in a live Human vs AI game."""
        return (
            self.game is not None
            and self.game.active
            and self.game.mode == GameMode.HUMAN_VS_AI
            and self.game.current_player == self.bot.mark
        )

    def start_session(self, mode: GameMode) -> TurnResult:
        """Start a new game in `mode`, replacing any current one."""
        self.game = self.reducer.reset(mode)
        logger.info("Started %s session", self.game.mode.value)
        return TurnResult(applied=True, status=self.status, ai_to_move=self.is_ai_turn())

    def reset_session(self) -> TurnResult:
        """Restart the current game with the same mode."""
        if self.game is None:
            return TurnResult(
                applied=False,
                status=self.status,
                error="Select game mode to start",
                error_code=MoveError.INACTIVE_SESSION,
            )
        self.reducer.restart(self.game)
        logger.info("Reset %s session", self.game.mode.value)
        return TurnResult(applied=True, status=self.status, ai_to_move=self.is_ai_turn())

    def submit_move(self, index: int) -> TurnResult:
        """Play `index` for the human whose turn it is."""
        rejection = self._check_human_turn()
        if rejection:
            return rejection

        result = self.reducer.apply(self.game, index)
        return TurnResult.from_move(result, ai_to_move=self.is_ai_turn())

    def request_ai_move(self) -> TurnResult:
        """Let the bot choose and play its move."""
        if self.game is None or not self.game.active:
            return self._reject("Game is not in progress", MoveError.INACTIVE_SESSION)

        if not self.is_ai_turn():
            return self._reject("It is not the AI's turn", MoveError.WRONG_TURN_FOR_AI)

        decision = self.bot.select_move(self.game.board)
        result = self.reducer.apply(self.game, decision.index)
        logger.debug("AI played %d by rule %s", decision.index, decision.rule.value)
        return TurnResult.from_move(result, ai_to_move=self.is_ai_turn(), rule=decision.rule)

    def _check_human_turn(self) -> TurnResult | None:
        if self.game is None:
            return self._reject("Select game mode to start", MoveError.INACTIVE_SESSION)
        if self.is_ai_turn():
            return self._reject("Wait for the AI to move", MoveError.WRONG_TURN_FOR_AI)
        return None

    def _reject(self, error: str, code: MoveError) -> TurnResult:
        logger.debug("Rejected call: %s", error)
        return TurnResult(applied=False, status=self.status, error=error, error_code=code)
