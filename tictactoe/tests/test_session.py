"""
Tests for the game loop, session manager and AI move scheduler.

Tests:
- Boundary calls and their rejection codes
- Human vs AI turn handoff
- Status and turn indicator text
- Session lifecycle and stale cleanup
- Pacing delay scheduling and cancellation
"""

import asyncio
import logging
import time

from ..engine_core.state import GameMode, GamePhase, Mark
from ..engine_core.action import MoveError, TerminalStatus
from ..engine_core.rules import legal_moves
from ..bots import MoveRule
from ..session import (
    GameLoop,
    SessionManager,
    AIMoveScheduler,
    status_message,
    turn_indicator,
)


class TestGameLoopStart:
    """Tests for starting and resetting."""

    def test_before_start(self):
        """Nothing can be played before a mode is chosen."""
        loop = GameLoop()

        assert loop.game is None
        assert loop.mode is None
        assert loop.status == TerminalStatus.not_started()

        result = loop.submit_move(0)
        assert not result.applied
        assert result.error_code == MoveError.INACTIVE_SESSION

        result = loop.request_ai_move()
        assert not result.applied
        assert result.error_code == MoveError.INACTIVE_SESSION

    def test_reset_before_start_is_noop(self):
        """Reset without a mode leaves the loop unstarted."""
        loop = GameLoop()
        result = loop.reset_session()

        assert not result.applied
        assert result.status.phase == GamePhase.NOT_STARTED
        assert loop.game is None

    def test_start_session(self, ai_loop):
        """X is first to move and the AI is not due yet."""
        assert ai_loop.mode == GameMode.HUMAN_VS_AI
        assert ai_loop.game.current_player == Mark.X
        assert ai_loop.status == TerminalStatus.in_progress()
        assert not ai_loop.is_ai_turn()

    def test_start_replaces_current_game(self, ai_loop):
        """Starting again discards the old board."""
        ai_loop.submit_move(0)
        ai_loop.start_session(GameMode.HUMAN_VS_HUMAN)

        assert ai_loop.mode == GameMode.HUMAN_VS_HUMAN
        assert ai_loop.game.moves == []

    def test_reset_keeps_mode(self, ai_loop):
        """Reset clears the board but stays in Human vs AI."""
        ai_loop.submit_move(0)
        ai_loop.request_ai_move()

        result = ai_loop.reset_session()

        assert result.applied
        assert ai_loop.mode == GameMode.HUMAN_VS_AI
        assert ai_loop.game.board == [Mark.EMPTY] * 9
        assert ai_loop.game.current_player == Mark.X

    def test_reset_after_win(self, human_loop):
        """A finished game can be restarted."""
        for index in [0, 3, 1, 4, 2]:
            human_loop.submit_move(index)
        assert human_loop.status.phase == GamePhase.WON

        human_loop.reset_session()

        assert human_loop.game.active
        assert human_loop.status == TerminalStatus.in_progress()


class TestGameLoopHumanVsAI:
    """Tests for turn handoff to the bot."""

    def test_ai_replies_center(self, ai_loop):
        """After X takes a corner the AI takes the center."""
        result = ai_loop.submit_move(0)

        assert result.applied
        assert result.mark == Mark.X
        assert result.ai_to_move

        result = ai_loop.request_ai_move()

        assert result.applied
        assert result.index == 4
        assert result.mark == Mark.O
        assert result.rule == MoveRule.CENTER
        assert not result.ai_to_move
        assert ai_loop.game.board[4] == Mark.O

    def test_human_cannot_move_for_ai(self, ai_loop):
        """During the AI's turn human moves are rejected."""
        ai_loop.submit_move(0)
        before = list(ai_loop.game.board)

        result = ai_loop.submit_move(1)

        assert not result.applied
        assert result.error_code == MoveError.WRONG_TURN_FOR_AI
        assert ai_loop.game.board == before

    def test_ai_out_of_turn(self, ai_loop):
        """The AI cannot move on X's turn."""
        result = ai_loop.request_ai_move()

        assert not result.applied
        assert result.error_code == MoveError.WRONG_TURN_FOR_AI
        assert ai_loop.game.board == [Mark.EMPTY] * 9

    def test_ai_in_human_mode(self, human_loop):
        """The AI never moves in Human vs Human."""
        human_loop.submit_move(0)
        assert not human_loop.is_ai_turn()

        result = human_loop.request_ai_move()

        assert not result.applied
        assert result.error_code == MoveError.WRONG_TURN_FOR_AI
        assert human_loop.game.current_player == Mark.O

    def test_ai_after_game_over(self, human_loop):
        """Finished games reject AI moves as inactive."""
        for index in [0, 3, 1, 4, 2]:
            human_loop.submit_move(index)

        result = human_loop.request_ai_move()
        assert result.error_code == MoveError.INACTIVE_SESSION

    def test_ai_blocks(self, ai_loop):
        """The AI blocks an open X line."""
        ai_loop.submit_move(0)
        ai_loop.request_ai_move()  # center
        ai_loop.submit_move(1)

        result = ai_loop.request_ai_move()

        assert result.index == 2
        assert result.rule == MoveRule.BLOCK

    def test_rejected_move_keeps_turn(self, ai_loop):
        """An invalid human move does not hand the turn over."""
        result = ai_loop.submit_move(9)

        assert not result.applied
        assert result.error_code == MoveError.INVALID_INDEX
        assert not result.ai_to_move
        assert ai_loop.game.current_player == Mark.X

    def test_full_game_terminates(self, ai_loop):
        """Playing the first free cell against the AI always ends the game."""
        for _ in range(9):
            if not ai_loop.game.active:
                break
            if ai_loop.is_ai_turn():
                assert ai_loop.request_ai_move().applied
            else:
                assert ai_loop.submit_move(legal_moves(ai_loop.game)[0]).applied

        assert ai_loop.status.is_terminal
        # the bot never loses to this opponent
        assert ai_loop.game.winner != Mark.X


class TestMessages:
    """Tests for status text."""

    def test_status_messages(self, human_loop):
        assert status_message(None) == "Select game mode to start"
        assert status_message(human_loop.game) == "It's X's turn"

        human_loop.submit_move(4)
        assert status_message(human_loop.game) == "It's O's turn"

    def test_win_message(self, human_loop):
        for index in [0, 3, 1, 4, 2]:
            human_loop.submit_move(index)
        assert status_message(human_loop.game) == "Player X has won!"

    def test_draw_message(self, human_loop):
        for index in [0, 1, 2, 4, 3, 5, 7, 6, 8]:
            human_loop.submit_move(index)
        assert status_message(human_loop.game) == "Game ended in a draw!"

    def test_turn_indicator(self):
        assert turn_indicator(GameMode.HUMAN_VS_AI) == "Player X: You | Player O: AI"
        assert turn_indicator(GameMode.HUMAN_VS_HUMAN) == "Player X: You | Player O: Player 2"
        assert turn_indicator(None) == ""


class TestSessionManager:
    """Tests for session lifecycle."""

    def test_create_session(self):
        manager = SessionManager()
        session = manager.create_session(GameMode.HUMAN_VS_AI, seed=7)

        assert session.session_id in manager.list_sessions()
        assert session.is_active()
        assert session.loop.mode == GameMode.HUMAN_VS_AI
        assert manager.get_session(session.session_id) is session

    def test_sessions_are_independent(self):
        manager = SessionManager()
        first = manager.create_session(GameMode.HUMAN_VS_HUMAN)
        second = manager.create_session(GameMode.HUMAN_VS_HUMAN)

        first.loop.submit_move(4)

        assert first.session_id != second.session_id
        assert second.loop.game.board[4] == Mark.EMPTY

    def test_get_unknown_session(self):
        assert SessionManager().get_session("missing") is None

    def test_end_session(self):
        manager = SessionManager()
        session = manager.create_session(GameMode.HUMAN_VS_HUMAN)

        assert manager.end_session(session.session_id)
        assert manager.get_session(session.session_id) is None
        assert not session.is_active()
        assert not manager.end_session(session.session_id)

    def test_list_active_sessions(self):
        manager = SessionManager()
        playing = manager.create_session(GameMode.HUMAN_VS_HUMAN)
        finished = manager.create_session(GameMode.HUMAN_VS_HUMAN)
        for index in [0, 3, 1, 4, 2]:
            finished.loop.submit_move(index)

        assert manager.list_active_sessions() == [playing.session_id]
        assert len(manager.list_sessions()) == 2

    def test_cleanup_stale_sessions(self):
        manager = SessionManager()
        stale = manager.create_session(GameMode.HUMAN_VS_AI)
        fresh = manager.create_session(GameMode.HUMAN_VS_AI)
        stale.updated_at = time.time() - 120

        removed = manager.cleanup_stale_sessions(max_age_seconds=60)

        assert removed == 1
        assert manager.list_sessions() == [fresh.session_id]

    def test_touch_keeps_session_alive(self):
        manager = SessionManager()
        session = manager.create_session(GameMode.HUMAN_VS_AI)
        session.updated_at = time.time() - 120
        session.touch()

        assert manager.cleanup_stale_sessions(max_age_seconds=60) == 0


class TestAIMoveScheduler:
    """Tests for the pacing delay."""

    def test_callback_fires_after_delay(self):
        fired = []

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("a", lambda: fired.append("a"))
            assert scheduler.is_pending("a")
            assert fired == []
            await asyncio.sleep(0.05)
            assert not scheduler.is_pending("a")

        asyncio.run(scenario())
        assert fired == ["a"]

    def test_coroutine_callback(self):
        fired = []

        async def play():
            fired.append("played")

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("a", play)
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert fired == ["played"]

    def test_cancel(self):
        fired = []

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("a", lambda: fired.append("a"))
            assert scheduler.cancel("a")
            assert not scheduler.cancel("a")
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert fired == []

    def test_reschedule_replaces_pending(self):
        fired = []

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("a", lambda: fired.append("first"))
            scheduler.schedule("a", lambda: fired.append("second"))
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert fired == ["second"]

    def test_failing_callback_is_logged(self, caplog):
        def explode():
            raise RuntimeError("boom")

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("a", explode)
            await asyncio.sleep(0.05)
            assert not scheduler.is_pending("a")

        with caplog.at_level(logging.ERROR, logger="tictactoe.session.scheduler"):
            asyncio.run(scenario())

        assert "Scheduled AI move for a failed" in caplog.text
        assert "boom" in caplog.text

    def test_failing_coroutine_is_logged(self, caplog):
        async def explode():
            raise RuntimeError("task boom")

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("b", explode)
            await asyncio.sleep(0.05)
            assert not scheduler._tasks

        with caplog.at_level(logging.ERROR, logger="tictactoe.session.scheduler"):
            asyncio.run(scenario())

        assert "Scheduled AI move for b failed" in caplog.text
        assert "task boom" in caplog.text

    def test_cancel_all(self):
        fired = []

        async def scenario():
            scheduler = AIMoveScheduler(delay_seconds=0.01)
            scheduler.schedule("a", lambda: fired.append("a"))
            scheduler.schedule("b", lambda: fired.append("b"))
            scheduler.cancel_all()
            assert not scheduler.is_pending("a")
            assert not scheduler.is_pending("b")
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert fired == []
