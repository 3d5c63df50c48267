"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to GameLoop calls
2. Manages sessions
3. Formats responses for the browser

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    # Responses
    SessionResponse,
    MoveResponse,
    ErrorResponse,
    # Shared
    StatusInfo,
    MoveInfo,
    # Enums
    ErrorCode,
    GameModeName,
    PhaseName,
)
from ..engine_core.state import GameMode
from ..engine_core.rules import legal_moves
from ..session import SessionManager, Session, TurnResult, status_message, turn_indicator


@dataclass
class APIService:
    """
    Main API service for the browser front end.

    Usage:
        service = APIService()

        # Start a game
        session = service.create_session(CreateSessionRequest(mode="ai"))

        # Human move, then the AI reply
        service.submit_move(session.session_id, MoveRequest(index=0))
        service.request_ai_move(session.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.
        """
        session = self.session_manager.create_session(
            mode=GameMode(request.mode.value),
            seed=request.seed,
        )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def submit_move(
        self,
        session_id: str,
        request: MoveRequest,
    ) -> MoveResponse | ErrorResponse:
        """
        Apply a human move. Rejections come back with applied=False.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.loop.submit_move(request.index)
        session.touch()
        return self._turn_to_response(session, result)

    def request_ai_move(self, session_id: str) -> MoveResponse | ErrorResponse:
        """
        Let the AI play its move now.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.loop.request_ai_move()
        session.touch()
        return self._turn_to_response(session, result)

    def reset_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Restart the game with the same mode.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        session.loop.reset_session()
        session.touch()
        return self._session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a game session.
        """
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List session IDs.
        """
        return self.session_manager.list_sessions()

    def cleanup(self, max_age_seconds: int) -> int:
        """
        Drop idle sessions.
        """
        return self.session_manager.cleanup_stale_sessions(max_age_seconds)

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        loop = session.loop
        game = loop.game
        status = loop.status

        return SessionResponse(
            session_id=session.session_id,
            mode=GameModeName(game.mode.value),
            board=[cell.value for cell in game.board],
            current_player=game.current_player.value,
            status=StatusInfo(
                phase=PhaseName(status.phase.value),
                winner=status.winner.value if status.winner else None,
                winning_line=list(status.line) if status.line else None,
            ),
            message=status_message(game),
            turn_indicator=turn_indicator(game.mode),
            moves=[MoveInfo(index=m.index, mark=m.mark.value) for m in game.moves],
            legal_moves=legal_moves(game),
            ai_to_move=loop.is_ai_turn(),
            created_at=session.created_at,
        )

    def _turn_to_response(self, session: Session, result: TurnResult) -> MoveResponse:
        """Convert TurnResult to MoveResponse."""
        return MoveResponse(
            session_id=session.session_id,
            applied=result.applied,
            index=result.index,
            mark=result.mark.value if result.mark else None,
            rule=result.rule.value if result.rule else None,
            error=result.error,
            error_code=ErrorCode(result.error_code.value) if result.error_code else None,
            session=self._session_to_response(session),
        )
