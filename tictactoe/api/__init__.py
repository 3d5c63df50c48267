"""
API Module - Browser interface.

Exposes the engine via REST API and WebSocket for a browser front end.
The browser:
1. Creates a session for a mode
2. Submits moves for the human player(s)
3. Receives the AI's replies, pushed after a short pacing delay
4. Resets or ends the session

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    # Responses
    SessionResponse,
    MoveResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    StatusInfo,
    MoveInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MoveRequest",
    # Responses
    "SessionResponse",
    "MoveResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "StatusInfo",
    "MoveInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
