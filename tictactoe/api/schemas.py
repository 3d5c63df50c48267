"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the browser and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- VALIDATION_ERROR: Request body failed validation (HTTP 422)
- INVALID_INDEX, CELL_OCCUPIED, INACTIVE_SESSION, WRONG_TURN_FOR_AI:
  a move was rejected; returned inside a 200 MoveResponse, not as an error
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameModeName(str, Enum):
    """Game mode values."""
    HUMAN = "human"
    AI = "ai"


class PhaseName(str, Enum):
    """Game status values."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INDEX = "INVALID_INDEX"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    INACTIVE_SESSION = "INACTIVE_SESSION"
    WRONG_TURN_FOR_AI = "WRONG_TURN_FOR_AI"


# =============================================================================
# Shared Models
# =============================================================================

class StatusInfo(BaseModel):
    """Terminal status: in progress, won by a mark on a line, or draw."""
    phase: PhaseName
    winner: Optional[str] = None
    winning_line: Optional[list[int]] = Field(
        default=None,
        description="The three cells to highlight when the game is won",
    )


class MoveInfo(BaseModel):
    """A move already on the board."""
    index: int
    mark: str


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Start a new game."""
    mode: GameModeName = GameModeName.AI
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the AI's random corner/side choice",
    )


class MoveRequest(BaseModel):
    """Play a cell for the human whose turn it is."""
    index: int = Field(description="Cell 0-8, row-major")


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Everything the browser needs to render a session."""
    session_id: str
    mode: GameModeName
    board: list[str] = Field(description="9 cells: '', 'X' or 'O'")
    current_player: str
    status: StatusInfo
    message: str
    turn_indicator: str
    moves: list[MoveInfo] = Field(default_factory=list)
    legal_moves: list[int] = Field(default_factory=list)
    ai_to_move: bool = False
    created_at: float


class MoveResponse(BaseModel):
    """Outcome of a human or AI move."""
    session_id: str
    applied: bool
    index: Optional[int] = None
    mark: Optional[str] = None
    rule: Optional[str] = Field(default=None, description="Bot rule, for AI moves")
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    ai_move_scheduled: bool = False
    session: SessionResponse


class SessionListResponse(BaseModel):
    """List of session IDs."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response for ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
