"""
FastAPI Application - REST API for the browser front end.

Endpoints:
    POST   /api/v1/sessions                 Start a game (mode: human | ai)
    GET    /api/v1/sessions                 List sessions
    GET    /api/v1/sessions/{id}            Get session state
    DELETE /api/v1/sessions/{id}            End session
    POST   /api/v1/sessions/{id}/moves      Play a cell for the human to move
    POST   /api/v1/sessions/{id}/ai-move    Let the AI move now
    POST   /api/v1/sessions/{id}/reset      Restart with the same mode
    WS     /api/v1/sessions/{id}/ws         Real-time state updates

AI Reply Flow:
    1. POST /moves applies the human move
    2. If the AI is now due and auto-play is on, its move is scheduled
       after the pacing delay (ai_move_scheduled=true in the response)
    3. When it fires, the new state is pushed over the WebSocket
    With auto-play off, the browser calls POST /ai-move itself.

All responses are JSON with explicit Pydantic schemas.
"""

from contextlib import asynccontextmanager
from typing import Optional, Union
import json
import logging

from fastapi import FastAPI, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..session import AIMoveScheduler
from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    MoveRequest,
    # Response models
    SessionResponse,
    MoveResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
)

logger = logging.getLogger(__name__)


def create_app(service: Optional[APIService] = None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()
    scheduler = AIMoveScheduler(delay_seconds=settings.ai_delay_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        scheduler.cancel_all()

    app = FastAPI(
        title="TicTacToe Engine API",
        description="""
Tic-tac-toe for the browser: Human vs Human or Human vs AI.

## Rejected moves

Moves that break the rules are not HTTP errors. The response has
`applied=false`, an `error_code` and the unchanged session:

| Code | Description |
|------|-------------|
| `INVALID_INDEX` | Cell outside 0-8 |
| `CELL_OCCUPIED` | Cell already holds a mark |
| `INACTIVE_SESSION` | Game already won or drawn |
| `WRONG_TURN_FOR_AI` | AI asked to move out of turn, or human moved during the AI's turn |

Unknown sessions return 404 with `SESSION_NOT_FOUND`.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # WebSocket connections
    ws_connections: dict[str, list[WebSocket]] = {}

    app.state.service = api_service
    app.state.scheduler = scheduler
    app.state.settings = settings
    app.state.ws_connections = ws_connections

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return make_error_response(response.error_code, response.error, status_code=404)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        if session_id in ws_connections:
            dead_connections = []
            for ws in list(ws_connections[session_id]):
                try:
                    await ws.send_json(message)
                except Exception:
                    dead_connections.append(ws)
            for ws in dead_connections:
                if ws in ws_connections.get(session_id, []):
                    ws_connections[session_id].remove(ws)

    async def run_scheduled_ai_move(session_id: str):
        """Play the AI's move once the pacing delay has passed."""
        response = api_service.request_ai_move(session_id)
        if isinstance(response, ErrorResponse):
            logger.info("Scheduled AI move dropped: %s", response.error)
            return
        await broadcast_to_session(session_id, {
            "type": "ai_move",
            "payload": response.model_dump(mode="json"),
        })

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Start a new game",
    )
    async def create_session(body: CreateSessionRequest) -> SessionResponse:
        """
        Start a new game in `human` (two players, one browser) or `ai` mode.

        X always moves first and is played by the human.
        """
        api_service.cleanup(settings.session_ttl)
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session state",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the board, status and turn text of a session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: str = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        scheduler.cancel(session_id)
        success = api_service.end_session(session_id, reason)
        ws_connections.pop(session_id, None)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Restart with the same mode",
    )
    async def reset_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Clear the board and hand the first move back to X."""
        scheduler.cancel(session_id)
        response = api_service.reset_session(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)

        await broadcast_to_session(session_id, {
            "type": "state_update",
            "payload": response.model_dump(mode="json"),
        })
        return response

    # =========================================================================
    # Move Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/moves",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Play a cell",
    )
    async def submit_move(
        session_id: str,
        body: MoveRequest,
    ) -> Union[MoveResponse, JSONResponse]:
        """
        Play `index` for the human whose turn it is.

        **Request Body:**
        ```json
        {"index": 4}
        ```
        """
        response = api_service.submit_move(session_id, body)
        if isinstance(response, ErrorResponse):
            return not_found(response)

        if response.applied and response.session.ai_to_move and settings.auto_ai:
            scheduler.schedule(session_id, lambda: run_scheduled_ai_move(session_id))
            response.ai_move_scheduled = True

        if response.applied:
            await broadcast_to_session(session_id, {
                "type": "state_update",
                "payload": response.session.model_dump(mode="json"),
            })
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/ai-move",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Let the AI move now",
    )
    async def request_ai_move(session_id: str) -> Union[MoveResponse, JSONResponse]:
        """Play the AI's move immediately, cancelling any scheduled one."""
        scheduler.cancel(session_id)
        response = api_service.request_ai_move(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)

        if response.applied:
            await broadcast_to_session(session_id, {
                "type": "ai_move",
                "payload": response.model_dump(mode="json"),
            })
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Board changed (human move, reset)
        - ai_move: The AI played
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            await websocket.send_json({
                "type": "error",
                "payload": response.model_dump(mode="json"),
            })
            await websocket.close()
            return

        ws_connections.setdefault(session_id, []).append(websocket)

        try:
            await websocket.send_json({
                "type": "state_update",
                "payload": response.model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})

        except WebSocketDisconnect:
            logger.debug("WebSocket closed for %s", session_id)
        finally:
            if websocket in ws_connections.get(session_id, []):
                ws_connections[session_id].remove(websocket)
            if not ws_connections.get(session_id):
                ws_connections.pop(session_id, None)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="tictactoe-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "TicTacToe Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
