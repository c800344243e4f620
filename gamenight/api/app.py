"""
FastAPI Application - REST API for the scheduler client.

Endpoints:
    GET    /api/health                  Service health
    GET    /api/games?q=                Search BoardGameGeek by name
    GET    /api/game/{id}               Normalized game metadata
    POST   /api/table                   Create a table
    GET    /api/table/{id}              Get a table
    POST   /api/table/{id}/join         Join a table
    POST   /api/table/{id}/remove       Remove a participant
    GET    /preview/{id}                Link-preview HTML (Open Graph + redirect)

Domain errors are mapped to JSON ErrorResponse bodies:
    400  VALIDATION_ERROR, TABLE_FULL, MISSING_NAME
    404  SESSION_NOT_FOUND, GAME_NOT_FOUND
    500  UPSTREAM_ERROR (generic message, details are only logged)
"""

from contextlib import asynccontextmanager
from typing import Annotated, Optional
import logging

from fastapi import Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from .. import __version__, config
from ..errors import ErrorCode, GameNightError, SessionNotFoundError
from ..keepalive import Keepalive
from .schemas import (
    CreateTableRequest,
    CreateTableResponse,
    ErrorResponse,
    GameCandidateResponse,
    GameInfoResponse,
    HealthResponse,
    ParticipantRequest,
    TableResponse,
)
from .service import APIService

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.TABLE_FULL: 400,
    ErrorCode.MISSING_NAME: 400,
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.UPSTREAM_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}

UPSTREAM_MESSAGE = "Failed to fetch from BoardGameGeek"


def create_app(service: Optional[APIService] = None, keepalive: Optional[Keepalive] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        keepalive: Optional Keepalive task (configured from env if not provided)

    Returns:
        FastAPI application instance
    """
    api_service = service or APIService()
    pinger = keepalive or Keepalive()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config.configure_logging()
        await api_service.start()
        pinger.start()
        try:
            yield
        finally:
            await pinger.stop()
            await api_service.stop()

    app = FastAPI(
        title="Game Night API",
        description="Schedule board-game tables, share them and let friends join.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )
    app.state.service = api_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error handlers
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

    @app.exception_handler(GameNightError)
    async def handle_domain_error(request: Request, exc: GameNightError) -> JSONResponse:
        status_code = STATUS_CODES.get(exc.code, 500)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return make_error_response(exc.code, UPSTREAM_MESSAGE, status_code)
        return make_error_response(exc.code, exc.message, status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        fields = sorted({".".join(str(part) for part in e["loc"] if part != "body") for e in errors})
        message = errors[0]["msg"] if errors else "Invalid request"
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            message,
            details={"fields": fields},
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return api_service.health()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/games",
        response_model=list[GameCandidateResponse],
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Search BoardGameGeek by name",
    )
    async def search_games(
        q: Annotated[Optional[str], Query(description="Game name to search for")] = None,
    ) -> list[GameCandidateResponse]:
        """Candidates in BoardGameGeek's relevance order."""
        return await api_service.search_games(q)

    @app.get(
        "/api/game/{game_id}",
        response_model=GameInfoResponse,
        responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get normalized game metadata",
    )
    async def get_game(game_id: str) -> GameInfoResponse:
        return await api_service.get_game(game_id)

    # =========================================================================
    # Table Endpoints
    # =========================================================================

    @app.post(
        "/api/table",
        response_model=CreateTableResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Tables"],
        summary="Create a table",
    )
    async def create_table(body: Annotated[CreateTableRequest, Body()]) -> CreateTableResponse:
        """
        Create a single-game or flexible table.

        Game metadata lookups that fail do not fail the request; the table
        is created with placeholder ("N/A") metadata instead.
        """
        return await api_service.create_table(body)

    @app.get(
        "/api/table/{table_id}",
        response_model=TableResponse,
        response_model_by_alias=True,
        response_model_exclude_unset=True,
        responses={404: {"model": ErrorResponse}},
        tags=["Tables"],
        summary="Get a table",
    )
    async def get_table(table_id: str) -> TableResponse:
        return await api_service.get_table(table_id)

    @app.post(
        "/api/table/{table_id}/join",
        response_model=TableResponse,
        response_model_exclude_unset=True,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Tables"],
        summary="Join a table",
    )
    async def join_table(
        table_id: str,
        body: Annotated[Optional[ParticipantRequest], Body()] = None,
    ) -> TableResponse:
        return await api_service.join_table(table_id, body.name if body else None)

    @app.post(
        "/api/table/{table_id}/remove",
        response_model=TableResponse,
        response_model_exclude_unset=True,
        responses={404: {"model": ErrorResponse}},
        tags=["Tables"],
        summary="Remove a participant",
    )
    async def remove_participant(
        table_id: str,
        body: Annotated[Optional[ParticipantRequest], Body()] = None,
    ) -> TableResponse:
        """Remove every participant with exactly this name."""
        return await api_service.remove_from_table(table_id, body.name if body else None)

    # =========================================================================
    # Link preview
    # =========================================================================

    @app.get("/preview/{table_id}", response_class=HTMLResponse, tags=["Preview"])
    async def preview(table_id: str):
        try:
            return HTMLResponse(await api_service.preview_html(table_id))
        except SessionNotFoundError:
            return PlainTextResponse("Table not found", status_code=404)

    return app


# For running directly: uvicorn gamenight.api.app:app
app = create_app()
