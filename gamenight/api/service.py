"""
API Service - Business logic layer between HTTP and the domain.

The service:
1. Translates validated requests into domain input
2. Delegates to the session and participation managers
3. Formats domain objects as response models

This layer is framework-agnostic; domain errors propagate to the caller
(the FastAPI app maps them to status codes).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .. import __version__, config
from ..display import build_preview, preview_link, render_preview_html, share_link
from ..games.fetcher import GameDetailFetcher
from ..session import ParticipationManager, Session, SessionManager, SessionStore, create_store
from .schemas import (
    CreateTableRequest,
    CreateTableResponse,
    GameCandidateResponse,
    GameInfoResponse,
    HealthResponse,
    TableResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        await service.start()

        created = await service.create_table(request)
        table = await service.join_table(created.id, "Bob")

        await service.stop()
    """
    store: SessionStore = field(default_factory=create_store)
    fetcher: GameDetailFetcher = field(default_factory=GameDetailFetcher)
    session_manager: SessionManager = field(init=False)
    participation: ParticipationManager = field(init=False)

    def __post_init__(self):
        self.session_manager = SessionManager(self.store, self.fetcher)
        self.participation = ParticipationManager(self.store)

    async def start(self) -> None:
        await self.store.connect()
        await self.fetcher.client.connect()

    async def stop(self) -> None:
        await self.fetcher.client.close()
        await self.store.close()

    # =========================================================================
    # Games
    # =========================================================================

    async def search_games(self, query: str | None) -> list[GameCandidateResponse]:
        candidates = await self.fetcher.search(query)
        return [GameCandidateResponse.model_validate(c.to_dict()) for c in candidates]

    async def get_game(self, game_id: str) -> GameInfoResponse:
        game = await self.fetcher.fetch(game_id)
        return GameInfoResponse.model_validate(game.to_dict())

    # =========================================================================
    # Tables
    # =========================================================================

    async def create_table(self, request: CreateTableRequest) -> CreateTableResponse:
        session = await self.session_manager.create_session(request.to_input())
        return CreateTableResponse(id=session.session_id)

    async def get_table(self, session_id: str) -> TableResponse:
        session = await self.session_manager.get_session(session_id)
        return self._table_to_response(session)

    async def join_table(self, session_id: str, name: str | None) -> TableResponse:
        session = await self.participation.join(session_id, name)
        return self._table_to_response(session)

    async def remove_from_table(self, session_id: str, name: str | None) -> TableResponse:
        session = await self.participation.remove(session_id, name)
        return self._table_to_response(session)

    async def preview_html(self, session_id: str) -> str:
        session = await self.session_manager.get_session(session_id)
        return render_preview_html(build_preview(session))

    def health(self) -> HealthResponse:
        return HealthResponse(version=__version__, environment=config.GAMENIGHT_ENV)

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _table_to_response(self, session: Session) -> TableResponse:
        """Convert Session to TableResponse."""
        data = session.to_dict()
        data["shareLink"] = share_link(session.session_id)
        data["previewLink"] = preview_link(session.session_id)
        return TableResponse.model_validate(data)
