"""
Session Manager - Creates and looks up tables.

LIFECYCLE:
1. Organizer submits a table → validated, enriched, persisted
2. Friends open the shared link → table loaded by id
3. Friends join/leave → ParticipationManager mutates participants
4. One day after creation → the store expires the table

CREATION RULES:
- date, time, location and players_needed >= 1 are required
- date may be at most MAX_DAYS_AHEAD days from today
- Flexible tables need at least one selected game
- Game metadata enrichment never blocks creation; failed lookups degrade
"""

from __future__ import annotations
import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable

from .. import config
from ..errors import SessionNotFoundError, ValidationError
from ..games.fetcher import GameDetailFetcher
from ..games.models import GameInfo
from .models import FlexibleTableInput, Session, SingleTableInput, TableInput, utcnow
from .store import SessionStore

logger = logging.getLogger(__name__)

MIN_FLEXIBLE_GAMES = 1


class SessionManager:
    """
    Creates sessions and loads them by id.

    Responsibilities:
    - Validate creation input against scheduling and mode rules
    - Attach BGG metadata (single game or a rate-limited list)
    - Persist through the session store
    """

    def __init__(
        self,
        store: SessionStore,
        fetcher: GameDetailFetcher,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.fetcher = fetcher
        self._clock = clock

    async def create_session(self, request: TableInput) -> Session:
        """
        Create and persist a new table.

        Raises:
            ValidationError: On missing fields, a date beyond the scheduling
                window, or a flexible table without games.
        """
        now = self._clock()
        self._validate(request, now)

        session = Session(
            session_id=uuid.uuid4().hex,
            date=request.date,
            time=request.time.strip(),
            location=request.location.strip(),
            players_needed=request.players_needed,
            created_at=now,
            organizer_joins=request.organizer_joins,
            participants=self._initial_participants(request),
        )

        if isinstance(request, FlexibleTableInput):
            session.is_flexible = True
            session.flexible_games = await self.fetcher.fetch_many(request.flexible_games)
        else:
            session.game_name = request.game_name
            session.game_id = request.game_id
            if request.game_id:
                session.game_data = await self.fetcher.fetch_or_degrade(
                    request.game_id, request.game_name or request.game_id
                )

        await self.store.put(session)
        logger.info(
            "Created %s table %s for %s at %s (%d players)",
            "flexible" if session.is_flexible else "single-game",
            session.session_id,
            session.date.isoformat(),
            session.location,
            session.players_needed,
        )
        return session

    async def get_session(self, session_id: str) -> Session:
        """
        Load a table by id.

        Raises:
            SessionNotFoundError: If the table does not exist or has expired.
        """
        session = await self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def list_sessions(self) -> list[Session]:
        return await self.store.list()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _validate(self, request: TableInput, now: datetime) -> None:
        missing = [
            label for label, value in (
                ("date", request.date),
                ("time", request.time),
                ("location", request.location),
            )
            if not value or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if request.players_needed is None or request.players_needed < 1:
            raise ValidationError("At least one player is needed.")

        last_day = now.date() + timedelta(days=config.MAX_DAYS_AHEAD)
        if request.date > last_day:
            raise ValidationError(
                f"You cannot schedule games more than {config.MAX_DAYS_AHEAD} days in advance."
            )

        if isinstance(request, FlexibleTableInput):
            games = [game for game in request.flexible_games if game.name and game.name.strip()]
            if len(games) < MIN_FLEXIBLE_GAMES:
                raise ValidationError("Please select at least one game for flexible mode.")
            request.flexible_games = [_strip_name(game) for game in games]
        elif isinstance(request, SingleTableInput):
            if request.game_name is not None:
                request.game_name = request.game_name.strip() or None

    def _initial_participants(self, request: TableInput) -> list[str]:
        participants = [p.strip() for p in request.participants if p and p.strip()]
        organizer = (request.organizer_name or "").strip()
        if request.organizer_joins and organizer:
            participants = [organizer] + [p for p in participants if p != organizer]
        return participants[:request.players_needed]


def _strip_name(game: GameInfo) -> GameInfo:
    game.name = game.name.strip()
    return game
