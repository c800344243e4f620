"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Wire format is camelCase (playersNeeded, isFlexible, gameData, ...);
Python attributes are snake_case. Table creation bodies are a union of
SingleTableRequest and FlexibleTableRequest told apart by isFlexible,
and are converted to domain input before reaching the session manager.

Error Codes:
- VALIDATION_ERROR: Bad or missing input, or date outside the scheduling window
- SESSION_NOT_FOUND: Table does not exist or has expired
- GAME_NOT_FOUND: BoardGameGeek has no usable record for the id
- TABLE_FULL: Table already has playersNeeded participants
- MISSING_NAME: Join request without a name
- UPSTREAM_ERROR: BoardGameGeek unreachable or returned garbage
"""

import datetime as dt
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from ..errors import ErrorCode
from ..games.models import GameInfo
from ..session.models import FlexibleTableInput, SingleTableInput


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire."""
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


def _id_as_text(value: Any) -> Any:
    if isinstance(value, int):
        return str(value)
    return value


# =============================================================================
# Games
# =============================================================================

class GameCandidateResponse(CamelModel):
    """A search hit."""
    id: str
    name: str
    year_published: str = "N/A"


class GameInfoResponse(CamelModel):
    """Normalized game metadata. Unknown numeric fields hold "N/A"."""
    id: Optional[str] = None
    name: str
    min_playing_time: Optional[str] = None
    max_playing_time: Optional[str] = None
    complexity: Optional[str] = None
    link: Optional[str] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    youtube_link: Optional[str] = None


# =============================================================================
# Table requests
# =============================================================================

class GameSelection(CamelModel):
    """A game picked for a flexible table; custom games have no id."""
    id: Optional[str] = None
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _id_as_text(value)

    def to_game(self) -> GameInfo:
        return GameInfo(id=self.id or None, name=self.name)


class TableRequestBase(CamelModel):
    date: dt.date
    time: str = Field(min_length=1, description="HH:MM")
    location: str = Field(min_length=1)
    players_needed: int = Field(ge=1)
    organizer_joins: bool = False
    organizer_name: Optional[str] = None
    participants: list[str] = Field(default_factory=list)

    def _details(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "time": self.time,
            "location": self.location,
            "players_needed": self.players_needed,
            "organizer_joins": self.organizer_joins,
            "organizer_name": self.organizer_name,
            "participants": list(self.participants),
        }


class SingleTableRequest(TableRequestBase):
    """Create a table around one game. Flexible-mode fields are ignored."""
    is_flexible: Literal[False] = False
    game_name: Optional[str] = None
    game_id: Optional[str] = None

    @field_validator("game_id", mode="before")
    @classmethod
    def coerce_game_id(cls, value: Any) -> Any:
        return _id_as_text(value)

    def to_input(self) -> SingleTableInput:
        return SingleTableInput(
            **self._details(),
            game_name=self.game_name,
            game_id=self.game_id or None,
        )


class FlexibleTableRequest(TableRequestBase):
    """Create a table with candidate games. Single-mode fields are ignored."""
    is_flexible: Literal[True]
    flexible_games: list[GameSelection] = Field(default_factory=list)

    def to_input(self) -> FlexibleTableInput:
        return FlexibleTableInput(
            **self._details(),
            flexible_games=[game.to_game() for game in self.flexible_games],
        )


CreateTableRequest = Union[FlexibleTableRequest, SingleTableRequest]


class ParticipantRequest(BaseModel):
    """Body of join and remove requests."""
    name: Optional[str] = None


# =============================================================================
# Table responses
# =============================================================================

class CreateTableResponse(BaseModel):
    id: str


class TableResponse(CamelModel):
    """
    A table as stored, plus its links.

    Only the fields of the table's mode are present.
    """
    id: str
    date: dt.date
    time: str
    location: str
    players_needed: int
    organizer_joins: bool
    participants: list[str]
    is_flexible: bool
    created_at: dt.datetime
    expires_at: dt.datetime
    game_name: Optional[str] = None
    game_id: Optional[str] = None
    game_data: Optional[GameInfoResponse] = None
    flexible_games: Optional[list[GameInfoResponse]] = None
    share_link: str
    preview_link: str


# =============================================================================
# Misc
# =============================================================================

class ErrorResponse(BaseModel):
    """Error body for all failed JSON requests."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
