"""
Session Models - A scheduled board-game table.

A session is either single-game (one designated game, optionally enriched
from BGG) or flexible (a list of candidate games). The mode is fixed at
creation and the fields of the other mode are never stored.

Documents use camelCase keys, matching the JSON wire format.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Union

from .. import config
from ..games.models import GameInfo


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Creation input
# =============================================================================

@dataclass
class TableDetails:
    """Fields shared by both creation modes."""
    date: date
    time: str
    location: str
    players_needed: int
    organizer_joins: bool = False
    organizer_name: str | None = None
    participants: list[str] = field(default_factory=list)


@dataclass
class SingleTableInput(TableDetails):
    """Create a table around one game."""
    game_name: str | None = None
    game_id: str | None = None


@dataclass
class FlexibleTableInput(TableDetails):
    """Create a table offering several candidate games."""
    flexible_games: list[GameInfo] = field(default_factory=list)


TableInput = Union[SingleTableInput, FlexibleTableInput]


# =============================================================================
# Session entity
# =============================================================================

@dataclass
class Session:
    """
    A board-game table people can join.

    Invariant: len(participants) <= players_needed.
    participants[0] is conventionally the organizer.
    """
    session_id: str
    date: date
    time: str
    location: str
    players_needed: int
    created_at: datetime
    organizer_joins: bool = False
    participants: list[str] = field(default_factory=list)
    is_flexible: bool = False

    # Single mode
    game_name: str | None = None
    game_id: str | None = None
    game_data: GameInfo | None = None

    # Flexible mode
    flexible_games: list[GameInfo] = field(default_factory=list)

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=config.SESSION_TTL_SECONDS)

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.players_needed

    @property
    def organizer(self) -> str | None:
        return self.participants[0] if self.participants else None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        """JSON representation returned to clients."""
        data: dict[str, Any] = {
            "id": self.session_id,
            "date": self.date.isoformat(),
            "time": self.time,
            "location": self.location,
            "playersNeeded": self.players_needed,
            "organizerJoins": self.organizer_joins,
            "participants": list(self.participants),
            "isFlexible": self.is_flexible,
            "createdAt": self.created_at.isoformat(),
            "expiresAt": self.expires_at.isoformat(),
        }
        if self.is_flexible:
            data["flexibleGames"] = [game.to_dict() for game in self.flexible_games]
        else:
            data["gameName"] = self.game_name
            data["gameId"] = self.game_id
            data["gameData"] = self.game_data.to_dict() if self.game_data else None
        return data

    def to_document(self) -> dict[str, Any]:
        """Storage representation; createdAt stays a datetime for TTL indexes."""
        document = self.to_dict()
        document["_id"] = document.pop("id")
        document["createdAt"] = self.created_at
        document.pop("expiresAt")
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Session:
        created_at = document["createdAt"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at.tzinfo is None:
            # Mongo hands back naive UTC datetimes
            created_at = created_at.replace(tzinfo=timezone.utc)

        is_flexible = bool(document.get("isFlexible", False))
        game_data = document.get("gameData")
        return cls(
            session_id=str(document["_id"]),
            date=date.fromisoformat(document["date"]),
            time=document["time"],
            location=document["location"],
            players_needed=int(document["playersNeeded"]),
            created_at=created_at,
            organizer_joins=bool(document.get("organizerJoins", False)),
            participants=list(document.get("participants") or []),
            is_flexible=is_flexible,
            game_name=None if is_flexible else document.get("gameName"),
            game_id=None if is_flexible else document.get("gameId"),
            game_data=GameInfo.from_dict(game_data) if game_data and not is_flexible else None,
            flexible_games=[
                GameInfo.from_dict(game) for game in document.get("flexibleGames") or []
            ] if is_flexible else [],
        )
