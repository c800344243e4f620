"""
Session Module - Scheduled board-game tables.

A session (a "table") is:
- Created by an organizer, for one game or a list of candidate games
- Shared by link and joined until players_needed is reached
- Expired automatically one day after creation

Persistence goes through a SessionStore: MongoDB in production,
in-memory for tests and local runs.
"""

from .models import FlexibleTableInput, Session, SingleTableInput, TableInput
from .store import InMemorySessionStore, MongoSessionStore, SessionStore, create_store
from .manager import SessionManager
from .participation import ParticipationManager

__all__ = [
    "Session",
    "SingleTableInput",
    "FlexibleTableInput",
    "TableInput",
    "SessionStore",
    "InMemorySessionStore",
    "MongoSessionStore",
    "create_store",
    "SessionManager",
    "ParticipationManager",
]
