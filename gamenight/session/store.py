"""
Session Stores - Swappable persistence for sessions (repository pattern).

Stores return domain Sessions. Join and remove are exposed as single
store operations so the capacity check and the write happen together:
Mongo does it in one conditional document update, the in-memory store
does it without yielding to the event loop in between.

Sessions expire SESSION_TTL_SECONDS after creation.
"""

from __future__ import annotations
import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ReturnDocument

from .. import config
from .models import Session, utcnow

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Interface for session persistence."""

    async def connect(self) -> None:
        """Prepare the store for use (connections, indexes)."""

    async def close(self) -> None:
        """Release store resources."""

    @abstractmethod
    async def get(self, session_id: str) -> Session | None:
        """Return a session by id, or None if absent or expired."""
        ...

    @abstractmethod
    async def put(self, session: Session) -> None:
        """Insert or replace a session."""
        ...

    @abstractmethod
    async def list(self) -> list[Session]:
        """Return all live sessions, oldest first."""
        ...

    @abstractmethod
    async def append_participant(self, session_id: str, name: str) -> Session | None:
        """
        Append name if the session still has room.

        Returns the updated session, or None if the session is absent or full.
        """
        ...

    @abstractmethod
    async def remove_participant(self, session_id: str, name: str) -> Session | None:
        """
        Remove every participant exactly matching name.

        Returns the updated session, or None if the session is absent.
        """
        ...


class InMemorySessionStore(SessionStore):
    """
    Process-local store.

    Documents are copied on the way in and out, so callers never share
    mutable state with the store. Expired sessions are dropped lazily.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._documents: dict[str, dict[str, Any]] = {}
        self._clock = clock

    def _load(self, session_id: str) -> dict[str, Any] | None:
        document = self._documents.get(session_id)
        if document is None:
            return None
        if Session.from_document(document).is_expired(self._clock()):
            del self._documents[session_id]
            return None
        return document

    async def get(self, session_id: str) -> Session | None:
        document = self._load(session_id)
        return Session.from_document(copy.deepcopy(document)) if document else None

    async def put(self, session: Session) -> None:
        self._documents[session.session_id] = session.to_document()

    async def list(self) -> list[Session]:
        sessions = []
        for session_id in list(self._documents):
            document = self._load(session_id)
            if document:
                sessions.append(Session.from_document(copy.deepcopy(document)))
        return sorted(sessions, key=lambda s: s.created_at)

    async def append_participant(self, session_id: str, name: str) -> Session | None:
        document = self._load(session_id)
        if document is None:
            return None
        if len(document["participants"]) >= document["playersNeeded"]:
            return None
        document["participants"].append(name)
        return Session.from_document(copy.deepcopy(document))

    async def remove_participant(self, session_id: str, name: str) -> Session | None:
        document = self._load(session_id)
        if document is None:
            return None
        document["participants"] = [p for p in document["participants"] if p != name]
        return Session.from_document(copy.deepcopy(document))


class MongoSessionStore(SessionStore):
    """
    MongoDB-backed store using motor.

    Collection: tables. A TTL index on createdAt lets MongoDB delete
    sessions one day after creation. The TTL monitor only runs about once a
    minute, so reads also drop sessions that are already past expiry.
    """

    def __init__(
        self,
        uri: str | None = None,
        db_name: str = config.MONGO_DB,
        collection: str = "tables",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uri = uri or config.MONGO_URI or "mongodb://localhost:27017"
        self.db_name = db_name
        self.collection_name = collection
        self._client: AsyncIOMotorClient | None = None
        self._collection: Any = None
        self._clock = clock

    async def connect(self) -> None:
        self._client = AsyncIOMotorClient(self.uri)
        self._collection = self._client[self.db_name][self.collection_name]
        await self._collection.create_index(
            "createdAt", expireAfterSeconds=config.SESSION_TTL_SECONDS
        )
        logger.info("Session store connected to MongoDB: %s.%s", self.db_name, self.collection_name)

    async def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None
            self._collection = None

    def _require_connection(self):
        if self._collection is None:
            raise RuntimeError("MongoSessionStore is not connected.")

    def _live(self, document: dict[str, Any] | None) -> Session | None:
        if document is None:
            return None
        session = Session.from_document(document)
        return None if session.is_expired(self._clock()) else session

    async def get(self, session_id: str) -> Session | None:
        self._require_connection()
        document = await self._collection.find_one({"_id": session_id})
        return self._live(document)

    async def put(self, session: Session) -> None:
        self._require_connection()
        await self._collection.replace_one(
            {"_id": session.session_id}, session.to_document(), upsert=True
        )

    async def list(self) -> list[Session]:
        self._require_connection()
        cursor = self._collection.find().sort("createdAt", 1)
        sessions = [self._live(document) async for document in cursor]
        return [session for session in sessions if session is not None]

    async def append_participant(self, session_id: str, name: str) -> Session | None:
        self._require_connection()
        document = await self._collection.find_one_and_update(
            {
                "_id": session_id,
                "$expr": {"$lt": [{"$size": "$participants"}, "$playersNeeded"]},
            },
            {"$push": {"participants": name}},
            return_document=ReturnDocument.AFTER,
        )
        return self._live(document)

    async def remove_participant(self, session_id: str, name: str) -> Session | None:
        self._require_connection()
        document = await self._collection.find_one_and_update(
            {"_id": session_id},
            {"$pull": {"participants": name}},
            return_document=ReturnDocument.AFTER,
        )
        return self._live(document)


def create_store() -> SessionStore:
    """Pick the store from configuration."""
    if config.MONGO_URI:
        return MongoSessionStore()
    logger.info("MONGO_URI not set; sessions are kept in memory")
    return InMemorySessionStore()
