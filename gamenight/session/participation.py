"""
Participation Manager - Joining and leaving tables.

Joins are bounded by players_needed; duplicate names are allowed.
Removal takes out every exact match and needs no authorization: anyone
holding the link may remove anyone.
"""

from __future__ import annotations
import logging

from ..errors import CapacityExceededError, MissingNameError, SessionNotFoundError
from .models import Session
from .store import SessionStore

logger = logging.getLogger(__name__)


class ParticipationManager:
    """Adds and removes participants under the capacity invariant."""

    def __init__(self, store: SessionStore):
        self.store = store

    async def join(self, session_id: str, name: str | None) -> Session:
        """
        Add name to the table.

        Raises:
            SessionNotFoundError: If the table does not exist.
            MissingNameError: If name is missing or blank.
            CapacityExceededError: If the table is already full.
        """
        session = await self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        name = (name or "").strip()
        if not name:
            raise MissingNameError()
        if session.is_full:
            raise CapacityExceededError(session_id)

        # Capacity is checked again inside the store against the current document
        updated = await self.store.append_participant(session_id, name)
        if updated is None:
            if await self.store.get(session_id) is None:
                raise SessionNotFoundError(session_id)
            raise CapacityExceededError(session_id)

        logger.info("%s joined table %s (%d/%d)",
                    name, session_id, len(updated.participants), updated.players_needed)
        return updated

    async def remove(self, session_id: str, name: str | None) -> Session:
        """
        Remove every participant named exactly name.

        Raises:
            SessionNotFoundError: If the table does not exist.
        """
        updated = await self.store.remove_participant(session_id, name or "")
        if updated is None:
            raise SessionNotFoundError(session_id)

        logger.info("Removed %s from table %s", name, session_id)
        return updated
